import logging
from typing import Dict, List, Optional, Sequence, Type

from ..core.session import AWSSession
from .base_plugin import BaseResourcePlugin
from .dynamodb_plugin import DynamoDBPlugin
from .ec2_plugin import EC2Plugin
from .elb_plugin import ELBPlugin
from .rds_plugin import RDSPlugin
from .redshift_plugin import RedshiftPlugin
from .resource import Resource

logger = logging.getLogger(__name__)

SUPPORTED_SERVICES: Dict[str, Type[BaseResourcePlugin]] = {
    "dynamodb": DynamoDBPlugin,
    "ec2": EC2Plugin,
    "elb": ELBPlugin,
    "rds": RDSPlugin,
    "redshift": RedshiftPlugin,
}


class ResourceScanner:
    def __init__(self, session: AWSSession) -> None:
        self._session = session
        self._plugins: Dict[str, BaseResourcePlugin] = {}

    def plugin(self, service_name: str) -> BaseResourcePlugin:
        """Return the plugin for a service, creating it on first use."""
        if service_name not in SUPPORTED_SERVICES:
            raise ValueError(f"Unsupported service: {service_name}")
        if service_name not in self._plugins:
            self._plugins[service_name] = SUPPORTED_SERVICES[service_name](self._session)
        return self._plugins[service_name]

    def scan_resources(
        self, service_name: str, names: Optional[Sequence[str]] = None
    ) -> List[Resource]:
        resources = self.plugin(service_name).discover(names)
        logger.debug(f"Scanned {len(resources)} {service_name} resources")
        return resources
