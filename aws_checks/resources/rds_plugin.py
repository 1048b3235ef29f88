import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence
from botocore.exceptions import ClientError

from ..core.exceptions import ResourceError
from ..utils import utc_now
from .base_plugin import BaseResourcePlugin, select_by_name
from .resource import Resource

logger = logging.getLogger(__name__)


class RDSPlugin(BaseResourcePlugin):
    """Plugin for discovering RDS database instances and their events."""

    service_name = "rds"

    def filter_instance_info(self, instance: dict) -> Resource:
        """Extract relevant information from an RDS instance."""
        return Resource(
            type="RDS",
            name=instance["DBInstanceIdentifier"],
            id=instance.get("DBInstanceArn", ""),
            attributes={
                "instance_class": instance.get("DBInstanceClass"),
                "availability_zone": instance.get("AvailabilityZone"),
                "allocated_storage": instance.get("AllocatedStorage"),
                "status": instance.get("DBInstanceStatus"),
            },
        )

    def discover(self, names: Optional[Sequence[str]] = None) -> List[Resource]:
        instances = [
            self.filter_instance_info(instance)
            for instance in self._paginate("describe_db_instances", "DBInstances")
        ]
        selected = select_by_name(instances, names)
        logger.info(f"Discovered {len(selected)} RDS instances")
        return selected

    def get_instance(self, identifier: str) -> Resource:
        try:
            response = self.client.describe_db_instances(DBInstanceIdentifier=identifier)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "DBInstanceNotFound":
                raise ResourceError(f"DB instance {identifier} not found") from e
            raise
        instances = response.get("DBInstances", [])
        if not instances:
            raise ResourceError(f"DB instance {identifier} not found")
        return self.filter_instance_info(instances[0])

    def recent_events(
        self, identifier: str, hours: int, now: Optional[datetime] = None
    ) -> List[Dict]:
        """Events of one DB instance over the last ``hours``, oldest first."""
        start_time = (now or utc_now()) - timedelta(hours=hours)
        return self._paginate(
            "describe_events",
            "Events",
            SourceIdentifier=identifier,
            SourceType="db-instance",
            StartTime=start_time,
        )
