from .resource import Resource
from .resource_scanner import ResourceScanner, SUPPORTED_SERVICES
from .base_plugin import BaseResourcePlugin, select_by_name
from .dynamodb_plugin import DynamoDBPlugin
from .ec2_plugin import EC2Plugin
from .elb_plugin import ELBPlugin
from .rds_plugin import RDSPlugin
from .redshift_plugin import RedshiftPlugin

__all__ = [
    "Resource",
    "ResourceScanner",
    "SUPPORTED_SERVICES",
    "BaseResourcePlugin",
    "select_by_name",
    "DynamoDBPlugin",
    "EC2Plugin",
    "ELBPlugin",
    "RDSPlugin",
    "RedshiftPlugin",
]
