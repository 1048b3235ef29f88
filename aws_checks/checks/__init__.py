from typing import Dict, Type

from .base import BaseCheck, MetricCheck
from .dynamodb import DynamoDBCapacityCheck, DynamoDBThrottleCheck
from .ec2 import EC2NetworkCheck
from .elb import ELBHealthCheck, ELBLatencyCheck, ELBSumRequestsCheck
from .rds import RDSCheck, RDSEventsCheck
from .redshift import RedshiftEventsCheck
from .vpn import VPNStatusCheck

CHECKS: Dict[str, Type[BaseCheck]] = {
    check.name: check
    for check in (
        DynamoDBCapacityCheck,
        DynamoDBThrottleCheck,
        EC2NetworkCheck,
        ELBHealthCheck,
        ELBLatencyCheck,
        ELBSumRequestsCheck,
        RDSCheck,
        RDSEventsCheck,
        RedshiftEventsCheck,
        VPNStatusCheck,
    )
}

__all__ = [
    "CHECKS",
    "BaseCheck",
    "MetricCheck",
    "DynamoDBCapacityCheck",
    "DynamoDBThrottleCheck",
    "EC2NetworkCheck",
    "ELBHealthCheck",
    "ELBLatencyCheck",
    "ELBSumRequestsCheck",
    "RDSCheck",
    "RDSEventsCheck",
    "RedshiftEventsCheck",
    "VPNStatusCheck",
]
