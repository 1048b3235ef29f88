"""
AWS Checks Package

Command-line health checks for AWS services, reporting in the
OK / WARNING / CRITICAL / UNKNOWN convention of monitoring plugins:
- DynamoDB consumed capacity and throttling
- EC2 network traffic
- Classic ELB instance health, latency and request count
- RDS instance metrics and events
- Redshift maintenance events
- VPN tunnel status
"""

__version__ = "0.1.0"

from .checks import CHECKS
from .core import (
    AWSSession,
    CheckResult,
    Severity,
    create_session,
    worst,
)
from .main import run_check

__all__ = [
    # Checks
    "CHECKS",
    "run_check",
    # Session related
    "AWSSession",
    "create_session",
    # Results
    "CheckResult",
    "Severity",
    "worst",
]
