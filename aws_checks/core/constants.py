"""AWS-specific constants used across the aws_checks package."""

from pathlib import Path
from typing import Final, Dict

# File paths
CONFIG_DIR: Final[Path] = Path(__file__).parents[1] / "configs"
METRIC_SETTINGS: Final[Path] = CONFIG_DIR / "metric_settings.yml"
RDS_INSTANCE_MEMORY: Final[Path] = CONFIG_DIR / "rds_instance_memory.yml"

# Logging
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# AWS Region
DEFAULT_REGION: Final[str] = "us-east-1"
DEFAULT_SESSION: Final[str] = "AWSChecks"

### CloudWatch constants ###
DEFAULT_PERIOD: Final[int] = 60
NO_DATA: Final[float] = -1.0

# CloudWatch expects capitalised statistic names
STATISTICS: Final[Dict[str, str]] = {
    "average": "Average",
    "sum": "Sum",
    "maximum": "Maximum",
    "minimum": "Minimum",
    "samplecount": "SampleCount",
}

### Event checks ###
EVENT_LOOKBACK_HOURS: Final[int] = 2
RDS_CRITICAL_EVENT_PATTERN: Final[str] = r"has started|is being|off-line|shutdown"
REDSHIFT_MAINTENANCE_EVENT_ID: Final[str] = "REDSHIFT-EVENT-2003"

### ELB ###
ELB_IN_SERVICE: Final[str] = "InService"

### VPN ###
VPN_TUNNEL_UP: Final[str] = "UP"
