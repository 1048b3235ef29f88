import argparse
import logging
import re
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from ..core.constants import (
    EVENT_LOOKBACK_HOURS,
    RDS_CRITICAL_EVENT_PATTERN,
    RDS_INSTANCE_MEMORY,
)
from ..core.exceptions import ConfigurationError
from ..core.severity import CheckResult, Severity, worst
from ..resources import Resource
from ..utils import load_yaml, split_names
from .base import BaseCheck, MetricCheck

logger = logging.getLogger(__name__)

GIB = 1024 ** 3
RDS_ITEMS = ("cpu", "memory", "disk")
DEFAULT_USAGE_LIMIT = 80.0
DISABLED = ("none", "off")


@lru_cache(maxsize=None)
def _instance_memory_table() -> Dict[str, float]:
    return load_yaml(RDS_INSTANCE_MEMORY)


def usage_limit_argument(value: str) -> Optional[float]:
    """Percentage limit; 'none', 'off' or 0 turn the item off."""
    if value.strip().lower() in DISABLED:
        return None
    try:
        limit = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid percentage: '{value}'")
    return limit or None


def memory_total_bytes(instance_class: str) -> float:
    try:
        return float(_instance_memory_table()[instance_class]) * GIB
    except KeyError:
        raise ConfigurationError(
            f"Unknown memory size for instance class '{instance_class}'"
        )


class RDSCheck(MetricCheck):
    """
    Availability zone, CPU, memory and disk usage of one DB instance.

    Every item is evaluated on its own; the worst severity is reported.
    """

    name = "rds"
    title = "CheckRDS"
    description = "Check RDS instance statuses by RDS and CloudWatch API."

    @classmethod
    def add_threshold_arguments(cls, parser: argparse.ArgumentParser) -> None:
        for severity in ("warning", "critical"):
            parser.add_argument(
                f"--availability-zone-{severity}",
                default=None,
                metavar="AZ",
                help=f"Trigger a {severity} if availability zone is different than given argument.",
            )
            for item in RDS_ITEMS:
                parser.add_argument(
                    f"--{item}-{severity}-over",
                    type=usage_limit_argument,
                    default=DEFAULT_USAGE_LIMIT,
                    help=f"Trigger a {severity} if {item} usage is over a percentage "
                    "(default: %(default)s, 'none' or 0 to skip).",
                )

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--db-instance-id",
            "-i",
            required=True,
            help="DB instance identifier.",
        )
        super().add_arguments(parser)

    def __init__(self, args: argparse.Namespace, session) -> None:
        super().__init__(args, session)
        self._values: Dict[str, float] = {}

    def item_thresholds(self, item: str) -> Tuple[Optional[float], Optional[float]]:
        # Config file values bypass the flag type, so 0 is mapped here too
        return (
            getattr(self.args, f"{item}_warning_over") or None,
            getattr(self.args, f"{item}_critical_over") or None,
        )

    def metric_value(self, item: str) -> Optional[float]:
        """Fetched once per item; None when CloudWatch had no datapoints."""
        settings = self.metric_settings(item)
        if item not in self._values:
            self._values[item] = self.fetch(settings, self.instance.name)
        value = self._values[item]
        return value if self.has_data(value, settings) else None

    def check_az(self) -> None:
        actual = self.instance.attributes.get("availability_zone")
        for severity, expected in (
            (Severity.CRITICAL, self.args.availability_zone_critical),
            (Severity.WARNING, self.args.availability_zone_warning),
        ):
            if expected and actual != expected:
                self.flag(severity, f"AZ is {actual} (expected {expected})")

    def usage_percentage(self, item: str) -> Optional[float]:
        value = self.metric_value(item)
        if value is None:
            return None
        if item == "cpu":
            return value
        if item == "memory":
            provisioned = memory_total_bytes(self.instance.attributes.get("instance_class"))
        else:
            provisioned = float(self.instance.attributes.get("allocated_storage") or 0) * GIB
        if not provisioned:
            return None
        return (provisioned - value) / provisioned * 100

    def check_item(self, item: str) -> None:
        warning, critical = self.item_thresholds(item)
        if warning is None and critical is None:
            return

        settings = self.metric_settings(item)
        usage = self.usage_percentage(item)
        if usage is None:
            self.note(f"{settings.metric_name} has no datapoints")
            return

        severity, limit = self.thresholds(settings, warning, critical).evaluate(usage)
        if severity is Severity.OK:
            return
        label = {
            "cpu": "CPUUtilization",
            "memory": "Memory usage",
            "disk": "Disk usage",
        }[item]
        self.flag(severity, f"{label} is {usage:.2f}% (expected lower than {limit}%)")

    def run(self) -> CheckResult:
        self.instance: Resource = self.scanner.plugin("rds").get_instance(
            self.args.db_instance_id
        )
        self.check_az()
        for item in RDS_ITEMS:
            self.check_item(item)

        parts = list(self._messages)
        if any(any(t is not None for t in self.item_thresholds(item)) for item in RDS_ITEMS):
            parts.append(self.window_trailer(unit="s"))
        message = f"{self.args.db_instance_id}: " + "; ".join(parts)
        return self.result(worst(*self._severities), message.strip())


class RDSEventsCheck(BaseCheck):
    """
    DB instances whose latest event in the last two hours starts a
    disruptive operation (maintenance, reboot, shutdown).
    """

    name = "rds-events"
    title = "CheckRDSEvents"
    description = "Check RDS instances for critical events."

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--db-instance-ids",
            "-i",
            type=split_names,
            default=None,
            help="DB instance identifiers to check, separated by , or ;. Defaults to all instances.",
        )

    def instances_with_critical_events(self) -> List[str]:
        plugin = self.scanner.plugin("rds")
        pattern = re.compile(RDS_CRITICAL_EVENT_PATTERN)
        critical_instances = []
        for instance in plugin.discover(self.args.db_instance_ids):
            events = plugin.recent_events(instance.name, EVENT_LOOKBACK_HOURS)
            if not events:
                continue
            # The latest event still being a "started" one means it has not completed
            if pattern.search(events[-1].get("Message", "")):
                critical_instances.append(instance.name)
        return critical_instances

    def run(self) -> CheckResult:
        try:
            critical_instances = self.instances_with_critical_events()
        except (BotoCoreError, ClientError) as e:
            logger.error(f"RDS API error: {e}")
            return self.result(
                Severity.UNKNOWN, f"An error occurred processing AWS RDS API: {e}"
            )

        if critical_instances:
            return self.result(
                Severity.CRITICAL,
                f"Clusters w/ critical events: {','.join(critical_instances)}",
            )
        return self.result(Severity.OK, "No DB instances with critical events")
