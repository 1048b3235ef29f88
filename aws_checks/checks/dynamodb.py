import argparse
import logging
from typing import List

from ..core.severity import CheckResult, Severity
from ..resources import Resource
from ..utils import format_number, split_names
from .base import MetricCheck

logger = logging.getLogger(__name__)

READ_WRITE = ("read", "write")


def read_write_argument(value: str) -> List[str]:
    kinds = [kind.lower() for kind in split_names(value)]
    invalid = [kind for kind in kinds if kind not in READ_WRITE]
    if invalid or not kinds:
        raise argparse.ArgumentTypeError(
            f"expected read, write or both, got '{value}'"
        )
    return kinds


class DynamoDBMetricCheck(MetricCheck):
    """Shared table iteration of the DynamoDB checks."""

    kinds_dest: str = ""

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--table-names",
            "-n",
            type=split_names,
            default=None,
            help="Table names to check. Separated by , or ;. If not specified, check all tables.",
        )
        super().add_arguments(parser)

    def run(self) -> CheckResult:
        tables = self.scanner.scan_resources("dynamodb", self.args.table_names)
        for table in tables:
            for kind in getattr(self.args, self.kinds_dest):
                self.check_table(table, kind)
        return self.report(f"{len(tables)} tables total")

    def check_table(self, table: Resource, kind: str) -> None:
        raise NotImplementedError


class DynamoDBCapacityCheck(DynamoDBMetricCheck):
    """Consumed read/write capacity as a percentage of the provisioned units."""

    name = "dynamodb-capacity"
    title = "CheckDynamoDBCapacity"
    description = "Check DynamoDB consumed capacity by CloudWatch and DynamoDB API."
    threshold_help = "consumed capacity is over a percentage"
    kinds_dest = "capacity_for"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        super().add_arguments(parser)
        parser.add_argument(
            "--capacity-for",
            "-c",
            type=read_write_argument,
            default=list(READ_WRITE),
            help="Read/Write (or both) capacity to check (default: read,write).",
        )

    def check_table(self, table: Resource, kind: str) -> None:
        provisioned = table.attributes.get(f"{kind}_capacity_units") or 0
        if not provisioned:
            # On-demand tables have no provisioned units to compare against
            self.note(f"; Table {table.name} has no provisioned {kind} capacity")
            return

        settings = self.metric_settings(kind)
        consumed = self.fetch(settings, table.name)
        percentage = consumed / float(provisioned) * 100
        severity, threshold = self.default_thresholds(settings).evaluate(percentage)
        if severity is Severity.OK:
            return
        self.flag(
            severity,
            f"; On table {table.name} consumed {kind} capacity is {percentage:.2f}% "
            f"(expected_lower_than {format_number(threshold)})",
        )


class DynamoDBThrottleCheck(DynamoDBMetricCheck):
    """Read/write throttle events per table."""

    name = "dynamodb-throttle"
    title = "CheckDynamoDBThrottle"
    description = "Check DynamoDB throttle by CloudWatch and DynamoDB API."
    threshold_help = "throttle is over the given number"
    kinds_dest = "throttle_for"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        super().add_arguments(parser)
        parser.add_argument(
            "--throttle-for",
            "-c",
            type=read_write_argument,
            default=list(READ_WRITE),
            help="Read/Write (or both) throttle to check (default: read,write).",
        )

    def check_table(self, table: Resource, kind: str) -> None:
        settings = self.metric_settings(kind)
        events = self.fetch(settings, table.name)
        severity, threshold = self.default_thresholds(settings).evaluate(events)
        if severity is Severity.OK:
            return
        self.flag(
            severity,
            f"; On table {table.name} {settings.metric_name} is {format_number(events)} "
            f"(higher_than {format_number(threshold)})",
        )
