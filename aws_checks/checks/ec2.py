import argparse

from ..core.severity import CheckResult, Severity
from ..utils import format_number
from .base import MetricCheck


class EC2NetworkCheck(MetricCheck):
    name = "ec2-network"
    title = "CheckEc2Network"
    description = "Check EC2 network metrics by CloudWatch API."
    threshold_help = "network traffic is over specified bytes"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--instance-id",
            "-i",
            required=True,
            help="EC2 instance ID to check.",
        )
        parser.add_argument(
            "--direction",
            "-d",
            choices=["NetworkIn", "NetworkOut"],
            default="NetworkIn",
            help="Direction of network traffic to measure (default: %(default)s).",
        )
        super().add_arguments(parser)

    def run(self) -> CheckResult:
        direction = self.args.direction
        settings = self.metric_settings(direction)
        value = self.fetch(settings, self.args.instance_id)
        if not self.has_data(value, settings):
            return self.result(Severity.OK, f"{direction} has no datapoints")

        severity, _ = self.default_thresholds(settings).evaluate(value)
        return self.result(severity, f"{direction} at {format_number(value)} Bytes")
