import argparse
import logging
from typing import List

from ..core.constants import ELB_IN_SERVICE
from ..core.severity import CheckResult, Severity
from ..resources import Resource
from ..utils import format_number, split_names
from .base import BaseCheck, MetricCheck

logger = logging.getLogger(__name__)


class ELBHealthCheck(BaseCheck):
    """Instance health of one or all classic load balancers in a region."""

    name = "elb-health"
    title = "ELBHealth"
    description = "Check the health of an Elastic Load Balancer or all ELBs in a given region."

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--elb-name",
            "-n",
            type=split_names,
            default=None,
            help="Load balancer name(s) to check, separated by , or ;. If not specified, check all.",
        )
        parser.add_argument(
            "--instances",
            "-i",
            type=split_names,
            default=None,
            help="Comma separated list of instance IDs inside the ELB to check.",
        )
        parser.add_argument(
            "--with-reasons",
            action="store_true",
            help="Include the reported reason for each unhealthy instance.",
        )

    def describe_unhealthy(self, states: List[dict]) -> List[str]:
        unhealthy = []
        for state in states:
            if state.get("State") == ELB_IN_SERVICE:
                continue
            entry = f"{state['InstanceId']}::{state.get('State')}"
            if self.args.with_reasons and state.get("Description"):
                entry += f" ({state['Description']})"
            unhealthy.append(f"[{entry}]")
        return unhealthy

    def run(self) -> CheckResult:
        plugin = self.scanner.plugin("elb")
        elbs = plugin.discover(self.args.elb_name)
        message = f"{self.session.region_name}: " if len(elbs) > 1 else ""
        severity = Severity.OK

        for elb in elbs:
            states = plugin.instance_health(elb.name, self.args.instances)
            unhealthy = self.describe_unhealthy(states)
            if unhealthy:
                message += f"{elb.name} unhealthy => {' '.join(unhealthy)}. "
                severity = Severity.CRITICAL
            else:
                message += f"{elb.name} => healthy. "

        if not elbs:
            message = "No load balancers found"
        return self.result(severity, message.strip())


class ELBMetricCheck(MetricCheck):
    """Shared per load balancer iteration of the ELB metric checks."""

    metric_key: str = ""

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--elb-names",
            "-l",
            type=split_names,
            default=None,
            help="Load balancer names to check. Separated by , or ;. If not specified, check all load balancers.",
        )
        super().add_arguments(parser)

    def run(self) -> CheckResult:
        self.elbs = self.scanner.scan_resources("elb", self.args.elb_names)
        if len(self.elbs) == 1:
            header = self.elbs[0].name
        else:
            header = f"{len(self.elbs)} load balancers total"

        settings = self.metric_settings(self.metric_key)
        for elb in self.elbs:
            value = self.fetch(settings, elb.name)
            if not self.has_data(value, settings):
                self.flag_no_alive_nodes(elb)
                continue
            severity, threshold = self.default_thresholds(settings).evaluate(value)
            if severity is not Severity.OK:
                self.flag(severity, self.describe(elb, value, threshold))
        return self.report(header)

    @property
    def single(self) -> bool:
        return len(self.elbs) == 1

    def subject(self, elb: Resource) -> str:
        return "" if self.single else f"{elb.name}'s "

    def flag_no_alive_nodes(self, elb: Resource) -> None:
        # CloudWatch stops reporting once an ELB has no registered live nodes
        if self.single:
            self.flag(Severity.WARNING, "; The load balancer has no alive nodes!")
        else:
            self.note(f"; load balancer {elb.name} has no alive nodes!")

    def describe(self, elb: Resource, value: float, threshold: float) -> str:
        raise NotImplementedError


class ELBLatencyCheck(ELBMetricCheck):
    name = "elb-latency"
    title = "CheckELBLatency"
    description = "Check Elastic Load Balancer latency by CloudWatch API."
    threshold_help = "latency is over specified seconds"
    metric_key = "latency"

    def describe(self, elb: Resource, value: float, threshold: float) -> str:
        return (
            f"; {self.subject(elb)}Latency is {value:.3f} seconds. "
            f"(expected lower than {threshold:.3f})"
        )


class ELBSumRequestsCheck(ELBMetricCheck):
    name = "elb-sum-requests"
    title = "CheckELBSumRequests"
    description = "Check Elastic Load Balancer sum of requests by CloudWatch API."
    threshold_help = "sum requests is over specified count"
    metric_key = "requests"

    def describe(self, elb: Resource, value: float, threshold: float) -> str:
        return (
            f"; {self.subject(elb)}Sum Requests is {format_number(value)}. "
            f"(expected lower than {format_number(threshold)})"
        )
