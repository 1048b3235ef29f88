import argparse
import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import List, Optional

from ..cloudwatch.metrics import (
    CloudWatchMetrics,
    MetricConfig,
    MetricQuery,
    MetricSettings,
    is_no_data,
    normalize_statistic,
)
from ..cloudwatch.thresholds import Thresholds
from ..core.session import AWSSession
from ..core.severity import CheckResult, Severity, worst
from ..resources import ResourceScanner
from ..utils import parse_time, utc_now

logger = logging.getLogger(__name__)


def time_argument(value: str):
    try:
        return parse_time(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 time: '{value}'")


class BaseCheck(ABC):
    """
    A single health check.

    Subclasses declare their flags in ``add_arguments`` and implement ``run``,
    which returns the ``CheckResult`` printed by the runner.
    """

    name: str = ""
    title: str = ""
    description: str = ""

    def __init__(self, args: argparse.Namespace, session: AWSSession) -> None:
        self.args = args
        self.session = session
        self.scanner = ResourceScanner(session)

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        pass

    @abstractmethod
    def run(self) -> CheckResult:
        pass

    def result(self, severity: Severity, message: str = "") -> CheckResult:
        logger.info(f"{self.name} finished with {severity.name}")
        return CheckResult(check_name=self.title, severity=severity, message=message)


class MetricCheck(BaseCheck):
    """
    Fetch CloudWatch values per resource, compare them with the
    warning/critical thresholds and collect the flagged messages.
    """

    threshold_help: str = "the metric is over the given value"

    def __init__(self, args: argparse.Namespace, session: AWSSession) -> None:
        super().__init__(args, session)
        self.metric_config = MetricConfig()
        self.metrics = CloudWatchMetrics(session)
        self.end_time = args.end_time or utc_now()
        self._severities: List[Severity] = []
        self._messages: List[str] = []

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--end-time",
            "-t",
            type=time_argument,
            default=None,
            help="CloudWatch metric statistics end time, ISO-8601 (default: now).",
        )
        parser.add_argument(
            "--period",
            "-p",
            type=int,
            default=60,
            help="CloudWatch metric statistics period in seconds (default: %(default)s).",
        )
        parser.add_argument(
            "--statistics",
            "-S",
            type=str.lower,
            choices=["average", "sum", "maximum", "minimum", "samplecount"],
            default=MetricConfig().default_statistic(cls.name),
            help="CloudWatch statistics method (default: %(default)s).",
        )
        cls.add_threshold_arguments(parser)

    @classmethod
    def add_threshold_arguments(cls, parser: argparse.ArgumentParser) -> None:
        for severity in ("warning", "critical"):
            parser.add_argument(
                f"--{severity}-over",
                type=float,
                default=None,
                help=f"Trigger a {severity} if {cls.threshold_help}.",
            )

    # Metric helpers
    def metric_settings(self, key: str) -> MetricSettings:
        return self.metric_config.get_metric_settings(self.name, key)

    def fetch(self, settings: MetricSettings, dimension_value: str) -> float:
        query = MetricQuery.from_settings(
            settings,
            dimension_value=dimension_value,
            statistic=self.args.statistics,
            period=self.args.period,
            end_time=self.end_time,
        )
        return self.metrics.get_latest_value(query, default=settings.no_data_value)

    def has_data(self, value: float, settings: MetricSettings) -> bool:
        return not is_no_data(value, settings.no_data_value)

    def thresholds(
        self,
        settings: MetricSettings,
        warning: Optional[float] = None,
        critical: Optional[float] = None,
    ) -> Thresholds:
        return Thresholds(
            warning=warning,
            critical=critical,
            comparison_operator=settings.comparison_operator,
        )

    def default_thresholds(self, settings: MetricSettings) -> Thresholds:
        return self.thresholds(
            settings, warning=self.args.warning_over, critical=self.args.critical_over
        )

    # Result helpers
    def flag(self, severity: Severity, message: str) -> None:
        self._severities.append(severity)
        self._messages.append(message)

    def note(self, message: str) -> None:
        self._messages.append(message)

    def window_trailer(self, unit: str = " seconds") -> str:
        start_time = self.end_time - timedelta(seconds=self.args.period)
        return (
            f"({normalize_statistic(self.args.statistics)} within {self.args.period}{unit} "
            f"between {start_time} to {self.end_time})"
        )

    def report(self, header: str) -> CheckResult:
        message = header + "".join(self._messages) + f"; {self.window_trailer()}"
        return self.result(worst(*self._severities), message)
