import argparse
import logging
from typing import List, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from ..core.constants import EVENT_LOOKBACK_HOURS, REDSHIFT_MAINTENANCE_EVENT_ID
from ..core.severity import CheckResult, Severity
from ..resources import Resource
from ..utils import split_names
from .base import BaseCheck

logger = logging.getLogger(__name__)


class RedshiftEventsCheck(BaseCheck):
    name = "redshift-events"
    title = "CheckRedshiftEvents"
    description = "Check Amazon Redshift clusters for maintenance events."

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--clusters",
            "-c",
            type=split_names,
            default=[],
            help="Comma separated list of clusters to check. Defaults to all clusters in the region.",
        )

    def clusters_in_maintenance(self, clusters: Sequence[Resource]) -> List[str]:
        """Clusters whose latest event of the last two hours started maintenance."""
        plugin = self.scanner.plugin("redshift")
        in_maintenance = []
        for cluster in clusters:
            events = plugin.recent_events(cluster.name, EVENT_LOOKBACK_HOURS)
            if events and events[-1].get("EventId") == REDSHIFT_MAINTENANCE_EVENT_ID:
                in_maintenance.append(cluster.name)
        return in_maintenance

    def run(self) -> CheckResult:
        plugin = self.scanner.plugin("redshift")
        try:
            clusters = plugin.discover(self.args.clusters)
            missing = plugin.missing(self.args.clusters, clusters)
            if missing:
                return self.result(
                    Severity.UNKNOWN, f"Passed cluster(s): {','.join(missing)} not found"
                )
            in_maintenance = self.clusters_in_maintenance(clusters)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Redshift API error: {e}")
            return self.result(
                Severity.UNKNOWN, f"An error occurred processing AWS Redshift API: {e}"
            )

        if in_maintenance:
            return self.result(
                Severity.CRITICAL, f"Clusters in maintenance: {','.join(in_maintenance)}"
            )
        return self.result(Severity.OK, "No clusters in maintenance")
