import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from ..utils import utc_now
from .base_plugin import BaseResourcePlugin, select_by_name
from .resource import Resource

logger = logging.getLogger(__name__)


class RedshiftPlugin(BaseResourcePlugin):
    """Plugin for discovering Redshift clusters and their events."""

    service_name = "redshift"

    def discover(self, names: Optional[Sequence[str]] = None) -> List[Resource]:
        clusters = [
            Resource(
                type="Redshift",
                name=cluster["ClusterIdentifier"],
                id=cluster.get("ClusterNamespaceArn", ""),
                attributes={"status": cluster.get("ClusterStatus")},
            )
            for cluster in self._paginate("describe_clusters", "Clusters")
        ]
        selected = select_by_name(clusters, names)
        logger.info(f"Discovered {len(selected)} Redshift clusters")
        return selected

    @staticmethod
    def missing(requested: Sequence[str], clusters: Sequence[Resource]) -> List[str]:
        """Requested cluster identifiers that do not exist in the region."""
        known = {cluster.name for cluster in clusters}
        return [name for name in requested if name not in known]

    def recent_events(
        self, identifier: str, hours: int, now: Optional[datetime] = None
    ) -> List[Dict]:
        """Events of one cluster over the last ``hours``, oldest first."""
        start_time = (now or utc_now()) - timedelta(hours=hours)
        return self._paginate(
            "describe_events",
            "Events",
            SourceIdentifier=identifier,
            SourceType="cluster",
            StartTime=start_time,
        )
