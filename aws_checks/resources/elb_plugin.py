import logging
from typing import Dict, List, Optional, Sequence

from .base_plugin import BaseResourcePlugin, select_by_name
from .resource import Resource

logger = logging.getLogger(__name__)


class ELBPlugin(BaseResourcePlugin):
    """Plugin for discovering Classic Load Balancers."""

    service_name = "elb"

    def discover(self, names: Optional[Sequence[str]] = None) -> List[Resource]:
        load_balancers = [
            Resource(
                type="ELB",
                name=lb["LoadBalancerName"],
                id=lb.get("DNSName", ""),
                attributes={"instances": [i["InstanceId"] for i in lb.get("Instances", [])]},
            )
            for lb in self._paginate("describe_load_balancers", "LoadBalancerDescriptions")
        ]
        selected = select_by_name(load_balancers, names)
        logger.info(f"Discovered {len(selected)} load balancers")
        return selected

    def instance_health(
        self, elb_name: str, instance_ids: Optional[Sequence[str]] = None
    ) -> List[Dict]:
        """Return the InstanceStates of a load balancer, optionally for some instances only."""
        kwargs = {"LoadBalancerName": elb_name}
        if instance_ids:
            kwargs["Instances"] = [{"InstanceId": i} for i in instance_ids]
        return self.client.describe_instance_health(**kwargs).get("InstanceStates", [])
