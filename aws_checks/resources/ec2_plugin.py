import logging
from typing import List, Optional, Sequence
from botocore.exceptions import ClientError

from ..core.exceptions import ResourceError
from .base_plugin import BaseResourcePlugin
from .resource import Resource

logger = logging.getLogger(__name__)


class EC2Plugin(BaseResourcePlugin):
    """Plugin for site-to-site VPN connections, read through the EC2 API."""

    service_name = "ec2"

    def filter_vpn_info(self, connection: dict) -> Resource:
        """Extract state and tunnel telemetry from a VPN connection."""
        connection_id = connection["VpnConnectionId"]
        return Resource(
            type="VPN",
            name=connection_id,
            id=connection_id,
            attributes={
                "state": connection.get("State"),
                "tunnels": connection.get("VgwTelemetry", []),
            },
        )

    def discover(self, names: Optional[Sequence[str]] = None) -> List[Resource]:
        """VPN connections, restricted to the given connection ids."""
        kwargs = {"VpnConnectionIds": list(names)} if names else {}
        response = self.client.describe_vpn_connections(**kwargs)
        connections = [
            self.filter_vpn_info(connection)
            for connection in response.get("VpnConnections", [])
        ]
        logger.info(f"Discovered {len(connections)} VPN connections")
        return connections

    def vpn_connection(self, vpn_connection_id: str) -> Resource:
        try:
            connections = self.discover([vpn_connection_id])
        except ClientError as e:
            if "NotFound" in e.response.get("Error", {}).get("Code", ""):
                raise ResourceError(f"VPN connection {vpn_connection_id} not found") from e
            raise

        if not connections:
            raise ResourceError(f"VPN connection {vpn_connection_id} not found")
        return connections[0]
