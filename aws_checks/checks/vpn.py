import argparse

from ..core.constants import VPN_TUNNEL_UP
from ..core.severity import CheckResult, Severity
from .base import BaseCheck


class VPNStatusCheck(BaseCheck):
    name = "vpc-vpn"
    title = "VPNStatus"
    description = "Check VPN connections to AWS via EC2 API."

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--vpn-connection-id",
            "-c",
            required=True,
            help="AWS VPN connection object id.",
        )
        parser.add_argument(
            "--warning",
            "-w",
            action="store_true",
            help="Report dead tunnels as a warning instead of critical.",
        )

    def run(self) -> CheckResult:
        connection = self.scanner.plugin("ec2").vpn_connection(self.args.vpn_connection_id)
        message = f"{self.args.vpn_connection_id}: "
        tunnels_down = False
        for tunnel in connection.attributes["tunnels"]:
            status = str(tunnel.get("Status", "")).upper()
            if status != VPN_TUNNEL_UP:
                message += f"[tunnel: {tunnel.get('OutsideIpAddress')} {status}]"
                tunnels_down = True

        if not tunnels_down:
            return self.result(Severity.OK, message.strip())
        severity = Severity.WARNING if self.args.warning else Severity.CRITICAL
        return self.result(severity, message)
