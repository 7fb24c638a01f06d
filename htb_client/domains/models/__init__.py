"""Domain models: lab machines and VPN servers."""

from htb_client.domains.models.machine import Machine, parse_machines
from htb_client.domains.models.vpn_server import VPNServer, VPNServerOption, VPNServersData

__all__ = ["Machine", "VPNServer", "VPNServerOption", "VPNServersData", "parse_machines"]
