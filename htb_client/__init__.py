"""Typed client for the Hack The Box lab API.

Usage:

    from htb_client import HTBClient, PRODUCT_LABS

    with HTBClient(auth_token=token) as client:
        machine = client.find_active_machine_by_name("Lame")
        client.spawn_lab_machine(machine.id)
        server = client.get_assigned_vpn_server(PRODUCT_LABS)
"""

from htb_client.domains.models import Machine, VPNServer, VPNServerOption, VPNServersData
from htb_client.errors import (
    APIError,
    DecodeError,
    HTBClientError,
    MachineNotFound,
    MalformedURL,
    MultipleMachinesFound,
    NoActiveLabMachine,
    NoAssignedVPNServer,
    RequestConstructionFailed,
    TransportFailure,
    UnexpectedContentType,
    UnexpectedStatusCode,
    UnknownSubscriptionTier,
)
from htb_client.infrastructure.api.paths import (
    PRODUCT_COMPETITIVE,
    PRODUCT_ENDGAME,
    PRODUCT_FORTRESSES,
    PRODUCT_LABS,
    PRODUCT_PROLABS,
    PRODUCT_STARTING_POINT,
    SUBSCRIPTION_FREE,
    SUBSCRIPTION_VIP,
    SUBSCRIPTION_VIP_PLUS,
)
from htb_client.services.client import ClientOptions, HTBClient

__all__ = [
    "APIError",
    "ClientOptions",
    "DecodeError",
    "HTBClient",
    "HTBClientError",
    "Machine",
    "MachineNotFound",
    "MalformedURL",
    "MultipleMachinesFound",
    "NoActiveLabMachine",
    "NoAssignedVPNServer",
    "PRODUCT_COMPETITIVE",
    "PRODUCT_ENDGAME",
    "PRODUCT_FORTRESSES",
    "PRODUCT_LABS",
    "PRODUCT_PROLABS",
    "PRODUCT_STARTING_POINT",
    "RequestConstructionFailed",
    "SUBSCRIPTION_FREE",
    "SUBSCRIPTION_VIP",
    "SUBSCRIPTION_VIP_PLUS",
    "TransportFailure",
    "UnexpectedContentType",
    "UnexpectedStatusCode",
    "UnknownSubscriptionTier",
    "VPNServer",
    "VPNServerOption",
    "VPNServersData",
]
