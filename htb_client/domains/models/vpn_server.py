"""
VPN server models.

The servers endpoint groups servers two levels deep (region, then category)
and each group carries its own id -> server mapping. VPNServersData.servers()
flattens that into one list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from htb_client.errors import UnknownSubscriptionTier
from htb_client.infrastructure.api.paths import SUBSCRIPTION_MATCH_ORDER, HTBLabSubscription


def _as_mapping(value: Any, what: str) -> dict[str, Any]:
    # The API sends [] instead of {} for an empty group.
    if value is None or value == []:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class VPNServer:
    """A single VPN connection server."""

    id: int
    friendly_name: str = ""
    location: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VPNServer:
        if not isinstance(data, dict):
            raise ValueError(f"vpn server must be an object, got {type(data).__name__}")
        server_id = data.get("id")
        if isinstance(server_id, bool) or not isinstance(server_id, int) or server_id < 0:
            raise ValueError(f"vpn server id must be a non-negative integer, got {server_id!r}")
        return cls(
            id=server_id,
            friendly_name=str(data.get("friendly_name") or ""),
            location=str(data.get("location") or ""),
        )

    def subscription_type(self) -> HTBLabSubscription:
        """
        Derive the subscription tier from the friendly name.

        The lower-cased name is matched against "free", "vip+" and "vip" in
        that order, so "US VIP+ 3" is vip+ and never plain vip.

        Raises:
            UnknownSubscriptionTier: If the name contains none of the tokens.
        """
        name = self.friendly_name.lower()
        for token in SUBSCRIPTION_MATCH_ORDER:
            if token in name:
                return token  # type: ignore[return-value]
        raise UnknownSubscriptionTier(self.friendly_name)


@dataclass(frozen=True)
class VPNServerOption:
    """One group of servers, keyed by a free-form (usually id) string."""

    servers: Mapping[str, VPNServer] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VPNServerOption:
        data = _as_mapping(data, "vpn server option")
        servers = _as_mapping(data.get("servers"), "servers")
        return cls(
            servers=MappingProxyType({str(k): VPNServer.from_dict(v) for k, v in servers.items()}),
        )


@dataclass(frozen=True)
class VPNServersData:
    """Payload of the VPN servers endpoint."""

    assigned: VPNServer | None = None
    """Server currently bound to the account, if any."""

    options: Mapping[str, Mapping[str, VPNServerOption]] = field(default_factory=dict)
    """Outer group -> inner group -> option."""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VPNServersData:
        if not isinstance(data, dict):
            raise ValueError(f"vpn servers data must be an object, got {type(data).__name__}")
        assigned = data.get("assigned")
        options: dict[str, Mapping[str, VPNServerOption]] = {}
        for outer_key, inner in _as_mapping(data.get("options"), "options").items():
            inner = _as_mapping(inner, f"options[{outer_key!r}]")
            options[str(outer_key)] = MappingProxyType(
                {str(k): VPNServerOption.from_dict(v) for k, v in inner.items()}
            )
        return cls(
            assigned=VPNServer.from_dict(assigned) if assigned is not None else None,
            options=MappingProxyType(options),
        )

    def servers(self) -> list[VPNServer]:
        """Flatten options into one list, in the order the server sent them."""
        out: list[VPNServer] = []
        for inner in self.options.values():
            for option in inner.values():
                out.extend(option.servers.values())
        return out
