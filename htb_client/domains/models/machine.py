"""Lab machine model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Machine:
    """A lab machine as returned by the listing and active-machine endpoints."""

    id: int
    """Machine identifier."""

    name: str | None = None
    """Machine name; absent when the endpoint does not send it."""

    ip: str | None = None
    """Network address once the machine is spawned."""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Machine:
        if not isinstance(data, dict):
            raise ValueError(f"machine must be an object, got {type(data).__name__}")
        machine_id = data.get("id")
        if isinstance(machine_id, bool) or not isinstance(machine_id, int) or machine_id < 0:
            raise ValueError(f"machine id must be a non-negative integer, got {machine_id!r}")
        name = data.get("name")
        ip = data.get("ip")
        return cls(
            id=machine_id,
            name=str(name) if name is not None else None,
            ip=str(ip) if ip is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id}
        if self.name:
            d["name"] = self.name
        if self.ip:
            d["ip"] = self.ip
        return d


def parse_machines(data: Any) -> list[Machine]:
    """Parse a machines list, keeping server order. Null is an empty list."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"machines list must be an array, got {type(data).__name__}")
    return [Machine.from_dict(item) for item in data]
