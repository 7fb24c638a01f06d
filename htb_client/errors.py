"""
Error taxonomy for the HTB client.

Every failure is raised to the caller as a subclass of HTBClientError and is
never retried by this library.
"""

from __future__ import annotations


class HTBClientError(Exception):
    """Base exception for all HTB client errors."""


class MalformedURL(HTBClientError):
    """Raised when host + path does not parse as an absolute URL."""

    def __init__(self, url: str, reason: str = "") -> None:
        msg = f"failed to parse url: {url}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
        self.url = url


class RequestConstructionFailed(HTBClientError):
    """Raised when the transport request object cannot be built."""


class TransportFailure(HTBClientError):
    """Raised for network-level failures (DNS, refused connection, timeout)."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class UnexpectedStatusCode(HTBClientError):
    """Failure status whose body is not a readable error envelope."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"unexpected status code: {status_code}")
        self.status_code = status_code


class APIError(HTBClientError):
    """Failure status carrying the server's message."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"api error: status code {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class UnexpectedContentType(HTBClientError):
    """Success status but the body is not declared as JSON."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"unexpected content type: {actual!r}, expected: {expected!r}")
        self.expected = expected
        self.actual = actual


class DecodeError(HTBClientError):
    """Raised when a response body is not valid JSON or has the wrong shape."""


class MachineNotFound(HTBClientError):
    def __init__(self, name: str) -> None:
        super().__init__(f"machine not found: {name}")
        self.name = name


class MultipleMachinesFound(HTBClientError):
    def __init__(self, name: str) -> None:
        super().__init__(f"multiple machines found for the name: {name}")
        self.name = name


class NoActiveLabMachine(HTBClientError):
    def __init__(self) -> None:
        super().__init__("no active lab machine")


class NoAssignedVPNServer(HTBClientError):
    def __init__(self) -> None:
        super().__init__("no assigned vpn server")


class UnknownSubscriptionTier(HTBClientError):
    """A VPN server name matches none of the known subscription tokens."""

    def __init__(self, friendly_name: str) -> None:
        super().__init__(f"unknown subscription tier for vpn server: {friendly_name!r}")
        self.friendly_name = friendly_name


__all__ = [
    "APIError",
    "DecodeError",
    "HTBClientError",
    "MachineNotFound",
    "MalformedURL",
    "MultipleMachinesFound",
    "NoActiveLabMachine",
    "NoAssignedVPNServer",
    "RequestConstructionFailed",
    "TransportFailure",
    "UnexpectedContentType",
    "UnexpectedStatusCode",
    "UnknownSubscriptionTier",
]
