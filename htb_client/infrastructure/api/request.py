"""
Request builder for the HTB API.

RequestOptions is an immutable description of one call (path, method, query,
body, token, JSON flag). build_request() turns it into a requests.PreparedRequest
without touching the network.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import IO, Any, Mapping, Sequence
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests

from htb_client.errors import MalformedURL, RequestConstructionFailed
from htb_client.infrastructure.api.paths import CONTENT_TYPE_JSON, HTB_HOST

# RFC 9110 token characters.
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

RequestBody = bytes | IO[bytes]


def _normalize_query(query: Mapping[str, str | Sequence[str]] | None) -> Mapping[str, tuple[str, ...]]:
    out: dict[str, tuple[str, ...]] = {}
    for key, values in (query or {}).items():
        if isinstance(values, str):
            values = (values,)
        values = tuple(str(v) for v in values)
        if not values:
            raise RequestConstructionFailed(f"query parameter {key!r} has no values")
        out[str(key)] = values
    return MappingProxyType(out)


def encode_query(query: Mapping[str, Sequence[str]]) -> str:
    """URL-encode query parameters, keys in lexicographic order, values in given order."""
    pairs = [(key, value) for key in sorted(query) for value in query[key]]
    return urlencode(pairs)


@dataclass(frozen=True)
class RequestOptions:
    """Options for one outbound request. Unset fields keep the defaults below."""

    path: str = ""
    method: str = "GET"
    query: Mapping[str, Any] = field(default_factory=dict)
    body: RequestBody | None = None
    auth_token: str = ""
    is_json: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "query", _normalize_query(self.query))

    def with_json_body(self, body: RequestBody) -> RequestOptions:
        """Return a copy carrying `body` and flagged as JSON."""
        return replace(self, body=body, is_json=True)


def _compose_url(host: str, path: str, query: Mapping[str, Sequence[str]]) -> str:
    url = host + path
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as e:
        raise MalformedURL(url, str(e)) from e
    if not parts.scheme or not parts.netloc:
        raise MalformedURL(url, "missing scheme or host")
    if query:
        parts = parts._replace(query=encode_query(query))
    return urlunsplit(parts)


def build_request(options: RequestOptions, host: str = HTB_HOST) -> requests.PreparedRequest:
    """
    Build a transport-ready request from options.

    Args:
        options: What to request.
        host: Origin the path is appended to. Defaults to the HTB host.

    Returns:
        A prepared request ready for Session.send().

    Raises:
        MalformedURL: If host + path does not parse as an absolute URL.
        RequestConstructionFailed: If the method is not a valid token or requests
            cannot prepare the request.
    """
    url = _compose_url(host, options.path, options.query)

    if not _METHOD_TOKEN.fullmatch(options.method or ""):
        raise RequestConstructionFailed(f"failed to create request: invalid method {options.method!r}")

    headers: dict[str, str] = {}
    if options.auth_token:
        headers["Authorization"] = f"Bearer {options.auth_token}"
    if options.is_json:
        headers["Content-Type"] = CONTENT_TYPE_JSON

    try:
        return requests.Request(
            method=options.method,
            url=url,
            headers=headers,
            data=options.body,
        ).prepare()
    except (requests.RequestException, ValueError) as e:
        raise RequestConstructionFailed(f"failed to create request: {e}") from e
