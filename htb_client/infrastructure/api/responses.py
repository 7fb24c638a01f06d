"""
Response interpretation for the HTB API.

Sends a prepared request over a requests.Session, classifies the outcome and
decodes the JSON envelope. Payloads arrive wrapped as {"data": ...} on listing
endpoints, {"info": ...} on "current" singletons and {"message": ...} on errors;
each operation says which envelope it expects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, TypeVar

import requests

from htb_client.errors import (
    APIError,
    DecodeError,
    TransportFailure,
    UnexpectedContentType,
    UnexpectedStatusCode,
)
from htb_client.infrastructure.api.paths import CONTENT_TYPE_JSON
from htb_client.utils.logger import get_logger

logger = get_logger()

T = TypeVar("T")


def _require_object(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise DecodeError(f"response body must be a JSON object, got {type(body).__name__}")
    return body


def _parse_payload(value: Any, parse: Callable[[Any], T], key: str) -> T:
    try:
        return parse(value)
    except (ValueError, TypeError, KeyError) as e:
        raise DecodeError(f"invalid {key!r} payload: {e}") from e


@dataclass(frozen=True)
class APIDataResponse(Generic[T]):
    """{"data": T}. A null or missing payload is handed to `parse` as None."""

    KEY: ClassVar[str] = "data"

    data: T

    @classmethod
    def from_body(cls, body: Any, parse: Callable[[Any], T]) -> APIDataResponse[T]:
        body = _require_object(body)
        return cls(data=_parse_payload(body.get(cls.KEY), parse, cls.KEY))


@dataclass(frozen=True)
class APIInfoResponse(Generic[T]):
    """{"info": T | null}. A null or missing payload decodes to None."""

    KEY: ClassVar[str] = "info"

    info: T | None

    @classmethod
    def from_body(cls, body: Any, parse: Callable[[Any], T]) -> APIInfoResponse[T]:
        body = _require_object(body)
        value = body.get(cls.KEY)
        if value is None:
            return cls(info=None)
        return cls(info=_parse_payload(value, parse, cls.KEY))


@dataclass(frozen=True)
class APIMessageResponse:
    """{"message": str}, sent with failure status codes.

    Any JSON object decodes; a missing or null message is empty.
    """

    message: str

    @classmethod
    def from_body(cls, body: Any) -> APIMessageResponse:
        body = _require_object(body)
        message = body.get("message")
        if message is None:
            message = ""
        if not isinstance(message, str):
            raise DecodeError("error response 'message' is not a string")
        return cls(message=message)


def send_request(
    session: requests.Session,
    request: requests.PreparedRequest,
    timeout: float | None = None,
) -> requests.Response:
    """
    Send a prepared request.

    Raises:
        TransportFailure: On any network-level failure; the requests exception
            is kept on `.original`.
    """
    logger.info("Sending %s request to HTB API: %s", request.method, request.path_url)
    try:
        response = session.send(request, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("HTB API request failed: %s (%s)", e, type(e).__name__)
        raise TransportFailure(f"failed to do request: {e}", e) from e
    logger.info("HTB API responded with status: %s", response.status_code)
    return response


def check_status(response: requests.Response) -> None:
    """
    Raise for any status code >= 300.

    Raises:
        APIError: If the body is a JSON object (message may be empty).
        UnexpectedStatusCode: If it is not.
    """
    status_code = response.status_code
    if status_code < 300:
        return
    try:
        envelope = APIMessageResponse.from_body(response.json())
    except (ValueError, DecodeError):
        logger.warning("HTB API status %s without a readable error message", status_code)
        raise UnexpectedStatusCode(status_code) from None
    logger.warning("HTB API error %s: %s", status_code, envelope.message)
    raise APIError(status_code, envelope.message)


def check_content_type(response: requests.Response, expected: str = CONTENT_TYPE_JSON) -> None:
    """Raise UnexpectedContentType unless Content-Type equals `expected` exactly."""
    actual = response.headers.get("Content-Type", "")
    if actual != expected:
        raise UnexpectedContentType(expected, actual)


def execute(
    session: requests.Session,
    request: requests.PreparedRequest,
    timeout: float | None = None,
) -> int:
    """Send a request and check only its status. Returns the status code."""
    with send_request(session, request, timeout) as response:
        check_status(response)
        return response.status_code


def fetch_data(
    session: requests.Session,
    request: requests.PreparedRequest,
    parse: Callable[[Any], T],
    timeout: float | None = None,
) -> APIDataResponse[T]:
    """Send a request and decode a {"data": ...} envelope."""
    return _fetch(session, request, timeout, lambda body: APIDataResponse.from_body(body, parse))


def fetch_info(
    session: requests.Session,
    request: requests.PreparedRequest,
    parse: Callable[[Any], T],
    timeout: float | None = None,
) -> APIInfoResponse[T]:
    """Send a request and decode an {"info": ...} envelope."""
    return _fetch(session, request, timeout, lambda body: APIInfoResponse.from_body(body, parse))


def _fetch(
    session: requests.Session,
    request: requests.PreparedRequest,
    timeout: float | None,
    decode: Callable[[Any], Any],
) -> Any:
    with send_request(session, request, timeout) as response:
        check_status(response)
        check_content_type(response)
        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON body: {e}") from e
        return decode(body)
