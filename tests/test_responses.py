"""
Tests for response interpretation: status classification, content-type gate,
envelope decoding, transport failures and response release.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from htb_client.domains.models.machine import Machine, parse_machines
from htb_client.domains.models.vpn_server import VPNServersData
from htb_client.errors import (
    APIError,
    DecodeError,
    TransportFailure,
    UnexpectedContentType,
    UnexpectedStatusCode,
)
from htb_client.infrastructure.api.paths import PATH_ACTIVE_LAB_MACHINE, PATH_SPAWN_LAB_MACHINE
from htb_client.infrastructure.api.request import RequestOptions, build_request
from htb_client.infrastructure.api.responses import (
    APIDataResponse,
    APIInfoResponse,
    APIMessageResponse,
    execute,
    fetch_data,
    fetch_info,
)


@pytest.fixture
def prepared() -> requests.PreparedRequest:
    return build_request(RequestOptions(path=PATH_ACTIVE_LAB_MACHINE, auth_token="t"))


def _spy_close(response: requests.Response) -> requests.Response:
    response.close = MagicMock(wraps=response.close)  # type: ignore[method-assign]
    return response


def test_api_error_with_message(session, make_response, prepared) -> None:
    session.send.return_value = make_response(404, {"message": "not found"})
    with pytest.raises(APIError) as exc:
        fetch_info(session, prepared, Machine.from_dict)
    assert exc.value.status_code == 404
    assert exc.value.message == "not found"


def test_unexpected_status_code_with_unparseable_body(session, make_response, prepared) -> None:
    session.send.return_value = make_response(404, "<html>Not Found</html>", content_type="text/html")
    with pytest.raises(UnexpectedStatusCode) as exc:
        fetch_info(session, prepared, Machine.from_dict)
    assert exc.value.status_code == 404


@pytest.mark.parametrize("body", [None, b"{broken", ["message"], {"message": 42}])
def test_unexpected_status_code_without_message(session, make_response, prepared, body) -> None:
    session.send.return_value = make_response(500, body)
    with pytest.raises(UnexpectedStatusCode):
        fetch_info(session, prepared, Machine.from_dict)


@pytest.mark.parametrize("body", [{"error": "nope"}, {"message": None}, {}])
def test_api_error_with_empty_message(session, make_response, prepared, body) -> None:
    session.send.return_value = make_response(500, body)
    with pytest.raises(APIError) as exc:
        fetch_info(session, prepared, Machine.from_dict)
    assert exc.value.status_code == 500
    assert exc.value.message == ""


def test_redirect_status_is_failure(session, make_response, prepared) -> None:
    session.send.return_value = make_response(302, None, content_type=None)
    with pytest.raises(UnexpectedStatusCode) as exc:
        fetch_info(session, prepared, Machine.from_dict)
    assert exc.value.status_code == 302


def test_html_content_type_rejected_regardless_of_body(session, make_response, prepared) -> None:
    session.send.return_value = make_response(200, {"info": {"id": 1}}, content_type="text/html")
    with pytest.raises(UnexpectedContentType) as exc:
        fetch_info(session, prepared, Machine.from_dict)
    assert exc.value.expected == "application/json"
    assert exc.value.actual == "text/html"


def test_missing_content_type_rejected(session, make_response, prepared) -> None:
    session.send.return_value = make_response(200, {"info": None}, content_type=None)
    with pytest.raises(UnexpectedContentType) as exc:
        fetch_info(session, prepared, Machine.from_dict)
    assert exc.value.actual == ""


def test_content_type_must_match_exactly(session, make_response, prepared) -> None:
    session.send.return_value = make_response(
        200, {"info": None}, content_type="application/json; charset=utf-8"
    )
    with pytest.raises(UnexpectedContentType):
        fetch_info(session, prepared, Machine.from_dict)


def test_fetch_info_decodes_payload(session, make_response, prepared) -> None:
    session.send.return_value = make_response(200, {"info": {"id": 7, "name": "Lame", "ip": "10.10.10.3"}})
    out = fetch_info(session, prepared, Machine.from_dict, timeout=5.0)
    assert out == APIInfoResponse(info=Machine(id=7, name="Lame", ip="10.10.10.3"))
    session.send.assert_called_once_with(prepared, timeout=5.0)


@pytest.mark.parametrize("body", [{"info": None}, {}])
def test_fetch_info_null_payload(session, make_response, prepared, body) -> None:
    session.send.return_value = make_response(200, body)
    assert fetch_info(session, prepared, Machine.from_dict).info is None


def test_fetch_data_decodes_list(session, make_response, prepared) -> None:
    session.send.return_value = make_response(200, {"data": [{"id": 1, "name": "A"}, {"id": 2}]})
    out = fetch_data(session, prepared, parse_machines)
    assert isinstance(out, APIDataResponse)
    assert out.data == [Machine(id=1, name="A"), Machine(id=2)]


@pytest.mark.parametrize(
    "body",
    [
        b"{not json",
        ["data"],
        {"data": {"id": 1}},
        {"data": [{"id": "one"}]},
    ],
)
def test_fetch_data_decode_errors(session, make_response, prepared, body) -> None:
    session.send.return_value = make_response(200, body)
    with pytest.raises(DecodeError):
        fetch_data(session, prepared, parse_machines)


@pytest.mark.parametrize("body", [{"data": None}, {"info": []}])
def test_fetch_data_null_list_is_empty(session, make_response, prepared, body) -> None:
    session.send.return_value = make_response(200, body)
    assert fetch_data(session, prepared, parse_machines).data == []


def test_fetch_data_null_object_is_decode_error(session, make_response, prepared) -> None:
    session.send.return_value = make_response(200, {"data": None})
    with pytest.raises(DecodeError):
        fetch_data(session, prepared, VPNServersData.from_dict)


def test_transport_failure_wraps_original(session, prepared) -> None:
    original = requests.ConnectionError("connection refused")
    session.send.side_effect = original
    with pytest.raises(TransportFailure) as exc:
        fetch_info(session, prepared, Machine.from_dict)
    assert exc.value.original is original
    assert exc.value.__cause__ is original


def test_timeout_is_transport_failure(session, prepared) -> None:
    session.send.side_effect = requests.Timeout("read timed out")
    with pytest.raises(TransportFailure) as exc:
        fetch_data(session, prepared, parse_machines, timeout=0.1)
    assert isinstance(exc.value.original, requests.Timeout)


@pytest.mark.parametrize(
    "status, body, content_type, error",
    [
        (200, {"info": {"id": 1}}, "application/json", None),
        (404, {"message": "not found"}, "application/json", APIError),
        (500, "oops", "text/plain", UnexpectedStatusCode),
        (200, {"info": {"id": 1}}, "text/html", UnexpectedContentType),
        (200, b"{broken", "application/json", DecodeError),
    ],
)
def test_response_closed_on_every_path(session, make_response, prepared, status, body, content_type, error) -> None:
    response = _spy_close(make_response(status, body, content_type=content_type))
    session.send.return_value = response
    if error is None:
        fetch_info(session, prepared, Machine.from_dict)
    else:
        with pytest.raises(error):
            fetch_info(session, prepared, Machine.from_dict)
    assert response.close.called


@pytest.mark.parametrize("status", [200, 201, 204, 299])
def test_execute_accepts_any_success_status(session, make_response, status) -> None:
    request = build_request(RequestOptions(path=PATH_SPAWN_LAB_MACHINE, method="POST"))
    response = _spy_close(make_response(status, "<html>ok</html>", content_type="text/html"))
    session.send.return_value = response
    assert execute(session, request) == status
    assert response.close.called


def test_execute_raises_api_error(session, make_response) -> None:
    request = build_request(RequestOptions(path=PATH_SPAWN_LAB_MACHINE, method="POST"))
    session.send.return_value = make_response(400, {"message": "Machine already spawned"})
    with pytest.raises(APIError, match="Machine already spawned"):
        execute(session, request)


def test_message_envelope() -> None:
    assert APIMessageResponse.from_body({"message": "x"}).message == "x"
    assert APIMessageResponse.from_body({"msg": "x"}).message == ""
    with pytest.raises(DecodeError):
        APIMessageResponse.from_body({"message": ["x"]})
    with pytest.raises(DecodeError):
        APIMessageResponse.from_body("x")
