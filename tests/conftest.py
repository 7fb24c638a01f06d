"""Shared fixtures: in-process requests.Response objects and a mocked session."""

from __future__ import annotations

import io
import json
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
import requests


def _response(
    status_code: int = 200,
    body: Any = None,
    content_type: str | None = "application/json",
) -> requests.Response:
    if body is None:
        raw = b""
    elif isinstance(body, bytes):
        raw = body
    elif isinstance(body, str):
        raw = body.encode("utf-8")
    else:
        raw = json.dumps(body).encode("utf-8")

    r = requests.Response()
    r.status_code = status_code
    r.raw = io.BytesIO(raw)
    r.encoding = "utf-8"
    if content_type is not None:
        r.headers["Content-Type"] = content_type
    return r


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return _response


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)
