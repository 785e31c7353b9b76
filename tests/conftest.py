"""Shared fixtures."""

import json

import pytest
import requests
from requests.structures import CaseInsensitiveDict


def make_response(status: int = 200, body=None, headers: dict | None = None) -> requests.Response:
    """Build a real requests.Response; dict/list bodies are JSON-encoded."""
    resp = requests.Response()
    resp.status_code = status
    if body is None:
        resp._content = b""
    elif isinstance(body, (dict, list, int)):
        resp._content = json.dumps(body).encode()
    else:
        resp._content = body.encode()
    resp.headers = CaseInsensitiveDict(headers or {})
    resp.encoding = "utf-8"
    return resp


@pytest.fixture
def response():
    return make_response


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the clients read from the environment."""
    for name in [
        "TRACKER_OAUTH_TOKEN",
        "TRACKER_ORG_ID",
        "TRACKER_BASE_URL",
        "TRACKER_API_VERSION",
        "TRACKER_LANGUAGE",
        "OPEN_ROUTER_TOKEN",
        "LLM_BASE_URL",
        "LLM_SITE_URL",
        "LLM_APP_NAME",
        "YOU_PROXY",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
