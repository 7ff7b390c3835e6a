"""Shared test fixtures for Octane SDK tests."""

from unittest.mock import MagicMock

import pytest

from octane_sdk.context import Builder, OctaneConfiguration
from octane_sdk.http_client import OctaneHttpClient

SERVER_URL = "http://octane.test"


def make_response(status_code: int = 200, body=None, content: bytes = b"") -> MagicMock:
    """Return a fake ``requests.Response``."""
    r = MagicMock()
    r.status_code = status_code
    r.content = content
    if body is None:
        r.json.side_effect = ValueError("no json")
        r.text = content.decode() if content else ""
    else:
        r.json.return_value = body
        r.text = str(body)
    return r


@pytest.fixture
def http_client():
    """A mocked OctaneHttpClient; set ``http_client.request.return_value`` per test."""
    client = MagicMock(spec=OctaneHttpClient)
    client.request.return_value = {}
    return client


@pytest.fixture
def configuration(http_client):
    return OctaneConfiguration(http_client)


@pytest.fixture
def builder(configuration):
    return Builder(configuration, SERVER_URL)


@pytest.fixture
def workspace(builder):
    """Context for shared space 1001, workspace 1002."""
    return builder.shared_space(1001).work_space(1002).build()
