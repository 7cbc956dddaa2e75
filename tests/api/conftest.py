"""
tests/api/conftest.py

Shared fixtures for API route tests.

The `client` fixture wraps the FastAPI app in a TestClient used as a
context manager so the lifespan hooks run.  The analytics engine needs no
external services, so nothing is patched; require_api_key runs for real
and authenticated tests send the default "changeme" key (matches the
settings.api_key default).
"""
from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from sociogram.main import app

# Default API key that matches settings.api_key default value.
VALID_API_KEY = "changeme"


@pytest.fixture()
def client() -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture()
def auth() -> dict[str, str]:
    return {"X-API-Key": VALID_API_KEY}
