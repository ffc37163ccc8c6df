import asyncio
import os
import sys
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

MP_URL = "https://marketplace.test"

os.environ.setdefault("MP_URL", MP_URL)
os.environ.setdefault("PARTNER", "TESTPARTNER")
os.environ.setdefault("CLIENT_ID", "test-client")
os.environ.setdefault("CLIENT_SECRET", "test-secret")
os.environ.setdefault("SHARED_PASSWORD", "letmein")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

import app.main as main  # noqa: E402  (import after env vars are set)
from app.config import settings  # noqa: E402
from app.services.marketplace_client import (  # noqa: E402
    MarketplaceClient,
    build_async_client,
    get_marketplace_client,
)

TOKEN = "test-token"


def token_response(request: httpx.Request, status_code: int = 200) -> httpx.Response | None:
    if request.url.path == "/oauth2/token":
        if status_code != 200:
            return httpx.Response(status_code, json={"error": "invalid_client"})
        return httpx.Response(200, json={"access_token": TOKEN})
    return None


@pytest.fixture()
def client():
    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def marketplace():
    """Route marketplace calls made by the app through a stub handler.

    Usage: `marketplace(handler)` where handler takes an `httpx.Request` and
    returns an `httpx.Response`. Token requests are answered automatically.
    Returns the list of requests the app made.
    """
    seen: list[httpx.Request] = []

    def install(handler, token_status: int = 200):
        def _dispatch(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            response = token_response(request, token_status)
            return response if response is not None else handler(request)

        async def _override():
            async with build_async_client(settings, transport=httpx.MockTransport(_dispatch)) as http:
                yield MarketplaceClient(settings, http)

        main.app.dependency_overrides[get_marketplace_client] = _override
        return seen

    yield install
    main.app.dependency_overrides.pop(get_marketplace_client, None)


@pytest.fixture()
def call_service():
    """Run a service coroutine `func(client, token, *args)` against a stub handler."""

    def call(handler, func, *args, **kwargs):
        async def _run():
            transport = httpx.MockTransport(handler)
            async with build_async_client(settings, transport=transport) as http:
                return await func(MarketplaceClient(settings, http), TOKEN, *args, **kwargs)

        return asyncio.run(_run())

    return call
