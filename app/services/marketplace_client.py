import logging
from typing import Any, AsyncIterator

import httpx

from app.config import Settings, settings
from app.exceptions import MarketplaceError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth2/token"


def build_async_client(
    config: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the `httpx.AsyncClient` every marketplace call goes through."""
    return httpx.AsyncClient(
        base_url=config.MP_URL,
        timeout=httpx.Timeout(config.HTTP_TIMEOUT_SECONDS),
        headers={"Accept": "application/json"},
        transport=transport,
    )


class MarketplaceClient:
    """Thin bearer-token wrapper around the marketplace REST API."""

    def __init__(self, config: Settings, http: httpx.AsyncClient):
        self.settings = config
        self.http = http

    async def get_access_token(self) -> str:
        # No caching: every incoming request asks for a fresh token.
        body = {
            "grant_type": "client_credentials",
            "client_id": self.settings.CLIENT_ID,
            "client_secret": self.settings.CLIENT_SECRET,
            "scope": self.settings.MP_OAUTH_SCOPE,
        }
        logger.info("Requesting access token from %s%s", self.settings.MP_URL, TOKEN_PATH)
        try:
            response = await self.http.post(
                TOKEN_PATH,
                data=body,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            response.raise_for_status()
            token = response.json()["access_token"]
        except httpx.HTTPStatusError as exc:
            logger.error("Token endpoint rejected client credentials: status=%s", exc.response.status_code)
            raise MarketplaceError("Unable to obtain marketplace access token") from exc
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            logger.error("Error fetching access token: %s", exc)
            raise MarketplaceError("Unable to obtain marketplace access token") from exc
        logger.info("Access token fetched successfully.")
        return token

    def _auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    async def get_json(self, path: str, token: str, params: dict[str, Any] | None = None) -> Any:
        response = await self.http.get(path, params=params, headers=self._auth_headers(token))
        response.raise_for_status()
        return response.json()

    async def post_json(self, path: str, token: str, payload: dict[str, Any]) -> Any:
        headers = self._auth_headers(token)
        headers["Content-Type"] = "application/json"
        response = await self.http.post(path, json=payload, headers=headers)
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()


async def get_marketplace_client() -> AsyncIterator[MarketplaceClient]:
    """FastAPI dependency yielding a request-scoped client."""
    async with build_async_client(settings) as http:
        yield MarketplaceClient(settings, http)
