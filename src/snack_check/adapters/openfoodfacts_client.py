"""OpenFoodFacts search API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_BASE_URL = "https://world.openfoodfacts.org"
DEFAULT_USER_AGENT = "SnackCheck/1.0 (https://snackcheck.app)"


class OpenFoodFactsClient(Protocol):
    """Interface for OpenFoodFacts product searches."""

    async def search_products(
        self, term: str, timeout_seconds: float
    ) -> dict[str, object]:
        """Search products by free-text term and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed OpenFoodFacts client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, base_url: str = DEFAULT_BASE_URL, user_agent: str = DEFAULT_USER_AGENT
    ) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url, user_agent=user_agent, http_client=httpx.AsyncClient()
        )

    async def search_products(
        self, term: str, timeout_seconds: float
    ) -> dict[str, object]:
        """Search products containing the term."""
        url = f"{self.base_url}/cgi/search.pl"
        response = await self.http_client.get(
            url,
            params={
                "search_terms": term,
                "search_simple": 1,
                "action": "process",
                "json": 1,
            },
            headers={"User-Agent": self.user_agent},
            timeout=timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
