"""OpenStreetMap Nominatim reverse-geocoding client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class ReverseGeocodingClient(Protocol):
    """Interface for reverse-geocoding lookups."""

    async def reverse(self, latitude: float, longitude: float) -> dict[str, object]:
        """Return the raw reverse-geocoding payload for a coordinate pair."""


@dataclass
class HttpxNominatimClient(ReverseGeocodingClient):
    """HTTPX-backed Nominatim client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, user_agent: str) -> "HttpxNominatimClient":
        """Create a Nominatim client with a managed httpx session."""
        return cls(
            base_url=base_url,
            user_agent=user_agent,
            http_client=httpx.AsyncClient(),
        )

    async def reverse(self, latitude: float, longitude: float) -> dict[str, object]:
        """Resolve coordinates with Nominatim's /reverse endpoint."""
        response = await self.http_client.get(
            f"{self.base_url}/reverse",
            params={"format": "jsonv2", "lat": latitude, "lon": longitude},
            headers={"User-Agent": self.user_agent},
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
