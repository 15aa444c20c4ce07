"""Reverse-geocoding of solicitation locations."""

import logging
from dataclasses import dataclass

from solicitation_tracker.adapters.nominatim_client import ReverseGeocodingClient
from solicitation_tracker.domain.solicitations import AddressData, GeoLocation
from solicitation_tracker.services.cache import AddressCache

_MISSING = "N/A"
_COORDINATE_PRECISION = 5

_logger = logging.getLogger(__name__)


@dataclass
class GeocodingService:
    """Resolves coordinates to addresses; a failed lookup yields no address."""

    client: ReverseGeocodingClient
    cache: AddressCache
    ttl_seconds: int = 86400

    async def resolve(self, location: GeoLocation) -> AddressData | None:
        """Return the address for a location, or None when lookup fails."""
        cache_key = (
            round(location.latitude, _COORDINATE_PRECISION),
            round(location.longitude, _COORDINATE_PRECISION),
        )
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            payload = await self.client.reverse(location.latitude, location.longitude)
        except Exception:
            _logger.exception(
                "Reverse geocoding failed",
                extra={"latitude": location.latitude, "longitude": location.longitude},
            )
            return None

        address = parse_address(payload)
        if address is not None:
            self.cache.set(cache_key, address, ttl_seconds=self.ttl_seconds)
        return address


def parse_address(payload: dict[str, object]) -> AddressData | None:
    """Map a Nominatim payload to AddressData, defaulting missing parts."""
    parts = payload.get("address")
    if not isinstance(parts, dict):
        return None
    return AddressData(
        road=str(parts.get("road") or _MISSING),
        suburb=str(parts.get("suburb") or _MISSING),
        city=str(parts.get("city") or _MISSING),
        postcode=str(parts.get("postcode") or _MISSING),
        country=str(parts.get("country") or _MISSING),
        display_name=str(payload.get("display_name") or _MISSING),
    )
