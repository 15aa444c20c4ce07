"""Address lookup cache."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from solicitation_tracker.domain.solicitations import AddressData


class AddressCache(Protocol):
    """Cache interface for resolved addresses keyed by rounded coordinates."""

    def get(self, key: tuple[float, float]) -> AddressData | None:
        """Return a cached address if present and not expired."""

    def set(
        self, key: tuple[float, float], value: AddressData, ttl_seconds: int
    ) -> None:
        """Store an address with a TTL in seconds."""


@dataclass
class _CachedAddress:
    address: AddressData
    expires_at: datetime


class InMemoryAddressCache(AddressCache):
    """Process-local address cache."""

    def __init__(self) -> None:
        self._entries: dict[tuple[float, float], _CachedAddress] = {}

    def get(self, key: tuple[float, float]) -> AddressData | None:
        """Return a cached address if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.address

    def set(
        self, key: tuple[float, float], value: AddressData, ttl_seconds: int
    ) -> None:
        """Store an address with a TTL."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CachedAddress(address=value, expires_at=expires_at)
