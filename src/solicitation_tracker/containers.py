"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from solicitation_tracker.adapters.nominatim_client import HttpxNominatimClient
from solicitation_tracker.adapters.supabase_solicitation_repository import (
    SupabaseSolicitationRepository,
)
from solicitation_tracker.config import Settings
from solicitation_tracker.services.cache import InMemoryAddressCache
from solicitation_tracker.services.geocoding import GeocodingService
from solicitation_tracker.services.queues import QueueService
from solicitation_tracker.services.solicitations import SolicitationService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    solicitation_service: SolicitationService
    queue_service: QueueService
    geocoding_service: GeocodingService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    solicitation_repository = SupabaseSolicitationRepository(supabase_client)
    nominatim_client = HttpxNominatimClient.create(
        base_url=resolved_settings.nominatim_base_url,
        user_agent=resolved_settings.nominatim_user_agent,
    )
    geocoding_service = GeocodingService(
        client=nominatim_client,
        cache=InMemoryAddressCache(),
        ttl_seconds=resolved_settings.geocode_cache_ttl_seconds,
    )

    async def close_resources() -> None:
        await nominatim_client.close()

    return AppContainer(
        settings=resolved_settings,
        solicitation_service=SolicitationService(solicitation_repository),
        queue_service=QueueService(solicitation_repository),
        geocoding_service=geocoding_service,
        close_resources=close_resources,
    )
