"""Supabase-backed solicitation repository."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from solicitation_tracker.domain.errors import (
    DuplicateIdError,
    SolicitationNotFoundError,
)
from solicitation_tracker.domain.solicitations import (
    AddressData,
    GeoLocation,
    Solicitation,
    Status,
    StatusEntry,
)
from solicitation_tracker.services.solicitations import SolicitationRepository

_TABLE = "solicitations"
_COLUMNS = (
    "id, submitter_id, submitter_name, photo_ref, location_json, address_json, "
    "note, created_at, current_status, history_json"
)
_UNIQUE_VIOLATION = "23505"
_ADDRESS_FIELDS = ("road", "suburb", "city", "postcode", "country", "display_name")


@dataclass
class SupabaseSolicitationRepository(SolicitationRepository):
    """Supabase implementation storing one row per solicitation."""

    client: Client

    def list_all(self) -> list[Solicitation]:
        """Return every solicitation row."""
        response = self.client.table(_TABLE).select(_COLUMNS).execute()
        return [solicitation_from_row(row) for row in response.data or []]

    def get_by_id(self, solicitation_id: str) -> Solicitation | None:
        """Return a solicitation by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", solicitation_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return solicitation_from_row(response.data[0])

    def insert(self, solicitation: Solicitation) -> Solicitation:
        """Insert a new row, refusing ids that are already stored."""
        if self._exists(solicitation.id):
            raise DuplicateIdError(solicitation.id)
        try:
            response = (
                self.client.table(_TABLE)
                .insert(solicitation_to_row(solicitation))
                .execute()
            )
        except APIError as exc:
            # Another writer took the id after the existence check.
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateIdError(solicitation.id) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create solicitation in Supabase")
        return solicitation

    def replace(self, solicitation: Solicitation) -> Solicitation:
        """Overwrite the full row for an existing solicitation."""
        if not self._exists(solicitation.id):
            raise SolicitationNotFoundError(solicitation.id)
        self.client.table(_TABLE).update(solicitation_to_row(solicitation)).eq(
            "id", solicitation.id
        ).execute()
        return solicitation

    def _exists(self, solicitation_id: str) -> bool:
        response = (
            self.client.table(_TABLE)
            .select("id")
            .eq("id", solicitation_id)
            .limit(1)
            .execute()
        )
        return bool(response.data)


def solicitation_to_row(solicitation: Solicitation) -> dict[str, object]:
    """Serialize a solicitation to its JSON-compatible row."""
    address = solicitation.address
    return {
        "id": solicitation.id,
        "submitter_id": solicitation.submitter_id,
        "submitter_name": solicitation.submitter_name,
        "photo_ref": solicitation.photo_ref,
        "location_json": {
            "latitude": solicitation.location.latitude,
            "longitude": solicitation.location.longitude,
        },
        "address_json": (
            {
                "road": address.road,
                "suburb": address.suburb,
                "city": address.city,
                "postcode": address.postcode,
                "country": address.country,
                "display_name": address.display_name,
            }
            if address
            else None
        ),
        "note": solicitation.note,
        "created_at": solicitation.created_at.isoformat(),
        "current_status": solicitation.current_status.value,
        "history_json": [
            {
                "status": entry.status.value,
                "actor_name": entry.actor_name,
                "timestamp": entry.timestamp.isoformat(),
            }
            for entry in solicitation.history
        ],
    }


def solicitation_from_row(row: dict[str, object]) -> Solicitation:
    """Build a solicitation from a stored row."""
    location = row["location_json"]
    address = row.get("address_json")
    return Solicitation(
        id=str(row["id"]),
        submitter_id=str(row["submitter_id"]),
        submitter_name=str(row["submitter_name"]),
        photo_ref=str(row["photo_ref"]),
        location=GeoLocation(
            latitude=float(location["latitude"]),
            longitude=float(location["longitude"]),
        ),
        address=_address_from_json(address) if address else None,
        note=str(row.get("note") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        current_status=Status(row["current_status"]),
        history=tuple(
            StatusEntry(
                status=Status(entry["status"]),
                actor_name=entry["actor_name"],
                timestamp=datetime.fromisoformat(entry["timestamp"]),
            )
            for entry in row["history_json"]
        ),
    )


def _address_from_json(address: dict[str, object]) -> AddressData:
    return AddressData(
        **{name: str(address.get(name) or "N/A") for name in _ADDRESS_FIELDS}
    )
