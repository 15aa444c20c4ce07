"""Pydantic models for the solicitation HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field

from solicitation_tracker.domain.queues import ExecutorQueue, QueueEntry
from solicitation_tracker.domain.solicitations import (
    AddressData,
    GeoLocation,
    Solicitation,
    Status,
)


class LocationModel(BaseModel):
    """GPS coordinates payload."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def to_domain(self) -> GeoLocation:
        return GeoLocation(latitude=self.latitude, longitude=self.longitude)


class AddressModel(BaseModel):
    """Resolved address payload."""

    road: str = "N/A"
    suburb: str = "N/A"
    city: str = "N/A"
    postcode: str = "N/A"
    country: str = "N/A"
    display_name: str = "N/A"

    def to_domain(self) -> AddressData:
        return AddressData(**self.model_dump())

    @classmethod
    def from_domain(cls, address: AddressData) -> "AddressModel":
        return cls(
            road=address.road,
            suburb=address.suburb,
            city=address.city,
            postcode=address.postcode,
            country=address.country,
            display_name=address.display_name,
        )


class CreateSolicitationRequest(BaseModel):
    """Body of a new solicitation submission.

    ``photo_ref`` and ``location`` are optional here so that their absence is
    reported by the workflow engine rather than by request validation.
    """

    photo_ref: str | None = None
    location: LocationModel | None = None
    address: AddressModel | None = None
    note: str = ""


class TransitionRequest(BaseModel):
    """Body of a status transition request."""

    target_status: Status


class StatusEntryModel(BaseModel):
    """History entry payload."""

    status: Status
    actor_name: str
    timestamp: datetime


class SolicitationModel(BaseModel):
    """Solicitation payload."""

    id: str
    submitter_id: str
    submitter_name: str
    photo_ref: str
    location: LocationModel
    address: AddressModel | None
    note: str
    created_at: datetime
    current_status: Status
    history: list[StatusEntryModel]

    @classmethod
    def from_domain(cls, solicitation: Solicitation) -> "SolicitationModel":
        return cls(
            id=solicitation.id,
            submitter_id=solicitation.submitter_id,
            submitter_name=solicitation.submitter_name,
            photo_ref=solicitation.photo_ref,
            location=LocationModel(
                latitude=solicitation.location.latitude,
                longitude=solicitation.location.longitude,
            ),
            address=(
                AddressModel.from_domain(solicitation.address)
                if solicitation.address
                else None
            ),
            note=solicitation.note,
            created_at=solicitation.created_at,
            current_status=solicitation.current_status,
            history=[
                StatusEntryModel(
                    status=entry.status,
                    actor_name=entry.actor_name,
                    timestamp=entry.timestamp,
                )
                for entry in solicitation.history
            ],
        )


class SolicitationDetail(BaseModel):
    """Solicitation with the transitions available to the caller."""

    solicitation: SolicitationModel
    available_actions: list[Status]


class QueueEntryModel(BaseModel):
    """Worklist entry payload."""

    solicitation: SolicitationModel
    forwarded_by: str

    @classmethod
    def from_domain(cls, entry: QueueEntry) -> "QueueEntryModel":
        return cls(
            solicitation=SolicitationModel.from_domain(entry.solicitation),
            forwarded_by=entry.forwarded_by,
        )


class QueueResponse(BaseModel):
    """Worklist payload with the client refresh interval."""

    items: list[QueueEntryModel]
    refresh_after_seconds: int

    @classmethod
    def build(cls, entries: list[QueueEntry], refresh_after: int) -> "QueueResponse":
        return cls(
            items=[QueueEntryModel.from_domain(entry) for entry in entries],
            refresh_after_seconds=refresh_after,
        )


class ExecutorQueueResponse(BaseModel):
    """Executor worklist payload."""

    active: list[QueueEntryModel]
    finished: list[QueueEntryModel]
    refresh_after_seconds: int

    @classmethod
    def build(cls, queue: ExecutorQueue, refresh_after: int) -> "ExecutorQueueResponse":
        return cls(
            active=[QueueEntryModel.from_domain(entry) for entry in queue.active],
            finished=[QueueEntryModel.from_domain(entry) for entry in queue.finished],
            refresh_after_seconds=refresh_after,
        )
