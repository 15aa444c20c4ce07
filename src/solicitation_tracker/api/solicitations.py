"""Solicitation workflow and worklist endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from solicitation_tracker.api.models import (
    CreateSolicitationRequest,
    ExecutorQueueResponse,
    QueueResponse,
    SolicitationDetail,
    SolicitationModel,
    TransitionRequest,
)
from solicitation_tracker.domain.solicitations import Actor, Role
from solicitation_tracker.services.workflow import allowed_targets

if TYPE_CHECKING:
    from solicitation_tracker.containers import AppContainer

router = APIRouter(tags=["solicitations"])


async def current_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_name: str | None = Header(default=None),
    x_actor_role: str | None = Header(default=None),
) -> Actor:
    """Return the actor established by the identity layer."""
    if not x_actor_id or not x_actor_name or not x_actor_role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        role = Role(x_actor_role)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown role: {x_actor_role}",
        ) from exc
    return Actor(id=x_actor_id, display_name=x_actor_name, role=role)


@router.post("/solicitations", status_code=status.HTTP_201_CREATED)
async def create_solicitation(
    body: CreateSolicitationRequest,
    request: Request,
    actor: Actor = Depends(current_actor),
) -> SolicitationModel:
    """Submit a new geotagged photo report."""
    if actor.role != Role.SUBMITTER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only submitters can create solicitations.",
        )
    container: AppContainer = request.app.state.container
    location = body.location.to_domain() if body.location else None
    if body.address is not None:
        address = body.address.to_domain()
    elif location is not None and body.photo_ref:
        # Incomplete submissions are rejected by the service without a lookup.
        address = await container.geocoding_service.resolve(location)
    else:
        address = None
    solicitation = container.solicitation_service.create_solicitation(
        submitter=actor,
        photo_ref=body.photo_ref,
        location=location,
        address=address,
        note=body.note,
    )
    return SolicitationModel.from_domain(solicitation)


@router.get("/solicitations/{solicitation_id}")
async def get_solicitation(
    solicitation_id: str,
    request: Request,
    actor: Actor = Depends(current_actor),
) -> SolicitationDetail:
    """Return a solicitation and the actions the caller may take on it."""
    container: AppContainer = request.app.state.container
    solicitation = container.solicitation_service.get_solicitation(solicitation_id)
    return SolicitationDetail(
        solicitation=SolicitationModel.from_domain(solicitation),
        available_actions=sorted(
            allowed_targets(actor.role, solicitation.current_status)
        ),
    )


@router.post("/solicitations/{solicitation_id}/transitions")
async def apply_transition(
    solicitation_id: str,
    body: TransitionRequest,
    request: Request,
    actor: Actor = Depends(current_actor),
) -> SolicitationModel:
    """Move a solicitation to a new status."""
    container: AppContainer = request.app.state.container
    solicitation = container.solicitation_service.apply_transition(
        actor, solicitation_id, body.target_status
    )
    return SolicitationModel.from_domain(solicitation)


@router.get("/queues/reviewer", dependencies=[Depends(current_actor)])
async def reviewer_queue(request: Request) -> QueueResponse:
    """Return solicitations awaiting review."""
    container: AppContainer = request.app.state.container
    return QueueResponse.build(
        container.queue_service.reviewer_queue(),
        container.settings.poll_interval_seconds,
    )


@router.get("/queues/reviewer/history", dependencies=[Depends(current_actor)])
async def reviewer_history(request: Request) -> QueueResponse:
    """Return solicitations that were already reviewed."""
    container: AppContainer = request.app.state.container
    return QueueResponse.build(
        container.queue_service.reviewer_history(),
        container.settings.poll_interval_seconds,
    )


@router.get("/queues/executor", dependencies=[Depends(current_actor)])
async def executor_queue(request: Request) -> ExecutorQueueResponse:
    """Return approved solicitations split into active and finished."""
    container: AppContainer = request.app.state.container
    return ExecutorQueueResponse.build(
        container.queue_service.executor_queue(),
        container.settings.poll_interval_seconds,
    )


@router.get("/queues/mine")
async def my_solicitations(
    request: Request, actor: Actor = Depends(current_actor)
) -> QueueResponse:
    """Return the caller's own submissions."""
    container: AppContainer = request.app.state.container
    return QueueResponse.build(
        container.queue_service.submitter_view(actor.id),
        container.settings.poll_interval_seconds,
    )
