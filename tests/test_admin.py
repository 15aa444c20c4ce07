"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from solicitation_tracker.api.app import create_app
from solicitation_tracker.containers import AppContainer
from solicitation_tracker.domain.solicitations import Status
from tests.conftest import LOCATION, REVIEWER, SUBMITTER


def test_admin_health_requires_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/health")

    assert response.status_code == 401


def test_admin_health_accepts_valid_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/health", headers={"X-Admin-Token": "admin-token"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_admin_audit_trail_lists_all_records(container: AppContainer) -> None:
    service = container.solicitation_service
    refused = service.create_solicitation(SUBMITTER, "photo-1", LOCATION)
    pending = service.create_solicitation(SUBMITTER, "photo-2", LOCATION)
    service.apply_transition(REVIEWER, refused.id, Status.REFUSED)
    client = TestClient(create_app(container))

    response = client.get(
        "/admin/solicitations", headers={"X-Admin-Token": "admin-token"}
    )

    assert response.status_code == 200
    records = response.json()["solicitations"]
    assert [record["id"] for record in records] == [pending.id, refused.id]
    assert records[1]["history"][-1] == {
        "status": "Refused",
        "actor_name": "Rui Review",
        "timestamp": records[1]["history"][-1]["timestamp"],
    }


def test_admin_audit_trail_rejects_wrong_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/solicitations", headers={"X-Admin-Token": "nope"})

    assert response.status_code == 401
