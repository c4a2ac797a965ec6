"""Integration tests for the entity API routes."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from backend.app.api.routes.entities import get_entity_service
from backend.app.db.inmemory import InMemoryEntityService
from backend.app.main import app
from backend.app.models.entity import Entity, EntityStatus

TENANT_AUTH = {"Authorization": "Bearer tenant-a:user-a"}
OTHER_TENANT_AUTH = {"Authorization": "Bearer tenant-b:user-b"}


@pytest.fixture
def service(sample_entity: Entity) -> InMemoryEntityService:
    """In-memory service holding the sample entity for tenant-a."""
    svc = InMemoryEntityService()
    svc.seed(sample_entity)
    return svc


@pytest.fixture
def client(service: InMemoryEntityService) -> Generator[TestClient, None, None]:
    """Create test client backed by the in-memory service."""
    app.dependency_overrides[get_entity_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestGetEntity:
    """GET /api/entities/{id}."""

    def test_returns_entity(self, client: TestClient, sample_entity: Entity) -> None:
        response = client.get(f"/api/entities/{sample_entity.id}", headers=TENANT_AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["id"] == sample_entity.id
        assert data["data"]["tenantId"] == "tenant-a"
        assert data["data"]["status"] == "ACTIVE"

    def test_without_token_returns_401(self, client: TestClient, sample_entity: Entity) -> None:
        response = client.get(f"/api/entities/{sample_entity.id}")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_other_tenant_gets_same_404_as_missing(
        self, client: TestClient, sample_entity: Entity
    ) -> None:
        cross = client.get(f"/api/entities/{sample_entity.id}", headers=OTHER_TENANT_AUTH)
        missing = client.get("/api/entities/does-not-exist", headers=TENANT_AUTH)

        assert cross.status_code == missing.status_code == 404
        assert cross.json() == missing.json() == {"error": "Not found or unauthorized"}


class TestPatchEntity:
    """PATCH /api/entities/{id}."""

    def test_partial_update(
        self, client: TestClient, service: InMemoryEntityService, sample_entity: Entity
    ) -> None:
        response = client.patch(
            f"/api/entities/{sample_entity.id}", json={"legalForm": "LLC"}, headers=TENANT_AUTH
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["legalForm"] == "LLC"
        assert data["name"] == sample_entity.name
        assert data["activityCode"] == sample_entity.activity_code
        assert data["updatedBy"] == "user-a"

    def test_empty_name_returns_400_with_details(
        self, client: TestClient, sample_entity: Entity
    ) -> None:
        response = client.patch(
            f"/api/entities/{sample_entity.id}", json={"name": ""}, headers=TENANT_AUTH
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation error"
        assert body["details"][0]["field"] == "name"
        assert body["details"][0]["type"] == "string_too_short"

    def test_invalid_status_leaves_entity_untouched(
        self, client: TestClient, sample_entity: Entity
    ) -> None:
        response = client.patch(
            f"/api/entities/{sample_entity.id}", json={"status": "DELETED"}, headers=TENANT_AUTH
        )

        assert response.status_code == 400

        after = client.get(f"/api/entities/{sample_entity.id}", headers=TENANT_AUTH)
        assert after.json()["data"]["status"] == "ACTIVE"

    def test_malformed_json_returns_400(self, client: TestClient, sample_entity: Entity) -> None:
        response = client.patch(
            f"/api/entities/{sample_entity.id}",
            content=b"{oops",
            headers={**TENANT_AUTH, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    def test_without_token_returns_401(self, client: TestClient, sample_entity: Entity) -> None:
        response = client.patch(f"/api/entities/{sample_entity.id}", json={"name": "X"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}


class TestDeleteEntity:
    """DELETE /api/entities/{id}."""

    def test_archive_then_permanent_delete(
        self, client: TestClient, service: InMemoryEntityService, sample_entity: Entity
    ) -> None:
        archived = client.delete(f"/api/entities/{sample_entity.id}", headers=TENANT_AUTH)

        assert archived.status_code == 200
        assert archived.json() == {"success": True, "message": "Entity archived"}

        fetched = client.get(f"/api/entities/{sample_entity.id}", headers=TENANT_AUTH)
        assert fetched.json()["data"]["status"] == EntityStatus.ARCHIVED.value

        deleted = client.delete(
            f"/api/entities/{sample_entity.id}", params={"permanent": "true"}, headers=TENANT_AUTH
        )

        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "message": "Entity deleted"}

        gone = client.get(f"/api/entities/{sample_entity.id}", headers=TENANT_AUTH)
        assert gone.status_code == 404

    def test_permanent_flag_must_be_literal_true(
        self, client: TestClient, sample_entity: Entity
    ) -> None:
        response = client.delete(
            f"/api/entities/{sample_entity.id}", params={"permanent": "1"}, headers=TENANT_AUTH
        )

        assert response.json()["message"] == "Entity archived"

    def test_permanent_delete_of_active_entity_returns_500(
        self, client: TestClient, sample_entity: Entity
    ) -> None:
        response = client.delete(
            f"/api/entities/{sample_entity.id}", params={"permanent": "true"}, headers=TENANT_AUTH
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_other_tenant_cannot_archive(self, client: TestClient, sample_entity: Entity) -> None:
        response = client.delete(f"/api/entities/{sample_entity.id}", headers=OTHER_TENANT_AUTH)

        assert response.status_code == 404

        fetched = client.get(f"/api/entities/{sample_entity.id}", headers=TENANT_AUTH)
        assert fetched.json()["data"]["status"] == "ACTIVE"
