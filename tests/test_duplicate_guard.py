"""Tests for the duplicate-code guard shared by coded entities."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from app.errors import ErrorKind
from app.gateway import Gateway
from app.services.institution import InstitutionService
from app.services.researcher import ResearcherService


class TestCreateGuard:
    """Creating rows whose code is already taken."""

    def test_second_create_with_same_code_is_rejected(self, gateway: Gateway):
        """Test that codes are compared after upper-casing."""
        service = InstitutionService()
        first = service.create(gateway, {"codigo": "FUAB", "nombre": "Fundación Abrazo"})
        second = service.create(gateway, {"codigo": "fuab", "nombre": "Otra fundación"})

        assert first.success
        assert not second.success
        assert second.kind == ErrorKind.DUPLICATE_KEY
        assert second.error == "An institution with code FUAB already exists"
        assert gateway.count("instituciones").data == 1

    def test_race_past_the_precheck_is_caught_by_the_constraint(self, gateway: Gateway):
        """Two creators that both see "no duplicate" still leave a single row."""
        service = ResearcherService()
        payload = {"codigo": "INV07", "nombre": "Ana", "apellido": "Soto"}
        with patch.object(ResearcherService, "find_duplicate", return_value=None):
            first = service.create(gateway, payload)
            second = service.create(gateway, payload)

        assert first.success
        assert second.kind == ErrorKind.DUPLICATE_KEY
        assert second.error == "A researcher with code INV07 already exists"
        assert gateway.count("investigadores").data == 1

    def test_different_codes_coexist(self, gateway: Gateway):
        """Test that distinct codes are both stored."""
        service = InstitutionService()
        service.create(gateway, {"codigo": "AAA", "nombre": "Uno"})
        result = service.create(gateway, {"codigo": "BBB", "nombre": "Dos"})
        assert result.success
        assert gateway.count("instituciones").data == 2


class TestUpdateGuard:
    """Updating a row onto another row's code."""

    def test_update_keeping_own_code_is_allowed(self, gateway: Gateway):
        """Test that a row never conflicts with itself."""
        service = InstitutionService()
        created = service.create(gateway, {"codigo": "FUAB", "nombre": "Fundación Abrazo"}).data
        result = service.update(gateway, created["id"], {"codigo": "FUAB", "nombre": "Fundación Abrazo Norte"})
        assert result.success
        assert result.data["nombre"] == "Fundación Abrazo Norte"

    def test_update_to_another_rows_code_is_rejected(self, gateway: Gateway):
        """Test the duplicate message used on update."""
        service = InstitutionService()
        service.create(gateway, {"codigo": "AAA", "nombre": "Uno"})
        other = service.create(gateway, {"codigo": "BBB", "nombre": "Dos"}).data
        result = service.update(gateway, other["id"], {"codigo": "aaa", "nombre": "Dos"})
        assert result.kind == ErrorKind.DUPLICATE_KEY
        assert result.error == "Another institution with code AAA already exists"

    def test_update_missing_row(self, gateway: Gateway):
        """Test updating an id that does not exist."""
        result = InstitutionService().update(gateway, 42, {"codigo": "ZZZ", "nombre": "Nadie"})
        assert result.kind == ErrorKind.NOT_FOUND


class TestGuardOverHttp:
    def test_duplicate_maps_to_conflict(self, client: TestClient):
        """Test that a duplicate code is a 409 with an error body."""
        body = {"codigo": "INV01", "nombre": "Luis", "apellido": "Pardo"}
        assert client.post("/api/v1/researchers/", json=body).status_code == 201
        response = client.post("/api/v1/researchers/", json=body)
        assert response.status_code == 409
        assert response.json()["detail"] == {
            "error": "A researcher with code INV01 already exists",
            "kind": "duplicate_key",
        }
