"""
Tests for admin division endpoints.
"""


class TestDivisionEndpoints:
    """Division listing and creation."""

    def test_list_divisions_ordered_by_code(self, client, auth_headers, second_division, seed_division):
        response = client.get("/api/admin/divisions", headers=auth_headers)
        assert response.status_code == 200
        assert [d["code"] for d in response.json()["data"]] == ["D1", "D2"]

    def test_list_divisions_unauthenticated(self, client):
        response = client.get("/api/admin/divisions")
        assert response.status_code == 401

    def test_get_division(self, client, viewer_auth_headers, seed_division):
        response = client.get(f"/api/admin/divisions/{seed_division.id}", headers=viewer_auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["description"] == "Gold"

    def test_get_unknown_division(self, client, auth_headers, db_session):
        response = client.get("/api/admin/divisions/77", headers=auth_headers)
        assert response.status_code == 404

    def test_create_division(self, client, auth_headers, db_session):
        response = client.post(
            "/api/admin/divisions",
            headers=auth_headers,
            json={"code": " plat ", "description": "Platinum"},
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["code"] == "PLAT"
        assert data["is_active"] is True

    def test_create_duplicate_division(self, client, auth_headers, seed_division):
        response = client.post(
            "/api/admin/divisions",
            headers=auth_headers,
            json={"code": "d1", "description": "Again"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_ENTITY"

    def test_create_division_invalid_code(self, client, auth_headers, db_session):
        response = client.post(
            "/api/admin/divisions",
            headers=auth_headers,
            json={"code": "GOLD-24", "description": "Gold"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_create_division_viewer_forbidden(self, client, viewer_auth_headers, db_session):
        response = client.post(
            "/api/admin/divisions",
            headers=viewer_auth_headers,
            json={"code": "PLAT", "description": "Platinum"},
        )
        assert response.status_code == 403
