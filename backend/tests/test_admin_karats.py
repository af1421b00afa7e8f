"""
Tests for admin karat endpoints.
"""

import pytest


class TestKaratAuth:
    """Authentication and role checks."""

    def test_list_unauthenticated(self, client):
        response = client.get("/api/admin/karats")
        assert response.status_code == 401
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "UNAUTHORIZED"

    def test_invalid_token(self, client):
        response = client.get(
            "/api/admin/karats", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    def test_viewer_can_read(self, client, viewer_auth_headers, seed_karat):
        response = client.get(f"/api/admin/karats/{seed_karat.id}", headers=viewer_auth_headers)
        assert response.status_code == 200

    def test_viewer_cannot_create(self, client, viewer_auth_headers, seed_division, karat_payload):
        response = client.post(
            "/api/admin/karats",
            headers=viewer_auth_headers,
            json=karat_payload(seed_division.id),
        )
        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    def test_viewer_cannot_bulk_delete(self, client, viewer_auth_headers, seed_karat):
        response = client.post(
            "/api/admin/karats/bulk/delete",
            headers=viewer_auth_headers,
            json={"ids": [seed_karat.id]},
        )
        assert response.status_code == 403


class TestKaratCreateEndpoint:
    """POST /karats"""

    def test_create(self, client, auth_headers, seed_division, karat_payload):
        response = client.post(
            "/api/admin/karats",
            headers=auth_headers,
            json=karat_payload(seed_division.id, code="k18"),
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Karat created successfully"
        assert "pagination" not in body

        data = body["data"]
        assert data["code"] == "K18"
        assert data["status"] == "active"
        assert data["active"] is True
        assert data["is_active"] is True
        assert data["division"]["code"] == "D1"
        assert data["created_by_email"] == "admin@test.com"

    def test_create_with_wire_names(self, client, auth_headers, seed_division):
        response = client.post(
            "/api/admin/karats",
            headers=auth_headers,
            json={
                "karatCode": "K22",
                "division": seed_division.id,
                "description": "22 karat gold",
                "standardPurity": "91.6",
                "minimum": 91,
                "maximum": 92,
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["code"] == "K22"
        assert data["standard_purity"] == 91.6

    def test_create_duplicate(self, client, auth_headers, seed_karat, seed_division, karat_payload):
        response = client.post(
            "/api/admin/karats",
            headers=auth_headers,
            json=karat_payload(seed_division.id, code="k18"),
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "DUPLICATE_CODE"

    def test_create_missing_fields(self, client, auth_headers):
        response = client.post("/api/admin/karats", headers=auth_headers, json={"code": "K18"})
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "REQUIRED_FIELDS_MISSING"
        assert "division_id" in body["details"]["missing_fields"]

    def test_create_min_above_max(self, client, auth_headers, seed_division, karat_payload):
        response = client.post(
            "/api/admin/karats",
            headers=auth_headers,
            json=karat_payload(seed_division.id, minimum=80, maximum=70),
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_MIN_MAX_RANGE"

    def test_create_unknown_division(self, client, auth_headers, seed_division, karat_payload):
        response = client.post(
            "/api/admin/karats",
            headers=auth_headers,
            json=karat_payload(999),
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_DIVISION"

    def test_create_huge_integer_value(self, client, auth_headers, seed_division, karat_payload):
        response = client.post(
            "/api/admin/karats",
            headers=auth_headers,
            json=karat_payload(seed_division.id, maximum=10**400),
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "INVALID_NUMERIC_VALUES"
        assert body["details"]["fields"] == ["maximum"]

    def test_create_malformed_json(self, client, auth_headers):
        response = client.post(
            "/api/admin/karats",
            headers={**auth_headers, "Content-Type": "application/json"},
            content=b"{not json",
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestKaratQueryEndpoints:
    """GET /karats, /karats/{id}, /karats/division/{id}"""

    def test_list_with_pagination(self, client, auth_headers, make_karat, seed_division):
        for code in ("K10", "K14", "K18"):
            make_karat(seed_division.id, code=code)

        response = client.get(
            "/api/admin/karats?page=1&limit=2&sort_by=code&sort_order=asc",
            headers=auth_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert [k["code"] for k in body["data"]] == ["K10", "K14"]
        assert body["pagination"] == {
            "page": 1,
            "page_size": 2,
            "total_count": 3,
            "total_pages": 2,
        }

    def test_list_filter_by_status(self, client, auth_headers, make_karat, seed_division):
        make_karat(seed_division.id, code="K18")
        make_karat(seed_division.id, code="K22", status="inactive")

        response = client.get("/api/admin/karats?status=inactive", headers=auth_headers)
        assert [k["code"] for k in response.json()["data"]] == ["K22"]

    def test_list_invalid_status(self, client, auth_headers, seed_division):
        response = client.get("/api/admin/karats?status=archived", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_STATUS"

    def test_list_invalid_limit(self, client, auth_headers):
        response = client.get("/api/admin/karats?limit=0", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_list_search(self, client, auth_headers, make_karat, seed_division):
        make_karat(seed_division.id, code="K18", description="Eighteen")
        make_karat(seed_division.id, code="K22", description="Twenty two")

        response = client.get("/api/admin/karats?search=twenty", headers=auth_headers)
        assert [k["code"] for k in response.json()["data"]] == ["K22"]

    def test_list_by_division(self, client, auth_headers, make_karat, seed_division, second_division):
        make_karat(seed_division.id, code="K22")
        make_karat(seed_division.id, code="K14")
        make_karat(seed_division.id, code="K18", status="inactive")
        make_karat(second_division.id, code="S925")

        response = client.get(
            f"/api/admin/karats/division/{seed_division.id}", headers=auth_headers
        )
        assert response.status_code == 200
        assert [k["code"] for k in response.json()["data"]] == ["K14", "K22"]

    def test_get_not_found(self, client, auth_headers):
        response = client.get("/api/admin/karats/4242", headers=auth_headers)
        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "NOT_FOUND"
        assert body["details"]["id"] == 4242

    def test_get_malformed_id(self, client, auth_headers):
        response = client.get("/api/admin/karats/abc", headers=auth_headers)
        assert response.status_code == 400


class TestKaratCommandEndpoints:
    """Update, toggle, delete, restore and permanent delete."""

    def test_patch_updates_supplied_fields(self, client, auth_headers, seed_karat):
        response = client.patch(
            f"/api/admin/karats/{seed_karat.id}",
            headers=auth_headers,
            json={"description": "Gold 750"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["description"] == "Gold 750"
        assert data["standard_purity"] == 75.0
        assert data["updated_by_id"] == 1

    def test_put_with_active_flag(self, client, auth_headers, seed_karat):
        response = client.put(
            f"/api/admin/karats/{seed_karat.id}",
            headers=auth_headers,
            json={"isActive": False},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "inactive"
        assert data["active"] is False

    def test_update_min_against_stored_max(self, client, auth_headers, seed_karat):
        response = client.patch(
            f"/api/admin/karats/{seed_karat.id}",
            headers=auth_headers,
            json={"minimum": 90},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_MIN_MAX_RANGE"

    def test_toggle_status(self, client, auth_headers, seed_karat):
        url = f"/api/admin/karats/{seed_karat.id}/toggle-status"

        response = client.patch(url, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "inactive"
        assert response.json()["message"] == "Karat status changed to inactive"

        response = client.patch(url, headers=auth_headers)
        assert response.json()["data"]["status"] == "active"

    def test_soft_delete_then_restore(self, client, auth_headers, seed_karat, seed_division):
        response = client.delete(f"/api/admin/karats/{seed_karat.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False

        # Hidden from the division listing, still readable by id
        listing = client.get(
            f"/api/admin/karats/division/{seed_division.id}", headers=auth_headers
        )
        assert listing.json()["data"] == []
        detail = client.get(f"/api/admin/karats/{seed_karat.id}", headers=auth_headers)
        assert detail.status_code == 200
        assert detail.json()["data"]["deleted_at"] is not None

        response = client.post(
            f"/api/admin/karats/{seed_karat.id}/restore", headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is True

    def test_restore_live_karat(self, client, auth_headers, seed_karat):
        response = client.post(
            f"/api/admin/karats/{seed_karat.id}/restore", headers=auth_headers
        )
        assert response.status_code == 404

    def test_permanent_delete(self, client, auth_headers, seed_karat):
        response = client.delete(
            f"/api/admin/karats/{seed_karat.id}/permanent", headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["code"] == "K18"

        response = client.get(f"/api/admin/karats/{seed_karat.id}", headers=auth_headers)
        assert response.status_code == 404


class TestKaratBulkEndpoints:
    """POST /karats/bulk/delete and PATCH /karats/bulk/status"""

    def test_bulk_delete(self, client, auth_headers, make_karat, seed_division):
        a = make_karat(seed_division.id, code="K14")
        make_karat(seed_division.id, code="K18")
        c = make_karat(seed_division.id, code="K22")

        response = client.post(
            "/api/admin/karats/bulk/delete",
            headers=auth_headers,
            json={"ids": [a.id, 99999, c.id]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["data"] == {"deleted_count": 2, "requested_count": 3}
        assert body["message"] == "2 karat(s) deleted permanently"

    def test_bulk_delete_empty(self, client, auth_headers):
        response = client.post(
            "/api/admin/karats/bulk/delete", headers=auth_headers, json={"ids": []}
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "IDS_REQUIRED"

    def test_bulk_delete_invalid_ids(self, client, auth_headers):
        response = client.post(
            "/api/admin/karats/bulk/delete",
            headers=auth_headers,
            json={"ids": [1, "abc", "2b"]},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "INVALID_ID_FORMAT"
        assert body["details"]["invalid_ids"] == ["abc", "2b"]

    def test_bulk_status_oversized_id(self, client, auth_headers, seed_karat):
        response = client.patch(
            "/api/admin/karats/bulk/status",
            headers=auth_headers,
            json={"ids": [seed_karat.id, "9" * 5000], "status": "inactive"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "INVALID_ID_FORMAT"
        assert len(body["details"]["invalid_ids"]) == 1

    def test_bulk_status(self, client, auth_headers, make_karat, seed_division):
        x = make_karat(seed_division.id, code="K14", status="inactive")
        y = make_karat(seed_division.id, code="K18")

        response = client.patch(
            "/api/admin/karats/bulk/status",
            headers=auth_headers,
            json={"ids": [x.id, y.id], "status": "inactive"},
        )
        assert response.status_code == 200
        assert response.json()["data"] == {
            "matched_count": 2,
            "modified_count": 1,
            "requested_count": 2,
        }

    def test_bulk_status_unknown_status(self, client, auth_headers, seed_karat):
        response = client.patch(
            "/api/admin/karats/bulk/status",
            headers=auth_headers,
            json={"ids": [seed_karat.id], "status": "archived"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_STATUS"
