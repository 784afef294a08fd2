"""
CRUD behaviour for sites, space types, spaces and residents.
"""

import pytest

from concierge.core.auth import User


# =============================================================================
# Sites
# =============================================================================

class TestSites:
    def test_create_and_get(self, client):
        resp = client.post(
            "/api/sites",
            json={
                "name": "  Harbor View ",
                "address": "1 Pier Rd",
                "propertyValueAssessed": "950000.00",
                "propertyDateAcquired": "2019-04-01",
            },
        )

        assert resp.status_code == 201
        site = resp.json()
        assert site["name"] == "Harbor View"
        assert site["propertyValueAssessed"] == "950000.00"

        fetched = client.get(f"/api/sites/{site['id']}").json()
        assert fetched["propertyDateAcquired"] == "2019-04-01"

    def test_unknown_site_is_404(self, client):
        resp = client.get("/api/sites/missing")

        assert resp.status_code == 404
        assert resp.json() == {"message": "Site not found"}

    def test_blank_name_is_400(self, client):
        resp = client.post("/api/sites", json={"name": "   ", "address": "1 Pier Rd"})

        assert resp.status_code == 400
        assert resp.json() == {"message": "Invalid request data"}

    def test_partial_update_keeps_other_fields(self, client, site):
        resp = client.put(f"/api/sites/{site.id}", json={"propertyNickname": "Maple"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["propertyNickname"] == "Maple"
        assert body["name"] == "Maple Court"
        assert body["address"] == "12 Maple St"

    def test_search(self, client, site):
        client.post("/api/sites", json={"name": "Oak Terrace", "address": "4 Oak Ave"})

        names = [s["name"] for s in client.get("/api/sites", params={"search": "oak"}).json()]

        assert names == ["Oak Terrace"]

    def test_site_spaces(self, client, site, space):
        resp = client.get(f"/api/sites/{site.id}/spaces")

        assert resp.status_code == 200
        assert [s["identifier"] for s in resp.json()] == ["2B"]

    def test_site_with_spaces_cannot_be_deleted(self, client, site, space):
        resp = client.delete(f"/api/sites/{site.id}")

        assert resp.status_code == 400

    def test_delete(self, client, site):
        assert client.delete(f"/api/sites/{site.id}").status_code == 204
        assert client.get(f"/api/sites/{site.id}").status_code == 404


# =============================================================================
# Space types and spaces
# =============================================================================

class TestSpaces:
    def test_duplicate_space_type_is_400(self, client, space_type):
        resp = client.post("/api/space-types", json={"name": "studio"})

        assert resp.status_code == 400
        assert resp.json() == {"message": "Space type already exists"}

    def test_list_space_types(self, client, space_type):
        resp = client.get("/api/space-types")

        assert [t["name"] for t in resp.json()] == ["studio"]

    def test_create_space(self, client, site, space_type):
        resp = client.post(
            "/api/spaces",
            json={"identifier": "3A", "siteId": site.id, "spaceTypeId": space_type.id},
        )

        assert resp.status_code == 201
        assert resp.json()["siteId"] == site.id

    def test_space_with_unknown_site_is_400(self, client, space_type):
        resp = client.post(
            "/api/spaces",
            json={"identifier": "3A", "siteId": "nope", "spaceTypeId": space_type.id},
        )

        assert resp.status_code == 400

    def test_filter_by_site(self, client, db, site, space, space_type):
        other = client.post("/api/sites", json={"name": "Elm", "address": "9 Elm"}).json()
        client.post(
            "/api/spaces",
            json={"identifier": "1", "siteId": other["id"], "spaceTypeId": space_type.id},
        )

        resp = client.get("/api/spaces", params={"siteId": site.id})

        assert [s["id"] for s in resp.json()] == [space.id]

    def test_rename_space(self, client, space):
        resp = client.put(f"/api/spaces/{space.id}", json={"identifier": "2C"})

        assert resp.json()["identifier"] == "2C"
        assert resp.json()["siteId"] == space.site_id

    def test_unknown_space_is_404(self, client):
        assert client.delete("/api/spaces/missing").status_code == 404


# =============================================================================
# Residents
# =============================================================================

class TestResidents:
    def test_create(self, client):
        resp = client.post(
            "/api/residents",
            json={
                "name": "Sam Ortiz",
                "email": "sam@example.com",
                "type": "co_tenant",
                "role": "guarantor",
            },
        )

        assert resp.status_code == 201
        assert resp.json()["type"] == "co_tenant"
        assert resp.json()["userId"] is None

    def test_unknown_type_is_400(self, client):
        resp = client.post(
            "/api/residents",
            json={"name": "Sam", "email": "sam@example.com", "type": "landlord", "role": "guarantor"},
        )

        assert resp.status_code == 400

    def test_filters(self, client, resident):
        client.post(
            "/api/residents",
            json={"name": "Lee Park", "email": "lee@example.com", "type": "co_tenant", "role": "guarantor"},
        )

        by_type = client.get("/api/residents", params={"type": "primary_tenant"}).json()
        by_search = client.get("/api/residents", params={"q": "lee@"}).json()

        assert [r["name"] for r in by_type] == ["Dana Reyes"]
        assert [r["name"] for r in by_search] == ["Lee Park"]

    def test_partial_update(self, client, resident):
        resp = client.put(f"/api/residents/{resident.id}", json={"phone": "555-0100"})

        assert resp.json()["phone"] == "555-0100"
        assert resp.json()["email"] == "dana@example.com"

    def test_resident_with_lease_cannot_be_deleted(self, client, resident, lease_payload):
        client.post("/api/leases-with-funding", json=lease_payload([]))

        resp = client.delete(f"/api/residents/{resident.id}")

        assert resp.status_code == 400


class TestPropertyWritesNeedPropertyRole:
    @pytest.fixture
    def current_user(self):
        return User(user_id="user-fm", email="fm@example.com", role="facility_manager")

    def test_facility_manager_cannot_create_site(self, client):
        resp = client.post("/api/sites", json={"name": "X", "address": "Y"})

        assert resp.status_code == 403
        assert resp.json() == {"message": "Insufficient permissions. Required role: admin or property_manager"}

    def test_facility_manager_can_list_sites(self, client, site):
        assert client.get("/api/sites").status_code == 200
