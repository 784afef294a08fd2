"""
Audit log listing and the revenue report (JSON, CSV and PDF).
"""

import pytest


# =============================================================================
# Audit logs
# =============================================================================

class TestAuditLogs:
    def test_writes_are_logged_newest_first(self, client, site):
        client.put(f"/api/sites/{site.id}", json={"propertyNickname": "Maple"})
        client.delete(f"/api/sites/{site.id}")

        logs = client.get("/api/audit-logs", params={"entity_type": "site"}).json()

        assert [l["action"] for l in logs] == ["deleted", "updated"]
        assert logs[0]["entityId"] == site.id
        assert logs[0]["actorEmail"] == "admin@example.com"
        assert logs[0]["source"] == "api"

    def test_filter_by_actor_and_action(self, client, site):
        client.delete(f"/api/sites/{site.id}")

        assert len(client.get("/api/audit-logs", params={"action": "deleted"}).json()) == 1
        assert client.get("/api/audit-logs", params={"actor": "someone@else.com"}).json() == []

    def test_pagination(self, client):
        for i in range(3):
            client.post("/api/funders", json={"name": f"Funder {i}"})

        page = client.get("/api/audit-logs", params={"limit": 2, "offset": 2}).json()

        assert len(page) == 1

    def test_bad_date_is_400(self, client):
        resp = client.get("/api/audit-logs", params={"start_date": "yesterday"})

        assert resp.status_code == 400

    def test_stats(self, client, site, lease_payload):
        client.post("/api/leases-with-funding", json=lease_payload([]))
        client.delete(f"/api/sites/{site.id}")  # refused: site has spaces

        stats = client.get("/api/audit-logs/stats").json()

        assert stats["total"] == 1
        assert stats["leaseChanges"] == 1
        assert stats["deletions"] == 0


# =============================================================================
# Revenue report
# =============================================================================

@pytest.fixture
def funded_lease(client, lease_payload, funders):
    body = lease_payload([
        {"funderId": funders[0].id, "amount": "850.00"},
        {"funderId": funders[1].id, "amount": "350.00"},
    ])
    return client.post("/api/leases-with-funding", json=body).json()["lease"]["id"]


class TestRevenueReport:
    def test_totals(self, client, funded_lease, funders):
        report = client.get("/api/reports/revenue").json()

        assert report["total"] == "3600.00"
        assert report["months"] == [
            {"month": "2025-01", "amount": "1200.00", "eventCount": 2},
            {"month": "2025-02", "amount": "1200.00", "eventCount": 2},
            {"month": "2025-03", "amount": "1200.00", "eventCount": 2},
        ]
        assert report["funders"] == [
            {"funderId": funders[0].id, "funderName": "City Housing Voucher", "amount": "2550.00"},
            {"funderId": funders[1].id, "funderName": "Guarantor", "amount": "1050.00"},
        ]

    def test_month_range_is_inclusive(self, client, funded_lease):
        report = client.get(
            "/api/reports/revenue",
            params={"start_month": "2025-02", "end_month": "2025-03"},
        ).json()

        assert [m["month"] for m in report["months"]] == ["2025-02", "2025-03"]
        assert report["total"] == "2400.00"

    def test_other_lease_is_empty(self, client, funded_lease):
        report = client.get("/api/reports/revenue", params={"lease_id": "other"}).json()

        assert report == {"total": "0.00", "months": [], "funders": []}

    def test_bad_month_is_400(self, client):
        assert client.get("/api/reports/revenue", params={"start_month": "2025-1"}).status_code == 400

    def test_csv(self, client, funded_lease):
        resp = client.get("/api/reports/revenue/csv")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=revenue.csv" == resp.headers["content-disposition"]
        assert "2025-02,1200.00,2" in resp.text
        assert "City Housing Voucher,2550.00" in resp.text

    def test_pdf(self, client, funded_lease):
        resp = client.get("/api/reports/revenue/pdf")

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.content.startswith(b"%PDF")
