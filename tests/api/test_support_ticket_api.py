"""HTTP tests for the support ticket endpoints"""

from tests.conftest import REVIEWER_ID, SECOND_REVIEWER_ID

TICKET = {"subject": "Payout not received", "category": "payment", "message": "Where is it?"}


class TestSupportTicketApi:
    """Test the /api/v1/support-tickets routes"""

    def test_ticket_lifecycle(self, client, owner_headers, reviewer_headers):
        """Test open → reviewer reply → close → reply refused"""
        created = client.post("/api/v1/support-tickets", json=TICKET, headers=owner_headers)
        assert created.status_code == 201
        ticket_id = created.json()["id"]
        assert created.json()["status"] == "open"

        replied = client.post(
            f"/api/v1/support-tickets/{ticket_id}/replies",
            json={"text": "Looking into it"},
            headers=reviewer_headers,
        ).json()
        assert replied["status"] == "in-progress"
        assert replied["assigned_to"] == REVIEWER_ID

        closed = client.patch(
            f"/api/v1/support-tickets/{ticket_id}/status",
            json={"status": "closed"},
            headers=reviewer_headers,
        ).json()
        assert closed["closed_by"] == REVIEWER_ID

        refused = client.post(
            f"/api/v1/support-tickets/{ticket_id}/replies",
            json={"text": "Hello?"},
            headers=owner_headers,
        )
        assert refused.status_code == 409

        thread = client.get(f"/api/v1/support-tickets/{ticket_id}", headers=owner_headers).json()
        assert len(thread["messages"]) == 2

    def test_stranger_cannot_read(self, client, owner_headers):
        ticket = client.post("/api/v1/support-tickets", json=TICKET, headers=owner_headers).json()
        response = client.get(
            f"/api/v1/support-tickets/{ticket['id']}", headers={"X-User-Id": "someone-else"}
        )
        assert response.status_code == 403

    def test_list_is_scoped_to_owner(self, client, owner_headers, reviewer_headers):
        client.post("/api/v1/support-tickets", json=TICKET, headers=owner_headers)
        client.post("/api/v1/support-tickets", json=TICKET, headers={"X-User-Id": "owner-2"})

        mine = client.get("/api/v1/support-tickets", headers=owner_headers).json()
        everything = client.get("/api/v1/support-tickets", headers=reviewer_headers).json()

        assert mine["total"] == 1
        assert everything["total"] == 2

    def test_assign(self, client, owner_headers, reviewer_headers):
        ticket = client.post("/api/v1/support-tickets", json=TICKET, headers=owner_headers).json()

        response = client.patch(
            f"/api/v1/support-tickets/{ticket['id']}/assign",
            json={"admin_id": SECOND_REVIEWER_ID},
            headers=reviewer_headers,
        )

        assert response.status_code == 200
        assert response.json()["assigned_to"] == SECOND_REVIEWER_ID
        assert response.json()["status"] == "in-progress"

    def test_assign_requires_admin_id(self, client, owner_headers, reviewer_headers):
        ticket = client.post("/api/v1/support-tickets", json=TICKET, headers=owner_headers).json()
        response = client.patch(
            f"/api/v1/support-tickets/{ticket['id']}/assign", json={}, headers=reviewer_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Admin ID is required"

    def test_invalid_category(self, client, owner_headers):
        response = client.post(
            "/api/v1/support-tickets", json={**TICKET, "category": "billing"}, headers=owner_headers
        )
        assert response.status_code == 400
