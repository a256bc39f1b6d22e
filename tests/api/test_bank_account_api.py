"""HTTP tests for the bank account endpoints"""

ACCOUNT = {"account_name": "Jane Doe", "account_number": "111", "bank_name": "Bank A"}


class TestBankAccountApi:
    """Test the /api/v1/bank-accounts routes"""

    def test_requires_identity(self, client):
        """Test requests without X-User-Id are rejected"""
        response = client.get("/api/v1/bank-accounts")
        assert response.status_code == 401

    def test_add_and_list(self, client, owner_headers):
        """Test the first account is created as default and listed"""
        response = client.post("/api/v1/bank-accounts", json=ACCOUNT, headers=owner_headers)
        assert response.status_code == 201
        assert response.json()["is_default"] is True

        listing = client.get("/api/v1/bank-accounts", headers=owner_headers).json()
        assert listing["count"] == 1
        assert listing["accounts"][0]["account_number"] == "111"

    def test_duplicate_is_conflict(self, client, owner_headers):
        client.post("/api/v1/bank-accounts", json=ACCOUNT, headers=owner_headers)
        response = client.post("/api/v1/bank-accounts", json=ACCOUNT, headers=owner_headers)
        assert response.status_code == 409
        assert response.json()["detail"] == "Bank account already exists"

    def test_validation_error(self, client, owner_headers):
        response = client.post(
            "/api/v1/bank-accounts", json={**ACCOUNT, "bank_name": " "}, headers=owner_headers
        )
        assert response.status_code == 400

    def test_set_default_and_delete(self, client, owner_headers):
        """Test moving the default and the promotion on delete"""
        first = client.post("/api/v1/bank-accounts", json=ACCOUNT, headers=owner_headers).json()
        second = client.post(
            "/api/v1/bank-accounts", json={**ACCOUNT, "account_number": "222"}, headers=owner_headers
        ).json()

        response = client.patch(f"/api/v1/bank-accounts/{second['id']}/default", headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["is_default"] is True

        response = client.delete(f"/api/v1/bank-accounts/{second['id']}", headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["new_default_account_id"] == first["id"]

    def test_update(self, client, owner_headers):
        account = client.post("/api/v1/bank-accounts", json=ACCOUNT, headers=owner_headers).json()
        response = client.put(
            f"/api/v1/bank-accounts/{account['id']}",
            json={"account_name": "Janet Doe", "is_default": False},
            headers=owner_headers,
        )
        assert response.status_code == 200
        assert response.json()["account_name"] == "Janet Doe"
        assert response.json()["is_default"] is True

    def test_unknown_account(self, client, owner_headers):
        response = client.delete("/api/v1/bank-accounts/missing", headers=owner_headers)
        assert response.status_code == 404
