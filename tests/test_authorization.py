"""
Tests for authorization boundaries: cross-user isolation.

A logged-in user cannot read, modify, or even detect another user's
transactions or categories. Every attempt returns 404, and aggregates
(dashboard, reports) only ever include the caller's own data.
"""


async def _create_transaction(client, **overrides):
    body = {"date": "2024-01-15", "type": "income", "category": "Salary", "amount": "500"}
    body.update(overrides)
    response = await client.post("/transactions", json=body)
    assert response.status_code == 201
    return response.json()


class TestCrossUserTransactions:
    """User B cannot see or touch User A's transactions."""

    async def test_cannot_view_other_users_transaction(
        self, authenticated_client, second_user_headers
    ):
        txn = await _create_transaction(authenticated_client)

        resp = await authenticated_client.get(
            f"/transactions/{txn['id']}", headers=second_user_headers
        )
        assert resp.status_code == 404

    async def test_cannot_update_other_users_transaction(
        self, authenticated_client, second_user_headers
    ):
        txn = await _create_transaction(authenticated_client)

        resp = await authenticated_client.patch(
            f"/transactions/{txn['id']}", json={"amount": "1"}, headers=second_user_headers
        )
        assert resp.status_code == 404

        own = await authenticated_client.get(f"/transactions/{txn['id']}")
        assert own.json()["amount"] == txn["amount"]

    async def test_cannot_delete_other_users_transaction(
        self, authenticated_client, second_user_headers
    ):
        txn = await _create_transaction(authenticated_client)

        resp = await authenticated_client.delete(
            f"/transactions/{txn['id']}", headers=second_user_headers
        )
        assert resp.status_code == 404
        assert (await authenticated_client.get(f"/transactions/{txn['id']}")).status_code == 200

    async def test_list_only_shows_own(self, authenticated_client, second_user_headers):
        await _create_transaction(authenticated_client)

        resp = await authenticated_client.get("/transactions", headers=second_user_headers)
        assert resp.json() == []

    async def test_clear_all_only_clears_own(self, authenticated_client, second_user_headers):
        await _create_transaction(authenticated_client)

        resp = await authenticated_client.delete("/transactions", headers=second_user_headers)
        assert resp.json()["deleted_count"] == 0
        assert len((await authenticated_client.get("/transactions")).json()) == 1


class TestCrossUserAggregates:
    """Dashboard and reports never mix users."""

    async def test_dashboard_isolated(self, authenticated_client, second_user_headers):
        await _create_transaction(authenticated_client)

        resp = await authenticated_client.get(
            "/dashboard", params={"year": 2024, "month": 1}, headers=second_user_headers
        )
        assert resp.json()["current_balance"] in ("0", "0.00")

    async def test_report_isolated(self, authenticated_client, second_user_headers):
        await _create_transaction(authenticated_client)

        resp = await authenticated_client.get(
            "/reports/annual", params={"year": 2024}, headers=second_user_headers
        )
        details = next(s for s in resp.json()["sections"] if s["key"] == "transactions")
        assert details["rows"] == []


class TestCrossUserCategories:

    async def test_cannot_delete_other_users_category(
        self, authenticated_client, second_user_headers
    ):
        category = await authenticated_client.post(
            "/categories", json={"name": "Pets", "type": "expense"}
        )

        resp = await authenticated_client.delete(
            f"/categories/{category.json()['id']}", headers=second_user_headers
        )
        assert resp.status_code == 404

        other = await authenticated_client.get("/categories", headers=second_user_headers)
        assert other.json() == []
