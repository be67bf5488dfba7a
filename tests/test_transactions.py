"""
Tests for transaction endpoints.

These tests verify:
  - Creating income and expense entries
  - Validation of type, amount and category
  - Listing is newest first and supports month/year/type/category filters
  - Partial updates and deletes
  - Clearing all of a user's data
"""

from decimal import Decimal


async def _create(client, **overrides):
    body = {
        "date": "2024-01-15",
        "type": "expense",
        "category": "Food",
        "description": "Groceries",
        "amount": "42.50",
    }
    body.update(overrides)
    response = await client.post("/transactions", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreate:
    """Tests for POST /transactions."""

    async def test_create_expense(self, authenticated_client):
        txn = await _create(authenticated_client)
        assert txn["type"] == "expense"
        assert txn["category"] == "Food"
        assert txn["date"] == "2024-01-15"
        assert Decimal(txn["amount"]) == Decimal("42.50")
        assert "id" in txn

    async def test_create_income(self, authenticated_client):
        txn = await _create(
            authenticated_client, type="income", category="Salary", amount="3000"
        )
        assert txn["type"] == "income"
        assert Decimal(txn["amount"]) == Decimal("3000")

    async def test_zero_amount_allowed(self, authenticated_client):
        txn = await _create(authenticated_client, amount="0")
        assert Decimal(txn["amount"]) == 0

    async def test_negative_amount_rejected(self, authenticated_client):
        response = await authenticated_client.post(
            "/transactions",
            json={"date": "2024-01-15", "type": "expense", "category": "Food", "amount": "-1"},
        )
        assert response.status_code == 422

    async def test_unknown_type_rejected(self, authenticated_client):
        response = await authenticated_client.post(
            "/transactions",
            json={"date": "2024-01-15", "type": "transfer", "category": "Food", "amount": "1"},
        )
        assert response.status_code == 422

    async def test_too_many_decimals_rejected(self, authenticated_client):
        response = await authenticated_client.post(
            "/transactions",
            json={"date": "2024-01-15", "type": "expense", "category": "Food", "amount": "1.234"},
        )
        assert response.status_code == 422

    async def test_missing_category_rejected(self, authenticated_client):
        response = await authenticated_client.post(
            "/transactions",
            json={"date": "2024-01-15", "type": "expense", "amount": "1"},
        )
        assert response.status_code == 422

    async def test_amount_returned_at_cent_scale(self, authenticated_client):
        """The create response matches what later reads return."""
        txn = await _create(authenticated_client, amount="10")
        assert txn["amount"] == "10.00"

        fetched = await authenticated_client.get(f"/transactions/{txn['id']}")
        assert fetched.json()["amount"] == txn["amount"]

    async def test_blank_category_rejected(self, authenticated_client):
        response = await authenticated_client.post(
            "/transactions",
            json={"date": "2024-01-15", "type": "expense", "category": "   ", "amount": "1"},
        )
        assert response.status_code == 422

    async def test_description_defaults_to_empty(self, authenticated_client):
        response = await authenticated_client.post(
            "/transactions",
            json={"date": "2024-01-15", "type": "expense", "category": "Food", "amount": "1"},
        )
        assert response.status_code == 201
        assert response.json()["description"] == ""


class TestList:
    """Tests for GET /transactions."""

    async def test_newest_first(self, authenticated_client):
        await _create(authenticated_client, date="2024-01-01", description="old")
        await _create(authenticated_client, date="2024-03-01", description="new")
        await _create(authenticated_client, date="2024-02-01", description="mid")

        response = await authenticated_client.get("/transactions")
        assert response.status_code == 200
        assert [t["description"] for t in response.json()] == ["new", "mid", "old"]

    async def test_filter_by_month_and_year(self, authenticated_client):
        await _create(authenticated_client, date="2024-01-31")
        await _create(authenticated_client, date="2024-02-01")
        await _create(authenticated_client, date="2024-02-29")
        await _create(authenticated_client, date="2023-02-15")

        response = await authenticated_client.get(
            "/transactions", params={"year": 2024, "month": 2}
        )
        assert [t["date"] for t in response.json()] == ["2024-02-29", "2024-02-01"]

    async def test_filter_by_year_only(self, authenticated_client):
        await _create(authenticated_client, date="2023-12-31")
        await _create(authenticated_client, date="2024-12-31")

        response = await authenticated_client.get("/transactions", params={"year": 2024})
        assert [t["date"] for t in response.json()] == ["2024-12-31"]

    async def test_december_window(self, authenticated_client):
        await _create(authenticated_client, date="2024-12-31")
        await _create(authenticated_client, date="2025-01-01")

        response = await authenticated_client.get(
            "/transactions", params={"year": 2024, "month": 12}
        )
        assert [t["date"] for t in response.json()] == ["2024-12-31"]

    async def test_filter_by_type_and_category(self, authenticated_client):
        await _create(authenticated_client, type="income", category="Salary")
        await _create(authenticated_client, type="expense", category="Food")
        await _create(authenticated_client, type="expense", category="Transport")

        by_type = await authenticated_client.get("/transactions", params={"type": "expense"})
        assert {t["category"] for t in by_type.json()} == {"Food", "Transport"}

        by_category = await authenticated_client.get(
            "/transactions", params={"category": "Transport"}
        )
        assert len(by_category.json()) == 1

    async def test_invalid_filters_rejected(self, authenticated_client):
        response = await authenticated_client.get("/transactions", params={"month": 13})
        assert response.status_code == 422
        response = await authenticated_client.get("/transactions", params={"type": "refund"})
        assert response.status_code == 422

    async def test_pagination(self, authenticated_client):
        for day in range(1, 6):
            await _create(authenticated_client, date=f"2024-01-{day:02d}")

        page = await authenticated_client.get("/transactions", params={"limit": 2, "offset": 1})
        assert [t["date"] for t in page.json()] == ["2024-01-04", "2024-01-03"]


class TestUpdateAndDelete:
    """Tests for GET/PATCH/DELETE /transactions/{id}."""

    async def test_get_single(self, authenticated_client):
        txn = await _create(authenticated_client)
        response = await authenticated_client.get(f"/transactions/{txn['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == txn["id"]

    async def test_partial_update(self, authenticated_client):
        txn = await _create(authenticated_client)

        response = await authenticated_client.patch(
            f"/transactions/{txn['id']}", json={"amount": "99.99", "category": "Leisure"}
        )
        assert response.status_code == 200
        updated = response.json()
        assert Decimal(updated["amount"]) == Decimal("99.99")
        assert updated["category"] == "Leisure"
        # Untouched fields keep their values
        assert updated["description"] == "Groceries"
        assert updated["date"] == "2024-01-15"

    async def test_update_strips_text_fields(self, authenticated_client):
        await _create(authenticated_client, category="Food", amount="10")
        second = await _create(authenticated_client, category="Leisure", amount="20")

        response = await authenticated_client.patch(
            f"/transactions/{second['id']}",
            json={"category": " Food ", "description": "  Dinner  "},
        )
        assert response.status_code == 200
        assert response.json()["category"] == "Food"
        assert response.json()["description"] == "Dinner"

        report = await authenticated_client.get(
            "/reports/monthly", params={"year": 2024, "month": 1}
        )
        breakdown = next(
            s for s in report.json()["sections"] if s["key"] == "category_breakdown"
        )
        assert breakdown["rows"] == [["Food", "Expense", "2", "$30.00", "100.0%"]]

    async def test_update_blank_category_rejected(self, authenticated_client):
        txn = await _create(authenticated_client)
        response = await authenticated_client.patch(
            f"/transactions/{txn['id']}", json={"category": "   "}
        )
        assert response.status_code == 422

    async def test_delete(self, authenticated_client):
        txn = await _create(authenticated_client)

        response = await authenticated_client.delete(f"/transactions/{txn['id']}")
        assert response.status_code == 204

        response = await authenticated_client.get(f"/transactions/{txn['id']}")
        assert response.status_code == 404
        assert response.json()["error_type"] == "transaction_not_found"

    async def test_unknown_id_is_404(self, authenticated_client):
        fake_id = "00000000-0000-0000-0000-000000000000"
        assert (await authenticated_client.get(f"/transactions/{fake_id}")).status_code == 404
        assert (await authenticated_client.patch(f"/transactions/{fake_id}", json={})).status_code == 404
        assert (await authenticated_client.delete(f"/transactions/{fake_id}")).status_code == 404


class TestClearAll:
    """Tests for DELETE /transactions."""

    async def test_clear_all(self, authenticated_client):
        await _create(authenticated_client)
        await _create(authenticated_client)

        response = await authenticated_client.delete("/transactions")
        assert response.status_code == 200
        assert response.json()["deleted_count"] == 2

        listing = await authenticated_client.get("/transactions")
        assert listing.json() == []

    async def test_clear_all_when_empty(self, authenticated_client):
        response = await authenticated_client.delete("/transactions")
        assert response.json()["deleted_count"] == 0
