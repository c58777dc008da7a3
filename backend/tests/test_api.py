"""End-to-end tests through the HTTP API."""

import pytest
from structlog.testing import capture_logs
from ulid import ULID

API = "/api/v1"


def create_category(client, name: str, label: str | None = None) -> dict:
    response = client.post(f"{API}/categories", json={"name": name, "label": label})
    assert response.status_code == 201, response.text
    return response.json()


def create_month(client, month: str, **kwargs) -> dict:
    response = client.post(f"{API}/months", json={"month": month, **kwargs})
    assert response.status_code == 201, response.text
    return response.json()


def create_entry(client, month_id: str, category_id: str, budgeted: int, due_day=None) -> dict:
    response = client.post(
        f"{API}/months/{month_id}/entries",
        json={"category_id": category_id, "budgeted": budgeted, "due_day": due_day},
    )
    assert response.status_code == 201, response.text
    return response.json()


def create_transaction(client, entry_id: str, amount: int, date: str, title=None) -> dict:
    response = client.post(
        f"{API}/transactions",
        json={"entry_id": entry_id, "amount": amount, "date": date, "title": title},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def food_entry(client) -> dict:
    food = create_category(client, "food")
    month = create_month(client, "2026-01")
    return create_entry(client, month["id"], food["id"], 10000, 15)


class TestHealth:
    def test_health(self, client) -> None:
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_request_id_is_echoed(self, client) -> None:
        response = client.get(f"{API}/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_is_generated(self, client) -> None:
        response = client.get(f"{API}/health")
        assert len(response.headers["X-Request-ID"]) == 26


class TestBudgetFlow:
    def test_food_budget_for_january(self, client) -> None:
        """Budget 100.00 for food, spend 50.00, half remains."""
        food = create_category(client, "food")
        month = create_month(client, "2026-01")
        entry = create_entry(client, month["id"], food["id"], 10000, 15)
        create_transaction(client, entry["id"], 5000, "2026-01-10")

        response = client.get(f"{API}/months/{month['id']}/summary")
        assert response.status_code == 200
        summary = response.json()
        assert summary["month"] == "2026-01"
        assert summary["total_budgeted"] == 10000
        assert summary["total_paid"] == 5000
        assert summary["remaining"] == 5000
        assert len(summary["categories"]) == 1
        row = summary["categories"][0]
        assert row["entry_id"] == entry["id"]
        assert row["category"] == {"id": food["id"], "name": "food", "label": None}
        assert row["status"] == "underspent"
        assert row["remaining"] == 5000

    def test_summary_overflow_is_internal_error(self, client) -> None:
        """Two maximal budgets cannot be totalled; the error body stays opaque."""
        month = create_month(client, "2026-01")
        for name in ["rent", "food"]:
            category = create_category(client, name)
            create_entry(client, month["id"], category["id"], 2**63 - 1)

        response = client.get(f"{API}/months/{month['id']}/summary")
        assert response.status_code == 500
        assert response.json() == {"error": {"code": "INTERNAL_ERROR"}}


class TestCategories:
    def test_create_and_list(self, client) -> None:
        create_category(client, "utils/electricity", "Electricity")
        create_category(client, "food")

        response = client.get(f"{API}/categories")
        assert response.status_code == 200
        body = response.json()
        assert [c["name"] for c in body] == ["food", "utils/electricity"]
        assert body[1]["label"] == "Electricity"
        assert body[0]["created_at"].endswith("Z")

    def test_invalid_name(self, client) -> None:
        response = client.post(f"{API}/categories", json={"name": "food//fresh"})
        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "CATEGORY_INVALID_NAME"
        assert "double slashes" in error["details"]["reason"]

    def test_duplicate_name(self, client) -> None:
        create_category(client, "food")
        response = client.post(f"{API}/categories", json={"name": "food"})
        assert response.status_code == 409
        assert response.json() == {
            "error": {"code": "CATEGORY_NAME_ALREADY_EXISTS", "details": {"name": "food"}}
        }

    def test_patch_label_three_state(self, client) -> None:
        category = create_category(client, "food", "Groceries")
        url = f"{API}/categories/{category['id']}"

        response = client.patch(url, json={"name": "eating"})
        assert response.json()["label"] == "Groceries"
        assert response.json()["name"] == "eating"

        response = client.patch(url, json={"label": None})
        assert response.status_code == 200
        assert response.json()["label"] is None

        response = client.patch(url, json={"label": "Supermarket"})
        assert response.json()["label"] == "Supermarket"

    def test_patch_name_only_is_a_rename(self, client) -> None:
        """A body without a label renames; a body with one goes through update."""
        category = create_category(client, "food", "Groceries")
        url = f"{API}/categories/{category['id']}"

        with capture_logs() as logs:
            response = client.patch(url, json={"name": "eating"})
        assert response.status_code == 200
        assert response.json()["label"] == "Groceries"
        assert [e["event"] for e in logs if e["event"].startswith("category_")] == [
            "category_renamed"
        ]

        with capture_logs() as logs:
            client.patch(url, json={"name": "food", "label": "Supermarket"})
        assert [e["event"] for e in logs if e["event"].startswith("category_")] == [
            "category_updated"
        ]

    def test_patch_unknown(self, client) -> None:
        response = client.patch(f"{API}/categories/{ULID()}", json={"name": "food"})
        assert response.status_code == 404
        assert response.json() == {"error": {"code": "CATEGORY_NOT_FOUND"}}

    def test_malformed_id(self, client) -> None:
        response = client.patch(f"{API}/categories/not-a-ulid", json={"name": "food"})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "BAD_REQUEST"
        assert "not-a-ulid" in error["details"]["reason"]


class TestMonths:
    def test_create_copies_latest(self, client, food_entry) -> None:
        february = create_month(client, "2026-2")
        assert february["month"] == "2026-02"

        entries = client.get(f"{API}/months/{february['id']}/entries").json()
        assert len(entries) == 1
        assert entries[0]["category"]["name"] == "food"
        assert entries[0]["budgeted"] == 10000
        assert entries[0]["due_day"] == 15
        assert entries[0]["id"] != food_entry["id"]

    def test_create_empty(self, client, food_entry) -> None:
        february = create_month(client, "2026-02", empty=True)
        assert client.get(f"{API}/months/{february['id']}/entries").json() == []

    def test_duplicate(self, client) -> None:
        create_month(client, "2026-01")
        response = client.post(f"{API}/months", json={"month": "2026-01"})
        assert response.status_code == 409
        assert response.json()["error"]["details"] == {"month": "2026-01"}

    def test_invalid_format(self, client) -> None:
        response = client.post(f"{API}/months", json={"month": "January"})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "MONTH_INVALID_FORMAT"

    def test_copy_from_unknown_rolls_back(self, client, food_entry) -> None:
        """A failed copy leaves no half-created month behind."""
        response = client.post(f"{API}/months", json={"month": "2026-02", "copy_from": str(ULID())})
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "MONTH_NOT_FOUND"

        months = client.get(f"{API}/months").json()
        assert [m["month"] for m in months] == ["2026-01"]

    def test_list_and_get(self, client) -> None:
        create_month(client, "2025-12")
        march = create_month(client, "2026-03")

        assert [m["month"] for m in client.get(f"{API}/months").json()] == ["2026-03", "2025-12"]
        response = client.get(f"{API}/months/{march['id']}")
        assert response.status_code == 200
        assert response.json() == march

    def test_get_unknown(self, client) -> None:
        response = client.get(f"{API}/months/{ULID()}")
        assert response.status_code == 404


class TestEntries:
    def test_category_already_in_month(self, client, food_entry) -> None:
        month_id = client.get(f"{API}/months").json()[0]["id"]
        response = client.post(
            f"{API}/months/{month_id}/entries",
            json={"category_id": food_entry["category"]["id"], "budgeted": 1},
        )
        assert response.status_code == 409
        assert response.json()["error"]["details"] == {
            "category_id": food_entry["category"]["id"],
            "month": "2026-01",
        }

    def test_invalid_due_day(self, client) -> None:
        food = create_category(client, "food")
        month = create_month(client, "2026-01")
        response = client.post(
            f"{API}/months/{month['id']}/entries",
            json={"category_id": food["id"], "budgeted": 100, "due_day": 32},
        )
        assert response.status_code == 422
        assert response.json() == {
            "error": {"code": "ENTRY_INVALID_DUE_DAY", "details": {"value": 32}}
        }

    def test_float_budget_rejected(self, client) -> None:
        food = create_category(client, "food")
        month = create_month(client, "2026-01")
        response = client.post(
            f"{API}/months/{month['id']}/entries",
            json={"category_id": food["id"], "budgeted": 100.5},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"

    def test_patch_due_day(self, client, food_entry) -> None:
        month_id = client.get(f"{API}/months").json()[0]["id"]
        url = f"{API}/months/{month_id}/entries/{food_entry['id']}"

        response = client.patch(url, json={"budgeted": 12000})
        assert response.status_code == 200
        assert response.json()["budgeted"] == 12000
        assert response.json()["due_day"] == 15

        response = client.patch(url, json={"due_day": None})
        assert response.json()["due_day"] is None

    def test_delete_blocked_by_transactions(self, client, food_entry) -> None:
        month_id = client.get(f"{API}/months").json()[0]["id"]
        create_transaction(client, food_entry["id"], 100, "2026-01-02")

        response = client.delete(f"{API}/months/{month_id}/entries/{food_entry['id']}")
        assert response.status_code == 409
        assert response.json() == {
            "error": {"code": "ENTRY_HAS_TRANSACTIONS", "details": {"transaction_count": 1}}
        }

    def test_delete(self, client, food_entry) -> None:
        month_id = client.get(f"{API}/months").json()[0]["id"]
        response = client.delete(f"{API}/months/{month_id}/entries/{food_entry['id']}")
        assert response.status_code == 204
        assert client.get(f"{API}/months/{month_id}/entries").json() == []

    def test_list_unknown_month(self, client) -> None:
        response = client.get(f"{API}/months/{ULID()}/entries")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "MONTH_NOT_FOUND"


class TestTransactions:
    def test_create_validation(self, client, food_entry) -> None:
        base = {"entry_id": food_entry["id"], "amount": 100, "date": "2026-01-10"}

        response = client.post(f"{API}/transactions", json={**base, "amount": -1})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "TRANSACTION_INVALID_AMOUNT"

        response = client.post(f"{API}/transactions", json={**base, "date": "2026-13-01"})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "TRANSACTION_INVALID_DATE"

        response = client.post(f"{API}/transactions", json={**base, "title": "x" * 51})
        assert response.status_code == 422
        assert response.json()["error"]["details"] == {"length": 51, "max": 50}

        response = client.post(f"{API}/transactions", json={**base, "entry_id": str(ULID())})
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TRANSACTION_ENTRY_NOT_FOUND"

    def test_list_requires_filter(self, client) -> None:
        response = client.get(f"{API}/transactions")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "TRANSACTIONS_MONTH_REQUIRED"

    def test_list_by_month(self, client, food_entry) -> None:
        month_id = client.get(f"{API}/months").json()[0]["id"]
        create_transaction(client, food_entry["id"], 100, "2026-01-05", "Bakery")
        create_transaction(client, food_entry["id"], 200, "2026-01-20")

        response = client.get(f"{API}/transactions", params={"month": month_id})
        assert response.status_code == 200
        body = response.json()
        assert [t["date"] for t in body] == ["2026-01-20", "2026-01-05"]
        assert body[1]["title"] == "Bakery"

    def test_list_by_entry_paginates(self, client, food_entry) -> None:
        for day in range(1, 6):
            create_transaction(client, food_entry["id"], day, f"2026-01-0{day}")

        params = {"entry_id": food_entry["id"], "limit": 2}
        first = client.get(f"{API}/transactions", params=params).json()
        assert [t["amount"] for t in first["items"]] == [5, 4]
        assert first["has_more"] is True

        last = client.get(f"{API}/transactions", params={**params, "offset": 4}).json()
        assert [t["amount"] for t in last["items"]] == [1]
        assert last["has_more"] is False

    def test_limit_is_capped(self, client, food_entry) -> None:
        response = client.get(
            f"{API}/transactions", params={"entry_id": food_entry["id"], "limit": 101}
        )
        assert response.status_code == 400

    def test_patch_and_delete(self, client, food_entry) -> None:
        transaction = create_transaction(client, food_entry["id"], 100, "2026-01-05", "Bakery")
        url = f"{API}/transactions/{transaction['id']}"

        response = client.patch(url, json={"amount": 150})
        assert response.status_code == 200
        assert response.json()["amount"] == 150
        assert response.json()["title"] == "Bakery"

        response = client.patch(url, json={"title": None})
        assert response.json()["title"] is None

        assert client.delete(url).status_code == 204
        response = client.delete(url)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TRANSACTION_NOT_FOUND"
