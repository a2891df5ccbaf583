"""Tests for the category, transaction and settings repositories."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from ledgerlite.errors import DuplicateKeyError, NotFoundError, ValidationError
from tests.conftest import FIXED_NOW


class TestCategoryRepository:
    def test_create_stamps_id_and_timestamps(self, category_repo):
        category = category_repo.create(name="  Food ", color="#FB923C", emoji="🍔")

        assert category.id
        assert category.name == "Food"
        assert category.kind == "expense"
        assert category.created_at == FIXED_NOW
        assert category.updated_at == FIXED_NOW

    def test_ids_are_unique(self, category_factory):
        ids = {category_factory(name=f"Cat {idx}").id for idx in range(25)}
        assert len(ids) == 25

    def test_duplicate_name_rejected(self, category_factory):
        category_factory(name="Food")

        with pytest.raises(DuplicateKeyError):
            category_factory(name="Food")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": "", "color": "#fff"},
            {"name": "   ", "color": "#fff"},
            {"name": "Food", "color": ""},
            {"name": "Food", "color": "#fff", "kind": "transfer"},
        ],
    )
    def test_invalid_fields_rejected(self, category_repo, kwargs):
        with pytest.raises(ValidationError):
            category_repo.create(**kwargs)
        assert category_repo.count() == 0

    def test_update_refreshes_updated_at_only(self, category_repo, clock):
        category = category_repo.create(name="Food", color="#FB923C")
        later = clock.advance(hours=2)

        updated = category_repo.update(category.id, color="#000000", kind="both")

        assert updated.color == "#000000"
        assert updated.kind == "both"
        assert updated.created_at == FIXED_NOW
        assert updated.updated_at == later

    def test_update_rejects_id_and_unknown_fields(self, category_factory, category_repo):
        category = category_factory(name="Food")

        with pytest.raises(ValidationError):
            category_repo.update(category.id, id="other")
        with pytest.raises(ValidationError):
            category_repo.update(category.id, created_at=datetime(2020, 1, 1))

    def test_update_missing_category(self, category_repo):
        with pytest.raises(NotFoundError):
            category_repo.update("ghost", name="Anything")

    def test_list_all_sorted_by_name_and_by_kind(self, category_factory, category_repo):
        category_factory(name="Transport")
        category_factory(name="bills")
        category_factory(name="Salary", kind="income")

        assert [c.name for c in category_repo.list_all()] == ["bills", "Salary", "Transport"]
        assert [c.name for c in category_repo.list_by_kind("income")] == ["Salary"]

    def test_get_by_name(self, category_factory, category_repo):
        created = category_factory(name="Food")

        assert category_repo.get_by_name("Food").id == created.id
        assert category_repo.get_by_name("Nope") is None

    def test_delete_unreferenced_category(self, category_factory, category_repo):
        keep = category_factory(name="Keep")
        drop = category_factory(name="Drop")

        category_repo.delete(drop.id)

        assert [c.id for c in category_repo.list_all()] == [keep.id]

    def test_delete_referenced_category_leaves_transactions(
        self, category_factory, category_repo, transaction_factory, transaction_repo
    ):
        food = category_factory(name="Food")
        txn = transaction_factory(2500, category_id=food.id)

        category_repo.delete(food.id)

        assert transaction_repo.get_by_id(txn.id).category_id == food.id

    def test_delete_missing_category(self, category_repo):
        with pytest.raises(NotFoundError):
            category_repo.delete("ghost")


class TestTransactionRepository:
    def test_create_defaults(self, transaction_repo):
        txn = transaction_repo.create(flow="expense", amount=25000, payment_method="upi")

        assert txn.id
        assert txn.amount == 25000
        assert txn.happened_at == FIXED_NOW
        assert txn.created_at == txn.updated_at == FIXED_NOW

    @pytest.mark.parametrize("amount", [-1, 12.5, "100", True, None])
    def test_invalid_amounts_rejected(self, transaction_repo, amount):
        with pytest.raises(ValidationError):
            transaction_repo.create(flow="expense", amount=amount, payment_method="cash")
        assert transaction_repo.count() == 0

    def test_largest_storable_amount_accepted(self, transaction_repo):
        txn = transaction_repo.create(flow="income", amount=2**63 - 1, payment_method="cash")

        assert transaction_repo.get_by_id(txn.id).amount == 2**63 - 1

    @pytest.mark.parametrize("amount", [2**63, 2**64])
    def test_amount_beyond_integer_column_rejected(self, transaction_factory, transaction_repo, amount):
        with pytest.raises(ValidationError):
            transaction_repo.create(flow="expense", amount=amount, payment_method="cash")

        txn = transaction_factory(1000)
        with pytest.raises(ValidationError):
            transaction_repo.update(txn.id, amount=amount)
        assert transaction_repo.get_by_id(txn.id).amount == 1000

    def test_aware_happened_at_stored_as_local_time(self, transaction_repo):
        aware = datetime(2025, 3, 10, 6, 30, tzinfo=timezone.utc)

        txn = transaction_repo.create(
            flow="expense", amount=500, payment_method="card", happened_at=aware
        )

        fetched = transaction_repo.get_by_id(txn.id)
        assert fetched.happened_at.tzinfo is None
        assert fetched.happened_at == aware.astimezone().replace(tzinfo=None)

    def test_invalid_flow_and_payment_method(self, transaction_repo):
        with pytest.raises(ValidationError):
            transaction_repo.create(flow="transfer", amount=10, payment_method="cash")
        with pytest.raises(ValidationError):
            transaction_repo.create(flow="expense", amount=10, payment_method="cheque")

    def test_adjustment_never_keeps_category(self, transaction_repo, category_factory):
        category = category_factory(name="Food")

        txn = transaction_repo.create(
            flow="adjustment", amount=100000, payment_method="other", category_id=category.id
        )

        assert txn.category_id is None

    def test_amounts_stored_non_negative(self, transaction_factory, transaction_repo):
        transaction_factory(0)
        transaction_factory(500, flow="income")
        transaction_factory(900, flow="adjustment")

        assert all(t.amount >= 0 for t in transaction_repo.list_all())

    def test_date_only_happened_at_is_accepted(self, transaction_factory):
        txn = transaction_factory(100, happened_at=date(2025, 2, 1))
        assert txn.happened_at == datetime(2025, 2, 1)

    def test_update_changes_fields_and_stamps(self, transaction_factory, transaction_repo, clock):
        txn = transaction_factory(1000, reason="Tea")
        later = clock.advance(minutes=5)

        updated = transaction_repo.update(txn.id, amount=1500, reason="Tea and snacks")

        assert updated.amount == 1500
        assert updated.reason == "Tea and snacks"
        assert updated.created_at == FIXED_NOW
        assert updated.updated_at == later

    def test_update_to_adjustment_clears_category(self, transaction_factory, transaction_repo, category_factory):
        food = category_factory(name="Food")
        txn = transaction_factory(1000, category_id=food.id)

        updated = transaction_repo.update(txn.id, flow="adjustment")

        assert updated.category_id is None

    def test_update_missing_transaction_leaves_collection_unchanged(
        self, transaction_factory, transaction_repo
    ):
        existing = transaction_factory(1000)
        before = [t.model_dump() for t in transaction_repo.list_all()]

        with pytest.raises(NotFoundError):
            transaction_repo.update("missing-id", amount=5)

        assert [t.model_dump() for t in transaction_repo.list_all()] == before
        assert transaction_repo.get_by_id(existing.id).amount == 1000

    def test_update_rejects_negative_amount(self, transaction_factory, transaction_repo):
        txn = transaction_factory(1000)

        with pytest.raises(ValidationError):
            transaction_repo.update(txn.id, amount=-1000)
        assert transaction_repo.get_by_id(txn.id).amount == 1000

    def test_update_rejects_unknown_fields(self, transaction_factory, transaction_repo):
        txn = transaction_factory(1000)

        with pytest.raises(ValidationError):
            transaction_repo.update(txn.id, memo="x")

    def test_delete(self, transaction_factory, transaction_repo):
        txn = transaction_factory(1000)

        transaction_repo.delete(txn.id)

        assert transaction_repo.count() == 0
        with pytest.raises(NotFoundError):
            transaction_repo.delete(txn.id)

    def test_list_all_newest_first(self, transaction_factory, transaction_repo):
        transaction_factory(1, happened_at=datetime(2025, 1, 1))
        transaction_factory(3, happened_at=datetime(2025, 3, 1))
        transaction_factory(2, happened_at=datetime(2025, 2, 1))

        assert [t.amount for t in transaction_repo.list_all()] == [3, 2, 1]

    def test_search_filters(self, transaction_factory, transaction_repo, category_factory):
        food = category_factory(name="Food")
        transaction_factory(100, category_id=food.id, happened_at=datetime(2025, 1, 5), payment_method="cash")
        transaction_factory(200, category_id=food.id, happened_at=datetime(2025, 1, 20))
        transaction_factory(300, flow="income", happened_at=datetime(2025, 1, 10))
        transaction_factory(400, flow="adjustment", happened_at=datetime(2025, 2, 1))

        assert [t.amount for t in transaction_repo.search(flow="expense")] == [200, 100]
        assert [t.amount for t in transaction_repo.search(payment_method="cash")] == [100]
        assert [t.amount for t in transaction_repo.filter_by_category(food.id)] == [200, 100]
        assert [
            t.amount
            for t in transaction_repo.filter_by_date_range(datetime(2025, 1, 5), datetime(2025, 1, 20))
        ] == [200, 300, 100]
        assert [t.amount for t in transaction_repo.search(start_date=datetime(2025, 1, 15))] == [400, 200]
        assert [
            t.amount
            for t in transaction_repo.search(
                flow="expense", end_date=datetime(2025, 1, 10), category_id=food.id
            )
        ] == [100]

    def test_search_rejects_unknown_flow(self, transaction_repo):
        with pytest.raises(ValidationError):
            transaction_repo.search(flow="transfer")


class TestSettingsRepository:
    def test_get_creates_defaults_once(self, settings_repo, store):
        first = settings_repo.get()
        second = settings_repo.get()

        assert first.id == second.id == "default"
        assert first.currency_symbol == "₹"
        assert first.default_payment_method == "upi"
        assert first.month_start_day == 1
        assert first.theme == "dark"
        assert first.require_passcode is False
        assert store.count("settings") == 1

    def test_update_merges_and_persists(self, settings_repo):
        settings_repo.update(month_start_day=15, currency_symbol="$", theme="light")

        current = settings_repo.get()
        assert current.month_start_day == 15
        assert current.currency_symbol == "$"
        assert current.theme == "light"
        assert current.default_payment_method == "upi"

    def test_update_without_existing_row_creates_it(self, settings_repo, store):
        settings_repo.update(accent_color="#000000")
        assert store.count("settings") == 1

    @pytest.mark.parametrize("value", [0, 29, -1, "5", 5.0, True])
    def test_invalid_month_start_day(self, settings_repo, value):
        with pytest.raises(ValidationError):
            settings_repo.update(month_start_day=value)
        assert settings_repo.get().month_start_day == 1

    @pytest.mark.parametrize(
        "changes",
        [
            {"theme": "neon"},
            {"default_payment_method": "cheque"},
            {"currency_symbol": ""},
            {"id": "other"},
            {"locale": "en-IN"},
        ],
    )
    def test_invalid_updates_rejected(self, settings_repo, changes):
        with pytest.raises(ValidationError):
            settings_repo.update(**changes)

    def test_passcode_fields_pass_through(self, settings_repo):
        updated = settings_repo.update(require_passcode=True, passcode_hash="abc123")

        assert updated.require_passcode is True
        assert updated.passcode_hash == "abc123"
