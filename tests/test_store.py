"""Tests for the in-memory expense store."""

import random
from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.models.expense import Expense, ExpenseDraft
from expense_tracker.store import (
    DuplicateExpenseError,
    ExpenseNotFoundError,
    ExpenseStore,
)


def make_expense(expense_id: str, amount: str = "1.00") -> Expense:
    return Expense(
        id=expense_id,
        description=f"Expense {expense_id}",
        amount=Decimal(amount),
        date=date(2023, 1, 1),
    )


PATCH = ExpenseDraft(description="Patched", amount=Decimal("4.25"), date=date(2023, 5, 5))


class TestReplaceAll:
    """Tests for wholesale replacement."""

    def test_read_back_exactly(self, store, book, coffee):
        store.replace_all([book, coffee])
        assert store.expenses == (book, coffee)

    def test_discards_previous_contents(self, store, book, coffee):
        store.add(book)
        store.replace_all([coffee])
        assert store.expenses == (coffee,)

    def test_empty(self, store, book):
        store.add(book)
        store.replace_all([])
        assert len(store) == 0

    def test_duplicates_rejected_and_store_untouched(self, store, book):
        store.add(book)
        with pytest.raises(DuplicateExpenseError):
            store.replace_all([make_expense("2"), make_expense("2")])
        assert store.expenses == (book,)

    def test_accepts_generator(self, store):
        store.replace_all(make_expense(str(i)) for i in range(3))
        assert [e.id for e in store] == ["0", "1", "2"]


class TestAdd:
    """Tests for admitting new records."""

    def test_prepends(self, store, book, coffee):
        store.add(book)
        store.add(coffee)
        assert [e.id for e in store.expenses] == ["7", "1"]

    def test_same_id_replaces_existing(self, store, book):
        store.add(book)
        store.add(make_expense("2"))
        replacement = book.merged(PATCH)
        store.add(replacement)
        assert [e.id for e in store.expenses] == ["1", "2"]
        assert store.get("1").description == "Patched"


class TestUpdate:
    """Tests for in-place edits."""

    def test_replaces_fields_in_place(self, store, book, coffee):
        store.replace_all([coffee, book])
        store.update("1", PATCH)
        assert [e.id for e in store.expenses] == ["7", "1"]
        assert store.get("1").amount == Decimal("4.25")
        assert store.get("1").description == "Patched"

    def test_missing_id_is_noop(self, store, book, coffee):
        store.replace_all([book, coffee])
        before = store.expenses
        store.update("missing", PATCH)
        assert store.expenses == before


class TestRemove:
    """Tests for deletion."""

    def test_removes(self, store, book, coffee):
        store.replace_all([book, coffee])
        store.remove("7")
        assert "7" not in store
        assert store.expenses == (book,)

    def test_missing_id_is_noop(self, store, book):
        store.add(book)
        store.remove("missing")
        assert store.expenses == (book,)


class TestReads:
    """Tests for lookup helpers."""

    def test_get(self, store, book):
        store.add(book)
        assert store.get("1") == book

    def test_get_missing_raises(self, store):
        with pytest.raises(ExpenseNotFoundError) as exc_info:
            store.get("nope")
        assert exc_info.value.expense_id == "nope"

    def test_total(self, store):
        store.replace_all([make_expense("1", "14.99"), make_expense("2", "3.50")])
        assert store.total() == Decimal("18.49")

    def test_total_empty(self, store):
        assert store.total() == Decimal("0")

    def test_snapshot_is_detached(self, store, book, coffee):
        store.add(book)
        snapshot = store.expenses
        store.add(coffee)
        assert snapshot == (book,)

    def test_initial_contents(self, book, coffee):
        assert ExpenseStore([book, coffee]).expenses == (book, coffee)


class TestUniqueIds:
    """Ids stay unique under any sequence of add/update/remove."""

    @pytest.mark.parametrize("seed", range(20))
    def test_random_sequences(self, store, seed):
        rng = random.Random(seed)
        ids = [str(i) for i in range(5)]

        for _ in range(200):
            op = rng.choice(["add", "update", "remove"])
            expense_id = rng.choice(ids)
            if op == "add":
                store.add(make_expense(expense_id, str(rng.randint(0, 100))))
            elif op == "update":
                store.update(expense_id, PATCH)
            else:
                store.remove(expense_id)

            seen = [e.id for e in store.expenses]
            assert len(seen) == len(set(seen))
