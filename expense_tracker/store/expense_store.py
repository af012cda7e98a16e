"""
In-Memory Expense Store

Holds the committed expenses for the running session and the mutation
primitives both screens share.

DESIGN DECISION: The store is an explicit object handed to each screen
controller, not a module-level global. It is only touched from the UI
task, so it carries no locking.

Ordering: newest first. add() prepends; replace_all() keeps the order
it is given. Ids are unique at all times.
"""

from decimal import Decimal
from typing import Iterable, Iterator, Optional

from expense_tracker.models.expense import Expense, ExpenseDraft


class StoreError(Exception):
    """Base exception for store operations."""
    pass


class ExpenseNotFoundError(StoreError):
    """No expense with the requested id is in the store."""

    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"Expense not found: {expense_id}")


class DuplicateExpenseError(StoreError):
    """A collection with repeated ids was offered to the store."""
    pass


class ExpenseStore:
    """
    Session-wide collection of committed expenses.

    No persistence: a fresh list fetch is the only way to reconcile
    with the remote source of truth.
    """

    def __init__(self, expenses: Iterable[Expense] = ()):
        self._expenses: list[Expense] = []
        self.replace_all(expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(tuple(self._expenses))

    def __contains__(self, expense_id: object) -> bool:
        return self._index_of(expense_id) is not None

    @property
    def expenses(self) -> tuple[Expense, ...]:
        """Snapshot of the collection, newest first."""
        return tuple(self._expenses)

    def _index_of(self, expense_id) -> Optional[int]:
        for idx, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return idx
        return None

    def get(self, expense_id: str) -> Expense:
        """
        Look up an expense by id.

        Raises:
            ExpenseNotFoundError: If no expense has this id
        """
        idx = self._index_of(expense_id)
        if idx is None:
            raise ExpenseNotFoundError(expense_id)
        return self._expenses[idx]

    def total(self) -> Decimal:
        """Sum of all amounts."""
        return sum((expense.amount for expense in self._expenses), Decimal("0"))

    def replace_all(self, expenses: Iterable[Expense]) -> None:
        """
        Discard the current collection and install the given one.

        Raises:
            DuplicateExpenseError: If two records share an id.
                The store is left untouched.
        """
        incoming = list(expenses)

        seen = set()
        for expense in incoming:
            if expense.id in seen:
                raise DuplicateExpenseError(f"Duplicate expense id: {expense.id}")
            seen.add(expense.id)

        self._expenses = incoming

    def add(self, expense: Expense) -> None:
        """Prepend an expense. An existing record with the same id is dropped first."""
        self._expenses = [expense] + [e for e in self._expenses if e.id != expense.id]

    def update(self, expense_id: str, patch: ExpenseDraft) -> None:
        """Replace the matching record's fields in place. No-op if absent."""
        idx = self._index_of(expense_id)
        if idx is None:
            return
        self._expenses[idx] = self._expenses[idx].merged(patch)

    def remove(self, expense_id: str) -> None:
        """Delete the matching record. No-op if absent."""
        self._expenses = [e for e in self._expenses if e.id != expense_id]
