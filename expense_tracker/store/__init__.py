"""In-memory expense store package."""

from expense_tracker.store.expense_store import (
    DuplicateExpenseError,
    ExpenseNotFoundError,
    ExpenseStore,
    StoreError,
)

__all__ = [
    "DuplicateExpenseError",
    "ExpenseNotFoundError",
    "ExpenseStore",
    "StoreError",
]
