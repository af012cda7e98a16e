"""Services package."""

from expense_tracker.services.remote import (
    ExpenseServiceInterface,
    HttpExpenseService,
    NetworkError,
)

__all__ = [
    "ExpenseServiceInterface",
    "HttpExpenseService",
    "NetworkError",
]
