"""
Remote Service Package

Provides the abstract interface for the remote expense collection and
its HTTP implementation.
"""

from expense_tracker.services.remote.interface import (
    ExpenseServiceInterface,
    NetworkError,
)
from expense_tracker.services.remote.http_client import HttpExpenseService

__all__ = [
    # Interface
    "ExpenseServiceInterface",
    # Exceptions
    "NetworkError",
    # HTTP implementation
    "HttpExpenseService",
]
