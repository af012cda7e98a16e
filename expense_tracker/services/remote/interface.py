"""
Abstract Remote Expense Service Interface

DESIGN DECISION: Screens talk to the remote collection through this
interface only. This allows us to:
1. Swap the REST backend without touching the screens
2. Use an in-memory fake for testing
3. Keep the wire format out of the controllers

Every failure (transport, non-success status, undecodable body) is
reported as a single NetworkError.
"""

from abc import ABC, abstractmethod
from typing import Optional

from expense_tracker.models.expense import Expense, ExpenseDraft


class ExpenseServiceInterface(ABC):
    """
    Abstract interface for the remote expense collection.

    Each call is a single request: no retries, no batching.
    """

    @abstractmethod
    async def list_expenses(self) -> list[Expense]:
        """
        Fetch the full current collection.

        Returns:
            Every expense, in the order the remote delivered them

        Raises:
            NetworkError: On any failure. No partial results.
        """
        pass

    @abstractmethod
    async def create_expense(self, draft: ExpenseDraft) -> str:
        """
        Submit a new expense.

        Args:
            draft: The fields of the new expense

        Returns:
            The identifier assigned by the remote service

        Raises:
            NetworkError: If the call fails. The expense may or may
                not have been persisted.
        """
        pass

    @abstractmethod
    async def update_expense(self, expense_id: str, draft: ExpenseDraft) -> None:
        """
        Overwrite every field of an existing expense.

        Raises:
            NetworkError: If the call fails. Remote state is indeterminate.
        """
        pass

    @abstractmethod
    async def delete_expense(self, expense_id: str) -> None:
        """
        Remove an expense.

        Raises:
            NetworkError: If the call fails. Remote state is indeterminate.
        """
        pass


class NetworkError(Exception):
    """Any transport failure or non-success response from the remote service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
