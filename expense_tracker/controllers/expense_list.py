"""
All Expenses Screen

IDLE -> FETCHING -> READY | FAILED

On entry the screen fetches the whole collection and installs it into
the store, newest first. A failed fetch leaves the store as it was, so
dismissing the error shows the last known contents.
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from expense_tracker.audit import AuditLogger
from expense_tracker.controllers.base import (
    FETCH_ERROR_MESSAGE,
    ScreenController,
    ScreenState,
)
from expense_tracker.models.expense import Expense
from expense_tracker.services.remote import ExpenseServiceInterface, NetworkError
from expense_tracker.store import ExpenseStore, StoreError


class ExpenseListView(BaseModel):
    """What the list screen renders: the period header and the expenses."""
    model_config = ConfigDict(frozen=True)

    period_label: str
    expenses: tuple[Expense, ...]
    total: Decimal


class ExpenseListController(ScreenController):
    """Loads the collection into the store and exposes it for rendering."""

    period_label = "Total"

    def __init__(
        self,
        service: ExpenseServiceInterface,
        store: ExpenseStore,
        audit_logger: Optional[AuditLogger] = None,
        correlation_id: Optional[UUID] = None,
    ):
        super().__init__(
            ScreenState.IDLE,
            audit_logger=audit_logger,
            correlation_id=correlation_id,
        )
        self._service = service
        self._store = store

    async def load(self) -> None:
        """
        Fetch the full collection and replace the store's contents with it.

        On failure the controller holds FETCH_ERROR_MESSAGE and the store
        is not touched.
        """
        self._begin(ScreenState.FETCHING)

        try:
            expenses = await self._service.list_expenses()
            # Remote keys are chronological; the list shows newest first
            self._store.replace_all(reversed(expenses))
        except (NetworkError, StoreError) as e:
            self._fail(FETCH_ERROR_MESSAGE)
            if self._audit_logger:
                await self._audit_logger.log_expenses_fetch_failed(
                    error_message=str(e),
                    correlation_id=self.correlation_id,
                )
            return

        self._finish(ScreenState.READY)

        if self._audit_logger:
            await self._audit_logger.log_expenses_fetched(
                count=len(expenses),
                correlation_id=self.correlation_id,
            )

    def dismiss_error(self) -> None:
        """Leave FAILED and show whatever the store currently holds."""
        if self._state == ScreenState.FAILED:
            self._finish(ScreenState.READY)

    def snapshot(self) -> ExpenseListView:
        return ExpenseListView(
            period_label=self.period_label,
            expenses=self._store.expenses,
            total=self._store.total(),
        )
