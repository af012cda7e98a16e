"""
Shared fixtures.

No real network in tests: controllers run against FakeExpenseService,
the HTTP client against httpx.MockTransport.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import Expense, ExpenseDraft
from expense_tracker.services.remote import ExpenseServiceInterface, NetworkError
from expense_tracker.store import ExpenseStore


class FakeExpenseService(ExpenseServiceInterface):
    """In-memory remote collection that records calls and can be told to fail."""

    def __init__(self, expenses: Optional[list[Expense]] = None):
        self.records: dict[str, ExpenseDraft] = {
            e.id: e.to_draft() for e in (expenses or [])
        }
        self.calls: list[tuple] = []
        self.fail_with: Optional[NetworkError] = None
        self.next_id = "7"

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def list_expenses(self) -> list[Expense]:
        self.calls.append(("list",))
        self._maybe_fail()
        return [Expense.from_draft(i, d) for i, d in self.records.items()]

    async def create_expense(self, draft: ExpenseDraft) -> str:
        self.calls.append(("create", draft))
        self._maybe_fail()
        self.records[self.next_id] = draft
        return self.next_id

    async def update_expense(self, expense_id: str, draft: ExpenseDraft) -> None:
        self.calls.append(("update", expense_id, draft))
        self._maybe_fail()
        self.records[expense_id] = draft

    async def delete_expense(self, expense_id: str) -> None:
        self.calls.append(("delete", expense_id))
        self._maybe_fail()
        self.records.pop(expense_id, None)


class RecordingLogger:
    """Stands in for a structlog logger; keeps (level, event, fields)."""

    def __init__(self):
        self.entries: list[tuple[str, str, dict]] = []

    def _record(self, level, event, **kw):
        self.entries.append((level, event, kw))

    def debug(self, event, **kw):
        self._record("debug", event, **kw)

    def info(self, event, **kw):
        self._record("info", event, **kw)

    def warning(self, event, **kw):
        self._record("warning", event, **kw)

    def error(self, event, **kw):
        self._record("error", event, **kw)

    def event_types(self) -> list[str]:
        return [fields["event_type"] for _, _, fields in self.entries]


@pytest.fixture
def book() -> Expense:
    return Expense(
        id="1",
        description="Book",
        amount=Decimal("14.99"),
        date=date(2023, 1, 1),
    )


@pytest.fixture
def coffee() -> Expense:
    return Expense(
        id="7",
        description="Coffee",
        amount=Decimal("3.5"),
        date=date(2023, 2, 1),
    )


@pytest.fixture
def store() -> ExpenseStore:
    return ExpenseStore()


@pytest.fixture
def service() -> FakeExpenseService:
    return FakeExpenseService()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def audit_logger(recording_logger) -> AuditLogger:
    return AuditLogger(logger=recording_logger)
