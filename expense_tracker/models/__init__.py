"""
Data Models Package

This package contains all Pydantic models used by the Expense Tracker.
All data flowing between the remote service, the store and the screens
must conform to these schemas.
"""

from expense_tracker.models.expense import (
    AmountInput,
    DateInput,
    DescriptionInput,
    Expense,
    ExpenseDraft,
    ExpenseForm,
    FieldUpdate,
    FormInvalidError,
    coerce_amount,
    format_date,
    parse_date,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "AmountInput",
    "DateInput",
    "DescriptionInput",
    "Expense",
    "ExpenseDraft",
    "ExpenseForm",
    "FieldUpdate",
    "FormInvalidError",
    "coerce_amount",
    "format_date",
    "parse_date",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
