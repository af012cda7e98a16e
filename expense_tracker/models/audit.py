"""
Audit Models for the Expense Tracker

Every remote operation and its outcome is recorded as an audit event.
This provides:
1. Traceability of what the screens asked the remote service to do
2. Debugging information when a call fails
3. A record of optimistic edits that diverged from the remote

DESIGN DECISION: Events are immutable once built. The logger only appends.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # List screen
    EXPENSES_FETCHED = "expenses_fetched"
    EXPENSES_FETCH_FAILED = "expenses_fetch_failed"

    # Manage screen
    EXPENSE_CREATED = "expense_created"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_SAVE_FAILED = "expense_save_failed"
    EXPENSE_DELETE_FAILED = "expense_delete_failed"
    UPDATE_ROLLED_BACK = "update_rolled_back"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which expense is this about?
    expense_id: Optional[str] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )

    # Correlation - all events of one screen visit share an ID
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_id": self.expense_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expenses_fetched(count, correlation_id)
        event = AuditEventBuilder.expense_deleted(expense_id, correlation_id)
    """

    @staticmethod
    def expenses_fetched(
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_FETCHED,
            correlation_id=correlation_id,
            description=f"Fetched {count} expenses",
            details={"count": count},
        )

    @staticmethod
    def expenses_fetch_failed(
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_FETCH_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description="Could not fetch expenses",
            error_message=error_message,
        )

    @staticmethod
    def expense_created(
        expense_id: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense created: {amount}",
            details={"amount": amount},
        )

    @staticmethod
    def expense_updated(
        expense_id: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense updated: {amount}",
            details={"amount": amount},
        )

    @staticmethod
    def expense_deleted(
        expense_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description="Expense deleted",
        )

    @staticmethod
    def expense_save_failed(
        expense_id: Optional[str],
        error_message: str,
        optimistic: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        # A failed optimistic update leaves the store ahead of the remote
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_SAVE_FAILED,
            severity=AuditSeverity.WARNING if optimistic else AuditSeverity.ERROR,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description="Could not save expense",
            details={"optimistic_change_kept": optimistic},
            error_message=error_message,
        )

    @staticmethod
    def expense_delete_failed(
        expense_id: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETE_FAILED,
            severity=AuditSeverity.ERROR,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description="Could not delete expense",
            error_message=error_message,
        )

    @staticmethod
    def update_rolled_back(
        expense_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UPDATE_ROLLED_BACK,
            severity=AuditSeverity.WARNING,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description="Optimistic update reverted after remote failure",
        )
