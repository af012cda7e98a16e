"""
Audit Logger

DESIGN DECISION: Every remote operation triggered by a screen is logged,
together with its outcome. This provides:
1. Traceability of what was sent to the remote service
2. Debugging capability when a call fails
3. A visible trail of optimistic edits that the remote never confirmed

The audit logger:
- Is async so screens can await it next to their remote calls
- Never raises into the calling screen
- Supports correlation IDs to group the events of one screen visit
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Writes every event to the structured local log.
    """

    def __init__(self, logger=None):
        """
        Initialize audit logger.

        Args:
            logger: structlog logger to write to.
                    Defaults to the module-configured logger.
        """
        self._logger = logger or structlog.get_logger("expense_tracker.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value == "error":
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Logging must not break the screen that triggered it
            structlog.get_logger().error(
                "audit_log_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

        return True

    async def log_expenses_fetched(
        self,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful list fetch."""
        await self.log(AuditEventBuilder.expenses_fetched(
            count=count,
            correlation_id=correlation_id,
        ))

    async def log_expenses_fetch_failed(
        self,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed list fetch."""
        await self.log(AuditEventBuilder.expenses_fetch_failed(
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    async def log_expense_created(
        self,
        expense_id: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log expense creation."""
        await self.log(AuditEventBuilder.expense_created(
            expense_id=expense_id,
            amount=amount,
            correlation_id=correlation_id,
        ))

    async def log_expense_updated(
        self,
        expense_id: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a confirmed expense update."""
        await self.log(AuditEventBuilder.expense_updated(
            expense_id=expense_id,
            amount=amount,
            correlation_id=correlation_id,
        ))

    async def log_expense_deleted(
        self,
        expense_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log expense deletion."""
        await self.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            correlation_id=correlation_id,
        ))

    async def log_save_failed(
        self,
        expense_id: Optional[str],
        error_message: str,
        optimistic: bool = False,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed create or update."""
        await self.log(AuditEventBuilder.expense_save_failed(
            expense_id=expense_id,
            error_message=error_message,
            optimistic=optimistic,
            correlation_id=correlation_id,
        ))

    async def log_delete_failed(
        self,
        expense_id: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed delete."""
        await self.log(AuditEventBuilder.expense_delete_failed(
            expense_id=expense_id,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    async def log_update_rolled_back(
        self,
        expense_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log the revert of an optimistic update."""
        await self.log(AuditEventBuilder.update_rolled_back(
            expense_id=expense_id,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Each screen controller takes one when it is created and passes it
    through every event it logs.
    """
    return uuid4()


def configure_log_level(debug: bool = False) -> None:
    """Set the level for every expense_tracker.* logger."""
    logging.getLogger("expense_tracker").setLevel(
        logging.DEBUG if debug else logging.INFO
    )
