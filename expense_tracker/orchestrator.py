"""
Application Wiring for the Expense Tracker

This module ties together the remote service, the session store and the
audit logger, and hands out screen controllers with those dependencies
injected explicitly.

DESIGN DECISION: One ExpenseSession per user session. Both screens get
the same store object from it, so a change confirmed on the manage
screen is visible on the list screen without a refetch.
"""

from typing import Optional

from expense_tracker.audit import AuditLogger, configure_log_level
from expense_tracker.config import get_settings
from expense_tracker.controllers import ExpenseListController, ManageExpenseController
from expense_tracker.services.remote import ExpenseServiceInterface, HttpExpenseService
from expense_tracker.store import ExpenseStore


class ExpenseSession:
    """
    Holds the shared dependencies of one user session.

    Flow:
    1. List screen -> list_screen() -> load() fills the store
    2. Tap an expense -> manage_screen(expense_id) edits it
    3. Add button -> manage_screen() creates one
    """

    def __init__(
        self,
        service: ExpenseServiceInterface,
        store: Optional[ExpenseStore] = None,
        audit_logger: Optional[AuditLogger] = None,
        rollback_failed_updates: bool = False,
    ):
        self.service = service
        self.store = store if store is not None else ExpenseStore()
        self.audit_logger = audit_logger
        self.rollback_failed_updates = rollback_failed_updates

    def list_screen(self) -> ExpenseListController:
        return ExpenseListController(
            service=self.service,
            store=self.store,
            audit_logger=self.audit_logger,
        )

    def manage_screen(self, expense_id: Optional[str] = None) -> ManageExpenseController:
        """
        Open the manage screen.

        Raises:
            ExpenseNotFoundError: If expense_id is given but not in the store
        """
        return ManageExpenseController(
            service=self.service,
            store=self.store,
            expense_id=expense_id,
            audit_logger=self.audit_logger,
            rollback_failed_updates=self.rollback_failed_updates,
        )


def create_app_components(
    service: Optional[ExpenseServiceInterface] = None,
) -> ExpenseSession:
    """
    Factory function to create a session with all components.

    Args:
        service: Remote service to use. If None, an HttpExpenseService is
                 built from the EXPENSES_API_* settings.

    Returns:
        A new ExpenseSession with an empty store
    """
    settings = get_settings()
    configure_log_level(settings.app.debug_mode)

    return ExpenseSession(
        service=service or HttpExpenseService(settings.remote),
        store=ExpenseStore(),
        audit_logger=AuditLogger(),
        rollback_failed_updates=settings.app.rollback_failed_updates,
    )
