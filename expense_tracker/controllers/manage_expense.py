"""
Manage Expense Screen

EDITING -> SUBMITTING -> DONE | FAILED

Create mode starts from an empty form. Edit mode copies an existing
expense from the store into the form; the form is a draft and the store
is only touched when an action is confirmed.

Edit confirmation is optimistic: the store is updated before the remote
call. If the remote call then fails, the change stays in the store
unless rollback_failed_updates is set, in which case the previous record
is restored. Either way the next list fetch reconciles with the remote.
"""

from typing import Optional
from uuid import UUID

from expense_tracker.audit import AuditLogger
from expense_tracker.controllers.base import (
    DELETE_ERROR_MESSAGE,
    INVALID_INPUT_MESSAGE,
    SAVE_ERROR_MESSAGE,
    InvalidActionError,
    ScreenController,
    ScreenState,
)
from expense_tracker.models.expense import (
    Expense,
    ExpenseDraft,
    ExpenseForm,
    FieldUpdate,
    FormInvalidError,
)
from expense_tracker.services.remote import ExpenseServiceInterface, NetworkError
from expense_tracker.store import ExpenseNotFoundError, ExpenseStore


class ManageExpenseController(ScreenController):
    """Creates, edits or deletes a single expense."""

    def __init__(
        self,
        service: ExpenseServiceInterface,
        store: ExpenseStore,
        expense_id: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
        rollback_failed_updates: bool = False,
        correlation_id: Optional[UUID] = None,
    ):
        """
        Args:
            service: Remote expense service
            store: Session store shared with the list screen
            expense_id: Expense to edit. None opens the screen in create mode.
            audit_logger: Optional audit logger
            rollback_failed_updates: Restore the previous record when a
                remote update fails

        Raises:
            ExpenseNotFoundError: If expense_id is not in the store
        """
        super().__init__(
            ScreenState.EDITING,
            audit_logger=audit_logger,
            correlation_id=correlation_id,
        )
        self._service = service
        self._store = store
        self._expense_id = expense_id
        self._is_editing = expense_id is not None
        self._rollback_failed_updates = rollback_failed_updates
        self._validation_issues: list[str] = []

        if expense_id is None:
            self._form = ExpenseForm()
        else:
            self._form = ExpenseForm.from_expense(store.get(expense_id))

    @property
    def expense_id(self) -> Optional[str]:
        return self._expense_id

    @property
    def is_editing(self) -> bool:
        return self._is_editing

    @property
    def title(self) -> str:
        return "Edit Expense" if self.is_editing else "Add Expense"

    @property
    def confirm_label(self) -> str:
        return "Update" if self.is_editing else "Add"

    @property
    def form(self) -> ExpenseForm:
        return self._form

    @property
    def validation_issues(self) -> list[str]:
        """Field problems found by the last confirm(), if it failed validation."""
        return list(self._validation_issues)

    def _ensure_editing(self) -> None:
        self._ensure_not_busy()
        if self._state != ScreenState.EDITING:
            raise InvalidActionError(
                f"Form is not editable while {self._state.value}"
            )

    def apply(self, update: FieldUpdate) -> None:
        """Apply one field edit to the draft."""
        self._ensure_editing()
        self._form = self._form.apply(update)

    async def confirm(self) -> None:
        """
        Validate the draft and save it (create or update).

        Invalid input fails without any remote call or store change.
        """
        self._ensure_editing()

        try:
            draft = self._form.to_draft()
        except FormInvalidError as e:
            self._validation_issues = e.issues
            self._fail(INVALID_INPUT_MESSAGE)
            return
        self._validation_issues = []

        if self.is_editing:
            await self._update(draft)
        else:
            await self._create(draft)

    async def _create(self, draft: ExpenseDraft) -> None:
        self._begin(ScreenState.SUBMITTING)

        try:
            expense_id = await self._service.create_expense(draft)
        except NetworkError as e:
            self._fail(SAVE_ERROR_MESSAGE)
            if self._audit_logger:
                await self._audit_logger.log_save_failed(
                    expense_id=None,
                    error_message=str(e),
                    correlation_id=self.correlation_id,
                )
            return

        self._store.add(Expense.from_draft(expense_id, draft))
        self._finish(ScreenState.DONE)

        if self._audit_logger:
            await self._audit_logger.log_expense_created(
                expense_id=expense_id,
                amount=str(draft.amount),
                correlation_id=self.correlation_id,
            )

    async def _update(self, draft: ExpenseDraft) -> None:
        try:
            previous = self._store.get(self._expense_id)
        except ExpenseNotFoundError:
            previous = None

        self._begin(ScreenState.SUBMITTING)
        self._store.update(self._expense_id, draft)

        try:
            await self._service.update_expense(self._expense_id, draft)
        except NetworkError as e:
            rolled_back = self._rollback_failed_updates and previous is not None
            if rolled_back:
                self._store.update(self._expense_id, previous.to_draft())
            self._fail(SAVE_ERROR_MESSAGE)

            if self._audit_logger:
                await self._audit_logger.log_save_failed(
                    expense_id=self._expense_id,
                    error_message=str(e),
                    optimistic=not rolled_back,
                    correlation_id=self.correlation_id,
                )
                if rolled_back:
                    await self._audit_logger.log_update_rolled_back(
                        expense_id=self._expense_id,
                        correlation_id=self.correlation_id,
                    )
            return

        self._finish(ScreenState.DONE)

        if self._audit_logger:
            await self._audit_logger.log_expense_updated(
                expense_id=self._expense_id,
                amount=str(draft.amount),
                correlation_id=self.correlation_id,
            )

    async def delete(self) -> None:
        """
        Delete the edited expense remotely, then from the store.

        Raises:
            InvalidActionError: In create mode (there is nothing to delete)
        """
        if not self.is_editing:
            raise InvalidActionError("Only an existing expense can be deleted")
        self._ensure_editing()

        self._begin(ScreenState.SUBMITTING)

        try:
            await self._service.delete_expense(self._expense_id)
        except NetworkError as e:
            self._fail(DELETE_ERROR_MESSAGE)
            if self._audit_logger:
                await self._audit_logger.log_delete_failed(
                    expense_id=self._expense_id,
                    error_message=str(e),
                    correlation_id=self.correlation_id,
                )
            return

        self._store.remove(self._expense_id)
        self._finish(ScreenState.DONE)

        if self._audit_logger:
            await self._audit_logger.log_expense_deleted(
                expense_id=self._expense_id,
                correlation_id=self.correlation_id,
            )

    def cancel(self) -> None:
        """Discard the draft and leave the screen. The store is not touched."""
        self._ensure_not_busy()
        self._form = ExpenseForm()
        self._finish(ScreenState.DONE)

    def dismiss_error(self) -> None:
        """Leave FAILED and return to the form with the draft intact."""
        if self._state == ScreenState.FAILED:
            self._finish(ScreenState.EDITING)
