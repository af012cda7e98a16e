"""
Screen Controller Basics

Both screens are small state machines. What the rendering layer sees is
the presentation contract:

- state: one ScreenState tag
- error: the message to show while in FAILED, else None
- is_busy: True while a remote call is in flight (buttons disabled)

A controller allows at most one in-flight remote call. Starting another
action while busy raises ControllerBusyError.
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from expense_tracker.audit import AuditLogger, create_correlation_id


FETCH_ERROR_MESSAGE = "Could not fetch expenses"
SAVE_ERROR_MESSAGE = "Could not save expense! Please try again later"
DELETE_ERROR_MESSAGE = "Could not delete expense! Please try again later"
INVALID_INPUT_MESSAGE = "Invalid input values - please check your entered data!"


class ScreenState(str, Enum):
    """Presentation state tags exposed to the rendering layer."""
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    FAILED = "failed"
    EDITING = "editing"
    SUBMITTING = "submitting"
    DONE = "done"


BUSY_STATES = frozenset({ScreenState.FETCHING, ScreenState.SUBMITTING})


class ControllerError(Exception):
    """Base exception for misuse of a screen controller."""
    pass


class ControllerBusyError(ControllerError):
    """An action was requested while a remote call is still in flight."""
    pass


class InvalidActionError(ControllerError):
    """The action is not available in the controller's current state or mode."""
    pass


class ScreenController:
    """Shared state handling for the screen controllers."""

    def __init__(
        self,
        initial_state: ScreenState,
        audit_logger: Optional[AuditLogger] = None,
        correlation_id: Optional[UUID] = None,
    ):
        self._state = initial_state
        self._error: Optional[str] = None
        self._audit_logger = audit_logger
        self.correlation_id = correlation_id or create_correlation_id()

    @property
    def state(self) -> ScreenState:
        return self._state

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_busy(self) -> bool:
        return self._state in BUSY_STATES

    def _ensure_not_busy(self) -> None:
        if self.is_busy:
            raise ControllerBusyError(
                f"{type(self).__name__} is {self._state.value}; wait for it to finish"
            )

    def _begin(self, busy_state: ScreenState) -> None:
        """Enter a busy state for one remote call."""
        self._ensure_not_busy()
        self._state = busy_state
        self._error = None

    def _fail(self, message: str) -> None:
        self._state = ScreenState.FAILED
        self._error = message

    def _finish(self, state: ScreenState) -> None:
        self._state = state
        self._error = None
