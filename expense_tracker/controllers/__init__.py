"""Screen controllers package."""

from expense_tracker.controllers.base import (
    DELETE_ERROR_MESSAGE,
    FETCH_ERROR_MESSAGE,
    INVALID_INPUT_MESSAGE,
    SAVE_ERROR_MESSAGE,
    ControllerBusyError,
    ControllerError,
    InvalidActionError,
    ScreenController,
    ScreenState,
)
from expense_tracker.controllers.expense_list import (
    ExpenseListController,
    ExpenseListView,
)
from expense_tracker.controllers.manage_expense import ManageExpenseController

__all__ = [
    # State
    "ScreenController",
    "ScreenState",
    # Messages
    "DELETE_ERROR_MESSAGE",
    "FETCH_ERROR_MESSAGE",
    "INVALID_INPUT_MESSAGE",
    "SAVE_ERROR_MESSAGE",
    # Exceptions
    "ControllerBusyError",
    "ControllerError",
    "InvalidActionError",
    # Screens
    "ExpenseListController",
    "ExpenseListView",
    "ManageExpenseController",
]
