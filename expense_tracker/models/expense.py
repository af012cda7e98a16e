"""
Core Data Models for the Expense Tracker

These models define the shapes that flow between the remote service,
the in-memory store and the screens:

- ExpenseDraft: the editable fields of an expense, no identity yet
- Expense: a committed record with the id assigned by the remote service
- ExpenseForm: what the edit screen holds while the user is typing
- DescriptionInput / AmountInput / DateInput: typed per-field form updates

DESIGN DECISION: Amounts are Decimal everywhere inside the application.
The form keeps the raw text the user typed next to its numeric coercion,
so a half-typed "4." never leaks into the store as a string.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)


DATE_FORMAT = "%Y-%m-%d"


def format_date(value: dt.date) -> str:
    """Format a date the way the form displays it (YYYY-MM-DD)."""
    return value.strftime(DATE_FORMAT)


def parse_date(text: str) -> dt.date:
    """
    Parse a date coming from the form or from the wire.

    Accepts plain YYYY-MM-DD as well as full ISO-8601 timestamps
    (e.g. 2023-01-01T00:00:00.000Z); only the calendar date is kept.

    Raises:
        ValueError: If the text is not a recognizable date
    """
    text = text.strip()
    if "T" in text:
        return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return dt.datetime.strptime(text, DATE_FORMAT).date()


def coerce_amount(text: str) -> Optional[Decimal]:
    """Coerce user-typed amount text to a Decimal, or None if it isn't a number."""
    text = text.strip()
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


# =============================================================================
# RECORDS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    The editable fields of an expense.

    This is what gets sent to the remote service on create and update.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    # Records written by other clients may carry an empty description;
    # the form enforces non-empty text on submit.
    description: str = Field(
        ...,
        description="Free-text description of the expense"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount spent"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the expense"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def amount_from_wire(cls, v):
        """JSON numbers arrive as floats; go through str() to keep 14.99 exact."""
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator('date', mode='before')
    @classmethod
    def date_from_text(cls, v):
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str):
            return parse_date(v)
        return v

    def to_wire(self) -> dict:
        """Body for POST/PUT requests: {description, amount, date}."""
        return {
            "description": self.description,
            "amount": float(self.amount),
            "date": format_date(self.date),
        }


class Expense(ExpenseDraft):
    """
    A committed expense record.

    The id is opaque and assigned by the remote service on creation.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Identifier assigned by the remote service"
    )

    @classmethod
    def from_draft(cls, expense_id: str, draft: ExpenseDraft) -> "Expense":
        return cls(id=expense_id, **draft.model_dump())

    @classmethod
    def from_wire(cls, expense_id: str, payload: dict) -> "Expense":
        return cls(
            id=expense_id,
            description=payload.get("description"),
            amount=payload.get("amount"),
            date=payload.get("date"),
        )

    def to_draft(self) -> ExpenseDraft:
        return ExpenseDraft(
            description=self.description,
            amount=self.amount,
            date=self.date,
        )

    def merged(self, patch: ExpenseDraft) -> "Expense":
        """Same id, every field replaced by the patch."""
        return Expense.from_draft(self.id, patch)


# =============================================================================
# FORM STATE
# =============================================================================

class DescriptionInput(BaseModel):
    """User edited the description field."""
    field: Literal["description"] = "description"
    value: str


class AmountInput(BaseModel):
    """User edited the amount field (raw text)."""
    field: Literal["amount"] = "amount"
    text: str


class DateInput(BaseModel):
    """User edited the date field (YYYY-MM-DD text)."""
    field: Literal["date"] = "date"
    text: str


FieldUpdate = Annotated[
    Union[DescriptionInput, AmountInput, DateInput],
    Field(discriminator="field"),
]


class FormInvalidError(ValueError):
    """The form cannot be turned into a valid ExpenseDraft."""

    def __init__(self, issues: list[str]):
        self.issues = issues
        super().__init__("; ".join(issues))


class ExpenseForm(BaseModel):
    """
    Draft held by the edit screen while the user types.

    Independent of the store: nothing here is committed until the
    controller confirms it.
    """
    model_config = ConfigDict(frozen=True)

    description: str = ""
    amount_text: str = ""
    amount: Optional[Decimal] = None
    date_text: str = ""

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseForm":
        """Pre-populate the form from a committed record."""
        return cls(
            description=expense.description,
            amount_text=str(expense.amount),
            amount=expense.amount,
            date_text=format_date(expense.date),
        )

    def apply(self, update: FieldUpdate) -> "ExpenseForm":
        """Return a new form with one field changed."""
        if isinstance(update, DescriptionInput):
            return self.model_copy(update={"description": update.value})
        if isinstance(update, AmountInput):
            return self.model_copy(update={
                "amount_text": update.text,
                "amount": coerce_amount(update.text),
            })
        if isinstance(update, DateInput):
            return self.model_copy(update={"date_text": update.text})
        raise TypeError(f"Unsupported form update: {update!r}")

    def to_draft(self) -> ExpenseDraft:
        """
        Validate the form into an ExpenseDraft.

        The amount is coerced again from the text and the date text is
        parsed here, on submit.

        Raises:
            FormInvalidError: Listing every field that failed
        """
        issues = []

        if not self.description.strip():
            issues.append("description: must not be empty")

        amount = coerce_amount(self.amount_text)
        if amount is None:
            issues.append("amount: not a number")

        parsed_date = None
        try:
            parsed_date = parse_date(self.date_text)
        except ValueError:
            issues.append("date: expected YYYY-MM-DD")

        if issues:
            raise FormInvalidError(issues)

        try:
            return ExpenseDraft(
                description=self.description,
                amount=amount,
                date=parsed_date,
            )
        except ValidationError as e:
            raise FormInvalidError([
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]) from e
