"""
REST Implementation of the Remote Expense Service

The remote collection is a Firebase Realtime Database style JSON tree:

    GET    {base}/{collection}.json        -> {id: {description, amount, date}} | null
    POST   {base}/{collection}.json        -> {"name": "<assigned id>"}
    PUT    {base}/{collection}/{id}.json   -> (body ignored)
    DELETE {base}/{collection}/{id}.json   -> (body ignored)

DESIGN DECISION: A fresh httpx.AsyncClient is opened per call.
The UI layer may run each action on its own event loop, and a pooled
client bound to a closed loop would fail on the next request.

TRADEOFFS:
- No connection reuse (acceptable: one request per user action)
- No retries: a failed call is reported once and the user decides
"""

from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from expense_tracker.config import get_settings
from expense_tracker.config.settings import RemoteServiceSettings
from expense_tracker.models.expense import Expense, ExpenseDraft
from expense_tracker.services.remote.interface import (
    ExpenseServiceInterface,
    NetworkError,
)


logger = structlog.get_logger(__name__)


class HttpExpenseService(ExpenseServiceInterface):
    """
    Remote expense service over HTTP/JSON.

    Translates between the wire mapping and Expense records and maps every
    failure to NetworkError.
    """

    def __init__(
        self,
        settings: Optional[RemoteServiceSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Remote settings. Loaded from the environment if None.
            transport: Optional httpx transport (tests pass a MockTransport).
        """
        self._settings = settings or get_settings().remote
        self._transport = transport

    def _collection_path(self) -> str:
        return f"/{self._settings.collection}.json"

    def _item_path(self, expense_id: str) -> str:
        return f"/{self._settings.collection}/{expense_id}.json"

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
    ) -> httpx.Response:
        """Send one request; any transport error or non-2xx becomes NetworkError."""
        try:
            async with httpx.AsyncClient(
                base_url=self._settings.base_url,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning("remote_request_failed", method=method, path=path, error=str(e))
            raise NetworkError(f"{method} {path} failed: {e}") from e

        logger.debug(
            "remote_request",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if not response.is_success:
            raise NetworkError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON from remote service: {e}") from e

    async def list_expenses(self) -> list[Expense]:
        """Fetch and flatten the whole collection."""
        response = await self._request("GET", self._collection_path())
        payload = self._decode(response)

        # An empty collection comes back as null
        if payload is None:
            return []
        if not isinstance(payload, dict):
            raise NetworkError(
                f"Expected a mapping of expenses, got {type(payload).__name__}"
            )

        expenses = []
        for expense_id, record in payload.items():
            if not isinstance(record, dict):
                raise NetworkError(f"Malformed expense record: {expense_id}")
            try:
                expenses.append(Expense.from_wire(expense_id, record))
            except ValidationError as e:
                raise NetworkError(f"Malformed expense record {expense_id}: {e}") from e

        return expenses

    async def create_expense(self, draft: ExpenseDraft) -> str:
        """POST the draft and return the id the remote assigned."""
        response = await self._request(
            "POST",
            self._collection_path(),
            json=draft.to_wire(),
        )
        payload = self._decode(response)

        expense_id = payload.get("name") if isinstance(payload, dict) else None
        if not isinstance(expense_id, str) or not expense_id:
            raise NetworkError("Remote service did not return an expense id")
        return expense_id

    async def update_expense(self, expense_id: str, draft: ExpenseDraft) -> None:
        await self._request("PUT", self._item_path(expense_id), json=draft.to_wire())

    async def delete_expense(self, expense_id: str) -> None:
        await self._request("DELETE", self._item_path(expense_id))
