"""Notes API Client — wraps httpx.AsyncClient with auth headers and error mapping.

Invariants:
    - Authenticated calls read the token from the session store before every request
    - A missing token raises AuthError without touching the network
    - HTTP 400/422 → InputValidationError, 401/403 → AuthError, 404 → NoteNotFoundError,
      409 → ConflictError, 5xx → ServerError; transport failures → NetworkError
    - Undecodable or schema-violating bodies → ServerError
    - No retry: every call is single-shot, retry is a user action

Design Decisions:
    - Wrapper over raw httpx: the store sees only NotesError subclasses
    - Server message passed through when the body carries the error envelope, so the
      store can show it verbatim
    - Transport injectable: tests run against the reference server in-process
"""

import logging
from typing import TypeVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from notesync.core.domain_types import NoteId, SessionToken
from notesync.core.errors import (
    AuthError,
    ConflictError,
    ErrorContext,
    InputValidationError,
    NetworkError,
    NoteNotFoundError,
    NotesError,
    ServerError,
)
from notesync.core.repository_protocols import SessionStore
from notesync.schemas.auth import LoginResponse
from notesync.schemas.note import Note, NoteDraft, NotePatch

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOTE = TypeAdapter(Note)
_NOTE_LIST = TypeAdapter(list[Note])
_LOGIN = TypeAdapter(LoginResponse)


class NotesApiClient:
    """Client for the remote notes service (login, register, notes CRUD)."""

    def __init__(
        self,
        session_store: SessionStore,
        base_url: str,
        timeout_seconds: float = 15.0,
        token_key: str = "token",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.session_store = session_store
        self.token_key = token_key
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "NotesApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ─── Auth ────────────────────────────────────────────────────

    async def login(self, identifier: str, secret: str) -> SessionToken:
        """Exchange credentials for a token and persist it."""
        response = await self._request(
            "POST", "/login",
            json={"email": identifier, "password": secret},
            authenticated=False, operation="login",
        )
        token = self._decode(response, _LOGIN, operation="login").token
        if not token:
            raise AuthError(
                "Invalid credentials", context=ErrorContext(operation="login"),
            )
        await self.session_store.set(self.token_key, token)
        logger.info("Logged in", extra={"operation": "login"})
        return SessionToken(token)

    async def register(self, identifier: str, secret: str) -> None:
        await self._request(
            "POST", "/register",
            json={"email": identifier, "password": secret},
            authenticated=False, operation="register",
        )

    async def logout(self) -> None:
        await self.session_store.delete(self.token_key)
        logger.info("Logged out", extra={"operation": "logout"})

    # ─── Notes ───────────────────────────────────────────────────

    async def list_notes(self) -> list[Note]:
        response = await self._request("GET", "/notes", operation="list")
        return self._decode(response, _NOTE_LIST, operation="list")

    async def create_note(self, draft: NoteDraft) -> Note:
        response = await self._request(
            "POST", "/notes", json=draft.model_dump(), operation="create",
        )
        return self._decode(response, _NOTE, operation="create")

    async def update_note(self, note_id: NoteId, patch: NotePatch) -> Note:
        response = await self._request(
            "PUT", f"/notes/{note_id}", json=patch.model_dump(),
            operation="update", note_id=note_id,
        )
        return self._decode(response, _NOTE, operation="update", note_id=note_id)

    async def delete_note(self, note_id: NoteId) -> None:
        await self._request(
            "DELETE", f"/notes/{note_id}",
            operation="delete", note_id=note_id,
        )

    # ─── Plumbing ────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict | None = None,
        authenticated: bool = True,
        operation: str,
        note_id: int | None = None,
    ) -> httpx.Response:
        """Send one request and map any failure to a NotesError."""
        context = ErrorContext(operation=operation, note_id=note_id)
        headers = {}
        if authenticated:
            token = await self.session_store.get(self.token_key)
            if not token:
                raise AuthError("Not logged in", context=context)
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self.client.request(
                method, path, json=json, headers=headers,
            )
        except httpx.TimeoutException:
            raise NetworkError(
                "The notes service did not respond in time", context=context,
            )
        except httpx.TransportError as e:
            raise NetworkError(
                f"Could not reach the notes service: {e}", context=context,
            )

        if response.is_error:
            error = self._map_status(response, context)
            logger.warning(
                f"Notes service rejected {method} {path}: {error.message}",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "error_code": error.code,
                    "note_id": note_id,
                },
            )
            raise error

        logger.debug(
            f"{method} {path} succeeded",
            extra={
                "operation": operation,
                "status_code": response.status_code,
                "note_id": note_id,
            },
        )
        return response

    def _map_status(
        self, response: httpx.Response, context: ErrorContext,
    ) -> NotesError:
        """Translate an error status into the matching NotesError."""
        status = response.status_code
        context.status_code = status
        message = self._extract_message(response)
        if status in (400, 422):
            return InputValidationError(message, context=context)
        if status in (401, 403):
            return AuthError(message, context=context)
        if status == 404:
            return NoteNotFoundError(context.note_id, message, context=context)
        if status == 409:
            return ConflictError(message, context=context)
        return ServerError(message, status_code=status, context=context)

    def _extract_message(self, response: httpx.Response) -> str:
        """Error envelope message, FastAPI `detail`, or the reason phrase."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            detail = body.get("detail")
            if isinstance(detail, str) and detail:
                return detail
        return f"Notes service error ({response.status_code} {response.reason_phrase})"

    def _decode(
        self,
        response: httpx.Response,
        adapter: TypeAdapter[T],
        *,
        operation: str,
        note_id: int | None = None,
    ) -> T:
        """Validate a success body; anything off-contract is the server's fault."""
        try:
            return adapter.validate_python(response.json())
        except (ValueError, SchemaValidationError) as e:
            context = ErrorContext(
                operation=operation, note_id=note_id,
                status_code=response.status_code,
            )
            logger.warning(
                f"Undecodable {operation} response from notes service",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "note_id": note_id,
                    "error_code": "SERVER_ERROR",
                },
            )
            raise ServerError(
                f"Unexpected response from notes service: {e}",
                status_code=response.status_code, context=context,
            )
