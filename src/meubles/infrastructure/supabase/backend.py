"""Supabase implementation of the Backend port.

Wraps the async Supabase client: PostgREST for table access, realtime
channels for change feeds, storage for images, auth for the admin
session. Vendor errors are translated into DomainException subclasses
here and nowhere else.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from postgrest.exceptions import APIError
from postgrest.types import CountMethod
from storage3.utils import StorageException
from supabase import AsyncClient, AuthError, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from meubles.domain.exceptions import (
    AuthenticationFailedError,
    BackendUnavailableError,
    DomainException,
    EntityNotFoundError,
    UploadError,
    ValidationError,
)
from meubles.domain.model.change_event import EntityType
from meubles.domain.repository.backend import Backend, ChangeCallback, ChangeFeed, Row
from meubles.infrastructure.persistence.json_session_storage import JsonSessionStorage
from meubles.infrastructure.supabase.payloads import change_event_from_payload

logger = logging.getLogger(__name__)

NO_ROWS = "PGRST116"
INSUFFICIENT_PRIVILEGE = "42501"


def translate_api_error(exc: APIError, action: str) -> DomainException:
    """Map a PostgREST error onto the domain taxonomy."""
    code = str(exc.code or "")
    message = f"{action} failed: {exc.message or exc}"
    if code == NO_ROWS:
        return EntityNotFoundError(message)
    # SQLSTATE classes 22 (data exception) and 23 (integrity constraint)
    if code[:2] in ("22", "23"):
        return ValidationError(message)
    if code == INSUFFICIENT_PRIVILEGE or code.startswith("PGRST3"):
        return AuthenticationFailedError(message)
    return BackendUnavailableError(message)


class SupabaseChangeFeed(ChangeFeed):

    def __init__(self, client: AsyncClient, channel: Any, entity: EntityType) -> None:
        self._client = client
        self._channel = channel
        self.entity = entity

    async def close(self) -> None:
        try:
            await self._client.remove_channel(self._channel)
        except Exception as exc:
            raise BackendUnavailableError(
                f"Closing {self.entity.value} channel failed: {exc}"
            ) from exc


class SupabaseBackend(Backend):

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    @classmethod
    async def connect(cls, url: str, key: str, session_storage: JsonSessionStorage) -> SupabaseBackend:
        options = AsyncClientOptions(
            storage=session_storage,
            persist_session=True,
            auto_refresh_token=True,
        )
        client = await acreate_client(url, key, options=options)
        return cls(client)

    # --- Table access ---------------------------------------------------------

    async def select(
        self,
        table: EntityType,
        *,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        query = self._client.table(table.value).select(columns)
        for column, value in (filters or {}).items():
            query = query.is_(column, "null") if value is None else query.eq(column, value)
        if order_by is not None:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        response = await self._execute(query, f"Fetching {table.value}")
        return list(response.data or [])

    async def select_one(self, table: EntityType, row_id: str, *, columns: str = "*") -> Row:
        query = self._client.table(table.value).select(columns).eq("id", row_id).limit(1)
        response = await self._execute(query, f"Fetching {table.value} #{row_id}")
        if not response.data:
            raise EntityNotFoundError(f"{table.value} #{row_id} not found")
        return response.data[0]

    async def count(self, table: EntityType) -> int:
        query = self._client.table(table.value).select("id", count=CountMethod.exact, head=True)
        response = await self._execute(query, f"Counting {table.value}")
        return response.count or 0

    async def insert(self, table: EntityType, row: Row) -> Row:
        query = self._client.table(table.value).insert(row)
        response = await self._execute(query, f"Creating {table.value}")
        if not response.data:
            raise BackendUnavailableError(f"Creating {table.value} returned no row")
        return response.data[0]

    async def update(self, table: EntityType, row_id: str, changes: Row) -> Row:
        query = self._client.table(table.value).update(changes).eq("id", row_id)
        response = await self._execute(query, f"Updating {table.value} #{row_id}")
        if not response.data:
            raise EntityNotFoundError(f"{table.value} #{row_id} not found")
        return response.data[0]

    async def delete(self, table: EntityType, row_id: str) -> None:
        query = self._client.table(table.value).delete().eq("id", row_id)
        await self._execute(query, f"Deleting {table.value} #{row_id}")

    # --- Realtime -------------------------------------------------------------

    async def open_feed(self, table: EntityType, on_change: ChangeCallback) -> ChangeFeed:
        channel = self._client.channel(f"{table.value}-changes")

        def on_payload(payload: dict[str, Any]) -> None:
            on_change(change_event_from_payload(table, payload))

        def on_status(status: Any, error: Exception | None = None) -> None:
            state = str(getattr(status, "value", status))
            if state == "SUBSCRIBED":
                logger.info("%s channel subscribed", table.value)
            elif state in ("CHANNEL_ERROR", "TIMED_OUT"):
                logger.error("%s channel error: %s %s", table.value, state, error or "")

        channel.on_postgres_changes("*", schema="public", table=table.value, callback=on_payload)
        try:
            await channel.subscribe(on_status)
        except Exception as exc:
            raise BackendUnavailableError(f"Subscribing to {table.value} failed: {exc}") from exc
        return SupabaseChangeFeed(self._client, channel, table)

    # --- Storage --------------------------------------------------------------

    async def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        files = self._client.storage.from_(bucket)
        try:
            await files.upload(path, data, {"content-type": content_type})
            return await files.get_public_url(path)
        except (StorageException, httpx.HTTPError) as exc:
            raise UploadError(f"Uploading {path} failed: {exc}") from exc

    # --- Authentication -------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> str:
        try:
            response = await self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except (AuthError, httpx.HTTPError) as exc:
            raise AuthenticationFailedError(f"Sign in failed: {exc}") from exc
        if response.user is None:
            raise AuthenticationFailedError("Sign in failed: no user returned")
        return response.user.email or email

    async def sign_out(self) -> None:
        try:
            await self._client.auth.sign_out()
        except (AuthError, httpx.HTTPError) as exc:
            raise AuthenticationFailedError(f"Sign out failed: {exc}") from exc

    async def current_user(self) -> str | None:
        try:
            session = await self._client.auth.get_session()
            if session is None:
                return None
            response = await self._client.auth.get_user()
        except (AuthError, httpx.HTTPError) as exc:
            raise AuthenticationFailedError(f"Session lookup failed: {exc}") from exc
        if response is None or response.user is None:
            return None
        return response.user.email

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    async def _execute(query: Any, action: str) -> Any:
        try:
            return await query.execute()
        except APIError as exc:
            raise translate_api_error(exc, action) from exc
        except httpx.HTTPError as exc:
            raise BackendUnavailableError(f"{action} failed: {exc}") from exc
