"""Abstract port onto the hosted backend.

Defined in the domain layer so the gateway, cache and realtime layers
never depend on the vendor SDK. The Supabase adapter lives in the
infrastructure layer; tests use an in-memory fake.

Rows cross this boundary as plain dicts keyed by column name. Every
method signals failure with a DomainException subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from meubles.domain.model.change_event import ChangeEvent, EntityType

Row = dict[str, Any]
ChangeCallback = Callable[[ChangeEvent], None]


class ChangeFeed(ABC):
    """Handle on one open per-table change feed."""

    entity: EntityType

    @abstractmethod
    async def close(self) -> None:
        """Stop delivery and release the feed."""


class Backend(ABC):

    # --- Table access ---------------------------------------------------------

    @abstractmethod
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
        """Return matching rows.

        ``filters`` maps column names to required values; a ``None``
        value matches rows where the column is null.
        """

    @abstractmethod
    async def select_one(self, table: EntityType, row_id: str, *, columns: str = "*") -> Row:
        """Return the row with *row_id* or raise EntityNotFoundError."""

    @abstractmethod
    async def count(self, table: EntityType) -> int:
        """Return the exact number of rows in *table*."""

    @abstractmethod
    async def insert(self, table: EntityType, row: Row) -> Row:
        """Insert *row* and return it as stored (ids, timestamps filled in)."""

    @abstractmethod
    async def update(self, table: EntityType, row_id: str, changes: Row) -> Row:
        """Apply *changes* to one row and return it, or raise EntityNotFoundError."""

    @abstractmethod
    async def delete(self, table: EntityType, row_id: str) -> None:
        """Delete one row."""

    # --- Realtime -------------------------------------------------------------

    @abstractmethod
    async def open_feed(self, table: EntityType, on_change: ChangeCallback) -> ChangeFeed:
        """Open a change feed for every event type on *table*."""

    # --- Storage --------------------------------------------------------------

    @abstractmethod
    async def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        """Store a blob and return its public URL."""

    # --- Authentication -------------------------------------------------------

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> str:
        """Open an authenticated session and return the user's email."""

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session."""

    @abstractmethod
    async def current_user(self) -> str | None:
        """Return the signed-in user's email, or None."""
