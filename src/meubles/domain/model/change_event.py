"""Change notifications pushed by the backend's per-table feeds."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EntityType(Enum):
    """The three backend tables, named as the backend names them."""

    PRODUCTS = "products"
    CATEGORIES = "categories"
    ORDERS = "orders"


class ChangeKind(Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    entity: EntityType
    kind: ChangeKind
    record: dict[str, Any] = field(default_factory=dict)
    old_record: dict[str, Any] = field(default_factory=dict)
    committed_at: str | None = None

    @property
    def row_id(self) -> str | None:
        row = self.record or self.old_record
        value = row.get("id")
        return None if value is None else str(value)
