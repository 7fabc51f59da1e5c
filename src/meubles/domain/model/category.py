"""Category aggregate.

Categories form a tree at most two levels deep: root categories have no
parent, subcategories point at a root. The depth rule is a convention
the admin follows; the data layer does not enforce it.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    parent_id: str | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(frozen=True)
class CategoryNode:
    """A root category together with its direct subcategories."""

    category: Category
    subcategories: tuple[Category, ...] = field(default_factory=tuple)

    @property
    def id(self) -> str:
        return self.category.id

    @property
    def name(self) -> str:
        return self.category.name
