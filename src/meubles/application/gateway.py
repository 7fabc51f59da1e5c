"""Remote data gateway.

The single point of contact with the hosted backend: one coroutine per
(entity, operation) pair, each a single round-trip except the category
tree read. Failures surface as DomainException subclasses raised by the
backend port; the gateway propagates them unchanged except where noted.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import time
from datetime import datetime
from typing import Any, Callable

from meubles.application import records
from meubles.application.dto import CategoryDraft, ProductDraft
from meubles.domain.exceptions import DomainException, ValidationError
from meubles.domain.model.category import Category, CategoryNode
from meubles.domain.model.change_event import EntityType
from meubles.domain.model.order import Order, OrderStatus
from meubles.domain.model.product import Product
from meubles.domain.repository.backend import Backend, ChangeCallback, ChangeFeed
from meubles.domain.service.dashboard_stats import (
    DashboardStats,
    OrderSummary,
    compute_dashboard_stats,
)

logger = logging.getLogger(__name__)

MAX_PRODUCTS = 1000
IMAGE_BUCKET = "product-images"

PRODUCTS = EntityType.PRODUCTS
CATEGORIES = EntityType.CATEGORIES
ORDERS = EntityType.ORDERS


class Gateway:

    def __init__(self, backend: Backend, clock: Callable[[], float] = time.time) -> None:
        self._backend = backend
        self._clock = clock

    # --- Products -------------------------------------------------------------

    async def list_products(self) -> list[Product]:
        rows = await self._backend.select(
            PRODUCTS,
            columns=records.PRODUCT_COLUMNS,
            order_by="created_at",
            descending=True,
            limit=MAX_PRODUCTS,
        )
        return [records.product_from_row(row) for row in rows]

    async def get_product(self, product_id: str) -> Product:
        row = await self._backend.select_one(
            PRODUCTS, product_id, columns=records.PRODUCT_WITH_CATEGORY_COLUMNS
        )
        return records.product_from_row(row)

    async def create_product(self, draft: ProductDraft) -> Product:
        row = await self._backend.insert(PRODUCTS, records.product_draft_to_row(draft))
        return records.product_from_row(row)

    async def update_product(self, product_id: str, draft: ProductDraft) -> Product:
        row = await self._backend.update(
            PRODUCTS, product_id, records.product_draft_to_row(draft)
        )
        return records.product_from_row(row)

    async def delete_product(self, product_id: str) -> None:
        await self._backend.delete(PRODUCTS, product_id)

    # --- Categories -----------------------------------------------------------

    async def list_categories(self) -> list[Category]:
        rows = await self._backend.select(
            CATEGORIES, columns=records.CATEGORY_COLUMNS, order_by="name"
        )
        return [records.category_from_row(row) for row in rows]

    async def list_subcategories(self, parent_id: str) -> list[Category]:
        rows = await self._backend.select(
            CATEGORIES,
            columns=records.CATEGORY_COLUMNS,
            filters={"parent_id": parent_id},
            order_by="name",
        )
        return [records.category_from_row(row) for row in rows]

    async def list_root_categories_with_children(self) -> list[CategoryNode]:
        """Read the two-level category tree.

        Roots are fetched first, then every root's children concurrently.
        A failed child read only empties that root's subcategories.
        """
        rows = await self._backend.select(
            CATEGORIES,
            columns=records.CATEGORY_COLUMNS,
            filters={"parent_id": None},
            order_by="name",
        )
        roots = [records.category_from_row(row) for row in rows]
        children = await asyncio.gather(
            *(self.list_subcategories(root.id) for root in roots),
            return_exceptions=True,
        )

        nodes: list[CategoryNode] = []
        for root, result in zip(roots, children):
            if isinstance(result, DomainException):
                logger.error("Error fetching subcategories for %s: %s", root.name, result)
                result = []
            elif isinstance(result, BaseException):
                raise result
            nodes.append(CategoryNode(category=root, subcategories=tuple(result)))
        return nodes

    async def create_category(self, draft: CategoryDraft) -> Category:
        row = await self._backend.insert(CATEGORIES, records.category_draft_to_row(draft))
        return records.category_from_row(row)

    async def update_category(self, category_id: str, draft: CategoryDraft) -> Category:
        row = await self._backend.update(
            CATEGORIES, category_id, records.category_draft_to_row(draft)
        )
        return records.category_from_row(row)

    async def rename_category(self, category_id: str, name: str) -> Category:
        row = await self._backend.update(
            CATEGORIES, category_id, records.category_name_to_row(name)
        )
        return records.category_from_row(row)

    async def delete_category(self, category_id: str) -> None:
        await self._backend.delete(CATEGORIES, category_id)

    # --- Orders ---------------------------------------------------------------

    async def list_orders(self) -> list[Order]:
        rows = await self._backend.select(ORDERS, order_by="created_at", descending=True)
        return [records.order_from_row(row) for row in rows]

    async def get_order(self, order_id: str) -> Order:
        return records.order_from_row(await self._backend.select_one(ORDERS, order_id))

    async def create_order(self, order: Order) -> Order:
        if order.id is not None:
            raise ValidationError(f"Order #{order.id} already exists")
        row = await self._backend.insert(ORDERS, records.order_to_row(order))
        return records.order_from_row(row)

    async def update_order(self, order_id: str, changes: dict[str, Any]) -> Order:
        row = await self._backend.update(ORDERS, order_id, dict(changes))
        return records.order_from_row(row)

    async def update_order_status(self, order_id: str, status: OrderStatus | str) -> Order:
        """Write only the status column."""
        if not isinstance(status, OrderStatus):
            status = OrderStatus.parse(status)
        row = await self._backend.update(ORDERS, order_id, {"status": status.value})
        return records.order_from_row(row)

    async def delete_order(self, order_id: str) -> None:
        await self._backend.delete(ORDERS, order_id)

    # --- Dashboard ------------------------------------------------------------

    async def compute_dashboard_stats(self, now: datetime | None = None) -> DashboardStats:
        """Aggregate the dashboard figures client-side.

        A failed sub-read is logged and counted as empty, so the
        dashboard always renders.
        """
        summaries: list[OrderSummary] = []
        try:
            rows = await self._backend.select(ORDERS, columns=records.ORDER_SUMMARY_COLUMNS)
            summaries = [records.order_summary_from_row(row) for row in rows]
        except DomainException as exc:
            logger.error("Error fetching orders for stats: %s", exc)

        total_products = 0
        try:
            total_products = await self._backend.count(PRODUCTS)
        except DomainException as exc:
            logger.error("Error fetching products count: %s", exc)

        return compute_dashboard_stats(summaries, total_products, now=now)

    # --- Realtime -------------------------------------------------------------

    async def open_feed(self, entity: EntityType, on_change: ChangeCallback) -> ChangeFeed:
        return await self._backend.open_feed(entity, on_change)

    # --- Storage --------------------------------------------------------------

    async def upload_product_image(self, data: bytes, filename: str, product_id: str) -> str:
        """Upload an image and return its public URL.

        Stored under ``products/product-{id}-{epoch ms}.{ext}``.
        """
        ext = filename.rsplit(".", 1)[-1].lower()
        path = f"products/product-{product_id}-{int(self._clock() * 1000)}.{ext}"
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        return await self._backend.upload(IMAGE_BUCKET, path, data, content_type)

    # --- Authentication -------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> str:
        user = await self._backend.sign_in(email, password)
        logger.info("Signed in as %s", user)
        return user

    async def sign_out(self) -> None:
        await self._backend.sign_out()

    async def current_user(self) -> str | None:
        return await self._backend.current_user()
