"""Data access façade used by every consumer.

Owns the two list caches and the realtime subscription table, so there
is exactly one instance of that mutable state per process and it is
handed to consumers explicitly (see ``infrastructure.bootstrap``).

Policy:
- product and category list reads go through the cache and never raise
  for a backend failure;
- other list reads degrade to an empty list;
- single reads and all mutations propagate failures;
- a successful mutation invalidates the cache slot it touched.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from meubles.application.cache import CachedList
from meubles.application.dto import CategoryDraft, ProductDraft
from meubles.application.gateway import Gateway
from meubles.application.realtime import ChangeHandler, RealtimeSync
from meubles.domain.exceptions import DomainException
from meubles.domain.model.category import Category, CategoryNode
from meubles.domain.model.change_event import EntityType
from meubles.domain.model.order import Order, OrderStatus
from meubles.domain.model.product import Product
from meubles.domain.repository.backend import ChangeFeed
from meubles.domain.service.dashboard_stats import DashboardStats

logger = logging.getLogger(__name__)


class DataAccess:

    def __init__(
        self,
        gateway: Gateway,
        products_cache: CachedList[Product] | None = None,
        categories_cache: CachedList[Category] | None = None,
        realtime: RealtimeSync | None = None,
    ) -> None:
        self.gateway = gateway
        self.products_cache = products_cache or CachedList("products")
        self.categories_cache = categories_cache or CachedList("categories")
        self.realtime = realtime or RealtimeSync(
            gateway,
            {
                EntityType.PRODUCTS: self.products_cache,
                EntityType.CATEGORIES: self.categories_cache,
            },
        )

    # --- Products -------------------------------------------------------------

    async def list_products(self) -> list[Product]:
        return await self.products_cache.get(self.gateway.list_products)

    async def get_product(self, product_id: str) -> Product:
        return await self.gateway.get_product(product_id)

    async def create_product(self, draft: ProductDraft) -> Product:
        product = await self.gateway.create_product(draft)
        self.products_cache.invalidate()
        return product

    async def update_product(self, product_id: str, draft: ProductDraft) -> Product:
        product = await self.gateway.update_product(product_id, draft)
        self.products_cache.invalidate()
        return product

    async def delete_product(self, product_id: str) -> None:
        await self.gateway.delete_product(product_id)
        self.products_cache.invalidate()

    async def upload_product_image(self, data: bytes, filename: str, product_id: str) -> str:
        return await self.gateway.upload_product_image(data, filename, product_id)

    # --- Categories -----------------------------------------------------------

    async def list_categories(self) -> list[Category]:
        return await self.categories_cache.get(self.gateway.list_categories)

    async def list_root_categories_with_children(self) -> list[CategoryNode]:
        try:
            return await self.gateway.list_root_categories_with_children()
        except DomainException as exc:
            logger.error("Error fetching main categories: %s", exc)
            return []

    async def list_subcategories(self, parent_id: str) -> list[Category]:
        try:
            return await self.gateway.list_subcategories(parent_id)
        except DomainException as exc:
            logger.error("Error fetching subcategories: %s", exc)
            return []

    async def create_category(self, draft: CategoryDraft) -> Category:
        category = await self.gateway.create_category(draft)
        self.categories_cache.invalidate()
        return category

    async def update_category(self, category_id: str, draft: CategoryDraft) -> Category:
        category = await self.gateway.update_category(category_id, draft)
        self.categories_cache.invalidate()
        return category

    async def rename_category(self, category_id: str, name: str) -> Category:
        category = await self.gateway.rename_category(category_id, name)
        self.categories_cache.invalidate()
        return category

    async def delete_category(self, category_id: str) -> None:
        await self.gateway.delete_category(category_id)
        self.categories_cache.invalidate()

    # --- Orders ---------------------------------------------------------------

    async def list_orders(self) -> list[Order]:
        try:
            return await self.gateway.list_orders()
        except DomainException as exc:
            logger.error("Error fetching orders: %s", exc)
            return []

    async def get_order(self, order_id: str) -> Order:
        return await self.gateway.get_order(order_id)

    async def create_order(self, order: Order) -> Order:
        return await self.gateway.create_order(order)

    async def update_order(self, order_id: str, changes: dict[str, Any]) -> Order:
        return await self.gateway.update_order(order_id, changes)

    async def update_order_status(self, order_id: str, status: OrderStatus | str) -> Order:
        return await self.gateway.update_order_status(order_id, status)

    async def delete_order(self, order_id: str) -> None:
        await self.gateway.delete_order(order_id)

    async def compute_dashboard_stats(self, now: datetime | None = None) -> DashboardStats:
        return await self.gateway.compute_dashboard_stats(now=now)

    # --- Realtime -------------------------------------------------------------

    async def subscribe_to_products(self, handler: ChangeHandler) -> ChangeFeed | None:
        return await self.realtime.subscribe(EntityType.PRODUCTS, handler)

    async def subscribe_to_categories(self, handler: ChangeHandler) -> ChangeFeed | None:
        return await self.realtime.subscribe(EntityType.CATEGORIES, handler)

    async def subscribe_to_orders(self, handler: ChangeHandler) -> ChangeFeed | None:
        return await self.realtime.subscribe(EntityType.ORDERS, handler)

    async def unsubscribe_all(self) -> None:
        await self.realtime.unsubscribe_all()

    def clear_cache(self) -> None:
        self.products_cache.invalidate()
        self.categories_cache.invalidate()

    # --- Authentication -------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> str:
        return await self.gateway.sign_in(email, password)

    async def sign_out(self) -> None:
        await self.gateway.sign_out()

    async def current_user(self) -> str | None:
        return await self.gateway.current_user()
