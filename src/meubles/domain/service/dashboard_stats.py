"""Domain service: admin dashboard statistics.

Aggregation happens client-side over a light projection of every order
(amount, creation time, status) plus the product count.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

RECENT_WINDOW = timedelta(days=30)


@dataclass(frozen=True)
class OrderSummary:
    """The three order columns the dashboard needs."""

    total_amount: Decimal | None
    created_at: datetime | None
    status: str | None = None


@dataclass(frozen=True)
class DashboardStats:
    total_sales: Decimal
    total_orders: int
    recent_orders_count: int
    total_products: int


def compute_dashboard_stats(
    orders: list[OrderSummary],
    total_products: int,
    now: datetime | None = None,
) -> DashboardStats:
    """Aggregate order summaries into dashboard figures.

    A missing amount counts as zero. An order is recent when it was
    created at or after ``now - 30 days``; orders without a creation
    time are never recent.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - RECENT_WINDOW

    total_sales = sum(
        (o.total_amount for o in orders if o.total_amount is not None),
        Decimal("0"),
    )
    recent = [o for o in orders if o.created_at is not None and o.created_at >= cutoff]

    return DashboardStats(
        total_sales=total_sales,
        total_orders=len(orders),
        recent_orders_count=len(recent),
        total_products=total_products,
    )
