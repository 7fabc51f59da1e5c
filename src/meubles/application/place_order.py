"""Application service: Place Order use case (storefront checkout).

The order is durably created first; the admin notification is sent
afterwards and its failure never undoes or fails the checkout.
"""

from __future__ import annotations

import html
import logging
import time
from typing import Callable

from meubles.application.data_access import DataAccess
from meubles.application.dto import CheckoutForm, PlacedOrderDTO
from meubles.domain.exceptions import DomainException, ValidationError
from meubles.domain.model.order import CustomerDetails, Order
from meubles.domain.repository.notifier import OrderNotifier

logger = logging.getLogger(__name__)

RESUBMIT_INTERVAL = 1.0
FALLBACK_EMAIL = "non-fourni@example.com"


class PlaceOrderHandler:

    def __init__(
        self,
        data: DataAccess,
        notifier: OrderNotifier,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._data = data
        self._notifier = notifier
        self._clock = clock
        self._last_submission: float | None = None

    async def handle(self, form: CheckoutForm) -> PlacedOrderDTO:
        """Place an order for one product.

        Steps:
        1. Reject a resubmission within one second of the last one.
        2. Validate the customer details, load the product and check
           that enough of it is in stock.
        3. Snapshot the product into a new order and create it.
        4. Notify the relay; log and carry on if that fails.
        """
        now = self._clock()
        if self._last_submission is not None and now - self._last_submission < RESUBMIT_INTERVAL:
            raise ValidationError("Please wait before submitting another order")

        customer = CustomerDetails.create(
            full_name=form.full_name,
            phone_number=form.phone_number,
            address=form.address,
            email=form.email,
        )
        product = await self._data.get_product(form.product_id)
        if not product.in_stock:
            raise ValidationError(f"{product.name} is out of stock")
        if form.quantity > product.stock:
            raise ValidationError(f"Only {product.stock} of {product.name} left in stock")
        order = Order.create(customer=customer, product=product, quantity=form.quantity)

        created = await self._data.create_order(order)
        self._last_submission = now
        logger.info("Order %s created for %s", created.id, customer.full_name)

        message_id: str | None = None
        try:
            message_id = await self._notifier.notify(
                name=customer.full_name,
                email=customer.email or FALLBACK_EMAIL,
                order_details_html=order_details_html(created),
            )
        except DomainException as exc:
            logger.error("Error sending order notification: %s", exc)

        return PlacedOrderDTO(
            order_id=created.id,
            total=str(created.total_amount),
            notified=message_id is not None,
            message_id=message_id,
        )


def order_details_html(order: Order) -> str:
    """HTML fragment embedded in the admin notification email."""
    line = order.line
    customer = order.customer
    esc = html.escape
    return (
        "<h3>Détails du Produit:</h3>"
        f"<p>Produit: {esc(line.product_name)}</p>"
        f"<p>Quantité: {line.quantity}</p>"
        f"<p>Prix unitaire: {line.unit_price}</p>"
        f"<p>Sous-total: {line.subtotal}</p>"
        f"<p>Frais de livraison: {line.delivery_price}</p>"
        f"<p>Total: {order.total_amount}</p>"
        "<h3>Détails du Client:</h3>"
        f"<p>Nom: {esc(customer.full_name)}</p>"
        f"<p>Téléphone: {esc(customer.phone_number)}</p>"
        f"<p>Adresse: {esc(customer.address)}</p>"
    )
