"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from meubles.application.dto import CheckoutForm
from meubles.domain.model.order import Order, OrderStatus
from meubles.infrastructure import bootstrap
from meubles.infrastructure.cli.runtime import run, settings

STATUS_CHOICES = [s.value for s in OrderStatus]


def _display_order(order: Order) -> None:
    """Shared formatting for displaying an order."""
    created = order.created_at.strftime("%Y-%m-%d %H:%M UTC") if order.created_at else "-"
    click.echo(f"Order #{order.id}  (status={order.status.value})")
    click.echo(f"Customer: {order.customer.full_name}")
    click.echo(f"Phone:    {order.customer.phone_number}")
    click.echo(f"Address:  {order.customer.address}")
    click.echo(f"Created:  {created}")
    click.echo()

    line = order.line
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>14} {'Subtotal':>14}")
    click.echo(f"  {'-'*60}")
    click.echo(
        f"  {line.product_name[:24]:<24} {line.quantity.value:>5} "
        f"{str(line.unit_price):>14} {str(line.subtotal):>14}"
    )
    click.echo(f"  {'Delivery':<45} {str(line.delivery_price):>14}")
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Order Total':<45} {str(order.total_amount):>14}")


@click.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES), default=None, help="Only this status.")
def order_list(status: str | None) -> None:
    """List orders, newest first."""
    orders = run("Loading orders", lambda data: data.list_orders())
    if status is not None:
        orders = [o for o in orders if o.status.value == status]

    if not orders:
        click.echo("No orders found.")
        return

    for o in orders:
        created = o.created_at.strftime("%Y-%m-%d") if o.created_at else "-"
        click.echo(
            f"#{o.id:<6} {created:<10} {o.customer.full_name[:24]:<24} "
            f"{o.status.value:<14} {str(o.total_amount):>14}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    _display_order(run("Loading order", lambda data: data.get_order(order_id)))


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.argument("status", type=click.Choice(STATUS_CHOICES))
def order_status(order_id: str, status: str) -> None:
    """Move an order to a new status."""
    order = run("Updating order status", lambda data: data.update_order_status(order_id, status))
    click.echo(f"Order #{order.id} is now '{order.status.value}'.")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.confirmation_option(prompt="Delete this order?")
def order_delete(order_id: str) -> None:
    """Delete an order."""
    run("Deleting order", lambda data: data.delete_order(order_id))
    click.echo(f"Order #{order_id} deleted.")


@click.command("checkout")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, type=int, help="Units ordered.")
@click.option("--name", "full_name", required=True, help="Customer full name.")
@click.option("--phone", "phone_number", required=True, help="Customer phone number.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--email", default=None, help="Customer email (optional).")
def order_checkout(
    product_id: str,
    quantity: int,
    full_name: str,
    phone_number: str,
    address: str,
    email: str | None,
) -> None:
    """Place a storefront order for one product."""
    form = CheckoutForm(
        product_id=product_id,
        quantity=quantity,
        full_name=full_name,
        phone_number=phone_number,
        address=address,
        email=email,
    )
    config = settings()
    placed = run(
        "Placing order",
        lambda data: bootstrap.place_order_handler(config, data).handle(form),
    )

    click.echo(f"Order #{placed.order_id} placed  (total={placed.total})")
    if not placed.notified:
        click.echo("Warning: the shop could not be notified by email.", err=True)
