import logging

import click

from meubles.infrastructure.cli.admin_commands import login, logout, stats, watch, whoami
from meubles.infrastructure.cli.category_commands import (
    category_add,
    category_delete,
    category_list,
    category_rename,
    category_tree,
)
from meubles.infrastructure.cli.order_commands import (
    order_checkout,
    order_delete,
    order_list,
    order_show,
    order_status,
)
from meubles.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
    product_upload_image,
)
from meubles.infrastructure.cli.relay_commands import relay_serve
from meubles.infrastructure.config import load_settings


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log data-layer activity.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Meubles D'Or — storefront and admin tools"""
    ctx.obj = load_settings()
    level = logging.INFO if verbose else ctx.obj.log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def category() -> None:
    """Manage categories."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def relay() -> None:
    """Run the order notification relay."""


# Register subcommands
cli.add_command(login)
cli.add_command(logout)
cli.add_command(whoami)
cli.add_command(stats)
cli.add_command(watch)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
product.add_command(product_upload_image)
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_rename)
category.add_command(category_tree)
order.add_command(order_checkout)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
relay.add_command(relay_serve)
