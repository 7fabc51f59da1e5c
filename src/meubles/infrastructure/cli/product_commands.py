"""CLI commands for the Product aggregate."""

from __future__ import annotations

from pathlib import Path

import click

from meubles.application.dto import ProductDraft
from meubles.infrastructure.cli.runtime import run


def _draft_options(command):
    for option in reversed(
        [
            click.option("--name", required=True, help="Product name."),
            click.option("--price", required=True, help="Price (e.g. 450.00)."),
            click.option("--old-price", default=None, help="Previous price, shown crossed out."),
            click.option("--stock", default=0, type=click.IntRange(min=0), help="Units in stock."),
            click.option("--description", default=None, help="Long description."),
            click.option("--category", "category_id", default=None, help="Category ID."),
            click.option("--image", "image_urls", multiple=True, help="Image URL (repeatable, in display order)."),
        ]
    ):
        command = option(command)
    return command


def _draft(name, price, old_price, stock, description, category_id, image_urls) -> ProductDraft:
    return ProductDraft(
        name=name,
        price=price,
        old_price=old_price,
        stock=stock,
        description=description,
        category_id=category_id,
        image_urls=tuple(image_urls),
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = run("Loading products", lambda data: data.list_products())

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<8} {'Name':<30} {'Price':>14} {'Stock':>6}")
    click.echo("-" * 61)
    for p in products:
        click.echo(f"{p.id:<8} {p.name[:30]:<30} {str(p.price):>14} {p.stock:>6}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show one product with its category."""
    p = run("Loading product", lambda data: data.get_product(product_id))

    click.echo(f"Product #{p.id}  {p.name}")
    if p.old_price is not None:
        click.echo(f"Price:    {p.price}  (was {p.old_price}, -{p.discount_percent}%)")
    else:
        click.echo(f"Price:    {p.price}")
    click.echo(f"Stock:    {p.stock}")
    click.echo(f"Category: {p.category.name if p.category else '-'}")
    if p.description:
        click.echo(f"\n{p.description}\n")
    for url in p.image_urls:
        click.echo(f"  image: {url}")


@click.command("add")
@_draft_options
def product_add(**fields) -> None:
    """Add a new product to the catalog."""
    draft = _draft(**fields)
    product = run("Creating product", lambda data: data.create_product(draft))
    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@_draft_options
def product_update(product_id: str, **fields) -> None:
    """Replace a product's details."""
    draft = _draft(**fields)
    product = run("Updating product", lambda data: data.update_product(product_id, draft))
    click.echo(f"Product #{product.id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Delete this product?")
def product_delete(product_id: str) -> None:
    """Delete a product."""
    run("Deleting product", lambda data: data.delete_product(product_id))
    click.echo(f"Product #{product_id} deleted.")


@click.command("upload-image")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def product_upload_image(product_id: str, image: Path) -> None:
    """Upload an image file and print its public URL."""
    content = image.read_bytes()
    url = run(
        "Uploading image",
        lambda data: data.upload_product_image(content, image.name, product_id),
    )
    click.echo(url)
