"""CLI commands for categories."""

from __future__ import annotations

import click

from meubles.application.dto import CategoryDraft
from meubles.infrastructure.cli.runtime import run


@click.command("list")
def category_list() -> None:
    """List every category by name."""
    categories = run("Loading categories", lambda data: data.list_categories())

    if not categories:
        click.echo("No categories found.")
        return

    for c in categories:
        parent = f"  (in #{c.parent_id})" if c.parent_id else ""
        click.echo(f"{c.id:<8} {c.name}{parent}")


@click.command("tree")
def category_tree() -> None:
    """Show root categories with their subcategories."""
    nodes = run("Loading category tree", lambda data: data.list_root_categories_with_children())

    if not nodes:
        click.echo("No categories found.")
        return

    for node in nodes:
        click.echo(f"{node.name}  (#{node.id})")
        for sub in node.subcategories:
            click.echo(f"  └─ {sub.name}  (#{sub.id})")


@click.command("add")
@click.option("--name", required=True, help="Category name.")
@click.option("--parent", "parent_id", default=None, help="Parent category ID for a subcategory.")
def category_add(name: str, parent_id: str | None) -> None:
    """Create a category or subcategory."""
    draft = CategoryDraft(name=name, parent_id=parent_id)
    created = run("Creating category", lambda data: data.create_category(draft))
    click.echo(f"Category #{created.id} '{created.name}' created")


@click.command("rename")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--parent", "parent_id", default=None, help="Move under this parent category.")
@click.option("--root", "to_root", is_flag=True, default=False, help="Make it a root category.")
def category_rename(category_id: str, name: str, parent_id: str | None, to_root: bool) -> None:
    """Rename a category; --parent or --root also moves it."""
    if parent_id is not None and to_root:
        raise click.UsageError("--parent and --root are mutually exclusive")
    if parent_id is None and not to_root:
        run("Renaming category", lambda data: data.rename_category(category_id, name))
    else:
        draft = CategoryDraft(name=name, parent_id=parent_id)
        run("Updating category", lambda data: data.update_category(category_id, draft))
    click.echo(f"Category #{category_id} updated")


@click.command("delete")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.confirmation_option(prompt="Delete this category?")
def category_delete(category_id: str) -> None:
    """Delete a category."""
    run("Deleting category", lambda data: data.delete_category(category_id))
    click.echo(f"Category #{category_id} deleted.")
