"""Category management commands."""

import click
from ledgerkeep.cli.error_handling import handle_domain_error
from ledgerkeep.cli.resolution import resolve_category_or_exit
from ledgerkeep.domain.category import CategoryService


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(ctx.obj["owner_id"])
    if not categories:
        click.echo("No categories found. Run 'category init' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        marker = " (default)" if cat.is_default else ""
        icon = f" [{cat.icon}]" if cat.icon else ""
        click.echo(f"{cat.id:3d} | {cat.name}{marker} {cat.color}{icon}")


@category_group.command("init")
@click.pass_context
def init_categories(ctx):
    """Create the default categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.create_default_categories(ctx.obj["owner_id"])
    if not created:
        click.echo("Default categories already exist.")
        return
    click.echo(f"Created {len(created)} default categor{'y' if len(created) == 1 else 'ies'}.")


@category_group.command("create")
@click.argument("name")
@click.option("--color", default="#64748B", show_default=True, help="Display color (#RRGGBB)")
@click.option("--icon", help="Icon name")
@click.pass_context
def create_category(ctx, name: str, color: str, icon: str | None):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(
            owner_id=ctx.obj["owner_id"], name=name, color=color, icon=icon
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created category '{name}' (ID: {category_id})")


@category_group.command("update")
@click.argument("category", metavar="CATEGORY")
@click.option("--name", help="New name")
@click.option("--color", help="New display color (#RRGGBB)")
@click.option("--icon", help="New icon name")
@click.pass_context
def update_category(ctx, category: str, name: str | None, color: str | None, icon: str | None):
    """Update a category.

    CATEGORY can be a category name or ID.
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = CategoryService(db)

    category_id = resolve_category_or_exit(ctx, service, owner_id, category)
    try:
        service.update_category(owner_id, category_id, name=name, color=color, icon=icon)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated category {category_id}")


@category_group.command("delete")
@click.argument("category", metavar="CATEGORY")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category that has no transactions.

    CATEGORY can be a category name or ID.
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = CategoryService(db)

    category_id = resolve_category_or_exit(ctx, service, owner_id, category)
    try:
        service.delete_category(owner_id, category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
