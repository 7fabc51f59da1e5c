"""CLI commands for the admin session and the live dashboard."""

from __future__ import annotations

import asyncio

import click

from meubles.application.debounce import Debouncer
from meubles.domain.model.change_event import ChangeEvent
from meubles.domain.service.dashboard_stats import DashboardStats
from meubles.infrastructure.cli.runtime import run


def _format_stats(stats: DashboardStats) -> str:
    return (
        f"sales={stats.total_sales:.2f} TND  orders={stats.total_orders}  "
        f"last 30 days={stats.recent_orders_count}  products={stats.total_products}"
    )


@click.command("login")
@click.option("--email", required=True, help="Admin email.")
@click.password_option(confirmation_prompt=False)
def login(email: str, password: str) -> None:
    """Sign in; the session is kept for 30 days."""
    user = run("Signing in", lambda data: data.sign_in(email, password))
    click.echo(f"Signed in as {user}")


@click.command("logout")
def logout() -> None:
    """End the admin session."""
    run("Signing out", lambda data: data.sign_out())
    click.echo("Signed out.")


@click.command("whoami")
def whoami() -> None:
    """Show the signed-in admin."""
    user = run("Checking session", lambda data: data.current_user())
    click.echo(user or "Not signed in.")


@click.command("stats")
def stats() -> None:
    """Show dashboard figures."""
    click.echo(_format_stats(run("Loading stats", lambda data: data.compute_dashboard_stats())))


@click.command("watch")
@click.option("--seconds", type=float, default=None, help="Stop after this many seconds.")
def watch(seconds: float | None) -> None:
    """Print refreshed dashboard figures whenever the catalog or orders change."""

    async def work(data) -> None:
        async def refresh(event: ChangeEvent) -> None:
            figures = await data.compute_dashboard_stats()
            click.echo(f"[{event.entity.value} {event.kind.value}] {_format_stats(figures)}")

        debouncer: Debouncer[ChangeEvent] = Debouncer(refresh)
        await data.subscribe_to_products(debouncer.trigger)
        await data.subscribe_to_categories(debouncer.trigger)
        await data.subscribe_to_orders(debouncer.trigger)
        click.echo(_format_stats(await data.compute_dashboard_stats()))
        click.echo("Watching for changes (Ctrl-C to stop)...")
        try:
            if seconds is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(seconds)
        finally:
            debouncer.cancel()

    try:
        run("Watching changes", work)
    except KeyboardInterrupt:
        click.echo("Stopped.")
