"""Glue between synchronous click commands and the async data layer."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

import click

from meubles.application.data_access import DataAccess
from meubles.domain.exceptions import DomainException
from meubles.infrastructure import bootstrap
from meubles.infrastructure.config import Settings

T = TypeVar("T")


def settings() -> Settings:
    return click.get_current_context().find_root().obj


def run(operation: str, work: Callable[[DataAccess], Awaitable[T]]) -> T:
    """Run *work* against a fresh data layer, reporting failures by operation."""
    config = settings()

    async def main() -> T:
        data = await bootstrap.data_access(config)
        try:
            return await work(data)
        finally:
            await data.unsubscribe_all()

    try:
        return asyncio.run(main())
    except DomainException as exc:
        raise click.ClickException(f"{operation} failed: {exc}")
