"""Composition root: wires concrete implementations to the ports.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from fastapi import FastAPI

from meubles.application.data_access import DataAccess
from meubles.application.gateway import Gateway
from meubles.application.place_order import PlaceOrderHandler
from meubles.infrastructure.config import Settings
from meubles.infrastructure.notifications.relay_notifier import RelayNotifier
from meubles.infrastructure.persistence.json_session_storage import JsonSessionStorage
from meubles.infrastructure.relay.brevo import BrevoMailer
from meubles.infrastructure.relay.server import create_app
from meubles.infrastructure.supabase.backend import SupabaseBackend


async def data_access(settings: Settings) -> DataAccess:
    backend = await SupabaseBackend.connect(
        settings.supabase_url,
        settings.supabase_anon_key,
        JsonSessionStorage(settings.session_file),
    )
    return DataAccess(Gateway(backend))


def place_order_handler(settings: Settings, data: DataAccess) -> PlaceOrderHandler:
    return PlaceOrderHandler(data, RelayNotifier(settings.relay_url))


def relay_app(settings: Settings) -> FastAPI:
    mailer = BrevoMailer(
        api_key=settings.brevo_api_key,
        sender_email=settings.brevo_sender_email,
        admin_email=settings.brevo_admin_email,
    )
    return create_app(mailer)
