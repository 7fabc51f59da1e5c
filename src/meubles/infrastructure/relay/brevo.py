"""Brevo transactional email client used by the relay server."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from meubles.domain.exceptions import NotificationError
from meubles.infrastructure.notifications.responses import message_id

BREVO_BASE_URL = "https://api.brevo.com/v3"
SHOP_NAME = "Meubles D'Or"

_TAG = re.compile(r"<[^>]*>?")


@dataclass(frozen=True)
class OrderEmail:
    name: str
    email: str | None
    order_details: str


class BrevoMailer:

    def __init__(
        self,
        api_key: str,
        sender_email: str,
        admin_email: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._sender_email = sender_email
        self._admin_email = admin_email
        self._transport = transport

    async def send_order(self, order: OrderEmail) -> str:
        """Send the new-order email to the admin and return Brevo's message id."""
        async with httpx.AsyncClient(
            base_url=BREVO_BASE_URL,
            headers={"api-key": self._api_key, "Accept": "application/json"},
            timeout=15.0,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post("/smtp/email", json=self.build_payload(order))
            except httpx.HTTPError as exc:
                raise NotificationError(f"Brevo unreachable: {exc}") from exc

        if response.status_code == 401:
            raise NotificationError("Brevo API key authentication failed")
        if response.status_code == 403:
            raise NotificationError("Brevo API key lacks email sending permission")
        if response.status_code >= 400:
            raise NotificationError(f"Brevo error ({response.status_code}): {response.text}")
        return message_id(response, "Brevo")

    def build_payload(self, order: OrderEmail) -> dict:
        now = datetime.now(timezone.utc)
        email = order.email or "Non fourni"
        return {
            "sender": {"name": SHOP_NAME, "email": self._sender_email},
            "to": [{"email": self._admin_email, "name": "Admin"}],
            "replyTo": {"email": self._sender_email, "name": SHOP_NAME},
            "subject": f"NOUVELLE COMMANDE - {SHOP_NAME} #{int(now.timestamp() * 1000)}",
            "htmlContent": (
                "<h2>Nouvelle Commande Reçue</h2>"
                f"<p><strong>Nom:</strong> {html.escape(order.name)}</p>"
                f"<p><strong>Email:</strong> {html.escape(email)}</p>"
                "<p><strong>Détails:</strong></p>"
                f"<div>{order.order_details}</div>"
                f"<p>Timestamp: {now.isoformat()}</p>"
            ),
            "textContent": (
                "Nouvelle Commande\n\n"
                f"Nom: {order.name}\n"
                f"Email: {email}\n\n"
                "Détails de la commande:\n"
                f"{_TAG.sub('', order.order_details)}\n\n"
                f"Timestamp: {now.isoformat()}"
            ),
        }
