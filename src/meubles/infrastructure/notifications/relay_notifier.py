"""HTTP client for the order notification relay."""

from __future__ import annotations

import httpx

from meubles.domain.exceptions import NotificationError
from meubles.domain.repository.notifier import OrderNotifier
from meubles.infrastructure.notifications.responses import message_id

RELAY_TIMEOUT = 10.0


class RelayNotifier(OrderNotifier):

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    async def notify(self, name: str, email: str, order_details_html: str) -> str:
        payload = {"name": name, "email": email, "orderDetails": order_details_html}
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=RELAY_TIMEOUT, transport=self._transport
        ) as client:
            try:
                response = await client.post("/send-order", json=payload)
            except httpx.HTTPError as exc:
                raise NotificationError(f"Relay unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise NotificationError(
                f"Relay rejected notification ({response.status_code}): {response.text}"
            )
        return message_id(response, "Relay")
