"""Tests for the relay client and the Brevo mailer, over mocked HTTP."""

import asyncio
import json

import httpx
import pytest

from meubles.domain.exceptions import NotificationError
from meubles.infrastructure.notifications.relay_notifier import RelayNotifier
from meubles.infrastructure.relay.brevo import BrevoMailer, OrderEmail


def _transport(status: int, body: dict, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


class TestRelayNotifier:

    def test_posts_order_and_returns_message_id(self):
        seen = []
        notifier = RelayNotifier(
            "http://relay.test/", transport=_transport(200, {"success": True, "messageId": "m-1"}, seen)
        )

        message_id = asyncio.run(notifier.notify("Amira", "a@example.com", "<p>x</p>"))

        assert message_id == "m-1"
        assert seen[0].url == "http://relay.test/send-order"
        assert json.loads(seen[0].content) == {
            "name": "Amira",
            "email": "a@example.com",
            "orderDetails": "<p>x</p>",
        }

    def test_error_status_raises(self):
        notifier = RelayNotifier("http://relay.test", transport=_transport(500, {"success": False}))
        with pytest.raises(NotificationError, match="500"):
            asyncio.run(notifier.notify("Amira", "a@example.com", "<p>x</p>"))

    @pytest.mark.parametrize("answer", [{"text": "OK"}, {"json": ["queued"]}, {"json": "ok"}])
    def test_unreadable_answer_raises(self, answer):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, **answer))
        notifier = RelayNotifier("http://relay.test", transport=transport)
        with pytest.raises(NotificationError, match="Relay sent an"):
            asyncio.run(notifier.notify("Amira", "a@example.com", "<p>x</p>"))

    def test_unreachable_relay_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        notifier = RelayNotifier("http://relay.test", transport=httpx.MockTransport(handler))
        with pytest.raises(NotificationError, match="unreachable"):
            asyncio.run(notifier.notify("Amira", "a@example.com", "<p>x</p>"))


class TestBrevoMailer:

    ORDER = OrderEmail(name="Amira", email=None, order_details="<p>Buffet</p><p>Total: 807.00 TND</p>")

    def test_sends_with_api_key(self):
        seen = []
        mailer = BrevoMailer(
            "key-1", "shop@example.com", "admin@example.com",
            transport=_transport(201, {"messageId": "<abc@brevo>"}, seen),
        )

        assert asyncio.run(mailer.send_order(self.ORDER)) == "<abc@brevo>"
        assert seen[0].headers["api-key"] == "key-1"
        assert seen[0].url.path == "/v3/smtp/email"

    def test_payload(self):
        mailer = BrevoMailer("key-1", "shop@example.com", "admin@example.com")

        payload = mailer.build_payload(self.ORDER)

        assert payload["to"] == [{"email": "admin@example.com", "name": "Admin"}]
        assert payload["subject"].startswith("NOUVELLE COMMANDE - Meubles D'Or #")
        assert "Email: Non fourni" in payload["textContent"]
        assert "BuffetTotal: 807.00 TND" in payload["textContent"]
        assert "<div><p>Buffet</p>" in payload["htmlContent"]

    def test_customer_fields_are_escaped_in_html(self):
        mailer = BrevoMailer("key-1", "shop@example.com", "admin@example.com")

        payload = mailer.build_payload(
            OrderEmail(name="<b>Amira</b>", email="a&b@example.com", order_details="<p>x</p>")
        )

        assert "&lt;b&gt;Amira&lt;/b&gt;" in payload["htmlContent"]
        assert "a&amp;b@example.com" in payload["htmlContent"]
        assert "<div><p>x</p></div>" in payload["htmlContent"]

    def test_non_json_answer_raises(self):
        mailer = BrevoMailer(
            "key-1", "shop@example.com", "admin@example.com",
            transport=httpx.MockTransport(lambda request: httpx.Response(201, text="Created")),
        )
        with pytest.raises(NotificationError, match="Brevo sent an unreadable answer"):
            asyncio.run(mailer.send_order(self.ORDER))

    @pytest.mark.parametrize(
        "status, message", [(401, "authentication failed"), (403, "permission"), (400, "400")]
    )
    def test_rejections(self, status, message):
        mailer = BrevoMailer(
            "key-1", "shop@example.com", "admin@example.com",
            transport=_transport(status, {"message": "nope"}),
        )
        with pytest.raises(NotificationError, match=message):
            asyncio.run(mailer.send_order(self.ORDER))
