"""Notification relay: forwards storefront order notifications to Brevo.

Kept separate from the storefront so the Brevo API key never leaves the
server side.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from meubles.domain.exceptions import NotificationError
from meubles.infrastructure.relay.brevo import BrevoMailer, OrderEmail

logger = logging.getLogger(__name__)


class OrderNotification(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    orderDetails: Optional[str] = None


def create_app(mailer: BrevoMailer) -> FastAPI:
    app = FastAPI(title="Meubles D'Or notification relay")

    @app.get("/")
    def root():
        return {"message": "Notification relay is running. POST /send-order to notify."}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/ping")
    def ping():
        return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}

    @app.post("/send-order")
    async def send_order(notification: OrderNotification):
        if not notification.name or not notification.orderDetails:
            return JSONResponse(
                status_code=400,
                content={"success": False, "error": "Name and order details are required"},
            )

        try:
            message_id = await mailer.send_order(
                OrderEmail(
                    name=notification.name,
                    email=notification.email,
                    order_details=notification.orderDetails,
                )
            )
        except NotificationError as exc:
            logger.error("Error sending order notification: %s", exc)
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "error": "Failed to send email notification",
                    "details": str(exc),
                },
            )

        return {
            "success": True,
            "message": "Order notification email sent successfully",
            "messageId": message_id,
        }

    return app
