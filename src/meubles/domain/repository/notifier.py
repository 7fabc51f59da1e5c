"""Abstract port for new-order notifications."""

from __future__ import annotations

from abc import ABC, abstractmethod


class OrderNotifier(ABC):

    @abstractmethod
    async def notify(self, name: str, email: str, order_details_html: str) -> str:
        """Send a new-order notification and return the provider's message id.

        Raises NotificationError when the notification was not accepted.
        """
