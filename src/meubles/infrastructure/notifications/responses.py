"""Reading the JSON answer of a mail-sending service."""

from __future__ import annotations

import httpx

from meubles.domain.exceptions import NotificationError


def message_id(response: httpx.Response, service: str) -> str:
    """Return the ``messageId`` of a successful answer, or "" when it has none.

    A body that is not a JSON object raises NotificationError.
    """
    try:
        body = response.json()
    except ValueError as exc:
        raise NotificationError(f"{service} sent an unreadable answer: {response.text[:200]!r}") from exc
    if not isinstance(body, dict):
        raise NotificationError(f"{service} sent an unexpected answer: {body!r}")
    return str(body.get("messageId") or "")
