"""Decoding of realtime ``postgres_changes`` payloads."""

from __future__ import annotations

import logging
from typing import Any

from meubles.domain.model.change_event import ChangeEvent, ChangeKind, EntityType

logger = logging.getLogger(__name__)


def change_event_from_payload(entity: EntityType, payload: dict[str, Any]) -> ChangeEvent:
    """Build a ChangeEvent from a realtime payload.

    Accepts both the wire shape (``data.type``/``record``/``old_record``)
    and the flattened shape (``eventType``/``new``/``old``).
    """
    data = payload.get("data", payload)
    raw_kind = data.get("type") or data.get("eventType") or ""
    try:
        kind = ChangeKind(str(raw_kind).upper())
    except ValueError:
        logger.warning("Unknown %s change type %r, treating as UPDATE", entity.value, raw_kind)
        kind = ChangeKind.UPDATE

    return ChangeEvent(
        entity=entity,
        kind=kind,
        record=dict(data.get("record") or data.get("new") or {}),
        old_record=dict(data.get("old_record") or data.get("old") or {}),
        committed_at=data.get("commit_timestamp"),
    )
