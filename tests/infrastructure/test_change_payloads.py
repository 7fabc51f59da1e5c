"""Tests for realtime payload decoding."""

from meubles.domain.model.change_event import ChangeKind, EntityType
from meubles.infrastructure.supabase.payloads import change_event_from_payload


def test_wire_shape():
    event = change_event_from_payload(
        EntityType.PRODUCTS,
        {
            "data": {
                "type": "INSERT",
                "record": {"id": 4, "name": "Buffet"},
                "old_record": None,
                "commit_timestamp": "2025-05-02T08:30:00Z",
            },
            "ids": [1],
        },
    )

    assert event.kind == ChangeKind.INSERT
    assert event.row_id == "4"
    assert event.old_record == {}
    assert event.committed_at == "2025-05-02T08:30:00Z"


def test_flattened_shape_delete():
    event = change_event_from_payload(
        EntityType.ORDERS, {"eventType": "delete", "new": {}, "old": {"id": "9"}}
    )

    assert event.kind == ChangeKind.DELETE
    assert event.entity == EntityType.ORDERS
    assert event.old_record == {"id": "9"}


def test_unknown_kind_is_treated_as_update():
    event = change_event_from_payload(EntityType.CATEGORIES, {"data": {"type": "TRUNCATE"}})
    assert event.kind == ChangeKind.UPDATE
