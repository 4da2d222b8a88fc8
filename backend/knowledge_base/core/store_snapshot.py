"""Store Snapshot - JSON-safe views of groups and the whole store.

Invariants:
    - Snapshots are copies: mutating a snapshot never touches the store
    - No Enums or dataclasses in output (JSON-safe for API envelopes)
    - Group order and URL order match the store

Design Decisions:
    - Extracted from group_store.py so the API layer and the store share one
      shape for "updated snapshot of the affected entity"
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from knowledge_base.core.url_group import URLGroup

if TYPE_CHECKING:
    from knowledge_base.core.group_store import GroupStore


def group_to_snapshot(group: URLGroup, urls: Sequence[str]) -> dict:
    return {
        "id": group.id,
        "name": group.name,
        "is_editable": group.is_editable,
        "urls": list(urls),
    }


def store_to_snapshot(store: "GroupStore") -> dict:
    """Serialize every group with its membership plus the active pointer."""
    return {
        "groups": [
            group_to_snapshot(g, store.get_membership(g.id))
            for g in store.list_groups()
        ],
        "active_group_id": store.get_active_group_id(),
        "active_pointer": store.active_pointer.value,
        "max_urls": store.max_urls,
    }
