"""Group Capabilities - which controls the presentation layer may enable.

Invariants:
    - Pure: derived from store state only, never mutates
    - can_delete implies can_rename (both require an editable group)
    - capacity_notice is set exactly when at_capacity is True
    - URL controls are disabled while the active pointer is dangling

Design Decisions:
    - Flags mirror the store's own checks so a disabled control and a rejected
      command always agree
"""

from knowledge_base.core.domain_types import ActivePointer, GroupId
from knowledge_base.core.group_store import GroupStore
from knowledge_base.core.url_group import URLGroup


def group_capabilities(store: GroupStore, group_id: GroupId) -> dict | None:
    """Capability flags for one group, or None if the group does not exist."""
    group = store.get_group(group_id)
    if group is None:
        return None
    count = len(store.get_membership(group_id))
    at_capacity = count >= store.max_urls
    return {
        "can_rename": group.is_editable,
        "can_delete": group.is_editable and len(store.list_groups()) > 1,
        "can_add_url": not at_capacity and store.active_pointer == ActivePointer.VALID,
        "can_remove_url": store.active_pointer == ActivePointer.VALID,
        "at_capacity": at_capacity,
        "remaining_slots": max(store.max_urls - count, 0),
        "capacity_notice": (
            f"Maximum {store.max_urls} URLs reached for this group."
            if at_capacity else None
        ),
    }


def delete_prompt(group: URLGroup) -> str:
    """Confirmation text the host shows before calling delete_group."""
    return (
        f"Are you sure you want to delete the group \"{group.name}\"? "
        "This action cannot be undone."
    )
