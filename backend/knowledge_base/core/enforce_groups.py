"""Group Enforcement - structural rules guarding group lifecycle commands.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Return error dict on violation, None on success
    - Rename checks run NOT_FOUND -> NOT_EDITABLE -> INVALID_NAME
    - Delete checks run NOT_FOUND -> NOT_EDITABLE -> LAST_GROUP

Design Decisions:
    - Separated from enforce_membership: group rules guard the group list,
      membership rules guard a single URL list (ADR: responsibility separation)
"""

from collections.abc import Sequence

from knowledge_base.core.domain_types import ErrorKind, GroupId
from knowledge_base.core.url_group import URLGroup


def check_name(name: str) -> dict | None:
    if not name.strip():
        return _error(ErrorKind.INVALID_NAME, "Group name cannot be empty.")
    return None


def check_group_exists(
    groups: Sequence[URLGroup], group_id: GroupId | None,
) -> dict | None:
    if group_id is None:
        return _error(
            ErrorKind.NOT_FOUND,
            "No active group selected. Choose a group first.",
        )
    if not any(g.id == group_id for g in groups):
        return _error(ErrorKind.NOT_FOUND, f"Group '{group_id}' not found.")
    return None


def check_editable(group: URLGroup) -> dict | None:
    if not group.is_editable:
        return _error(
            ErrorKind.NOT_EDITABLE,
            f"Group \"{group.name}\" is built-in and cannot be changed.",
        )
    return None


def check_not_last(groups: Sequence[URLGroup]) -> dict | None:
    if len(groups) <= 1:
        return _error(ErrorKind.LAST_GROUP, "The last remaining group cannot be deleted.")
    return None


def _error(kind: ErrorKind, message: str) -> dict:
    return {"status": "error", "error_code": kind.value, "message": message}
