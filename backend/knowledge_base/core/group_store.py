"""Group Store - in-memory owner of URL groups, memberships and the active pointer.

Invariants:
    - groups is never empty; the last group cannot be deleted
    - active_group_id references an existing group, or is None right after the
      active group was deleted (dangling) until set_active_group resolves it
    - URL commands are refused while the active pointer is dangling
    - Every membership list is duplicate-free and holds at most max_urls entries
    - Commands are all-or-nothing: checks run first, mutation only on success

Design Decisions:
    - Dataclass with plain lists/dicts: pure, deterministic, testable without mocks
    - Commands return dicts ({"status": "ok", ...} or rejection): the shell decides
      whether a rejection becomes an exception (ADR: impureim sandwich)
    - No default active group after deletion: the caller must choose one
    - id_factory injectable so tests get deterministic ids
"""

import uuid
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace

from knowledge_base.core.domain_types import (
    ActivePointer, GroupId, DEFAULT_MAX_URLS, DEFAULT_URL_SCHEMES,
)
from knowledge_base.core.url_group import URLGroup
from knowledge_base.core import enforce_groups as _groups
from knowledge_base.core import enforce_membership as _membership
from knowledge_base.core.store_snapshot import group_to_snapshot

DEFAULT_GROUP_NAME = "Default"


def _new_group_id() -> GroupId:
    return GroupId(uuid.uuid4().hex)


@dataclass
class GroupSeed:
    """Initial group definition, usually built from settings."""
    name: str
    urls: list[str] = field(default_factory=list)
    is_editable: bool = False


@dataclass
class GroupStore:
    """Authoritative group list plus memberships keyed by group id."""

    groups: list[URLGroup]
    active_group_id: GroupId | None
    memberships: dict[GroupId, list[str]] = field(default_factory=dict)
    max_urls: int = DEFAULT_MAX_URLS
    url_schemes: tuple[str, ...] = DEFAULT_URL_SCHEMES
    id_factory: Callable[[], GroupId] = _new_group_id

    def __post_init__(self) -> None:
        if not self.groups:
            raise ValueError("GroupStore requires at least one group")
        if self.max_urls < 1:
            raise ValueError("max_urls must be >= 1")
        for group in self.groups:
            self.memberships.setdefault(group.id, [])
        if _groups.check_group_exists(self.groups, self.active_group_id):
            raise ValueError(f"Active group '{self.active_group_id}' is not in the store")

    # --- Queries ---------------------------------------------------------------

    def list_groups(self) -> list[URLGroup]:
        """Detached copies in store order; editing them never touches the store."""
        return [replace(g) for g in self.groups]

    def get_active_group_id(self) -> GroupId | None:
        return self.active_group_id

    def get_group(self, group_id: GroupId) -> URLGroup | None:
        group = self._find(group_id)
        return replace(group) if group is not None else None

    def get_membership(self, group_id: GroupId) -> list[str]:
        """Copy of the group's URLs in insertion order; empty if unknown."""
        return list(self.memberships.get(group_id, []))

    @property
    def active_pointer(self) -> ActivePointer:
        if self.active_group_id is None:
            return ActivePointer.DANGLING
        return ActivePointer.VALID

    # --- Group commands --------------------------------------------------------

    def create_group(self, name: str) -> dict:
        """Append a new editable group. Does not change the active group."""
        error = _groups.check_name(name)
        if error:
            return error
        group = URLGroup(id=self.id_factory(), name=name.strip(), is_editable=True)
        if self._find(group.id) is not None:
            raise ValueError(f"id_factory returned an id already in use: '{group.id}'")
        self.groups.append(group)
        self.memberships[group.id] = []
        return {"status": "ok", "group": group_to_snapshot(group, [])}

    def rename_group(self, group_id: GroupId, new_name: str) -> dict:
        error = _groups.check_group_exists(self.groups, group_id)
        if error:
            return error
        group = self._find(group_id)
        error = _groups.check_editable(group) or _groups.check_name(new_name)
        if error:
            return error
        group.name = new_name.strip()
        return {
            "status": "ok",
            "group": group_to_snapshot(group, self.memberships[group.id]),
        }

    def delete_group(self, group_id: GroupId) -> dict:
        """Remove an editable group. Deleting the active group leaves it dangling."""
        error = _groups.check_group_exists(self.groups, group_id)
        if error:
            return error
        group = self._find(group_id)
        error = _groups.check_editable(group) or _groups.check_not_last(self.groups)
        if error:
            return error
        self.groups.remove(group)
        self.memberships.pop(group_id, None)
        if self.active_group_id == group_id:
            self.active_group_id = None
        return {
            "status": "ok",
            "group_id": group_id,
            "active_group_id": self.active_group_id,
        }

    def set_active_group(self, group_id: GroupId) -> dict:
        error = _groups.check_group_exists(self.groups, group_id)
        if error:
            return error
        self.active_group_id = group_id
        return {"status": "ok", "active_group_id": group_id}

    # --- Membership commands ---------------------------------------------------

    def add_url(self, group_id: GroupId, url: str) -> dict:
        """Append url to the group's membership after every rule passes."""
        error = self._check_url_target(group_id)
        if error:
            return error
        current = self.memberships[group_id]
        error = _membership.can_add(url, current, self.max_urls, self.url_schemes)
        if error:
            return error
        current.append(url)
        return {"status": "ok", "group_id": group_id, "urls": list(current)}

    def remove_url(self, group_id: GroupId, url: str) -> dict:
        """Remove url by exact match. Absent url leaves the list as is."""
        error = self._check_url_target(group_id)
        if error:
            return error
        before = self.memberships[group_id]
        after = _membership.remove(url, before)
        self.memberships[group_id] = after
        return {
            "status": "ok",
            "group_id": group_id,
            "urls": list(after),
            "removed": len(after) != len(before),
        }

    def _find(self, group_id: GroupId) -> URLGroup | None:
        return next((g for g in self.groups if g.id == group_id), None)

    def _check_url_target(self, group_id: GroupId) -> dict | None:
        return (
            _groups.check_group_exists(self.groups, self.active_group_id)
            or _groups.check_group_exists(self.groups, group_id)
        )


def build_group_store(
    seeds: Sequence[GroupSeed],
    max_urls: int = DEFAULT_MAX_URLS,
    url_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
    id_factory: Callable[[], GroupId] = _new_group_id,
) -> GroupStore:
    """Build a store from seed groups. The first seed becomes active.

    Seed URLs go through the same membership rules as user input, so a bad
    seed raises ValueError instead of silently breaking an invariant.
    """
    if not seeds:
        seeds = [GroupSeed(name=DEFAULT_GROUP_NAME, is_editable=True)]

    groups: list[URLGroup] = []
    memberships: dict[GroupId, list[str]] = {}
    schemes = tuple(url_schemes)
    for seed in seeds:
        error = _groups.check_name(seed.name)
        if error:
            raise ValueError(error["message"])
        group = URLGroup(id=id_factory(), name=seed.name.strip(), is_editable=seed.is_editable)
        urls: list[str] = []
        for url in seed.urls:
            error = _membership.can_add(url, urls, max_urls, schemes)
            if error:
                raise ValueError(f"Seed group \"{group.name}\": {error['message']}")
            urls.append(url)
        groups.append(group)
        memberships[group.id] = urls

    return GroupStore(
        groups=groups,
        active_group_id=groups[0].id,
        memberships=memberships,
        max_urls=max_urls,
        url_schemes=schemes,
        id_factory=id_factory,
    )
