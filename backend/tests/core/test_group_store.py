"""GroupStore tests - pure tests for group lifecycle and membership commands.

Tests cover:
    - create / rename / delete / set_active happy paths and every rejection
    - all-or-nothing: state unchanged after any rejection
    - dangling active pointer after deleting the active group
    - query results are detached copies; create_group refuses a reused id
    - add_url / remove_url semantics (order, capacity, duplicates, idempotence)
    - build_group_store seeding and construction guards
"""

import itertools

import pytest

from knowledge_base.core.domain_types import ActivePointer, GroupId
from knowledge_base.core.group_store import (
    DEFAULT_GROUP_NAME,
    GroupSeed,
    GroupStore,
    build_group_store,
)
from knowledge_base.core.store_snapshot import store_to_snapshot
from knowledge_base.core.url_group import URLGroup


def _ids():
    counter = itertools.count(1)
    return lambda: GroupId(f"g{next(counter)}")


def _store(max_urls: int = 20, builtin: bool = True) -> GroupStore:
    """One built-in group (g1, active) plus one editable group (g2)."""
    return build_group_store(
        [
            GroupSeed(name="Getting Started", is_editable=not builtin),
            GroupSeed(name="Docs", is_editable=True),
        ],
        max_urls=max_urls,
        id_factory=_ids(),
    )


# --- Queries -------------------------------------------------------------------

def test_initial_active_group_is_first_seed():
    store = _store()
    assert store.get_active_group_id() == "g1"
    assert store.active_pointer == ActivePointer.VALID


def test_list_groups_preserves_order_and_returns_copy():
    store = _store()
    groups = store.list_groups()
    assert [g.name for g in groups] == ["Getting Started", "Docs"]
    groups.clear()
    assert len(store.list_groups()) == 2


def test_list_groups_entities_are_detached():
    store = _store()
    store.list_groups()[0].name = "Hacked"
    store.list_groups()[1].is_editable = False
    assert [g.name for g in store.list_groups()] == ["Getting Started", "Docs"]
    assert store.rename_group(GroupId("g2"), "API Docs")["status"] == "ok"


def test_get_group_entity_is_detached():
    store = _store()
    store.get_group(GroupId("g1")).name = "Hacked"
    assert store.get_group(GroupId("g1")).name == "Getting Started"


def test_get_membership_returns_copy():
    store = _store()
    store.add_url(GroupId("g1"), "https://a.com")
    urls = store.get_membership(GroupId("g1"))
    urls.append("https://b.com")
    assert store.get_membership(GroupId("g1")) == ["https://a.com"]


def test_get_membership_unknown_group_is_empty():
    assert _store().get_membership(GroupId("missing")) == []


def test_get_group_unknown_returns_none():
    assert _store().get_group(GroupId("missing")) is None


# --- create_group --------------------------------------------------------------

def test_create_group_appends_editable_group_with_empty_membership():
    store = _store()
    result = store.create_group("Research")
    assert result["status"] == "ok"
    assert result["group"] == {
        "id": "g3", "name": "Research", "is_editable": True, "urls": [],
    }
    assert [g.id for g in store.list_groups()] == ["g1", "g2", "g3"]
    assert store.get_membership(GroupId("g3")) == []


def test_create_group_does_not_change_active_group():
    store = _store()
    store.create_group("Research")
    assert store.get_active_group_id() == "g1"


def test_create_group_trims_name():
    store = _store()
    assert store.create_group("  Research  ")["group"]["name"] == "Research"


@pytest.mark.parametrize("name", ["", "   "])
def test_create_group_rejects_empty_name(name):
    store = _store()
    result = store.create_group(name)
    assert result["error_code"] == "INVALID_NAME"
    assert len(store.list_groups()) == 2


def test_create_group_scenario_docs():
    store = build_group_store([GroupSeed(name="Getting Started")], id_factory=_ids())
    before = len(store.list_groups())
    result = store.create_group("Docs")
    assert result["status"] == "ok"
    assert result["group"]["urls"] == []
    assert len(store.list_groups()) == before + 1


# --- rename_group --------------------------------------------------------------

def test_rename_group_keeps_id_and_membership():
    store = _store()
    store.add_url(GroupId("g2"), "https://a.com")
    result = store.rename_group(GroupId("g2"), "API Docs")
    assert result["group"] == {
        "id": "g2", "name": "API Docs", "is_editable": True, "urls": ["https://a.com"],
    }
    assert store.get_group(GroupId("g2")).name == "API Docs"


def test_rename_group_not_found():
    store = _store()
    assert store.rename_group(GroupId("nope"), "X")["error_code"] == "NOT_FOUND"


def test_rename_builtin_group_not_editable():
    store = _store()
    result = store.rename_group(GroupId("g1"), "Hacked")
    assert result["error_code"] == "NOT_EDITABLE"
    assert store.get_group(GroupId("g1")).name == "Getting Started"


def test_rename_builtin_with_empty_name_reports_not_editable():
    assert _store().rename_group(GroupId("g1"), "")["error_code"] == "NOT_EDITABLE"


def test_rename_group_rejects_empty_name():
    store = _store()
    assert store.rename_group(GroupId("g2"), "  ")["error_code"] == "INVALID_NAME"
    assert store.get_group(GroupId("g2")).name == "Docs"


# --- delete_group --------------------------------------------------------------

def test_delete_inactive_group_keeps_active_pointer():
    store = _store()
    result = store.delete_group(GroupId("g2"))
    assert result == {"status": "ok", "group_id": "g2", "active_group_id": "g1"}
    assert [g.id for g in store.list_groups()] == ["g1"]
    assert GroupId("g2") not in store.memberships


def test_delete_group_not_found():
    assert _store().delete_group(GroupId("nope"))["error_code"] == "NOT_FOUND"


def test_delete_builtin_group_not_editable():
    store = _store()
    store.add_url(GroupId("g1"), "https://a.com")
    assert store.delete_group(GroupId("g1"))["error_code"] == "NOT_EDITABLE"
    assert store.get_membership(GroupId("g1")) == ["https://a.com"]


def test_delete_last_group_rejected():
    store = build_group_store([GroupSeed(name="Only", is_editable=True)], id_factory=_ids())
    result = store.delete_group(GroupId("g1"))
    assert result["error_code"] == "LAST_GROUP"
    assert len(store.list_groups()) == 1
    assert store.get_active_group_id() == "g1"


def test_delete_active_group_leaves_pointer_dangling():
    store = _store()
    store.set_active_group(GroupId("g2"))
    result = store.delete_group(GroupId("g2"))
    assert result["active_group_id"] is None
    assert store.get_active_group_id() is None
    assert store.active_pointer == ActivePointer.DANGLING


def test_delete_active_then_add_url_fails_until_resolved():
    store = build_group_store(
        [GroupSeed(name="One", is_editable=True), GroupSeed(name="Two", is_editable=True)],
        id_factory=_ids(),
    )
    assert store.delete_group(GroupId("g1"))["status"] == "ok"
    assert "g1" not in [g.id for g in store.list_groups()]

    result = store.add_url(GroupId("g2"), "https://a.com")
    assert result["error_code"] == "NOT_FOUND"
    assert store.get_membership(GroupId("g2")) == []

    store.set_active_group(GroupId("g2"))
    assert store.add_url(GroupId("g2"), "https://a.com")["status"] == "ok"


def test_remove_url_refused_while_dangling():
    store = _store()
    store.add_url(GroupId("g1"), "https://a.com")
    store.set_active_group(GroupId("g2"))
    store.delete_group(GroupId("g2"))
    assert store.remove_url(GroupId("g1"), "https://a.com")["error_code"] == "NOT_FOUND"
    assert store.get_membership(GroupId("g1")) == ["https://a.com"]


# --- set_active_group ----------------------------------------------------------

def test_set_active_group_switches_pointer():
    store = _store()
    assert store.set_active_group(GroupId("g2")) == {
        "status": "ok", "active_group_id": "g2",
    }
    assert store.get_active_group_id() == "g2"


def test_set_active_group_not_found_keeps_pointer():
    store = _store()
    assert store.set_active_group(GroupId("nope"))["error_code"] == "NOT_FOUND"
    assert store.get_active_group_id() == "g1"


# --- add_url / remove_url ------------------------------------------------------

def test_add_url_capacity_scenario():
    store = _store(max_urls=2)
    g = GroupId("g1")
    assert store.add_url(g, "https://a.com")["urls"] == ["https://a.com"]
    assert store.add_url(g, "https://b.com")["urls"] == ["https://a.com", "https://b.com"]
    result = store.add_url(g, "https://c.com")
    assert result["error_code"] == "CAPACITY_EXCEEDED"
    assert store.get_membership(g) == ["https://a.com", "https://b.com"]


def test_add_url_malformed_scenario():
    store = _store()
    assert store.add_url(GroupId("g1"), "not-a-url")["error_code"] == "MALFORMED_URL"
    assert store.get_membership(GroupId("g1")) == []


def test_add_url_duplicate_scenario():
    store = _store()
    assert store.add_url(GroupId("g1"), "https://a.com")["status"] == "ok"
    assert store.add_url(GroupId("g1"), "https://a.com")["error_code"] == "DUPLICATE_URL"
    assert store.get_membership(GroupId("g1")) == ["https://a.com"]


def test_add_url_empty_input():
    assert _store().add_url(GroupId("g1"), "   ")["error_code"] == "EMPTY_INPUT"


def test_add_url_unknown_group():
    assert _store().add_url(GroupId("nope"), "https://a.com")["error_code"] == "NOT_FOUND"


def test_add_url_uses_store_scheme_allow_list():
    store = build_group_store(
        [GroupSeed(name="Files")], url_schemes=("ftp",), id_factory=_ids(),
    )
    assert store.add_url(GroupId("g1"), "ftp://files.example.com")["status"] == "ok"
    assert store.add_url(GroupId("g1"), "https://a.com")["error_code"] == "MALFORMED_URL"


def test_memberships_are_independent_per_group():
    store = _store()
    store.add_url(GroupId("g1"), "https://a.com")
    assert store.add_url(GroupId("g2"), "https://a.com")["status"] == "ok"
    assert store.get_membership(GroupId("g2")) == ["https://a.com"]


def test_remove_url_keeps_order_of_remaining():
    store = _store()
    for url in ("https://a.com", "https://b.com", "https://c.com"):
        store.add_url(GroupId("g1"), url)
    result = store.remove_url(GroupId("g1"), "https://b.com")
    assert result["urls"] == ["https://a.com", "https://c.com"]
    assert result["removed"] is True


def test_remove_url_twice_is_idempotent():
    store = _store()
    store.add_url(GroupId("g1"), "https://a.com")
    first = store.remove_url(GroupId("g1"), "https://a.com")
    second = store.remove_url(GroupId("g1"), "https://a.com")
    assert first["urls"] == second["urls"] == []
    assert second["status"] == "ok"
    assert second["removed"] is False


def test_remove_url_frees_capacity():
    store = _store(max_urls=1)
    store.add_url(GroupId("g1"), "https://a.com")
    store.remove_url(GroupId("g1"), "https://a.com")
    assert store.add_url(GroupId("g1"), "https://b.com")["status"] == "ok"


# --- build_group_store / construction ------------------------------------------

def test_build_without_seeds_creates_default_editable_group():
    store = build_group_store([], id_factory=_ids())
    groups = store.list_groups()
    assert len(groups) == 1
    assert groups[0].name == DEFAULT_GROUP_NAME
    assert groups[0].is_editable
    assert store.get_active_group_id() == groups[0].id


def test_build_seeds_urls_in_order():
    store = build_group_store(
        [GroupSeed(name="Docs", urls=["https://a.com", "https://b.com"])],
        id_factory=_ids(),
    )
    assert store.get_membership(GroupId("g1")) == ["https://a.com", "https://b.com"]
    assert not store.get_group(GroupId("g1")).is_editable


def test_build_rejects_invalid_seed_url():
    with pytest.raises(ValueError, match="Invalid URL format"):
        build_group_store([GroupSeed(name="Docs", urls=["not-a-url"])])


def test_build_rejects_duplicate_seed_url():
    with pytest.raises(ValueError, match="already been added"):
        build_group_store([GroupSeed(name="Docs", urls=["https://a.com", "https://a.com"])])


def test_build_rejects_seed_over_capacity():
    with pytest.raises(ValueError, match="maximum of 1"):
        build_group_store(
            [GroupSeed(name="Docs", urls=["https://a.com", "https://b.com"])], max_urls=1,
        )


def test_build_rejects_empty_seed_name():
    with pytest.raises(ValueError, match="Group name cannot be empty"):
        build_group_store([GroupSeed(name=" ")])


def test_store_requires_groups():
    with pytest.raises(ValueError):
        GroupStore(groups=[], active_group_id=None)


def test_store_requires_valid_active_group():
    with pytest.raises(ValueError):
        GroupStore(groups=[URLGroup(id=GroupId("a"), name="A")], active_group_id=GroupId("b"))


def test_store_requires_positive_capacity():
    with pytest.raises(ValueError):
        GroupStore(
            groups=[URLGroup(id=GroupId("a"), name="A")],
            active_group_id=GroupId("a"), max_urls=0,
        )


def test_store_fills_missing_memberships():
    store = GroupStore(
        groups=[URLGroup(id=GroupId("a"), name="A")], active_group_id=GroupId("a"),
    )
    assert store.get_membership(GroupId("a")) == []


# --- rejections never mutate ---------------------------------------------------

def test_rejections_leave_snapshot_unchanged():
    store = _store(max_urls=1)
    store.add_url(GroupId("g1"), "https://a.com")
    before = store_to_snapshot(store)

    store.create_group("")
    store.rename_group(GroupId("g1"), "X")
    store.rename_group(GroupId("g2"), "")
    store.delete_group(GroupId("g1"))
    store.delete_group(GroupId("nope"))
    store.set_active_group(GroupId("nope"))
    store.add_url(GroupId("g1"), "https://b.com")
    store.add_url(GroupId("g2"), "not-a-url")

    assert store_to_snapshot(store) == before


def test_create_group_rejects_reused_id_from_factory():
    store = build_group_store(
        [GroupSeed(name="Docs", is_editable=True)], id_factory=lambda: GroupId("same"),
    )
    store.add_url(GroupId("same"), "https://a.com")
    with pytest.raises(ValueError, match="already in use"):
        store.create_group("Research")
    assert [g.id for g in store.list_groups()] == ["same"]
    assert store.get_membership(GroupId("same")) == ["https://a.com"]
