"""URL Groups - group lifecycle, active-group switching and URL membership.

Invariants:
    - Every mutation goes through GroupCommands (core rules + logging + typed errors)
    - Request bodies validated by Pydantic before reaching the route handler
    - DELETE of the active group answers active_group_id=None; the client must
      PUT /groups/active before any URL command succeeds again

Design Decisions:
    - Store injected via Depends(get_group_store): tests override the dependency
      with a fresh store per test
    - get_group_or_404 shared by read endpoints so a missing group always maps
      to the same NOT_FOUND envelope
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from knowledge_base.core.capabilities import delete_prompt, group_capabilities
from knowledge_base.core.domain_types import GroupId
from knowledge_base.core.errors import ErrorContext, GroupNotFoundError
from knowledge_base.core.group_store import GroupStore
from knowledge_base.core.store_snapshot import group_to_snapshot, store_to_snapshot
from knowledge_base.core.url_group import URLGroup
from knowledge_base.infrastructure.store import get_group_store
from knowledge_base.schemas.url_group import (
    ActiveGroupUpdate,
    GroupCreate,
    GroupDetailResponse,
    GroupListResponse,
    GroupRename,
    GroupResponse,
    MembershipResponse,
    UrlAdd,
)
from knowledge_base.services.group_commands import GroupCommands

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/groups", tags=["groups"])


def get_group_commands(
    store: GroupStore = Depends(get_group_store),
) -> GroupCommands:
    return GroupCommands(store)


def get_group_or_404(store: GroupStore, group_id: str) -> URLGroup:
    group = store.get_group(GroupId(group_id))
    if group is None:
        raise GroupNotFoundError(
            f"Group '{group_id}' not found.", ErrorContext(group_id=group_id),
        )
    return group


# --- Groups --------------------------------------------------------------------

@router.get("", response_model=GroupListResponse)
async def list_groups(store: GroupStore = Depends(get_group_store)):
    """List groups in store order with the active pointer."""
    snapshot = store_to_snapshot(store)
    return GroupListResponse(
        groups=snapshot["groups"],
        active_group_id=snapshot["active_group_id"],
        max_urls=snapshot["max_urls"],
    )


@router.post(
    "", response_model=GroupResponse, status_code=status.HTTP_201_CREATED,
)
async def create_group(
    body: GroupCreate, commands: GroupCommands = Depends(get_group_commands),
):
    """Create an editable group. The active group does not change."""
    return commands.create_group(body.name)


@router.put("/active")
async def set_active_group(
    body: ActiveGroupUpdate,
    commands: GroupCommands = Depends(get_group_commands),
):
    """Point the active group at an existing group."""
    result = commands.set_active_group(GroupId(body.group_id))
    return {"active_group_id": result["active_group_id"]}


@router.get("/{group_id}", response_model=GroupDetailResponse)
async def get_group(
    group_id: str, store: GroupStore = Depends(get_group_store),
):
    """Group details with capability flags and the delete confirmation text."""
    group = get_group_or_404(store, group_id)
    return GroupDetailResponse(
        **group_to_snapshot(group, store.get_membership(group.id)),
        is_active=store.get_active_group_id() == group.id,
        capabilities=group_capabilities(store, group.id),
        delete_prompt=delete_prompt(group),
    )


@router.patch("/{group_id}", response_model=GroupResponse)
async def rename_group(
    group_id: str,
    body: GroupRename,
    commands: GroupCommands = Depends(get_group_commands),
):
    """Rename an editable group in place."""
    return commands.rename_group(GroupId(group_id), body.name)


@router.delete("/{group_id}")
async def delete_group(
    group_id: str, commands: GroupCommands = Depends(get_group_commands),
):
    """Delete an editable group. Confirmation is the client's job.

    Answers 200 with the new active pointer (None after deleting the active group).
    """
    result = commands.delete_group(GroupId(group_id))
    return {
        "deleted_group_id": result["group_id"],
        "active_group_id": result["active_group_id"],
    }


# --- Membership ----------------------------------------------------------------

@router.get("/{group_id}/urls", response_model=MembershipResponse)
async def get_membership(
    group_id: str, store: GroupStore = Depends(get_group_store),
):
    group = get_group_or_404(store, group_id)
    return MembershipResponse(group_id=group.id, urls=store.get_membership(group.id))


@router.post(
    "/{group_id}/urls", response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_url(
    group_id: str,
    body: UrlAdd,
    commands: GroupCommands = Depends(get_group_commands),
):
    """Append a URL to the group after empty/format/capacity/duplicate checks."""
    result = commands.add_url(GroupId(group_id), body.url)
    return MembershipResponse(group_id=result["group_id"], urls=result["urls"])


@router.delete("/{group_id}/urls", response_model=MembershipResponse)
async def remove_url(
    group_id: str,
    url: str = Query(..., max_length=2048),
    commands: GroupCommands = Depends(get_group_commands),
):
    """Remove a URL by exact match. Removing an absent URL is a no-op.

    The query value is stripped the same way UrlAdd strips the add body.
    """
    result = commands.remove_url(GroupId(group_id), url.strip())
    return MembershipResponse(group_id=result["group_id"], urls=result["urls"])
