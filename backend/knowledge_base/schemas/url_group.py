"""URL Group Schemas - Pydantic models for group and membership endpoints.

Invariants:
    - Names capped at 100 chars, URLs at 2048 chars
    - Empty names and URLs are NOT rejected here: the core returns
      INVALID_NAME / EMPTY_INPUT so clients get the domain error code
    - UrlAdd strips surrounding whitespace (input-box padding), nothing else

Design Decisions:
    - field_validator for side-effect-free transforms (strip) - keeps models pure
"""

from pydantic import BaseModel, Field, field_validator


class GroupCreate(BaseModel):
    """Group creation - name is validated by the core."""
    name: str = Field(max_length=100)


class GroupRename(BaseModel):
    """Group rename - new name is validated by the core."""
    name: str = Field(max_length=100)


class ActiveGroupUpdate(BaseModel):
    """Switch the active group."""
    group_id: str = Field(min_length=1, max_length=64)


class UrlAdd(BaseModel):
    """URL to append to a group's membership."""
    url: str = Field(max_length=2048)

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return v.strip()


class GroupResponse(BaseModel):
    """Group with its membership, in store order."""
    id: str
    name: str
    is_editable: bool
    urls: list[str] = Field(default_factory=list)


class GroupListResponse(BaseModel):
    """All groups plus the active pointer (None while dangling)."""
    groups: list[GroupResponse]
    active_group_id: str | None
    max_urls: int


class MembershipResponse(BaseModel):
    """Membership of one group after a URL command."""
    group_id: str
    urls: list[str]


class CapabilitiesResponse(BaseModel):
    """Control-enablement flags for one group."""
    can_rename: bool
    can_delete: bool
    can_add_url: bool
    can_remove_url: bool = True
    at_capacity: bool
    remaining_slots: int
    capacity_notice: str | None = None


class GroupDetailResponse(GroupResponse):
    """Group, membership, capabilities and the delete confirmation text."""
    is_active: bool
    capabilities: CapabilitiesResponse
    delete_prompt: str
