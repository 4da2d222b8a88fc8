"""URL Group - the group entity; membership lives outside it.

Invariants:
    - id never changes for the group's lifetime
    - name is only reassigned through GroupStore.rename_group (editable groups)
"""

from dataclasses import dataclass

from knowledge_base.core.domain_types import GroupId


@dataclass
class URLGroup:
    """Named collection of reference URLs. is_editable=False marks a built-in."""

    id: GroupId
    name: str
    is_editable: bool = True
