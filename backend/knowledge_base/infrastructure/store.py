"""Group Store Registry - process-wide GroupStore built from settings.

Invariants:
    - One GroupStore per process, created on startup by init_group_store()
    - get_group_store() never builds implicitly: an uninitialized store is a bug

Design Decisions:
    - Singleton initialized in the FastAPI lifespan, mirroring how other
      process resources are wired (ADR: no global import side effects)
    - In-memory only: persistence belongs to the host, state lost on restart
"""

import logging

from knowledge_base.config import Settings
from knowledge_base.core.group_store import GroupStore, build_group_store

logger = logging.getLogger(__name__)

# Singleton (initialized on startup)
group_store: GroupStore | None = None


def init_group_store(settings: Settings) -> GroupStore:
    global group_store
    group_store = build_group_store(
        [g.to_seed() for g in settings.builtin_groups],
        max_urls=settings.max_urls,
        url_schemes=settings.allowed_url_schemes,
    )
    logger.info(
        f"Group store ready with {len(group_store.groups)} group(s)",
        extra={"active_group_id": group_store.active_group_id},
    )
    return group_store


def get_group_store() -> GroupStore:
    """FastAPI dependency for the shared group store."""
    if not group_store:
        raise RuntimeError("Group store not initialized")
    return group_store
