"""Group Commands - applies user intents to a GroupStore and raises on rejection.

Invariants:
    - Every command runs exactly one core call; the store is untouched on rejection
    - Rejections become the matching KnowledgeBaseError (see core/errors.py)
    - Every accepted command is logged at INFO, every rejection at WARNING

Design Decisions:
    - Explicit method per intent over a generic dispatch dict: six commands,
      each with its own context fields (ADR: no getattr magic)
    - Synchronous: core commands never do IO, so nothing here awaits
"""

import logging

from knowledge_base.core.domain_types import GroupId
from knowledge_base.core.errors import ErrorContext, error_from_rejection
from knowledge_base.core.group_store import GroupStore

logger = logging.getLogger(__name__)


class GroupCommands:
    """User intents against one GroupStore."""

    def __init__(self, store: GroupStore):
        self.store = store

    def create_group(self, name: str) -> dict:
        result = self._apply("create_group", self.store.create_group(name), ErrorContext())
        return result["group"]

    def rename_group(self, group_id: GroupId, new_name: str) -> dict:
        result = self._apply(
            "rename_group", self.store.rename_group(group_id, new_name),
            ErrorContext(group_id=group_id),
        )
        return result["group"]

    def delete_group(self, group_id: GroupId) -> dict:
        return self._apply(
            "delete_group", self.store.delete_group(group_id),
            ErrorContext(group_id=group_id),
        )

    def set_active_group(self, group_id: GroupId) -> dict:
        return self._apply(
            "set_active_group", self.store.set_active_group(group_id),
            ErrorContext(group_id=group_id),
        )

    def add_url(self, group_id: GroupId, url: str) -> dict:
        return self._apply(
            "add_url", self.store.add_url(group_id, url),
            ErrorContext(group_id=group_id, url=url),
        )

    def remove_url(self, group_id: GroupId, url: str) -> dict:
        return self._apply(
            "remove_url", self.store.remove_url(group_id, url),
            ErrorContext(group_id=group_id, url=url),
        )

    def _apply(self, command: str, result: dict, context: ErrorContext) -> dict:
        """Log the outcome; raise the typed error for a rejection."""
        if result["status"] == "error":
            logger.warning(
                f"{command} rejected: {result['message']}",
                extra={
                    "error_code": result["error_code"],
                    "group_id": context.group_id,
                    "url": context.url,
                },
            )
            raise error_from_rejection(result, context)
        logger.info(
            f"{command} applied",
            extra={
                "group_id": context.group_id,
                "url": context.url,
                "active_group_id": self.store.get_active_group_id(),
            },
        )
        return result
