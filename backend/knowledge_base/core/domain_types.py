"""Domain Types - identifiers, error kinds and limits shared across the core.

Invariants:
    - GroupId wraps an opaque string - never parsed, only compared
    - Every rejection uses an ErrorKind value as its error_code
    - DEFAULT_MAX_URLS is the single source of truth for the capacity default

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (API envelopes are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

GroupId = NewType("GroupId", str)


# ─── Limits ──────────────────────────────────────────────────────

DEFAULT_MAX_URLS: int = 20
DEFAULT_URL_SCHEMES: tuple[str, ...] = ("http", "https")


# ─── Enums ───────────────────────────────────────────────────────

class ErrorKind(str, Enum):
    """Rejection reasons returned by group and membership commands."""
    INVALID_NAME = "INVALID_NAME"
    NOT_FOUND = "NOT_FOUND"
    NOT_EDITABLE = "NOT_EDITABLE"
    LAST_GROUP = "LAST_GROUP"
    EMPTY_INPUT = "EMPTY_INPUT"
    MALFORMED_URL = "MALFORMED_URL"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    DUPLICATE_URL = "DUPLICATE_URL"


class ActivePointer(str, Enum):
    """Modal state of the store's active-group pointer."""
    VALID = "valid"
    DANGLING = "dangling"
