"""Error Hierarchy - typed, categorized exceptions for knowledge base failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Core commands never raise these: they return rejection dicts, the shell raises
    - error_from_rejection() maps every ErrorKind to exactly one subclass
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with KnowledgeBaseError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from knowledge_base.core.domain_types import ErrorKind


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    group_id: str | None = None
    url: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class KnowledgeBaseError(Exception):
    """Base exception for all knowledge base errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "group_id": self.context.group_id,
                    "url": self.context.url,
                },
            }
        }


# ─── Group Errors ───────────────────────────────────────────────

class InvalidNameError(KnowledgeBaseError):
    """Group name is empty after trimming."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.INVALID_NAME.value, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class GroupNotFoundError(KnowledgeBaseError):
    """Group id does not exist, or no active group is selected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.NOT_FOUND.value, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class GroupNotEditableError(KnowledgeBaseError):
    """Built-in group cannot be renamed or deleted."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.NOT_EDITABLE.value, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )


class LastGroupError(KnowledgeBaseError):
    """The only remaining group cannot be deleted."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.LAST_GROUP.value, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Membership Errors ──────────────────────────────────────────

class EmptyInputError(KnowledgeBaseError):
    """URL is empty after trimming."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.EMPTY_INPUT.value, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class MalformedUrlError(KnowledgeBaseError):
    """URL is not absolute or uses an unrecognized scheme."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.MALFORMED_URL.value, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class CapacityExceededError(KnowledgeBaseError):
    """Group already holds max_urls URLs."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.CAPACITY_EXCEEDED.value, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


class DuplicateUrlError(KnowledgeBaseError):
    """URL already present in the group's membership."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.DUPLICATE_URL.value, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


_ERRORS_BY_KIND: dict[ErrorKind, type[KnowledgeBaseError]] = {
    ErrorKind.INVALID_NAME: InvalidNameError,
    ErrorKind.NOT_FOUND: GroupNotFoundError,
    ErrorKind.NOT_EDITABLE: GroupNotEditableError,
    ErrorKind.LAST_GROUP: LastGroupError,
    ErrorKind.EMPTY_INPUT: EmptyInputError,
    ErrorKind.MALFORMED_URL: MalformedUrlError,
    ErrorKind.CAPACITY_EXCEEDED: CapacityExceededError,
    ErrorKind.DUPLICATE_URL: DuplicateUrlError,
}


def error_from_rejection(
    rejection: dict, context: ErrorContext | None = None,
) -> KnowledgeBaseError:
    """Build the typed exception for a core rejection dict."""
    error_cls = _ERRORS_BY_KIND[ErrorKind(rejection["error_code"])]
    return error_cls(rejection["message"], context)
