"""Membership Enforcement - decides whether a URL may join a group's list.

Invariants:
    - All functions are PURE: no IO, no side effects, inputs never mutated
    - Return error dict on violation, None on success
    - Check order is fixed: empty -> malformed -> capacity -> duplicate
    - Duplicate detection is exact string equality (no normalization)
    - Removing an absent URL is a no-op, never an error

Design Decisions:
    - urllib.parse.urlsplit is the RFC 3986 parser: no regex for well-formedness
    - Scheme allow-list passed in, so the shell can widen it from settings
"""

from collections.abc import Iterable, Sequence
from urllib.parse import urlsplit

from knowledge_base.core.domain_types import ErrorKind, DEFAULT_URL_SCHEMES


def check_not_empty(url: str) -> dict | None:
    if not url.strip():
        return _error(ErrorKind.EMPTY_INPUT, "URL cannot be empty.")
    return None


def check_well_formed(
    url: str, schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
) -> dict | None:
    """Absolute URL with a recognized scheme and a host."""
    if not is_absolute_url(url, schemes):
        return _error(
            ErrorKind.MALFORMED_URL,
            f"Invalid URL format. Please include {_scheme_hint(schemes)}",
        )
    return None


def check_capacity(current: Sequence[str], max_urls: int) -> dict | None:
    if len(current) >= max_urls:
        return _error(
            ErrorKind.CAPACITY_EXCEEDED,
            f"You can add a maximum of {max_urls} URLs to the current group.",
        )
    return None


def check_not_duplicate(url: str, current: Sequence[str]) -> dict | None:
    if url in current:
        return _error(
            ErrorKind.DUPLICATE_URL,
            "This URL has already been added to the current group.",
        )
    return None


def can_add(
    url: str,
    current: Sequence[str],
    max_urls: int,
    schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
) -> dict | None:
    """Run every membership rule in order. First violation wins."""
    return (
        check_not_empty(url)
        or check_well_formed(url, schemes)
        or check_capacity(current, max_urls)
        or check_not_duplicate(url, current)
    )


def remove(url: str, current: Sequence[str]) -> list[str]:
    """Return a copy of current without the first exact match of url."""
    remaining = list(current)
    if url in remaining:
        remaining.remove(url)
    return remaining


def is_absolute_url(url: str, schemes: Iterable[str] = DEFAULT_URL_SCHEMES) -> bool:
    """True when url parses as scheme://host[...] with an allowed scheme."""
    if url != url.strip() or any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError:
        return False
    allowed = {s.lower() for s in schemes}
    return parts.scheme.lower() in allowed and bool(parts.hostname)


def _scheme_hint(schemes: Iterable[str]) -> str:
    """'http:// or https://' style list of the allowed scheme prefixes."""
    prefixes = list(dict.fromkeys(f"{s.lower()}://" for s in schemes))
    if len(prefixes) <= 1:
        return "".join(prefixes)
    return f"{', '.join(prefixes[:-1])} or {prefixes[-1]}"


def _error(kind: ErrorKind, message: str) -> dict:
    return {"status": "error", "error_code": kind.value, "message": message}
