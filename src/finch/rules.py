"""Built-in validators for finch forms.

Each validator takes the field's raw value first, then the extra
arguments from its declaration::

    ("title", min_length, 3)      # min_length(raw, 3)
    (("tags", LIST), each, integer)  # each(raw, integer)

Validators return the cleaned value and call ``check`` / ``fail`` to
reject the input. Custom validators follow the same protocol.

Combinators (``optional``, ``each``) take another validator plus its
arguments, so rules compose without factories.
"""

import re
from collections.abc import Sequence
from typing import Any

from finch.check import check, fail
from finch.fields import Validator

# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(raw: str | None) -> str:
    """Field must be present and non-blank."""
    check(raw is not None and raw.strip(), "This field is required")
    return raw


def optional(raw: Any, validator: Validator, *args: Any) -> Any:
    """Run *validator* only when a value was submitted.

    Missing or empty input validates to ``None``.
    """
    if raw is None or raw == "" or raw == ():
        return None
    return validator(raw, *args)


def always_fail(raw: Any, message: str = "This field is not accepted") -> None:
    """Reject every input."""
    fail(message)


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def min_length(raw: str | None, n: int) -> str:
    """String must be at least *n* characters."""
    check(raw is not None, "This field is required")
    check(len(raw) >= n, "Must be at least {} characters", n)
    return raw


def max_length(raw: str | None, n: int) -> str | None:
    """String must be at most *n* characters. A missing value passes."""
    check(raw is None or len(raw) <= n, "Must be at most {} characters", n)
    return raw


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")

# Scheme and host structure only
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


def email(raw: str | None) -> str:
    """Value must be a valid email address (basic format check)."""
    check(raw is not None and _EMAIL_RE.match(raw), "Must be a valid email address")
    return raw


def url(raw: str | None) -> str:
    """Value must be a valid URL (http/https)."""
    check(raw is not None and _URL_RE.match(raw), "Must be a valid URL")
    return raw


def matches(raw: str | None, pattern: str, message: str | None = None) -> str:
    """Value must match the regex *pattern*."""
    ok = raw is not None and re.match(pattern, raw)
    if message:
        check(ok, message)
    check(ok, "Must match pattern: {}", pattern)
    return raw


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(raw: str | None, *choices: str) -> str:
    """Value must be one of *choices*."""
    options = ", ".join(sorted(choices))
    check(raw in choices, "Must be one of: {}", options)
    return raw


# ---------------------------------------------------------------------------
# Type coercion
# ---------------------------------------------------------------------------


def integer(raw: str | None) -> int:
    """Value must be a whole number; returns the ``int``."""
    check(raw is not None, "This field is required")
    try:
        return int(raw)
    except ValueError:
        fail("Must be a whole number")


def number(raw: str | None) -> float:
    """Value must be a number (int or float); returns the ``float``."""
    check(raw is not None, "This field is required")
    try:
        return float(raw)
    except ValueError:
        fail("Must be a number")


# ---------------------------------------------------------------------------
# Sequences (LIST and ARRAY fields)
# ---------------------------------------------------------------------------


def each(raw: Sequence[str | None] | None, validator: Validator, *args: Any) -> list[Any]:
    """Apply *validator* to every element; ``None`` holes pass through.

    The first failing element fails the whole field.
    """
    if raw is None:
        return []
    return [None if item is None else validator(item, *args) for item in raw]


def drop_missing(raw: Sequence[str | None] | None) -> list[str]:
    """Remove the holes from an array field. An absent array is empty."""
    if raw is None:
        return []
    return [item for item in raw if item is not None]
