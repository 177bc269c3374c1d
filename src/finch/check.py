"""Validator invocation — the ``check`` assertion protocol.

A validator is any callable ``(raw_value, *extra_args) -> value``. It
signals bad input by calling ``check`` with a false condition, which
stops that validator on the spot::

    def positive(raw):
        check(raw is not None, "This field is required")
        try:
            n = int(raw)
        except ValueError:
            fail("{!r} is not a whole number", raw)
        check(n > 0, "Must be positive, got {}", n)
        return n

The failure is recorded as the field's ``Error``; other fields keep
validating. Any other exception a validator raises is a bug in the
validator and propagates to whoever built the form.

A validator that declares a keyword-only ``form`` parameter also receives a read-only
mapping of every field's raw value, for cross-field checks::

    def confirms(raw, other, *, form):
        check(raw == form[other], "Does not match {}", other)
        return raw
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NoReturn, TypeAlias

from finch.errors import FieldValidationError
from finch.fields import FieldSchema

logger = logging.getLogger("finch.check")


@dataclass(frozen=True, slots=True)
class Value:
    """A field validated successfully; ``value`` is the validator's result."""

    value: Any


@dataclass(frozen=True, slots=True)
class Error:
    """A field failed validation with ``message``."""

    message: str


Outcome: TypeAlias = Value | Error


def check(condition: object, template: str, /, *args: Any, **kwargs: Any) -> None:
    """Assert *condition* inside a validator.

    On a false condition, abort the running validator with
    ``template.format(*args, **kwargs)`` as the field's error message.
    Without arguments the template is used verbatim.

    Raises:
        FieldValidationError: If *condition* is false.
    """
    if condition:
        return
    message = template.format(*args, **kwargs) if args or kwargs else template
    raise FieldValidationError(message)


def fail(template: str, /, *args: Any, **kwargs: Any) -> NoReturn:
    """Abort the running validator unconditionally."""
    check(False, template, *args, **kwargs)
    raise AssertionError("unreachable")  # pragma: no cover


def invoke_validator(field: FieldSchema, raw: Any, raw_values: Mapping[str, Any]) -> Outcome:
    """Run *field*'s validator against *raw* and capture the outcome.

    Only ``FieldValidationError`` is caught; the error belongs to this
    field alone.
    """
    kwargs = {"form": raw_values} if field.wants_form else {}
    try:
        result = field.validator(raw, *field.extra_args, **kwargs)
    except FieldValidationError as e:
        logger.debug("Field %r failed: %s", field.name, e.message)
        return Error(e.message)
    return Value(result)
