"""Field schemas — the compiled description of one named field.

A field declaration is a tuple::

    (name_spec, validator, *extra_args)

where ``name_spec`` is a bare name (a scalar field) or a two-element
``(name, kind)`` pair naming ``LIST`` or ``ARRAY``::

    ("title", min_length, 1)
    (("tags", LIST), each, one_of, "red", "blue")
    (("slots", ARRAY), drop_missing)

Declarations are compiled once, when the form is defined. Anything
malformed raises ``SchemaError`` right there, never while binding input.
"""

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from finch.errors import SchemaError

# Type alias for a validator: (raw_value, *extra_args) -> value
Validator: TypeAlias = Callable[..., Any]


class FieldKind(Enum):
    """Shape of a field's raw value."""

    SCALAR = "scalar"
    LIST = "list"
    ARRAY = "array"


LIST = FieldKind.LIST
ARRAY = FieldKind.ARRAY

# Tags allowed in the second slot of a ``(name, kind)`` declaration
_KIND_TAGS: dict[str, FieldKind] = {"list": LIST, "array": ARRAY}


def field_key(name: str) -> str:
    """Normalize a field name or binding key for matching.

    Comparison ignores case and the ``-`` / ``_`` separators, so
    ``error_field``, ``errorField`` and ``ERROR-FIELD`` share one key.
    """
    return name.replace("-", "").replace("_", "").lower()


@dataclass(frozen=True, slots=True)
class FieldSchema:
    """One compiled field. Owned by its ``FormDefinition``."""

    name: str
    kind: FieldKind
    validator: Validator
    extra_args: tuple[Any, ...] = ()
    key: str = ""
    wants_form: bool = False

    def __repr__(self) -> str:
        validator = getattr(self.validator, "__name__", repr(self.validator))
        return f"FieldSchema({self.name!r}, {self.kind.value}, {validator})"


def compile_field(declaration: Sequence[Any], *, form: str = "") -> FieldSchema:
    """Compile one field declaration.

    Args:
        declaration: ``(name_spec, validator, *extra_args)``.
        form: Name of the enclosing form, used in error messages.

    Returns:
        The compiled ``FieldSchema``.

    Raises:
        SchemaError: If the declaration is empty, the name is not a
            non-empty string, the kind tag is unknown, or the validator
            is not callable.
    """
    if isinstance(declaration, str) or not declaration:
        msg = f"Form {form!r}: field declaration must be (name, validator, *args), got {declaration!r}"
        raise SchemaError(msg, form=form)

    name_spec, *rest = declaration
    name, kind = _parse_name_spec(name_spec, form)

    if not rest or not callable(rest[0]):
        msg = f"Form {form!r}: field {name!r} has no callable validator"
        raise SchemaError(msg, form=form, field=name)

    validator, *extra_args = rest
    return FieldSchema(
        name=name,
        kind=kind,
        validator=validator,
        extra_args=tuple(extra_args),
        key=field_key(name),
        wants_form=_accepts_form(validator),
    )


def _parse_name_spec(name_spec: Any, form: str) -> tuple[str, FieldKind]:
    """Split a name spec into ``(name, kind)``."""
    if isinstance(name_spec, str):
        name, kind = name_spec, FieldKind.SCALAR
    elif isinstance(name_spec, tuple | list) and len(name_spec) == 2:
        name, tag = name_spec
        kind = _parse_kind(tag, name, form)
    else:
        msg = f"Form {form!r}: bad field name {name_spec!r}, expected a name or (name, LIST|ARRAY)"
        raise SchemaError(msg, form=form)

    if not isinstance(name, str) or not name.strip("-_"):
        msg = f"Form {form!r}: field name must be a non-empty string, got {name!r}"
        raise SchemaError(msg, form=form)
    return name, kind


def _parse_kind(tag: Any, name: Any, form: str) -> FieldKind:
    if tag is LIST or tag is ARRAY:
        return tag
    if isinstance(tag, str) and tag.lower() in _KIND_TAGS:
        return _KIND_TAGS[tag.lower()]
    msg = f"Form {form!r}: unknown kind {tag!r} for field {name!r}, expected LIST or ARRAY"
    raise SchemaError(msg, form=form, field=name if isinstance(name, str) else None)


def _accepts_form(validator: Validator) -> bool:
    """Return True if *validator* declares a keyword-only ``form`` parameter.

    A positional ``form`` is an ordinary extra argument slot. Builtins and other callables without an inspectable signature
    never receive one.
    """
    try:
        sig = inspect.signature(validator)
    except (TypeError, ValueError):
        return False
    param = sig.parameters.get("form")
    if param is None:
        return False
    return param.kind is inspect.Parameter.KEYWORD_ONLY
