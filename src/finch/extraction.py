"""Raw value extraction — shape the bindings for each field.

Every field gets a raw value matching its kind, even when nothing in
the bindings matches it:

- **SCALAR**: the first matching value, or ``None``
- **LIST**: every matching value in encounter order, or ``()``
- **ARRAY**: a tuple indexed by the ``name[i]`` keys seen, holes filled
  with ``None``; ``None`` when no indexed key matched

Matching ignores case and ``-`` / ``_`` separators (see ``field_key``).
A key like ``name[x]`` or ``name[-1]`` is simply not an array key.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

from finch.config import FormConfig
from finch.definition import FormDefinition
from finch.fields import FieldKind, field_key

logger = logging.getLogger("finch.extraction")

# ``name[index]`` with a non-negative ASCII integer index
_ARRAY_KEY_RE = re.compile(r"(?P<name>.+)\[(?P<index>[0-9]+)\]")


def extract_raw_values(
    definition: FormDefinition,
    bindings: Iterable[tuple[str, str]],
    config: FormConfig | None = None,
) -> dict[str, Any]:
    """Compute the raw value of every field in *definition*.

    Args:
        definition: The compiled form.
        bindings: ``(key, value)`` pairs in submission order.
        config: Limits for array fields. Defaults to ``FormConfig()``.

    Returns:
        Field name -> raw value, in declaration order.
    """
    config = config or FormConfig()
    plain: dict[str, list[str]] = {}
    indexed: dict[str, dict[int, str]] = {}

    for key, value in bindings:
        plain.setdefault(field_key(key), []).append(value)
        match = _ARRAY_KEY_RE.fullmatch(key)
        if match is None:
            continue
        index = int(match["index"])
        slots = indexed.setdefault(field_key(match["name"]), {})
        if index >= config.max_array_length:
            logger.warning(
                "Ignoring %r: index %d exceeds max_array_length=%d",
                key,
                index,
                config.max_array_length,
            )
            continue
        # First value seen for an index wins, as for scalars
        slots.setdefault(index, value)

    raw: dict[str, Any] = {}
    for f in definition.fields:
        match f.kind:
            case FieldKind.SCALAR:
                values = plain.get(f.key)
                raw[f.name] = values[0] if values else None
            case FieldKind.LIST:
                raw[f.name] = tuple(plain.get(f.key, ()))
            case FieldKind.ARRAY:
                raw[f.name] = _build_array(indexed.get(f.key))
    return raw


def _build_array(slots: dict[int, str] | None) -> tuple[str | None, ...] | None:
    if not slots:
        return None
    size = max(slots) + 1
    return tuple(slots.get(i) for i in range(size))
