"""Form definitions — an ordered, immutable set of field schemas."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from finch.errors import SchemaError
from finch.fields import FieldSchema, compile_field, field_key


@dataclass(frozen=True, slots=True)
class FormDefinition:
    """A named, compiled form schema.

    Fields keep declaration order; validators run in that order.
    """

    name: str
    fields: tuple[FieldSchema, ...]

    def __iter__(self) -> Iterator[FieldSchema]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def find(self, name: str) -> FieldSchema | None:
        """Return the field matching *name* (case and separators ignored)."""
        key = field_key(name)
        for f in self.fields:
            if f.key == key:
                return f
        return None

    def field(self, name: str) -> FieldSchema:
        """Return the field matching *name*, or raise ``KeyError``."""
        found = self.find(name)
        if found is None:
            msg = f"Form {self.name!r} has no field {name!r}"
            raise KeyError(msg)
        return found


def compile_form(name: str, declarations: Iterable[Sequence[Any]]) -> FormDefinition:
    """Compile field declarations into a ``FormDefinition``.

    Raises:
        SchemaError: On any malformed declaration, or when two fields
            share a name.
    """
    if not isinstance(name, str) or not name:
        msg = f"Form name must be a non-empty string, got {name!r}"
        raise SchemaError(msg)

    fields: list[FieldSchema] = []
    seen: dict[str, str] = {}
    for declaration in declarations:
        compiled = compile_field(declaration, form=name)
        if compiled.key in seen:
            msg = (
                f"Form {name!r}: duplicate field {compiled.name!r}"
                f" (already declared as {seen[compiled.key]!r})"
            )
            raise SchemaError(msg, form=name, field=compiled.name)
        seen[compiled.key] = compiled.name
        fields.append(compiled)

    return FormDefinition(name=name, fields=tuple(fields))
