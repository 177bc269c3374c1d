"""Form instances — one definition bound to one set of bindings.

Construction does all the work: raw values for every field first, then
each validator in declaration order. Afterwards the form is read-only
and every accessor is a plain lookup.

Usage::

    form = Form(definition, [("title", "Hello"), ("tags", "a"), ("tags", "b")])
    if not form:
        return Template("post.html", form=form, errors=form.errors)
    title = form.value("title")

An unbound form (``Form(definition)``) is never valid and answers
``None`` for every field.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from finch.bindings import BindingSource, as_bindings
from finch.check import Error, Outcome, Value, invoke_validator
from finch.config import FormConfig
from finch.definition import FormDefinition
from finch.extraction import extract_raw_values


class Form:
    """Validated view of one submission.

    Attributes:
        definition: The compiled form this instance was built from.
        bound: False when no bindings were given.
    """

    __slots__ = ("_bound", "_definition", "_outcomes", "_raw")

    def __init__(
        self,
        definition: FormDefinition,
        bindings: BindingSource | None = None,
        *,
        config: FormConfig | None = None,
    ) -> None:
        self._definition = definition
        self._bound = bindings is not None
        self._raw: Mapping[str, Any] = MappingProxyType({})
        self._outcomes: Mapping[str, Outcome] = MappingProxyType({})
        if not self._bound:
            return

        raw = MappingProxyType(extract_raw_values(definition, as_bindings(bindings), config))
        outcomes = {f.name: invoke_validator(f, raw[f.name], raw) for f in definition.fields}
        self._raw = raw
        self._outcomes = MappingProxyType(outcomes)

    @property
    def definition(self) -> FormDefinition:
        return self._definition

    @property
    def bound(self) -> bool:
        """False when the form was built without bindings."""
        return self._bound

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def is_valid(self) -> bool:
        """True when bound and every field validated."""
        if not self.bound:
            return False
        return not any(isinstance(o, Error) for o in self._outcomes.values())

    def __bool__(self) -> bool:
        """Falsy when invalid, so ``if not form:`` reads naturally."""
        return self.is_valid

    @property
    def errors(self) -> dict[str, str]:
        """Field name -> error message for every failed field, in declaration order."""
        return {name: o.message for name, o in self._outcomes.items() if isinstance(o, Error)}

    @property
    def values(self) -> dict[str, Any]:
        """Field name -> validated value for every field that passed."""
        return {name: o.value for name, o in self._outcomes.items() if isinstance(o, Value)}

    def raw_value(self, name: str) -> Any:
        """The shaped, unvalidated input for *name*; ``None`` when unbound.

        Raises:
            KeyError: If the form has no such field.
        """
        return self._raw.get(self.definition.field(name).name)

    def value(self, name: str) -> Any:
        """The validated value for *name*; ``None`` if it failed or the form is unbound."""
        outcome = self._outcome(name)
        return outcome.value if isinstance(outcome, Value) else None

    def error(self, name: str) -> str | None:
        """The error message for *name*, or ``None``."""
        outcome = self._outcome(name)
        return outcome.message if isinstance(outcome, Error) else None

    def _outcome(self, name: str) -> Outcome | None:
        return self._outcomes.get(self.definition.field(name).name)

    def __repr__(self) -> str:
        if not self.bound:
            return f"<Form {self.name!r} unbound>"
        state = "valid" if self.is_valid else f"{len(self.errors)} error(s)"
        return f"<Form {self.name!r} {state}>"
