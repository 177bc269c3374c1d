"""Form definition registry.

Definitions are registered once, at configuration time, and read
afterwards. Redefining a name replaces the earlier definition (last
writer wins); a definition that fails to compile leaves the registry
untouched.

The module-level ``forms`` registry backs ``define_form()`` and
``make_form()``. Tests and embedded uses can build their own::

    registry = FormRegistry()
    registry.define("signup", [("email", rules.email)])
    form = registry.bind("signup", [("email", "a@example.com")])
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from finch.bindings import BindingSource
from finch.config import FormConfig
from finch.definition import FormDefinition, compile_form
from finch.errors import UnknownFormError
from finch.form import Form

logger = logging.getLogger("finch.registry")


class FormRegistry:
    """Named ``FormDefinition`` store with a shared ``FormConfig``."""

    __slots__ = ("_config", "_definitions")

    def __init__(self, config: FormConfig | None = None) -> None:
        self._config = config or FormConfig()
        self._definitions: dict[str, FormDefinition] = {}

    @property
    def config(self) -> FormConfig:
        return self._config

    def define(self, name: str, declarations: Iterable[Sequence[Any]]) -> FormDefinition:
        """Compile *declarations* and register them under *name*.

        Raises:
            SchemaError: If compilation fails. Nothing is stored.
        """
        definition = compile_form(name, declarations)
        if name in self._definitions:
            logger.debug("Redefining form %r (%d fields)", name, len(definition))
        else:
            logger.debug("Defined form %r (%d fields)", name, len(definition))
        self._definitions[name] = definition
        return definition

    def get(self, name: str) -> FormDefinition:
        """Return the definition registered as *name*.

        Raises:
            UnknownFormError: If nothing is registered under *name*.
        """
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownFormError(name) from None

    def bind(self, name: str, bindings: BindingSource | None = None) -> Form:
        """Build a ``Form`` for the definition *name*.

        Without *bindings* the form is unbound.
        """
        return Form(self.get(name), bindings, config=self._config)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"FormRegistry({sorted(self._definitions)!r})"


forms = FormRegistry()
"""Process-wide registry used by ``define_form()`` and ``make_form()``."""


def define_form(name: str, declarations: Iterable[Sequence[Any]]) -> FormDefinition:
    """Register a form on the process-wide registry."""
    return forms.define(name, declarations)


def make_form(name: str, bindings: BindingSource | None = None) -> Form:
    """Bind a form registered on the process-wide registry."""
    return forms.bind(name, bindings)
