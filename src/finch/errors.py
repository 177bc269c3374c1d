"""Finch exception hierarchy.

Two disjoint kinds matter to callers: ``SchemaError`` is raised while a
form definition is compiled, ``FieldValidationError`` is raised inside a
validator and never escapes form construction.
"""


class FinchError(Exception):
    """Base for all finch-specific errors."""


class SchemaError(FinchError):
    """Raised when a form definition is malformed.

    Raised at definition time, before anything reaches the registry.

    Attributes:
        form: Name of the form being compiled.
        field: Name of the offending field, when one can be named.
    """

    def __init__(self, message: str, *, form: str = "", field: str | None = None) -> None:
        self.form = form
        self.field = field
        super().__init__(message)


class FieldValidationError(FinchError):
    """Raised by ``check()`` when an assertion inside a validator fails.

    Caught at the validator boundary and recorded as that field's error.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownFormError(FinchError, KeyError):
    """No form definition is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"No form registered as {self.name!r}"


class UnsupportedContentType(FinchError, ValueError):  # noqa: N818
    """A request body cannot be turned into form bindings."""
