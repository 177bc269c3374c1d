"""Finch — declarative field validation for submitted form data.

Declare a form once, bind it to whatever a request submitted, read back
per-field values and errors::

    from finch import LIST, define_form, make_form
    from finch.rules import each, integer, min_length

    define_form("post", [
        ("title", min_length, 1),
        (("tags", LIST), each, integer),
    ])

    form = make_form("post", [("title", "Hi"), ("tags", "1"), ("tags", "2")])
    form.is_valid            # True
    form.value("tags")       # [1, 2]

Finch neither parses HTTP requests nor renders HTML; see
``finch.bindings`` for turning request bodies into bindings.
"""

from finch.bindings import as_bindings, parse_form_body, parse_multipart, parse_urlencoded
from finch.check import Error, Value, check, fail
from finch.config import FormConfig
from finch.definition import FormDefinition, compile_form
from finch.errors import (
    FieldValidationError,
    FinchError,
    SchemaError,
    UnknownFormError,
    UnsupportedContentType,
)
from finch.fields import ARRAY, LIST, FieldKind, FieldSchema
from finch.form import Form
from finch.registry import FormRegistry, define_form, forms, make_form

__version__ = "0.1.0-dev"
__all__ = [
    "ARRAY",
    "LIST",
    "Error",
    "FieldKind",
    "FieldSchema",
    "FieldValidationError",
    "FinchError",
    "Form",
    "FormConfig",
    "FormDefinition",
    "FormRegistry",
    "SchemaError",
    "UnknownFormError",
    "UnsupportedContentType",
    "Value",
    "as_bindings",
    "check",
    "compile_form",
    "define_form",
    "fail",
    "forms",
    "make_form",
    "parse_form_body",
    "parse_multipart",
    "parse_urlencoded",
]
