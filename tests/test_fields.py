"""Tests for finch.fields and finch.definition — declaration compilation."""

import pytest

from finch.definition import compile_form
from finch.errors import SchemaError
from finch.fields import ARRAY, LIST, FieldKind, compile_field, field_key


def _keep(raw):
    return raw


class TestFieldKey:
    def test_lowercases(self) -> None:
        assert field_key("Title") == "title"

    def test_ignores_separators(self) -> None:
        assert field_key("error_field") == field_key("error-field") == field_key("ERROR-FIELD")

    def test_camel_case_matches_kebab(self) -> None:
        assert field_key("errorField") == field_key("error-field")


class TestCompileField:
    def test_bare_name_is_scalar(self) -> None:
        f = compile_field(("title", _keep))
        assert f.name == "title"
        assert f.kind is FieldKind.SCALAR
        assert f.validator is _keep
        assert f.extra_args == ()

    def test_list_kind(self) -> None:
        assert compile_field((("tags", LIST), _keep)).kind is FieldKind.LIST

    def test_array_kind(self) -> None:
        assert compile_field((("slots", ARRAY), _keep)).kind is FieldKind.ARRAY

    def test_string_tags(self) -> None:
        assert compile_field((("tags", "list"), _keep)).kind is FieldKind.LIST
        assert compile_field((("slots", "ARRAY"), _keep)).kind is FieldKind.ARRAY

    def test_extra_args_kept_in_order(self) -> None:
        f = compile_field(("title", _keep, 1, "two", None))
        assert f.extra_args == (1, "two", None)

    def test_key_is_normalized(self) -> None:
        assert compile_field(("intField", _keep)).key == "intfield"

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(SchemaError, match="unknown kind") as exc_info:
            compile_field((("tags", "set"), _keep), form="post")
        assert exc_info.value.form == "post"
        assert exc_info.value.field == "tags"

    def test_scalar_tag_rejected(self) -> None:
        with pytest.raises(SchemaError):
            compile_field((("title", FieldKind.SCALAR), _keep))

    def test_three_element_name_rejected(self) -> None:
        with pytest.raises(SchemaError):
            compile_field((("tags", LIST, "extra"), _keep))

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(SchemaError, match="non-empty"):
            compile_field(("", _keep))

    def test_non_string_name_rejected(self) -> None:
        with pytest.raises(SchemaError):
            compile_field(((42, LIST), _keep))

    def test_missing_validator_rejected(self) -> None:
        with pytest.raises(SchemaError, match="callable"):
            compile_field(("title",))

    def test_non_callable_validator_rejected(self) -> None:
        with pytest.raises(SchemaError, match="callable"):
            compile_field(("title", "not a function"))

    def test_empty_declaration_rejected(self) -> None:
        with pytest.raises(SchemaError):
            compile_field(())

    def test_bare_string_declaration_rejected(self) -> None:
        with pytest.raises(SchemaError):
            compile_field("title")


class TestWantsForm:
    def test_plain_validator(self) -> None:
        assert not compile_field(("a", _keep)).wants_form

    def test_keyword_only_form(self) -> None:
        def v(raw, *, form):
            return raw

        assert compile_field(("a", v)).wants_form

    def test_positional_form_is_an_extra_arg(self) -> None:
        def v(raw, form):
            return raw

        assert not compile_field(("a", v, ("x", "y"))).wants_form

    def test_var_kwargs_do_not_count(self) -> None:
        def v(raw, **kwargs):
            return raw

        assert not compile_field(("a", v)).wants_form

    def test_builtin_validator(self) -> None:
        f = compile_field(("a", int))
        assert f.validator is int
        assert not f.wants_form


class TestCompileForm:
    def test_keeps_declaration_order(self) -> None:
        definition = compile_form("post", [("b", _keep), ("a", _keep), (("c", LIST), _keep)])
        assert [f.name for f in definition] == ["b", "a", "c"]
        assert len(definition) == 3

    def test_empty_form(self) -> None:
        assert len(compile_form("empty", [])) == 0

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(SchemaError, match="duplicate field") as exc_info:
            compile_form("post", [("title", _keep), ("title", _keep)])
        assert exc_info.value.field == "title"

    def test_duplicate_across_kinds_rejected(self) -> None:
        with pytest.raises(SchemaError):
            compile_form("post", [("tags", _keep), (("tags", LIST), _keep)])

    def test_duplicate_after_normalization_rejected(self) -> None:
        with pytest.raises(SchemaError):
            compile_form("post", [("int_field", _keep), ("int-field", _keep)])

    def test_bad_form_name_rejected(self) -> None:
        with pytest.raises(SchemaError):
            compile_form("", [("title", _keep)])

    def test_find_is_case_insensitive(self) -> None:
        definition = compile_form("post", [("error_field", _keep)])
        assert definition.find("ERROR-FIELD") is definition.fields[0]
        assert "errorField" in definition
        assert definition.find("missing") is None

    def test_field_raises_for_unknown(self) -> None:
        definition = compile_form("post", [("title", _keep)])
        with pytest.raises(KeyError, match="missing"):
            definition.field("missing")
