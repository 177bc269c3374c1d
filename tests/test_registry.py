"""Tests for finch.registry — definition storage and form binding."""

import logging

import pytest

from finch import registry as registry_module
from finch.config import FormConfig
from finch.errors import SchemaError, UnknownFormError
from finch.fields import ARRAY
from finch.form import Form
from finch.registry import FormRegistry


def _keep(raw):
    return raw


class TestFormRegistry:
    def test_define_and_get(self) -> None:
        registry = FormRegistry()
        definition = registry.define("post", [("title", _keep)])
        assert registry.get("post") is definition
        assert "post" in registry
        assert len(registry) == 1
        assert list(registry) == ["post"]

    def test_get_unknown_raises(self) -> None:
        registry = FormRegistry()
        with pytest.raises(UnknownFormError, match="nope"):
            registry.get("nope")

    def test_unknown_form_error_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            FormRegistry().get("nope")

    def test_redefinition_replaces(self) -> None:
        registry = FormRegistry()
        registry.define("post", [("title", _keep)])
        second = registry.define("post", [("body", _keep)])
        assert registry.get("post") is second
        assert len(registry) == 1

    def test_failed_definition_leaves_prior_untouched(self) -> None:
        registry = FormRegistry()
        first = registry.define("post", [("title", _keep)])
        with pytest.raises(SchemaError):
            registry.define("post", [("title", _keep), ("title", _keep)])
        assert registry.get("post") is first

    def test_failed_definition_not_stored(self) -> None:
        registry = FormRegistry()
        with pytest.raises(SchemaError):
            registry.define("post", [(("title", "bogus"), _keep)])
        assert "post" not in registry

    def test_registries_are_isolated(self) -> None:
        a = FormRegistry()
        b = FormRegistry()
        a.define("post", [("title", _keep)])
        assert "post" not in b

    def test_bind_returns_form(self) -> None:
        registry = FormRegistry()
        registry.define("post", [("title", _keep)])
        form = registry.bind("post", [("title", "hi")])
        assert isinstance(form, Form)
        assert form.value("title") == "hi"

    def test_bind_without_bindings_is_unbound(self) -> None:
        registry = FormRegistry()
        registry.define("post", [("title", _keep)])
        assert not registry.bind("post").bound

    def test_bind_passes_config(self) -> None:
        registry = FormRegistry(config=FormConfig(max_array_length=3))
        registry.define("post", [(("slots", ARRAY), _keep)])
        form = registry.bind("post", [("slots[1]", "a"), ("slots[7]", "b")])
        assert form.raw_value("slots") == (None, "a")

    def test_logs_definitions(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = FormRegistry()
        with caplog.at_level(logging.DEBUG, logger="finch.registry"):
            registry.define("post", [("title", _keep)])
            registry.define("post", [("title", _keep)])
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("Defined form 'post'") for m in messages)
        assert any(m.startswith("Redefining form 'post'") for m in messages)


class TestProcessWideRegistry:
    @pytest.fixture(autouse=True)
    def _fresh_registry(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(registry_module, "forms", FormRegistry())

    def test_define_form_and_make_form(self) -> None:
        registry_module.define_form("post", [("title", _keep)])
        form = registry_module.make_form("post", {"title": "hi"})
        assert form.is_valid
        assert "post" in registry_module.forms

    def test_make_form_unknown(self) -> None:
        with pytest.raises(UnknownFormError):
            registry_module.make_form("nope")
