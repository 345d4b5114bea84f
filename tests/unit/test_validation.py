"""Tests for argument validation against parameter schemas."""

from __future__ import annotations

import pytest

from toolwire.core.errors import SchemaViolationError
from toolwire.tools.base import ParameterSpec, ParamType
from toolwire.tools.validation import build_arguments_model, validate_arguments

_ALL_TYPES = (
    ParameterSpec("s", ParamType.STRING),
    ParameterSpec("n", ParamType.NUMBER),
    ParameterSpec("b", ParamType.BOOLEAN),
    ParameterSpec("o", ParamType.OBJECT),
)


def _violation(definition, arguments) -> SchemaViolationError:
    with pytest.raises(SchemaViolationError) as exc_info:
        validate_arguments(definition, arguments)
    return exc_info.value


class TestAccepts:
    def test_all_types(self, make_definition):
        definition = make_definition(parameters=_ALL_TYPES)
        args = {"s": "x", "n": 2.5, "b": False, "o": {"k": [1, 2]}}
        assert validate_arguments(definition, args) == args

    def test_number_accepts_int(self, make_definition):
        definition = make_definition(parameters=(ParameterSpec("n", ParamType.NUMBER),))
        assert validate_arguments(definition, {"n": 3}) == {"n": 3}

    def test_empty_string_is_a_string(self, make_definition):
        definition = make_definition()
        assert validate_arguments(definition, {"value": ""}) == {"value": ""}

    def test_no_parameters_accepts_none(self, make_definition):
        definition = make_definition(parameters=())
        assert validate_arguments(definition, None) == {}

    def test_undeclared_arguments_dropped(self, make_definition):
        definition = make_definition()
        assert validate_arguments(definition, {"value": "v", "extra": 1}) == {"value": "v"}

    def test_optional_absent_is_omitted(self, make_definition):
        definition = make_definition(
            parameters=(ParameterSpec("a"), ParameterSpec("b", required=False)),
        )
        assert validate_arguments(definition, {"a": "x"}) == {"a": "x"}

    def test_optional_none_is_omitted(self, make_definition):
        definition = make_definition(
            parameters=(ParameterSpec("a"), ParameterSpec("b", required=False)),
        )
        assert validate_arguments(definition, {"a": "x", "b": None}) == {"a": "x"}

    def test_valid_url(self, make_definition):
        definition = make_definition(parameters=(ParameterSpec("url", format="url"),))
        args = {"url": "https://example.com/path?q=1"}
        assert validate_arguments(definition, args) == args


class TestRejects:
    def test_missing(self, make_definition):
        err = _violation(make_definition(), {})
        assert err.parameter == "value"
        assert err.reason == "missing"
        assert "parameter 'value' missing" in str(err)

    def test_none_arguments_with_required_param(self, make_definition):
        err = _violation(make_definition(), None)
        assert err.reason == "missing"

    def test_non_mapping_arguments(self, make_definition):
        err = _violation(make_definition(), ["value"])
        assert err.parameter == "arguments"
        assert err.reason == "wrong type"

    @pytest.mark.parametrize(
        ("param_type", "bad_value"),
        [
            (ParamType.STRING, 5),
            (ParamType.STRING, None),
            (ParamType.NUMBER, "3"),
            (ParamType.NUMBER, True),
            (ParamType.BOOLEAN, "true"),
            (ParamType.BOOLEAN, 1),
            (ParamType.OBJECT, [1, 2]),
            (ParamType.OBJECT, "{}"),
        ],
    )
    def test_wrong_type(self, make_definition, param_type, bad_value):
        definition = make_definition(parameters=(ParameterSpec("p", param_type),))
        err = _violation(definition, {"p": bad_value})
        assert err.parameter == "p"
        assert err.reason == "wrong type"
        assert f"expected {param_type.value}" in str(err)

    def test_invalid_url_format(self, make_definition):
        definition = make_definition(parameters=(ParameterSpec("url", format="url"),))
        err = _violation(definition, {"url": "not a url"})
        assert err.parameter == "url"
        assert err.reason == "invalid format"

    def test_non_http_url_rejected(self, make_definition):
        definition = make_definition(parameters=(ParameterSpec("url", format="url"),))
        err = _violation(definition, {"url": "ftp://example.com/file"})
        assert err.reason == "invalid format"

    def test_message_names_tool(self, make_definition):
        err = _violation(make_definition("calculate"), {"value": 1})
        assert str(err).startswith("Invalid arguments for tool 'calculate'")


class TestModelCache:
    def test_model_built_once_per_definition(self, make_definition):
        definition = make_definition()
        assert build_arguments_model(definition) is build_arguments_model(definition)

    def test_model_name(self, make_definition):
        model = build_arguments_model(make_definition("list-directory"))
        assert model.__name__ == "ListDirectoryArguments"
