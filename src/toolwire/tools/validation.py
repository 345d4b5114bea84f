"""Argument validation against a tool's declared parameters.

Each :class:`ToolDefinition` is compiled once into a strict Pydantic
model. Validation errors are reduced to a single
:class:`SchemaViolationError` naming the first offending parameter and
whether it was missing, of the wrong type, or badly formatted.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    create_model,
)

from toolwire.core.errors import SchemaViolationError
from toolwire.tools.base import ParamType

if TYPE_CHECKING:
    from toolwire.tools.base import ParameterSpec, ToolDefinition

_URL_ADAPTER: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)

_TYPE_ANNOTATIONS: dict[ParamType, Any] = {
    ParamType.STRING: StrictStr,
    ParamType.NUMBER: StrictInt | StrictFloat,
    ParamType.BOOLEAN: StrictBool,
    ParamType.OBJECT: dict[str, Any],
}


def _check_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError as e:
        msg = f"not a valid URL: {value!r}"
        raise ValueError(msg) from e
    return value


_FORMAT_VALIDATORS = {
    "url": _check_url,
}


def _annotation_for(param: ParameterSpec) -> Any:
    annotation = _TYPE_ANNOTATIONS[param.type]
    if param.format in _FORMAT_VALIDATORS:
        annotation = Annotated[annotation, AfterValidator(_FORMAT_VALIDATORS[param.format])]
    return annotation


@lru_cache(maxsize=256)
def build_arguments_model(definition: ToolDefinition) -> type[BaseModel]:
    """Compile the parameter list of *definition* into a Pydantic model."""
    fields: dict[str, Any] = {}
    for param in definition.parameters:
        annotation = _annotation_for(param)
        if param.required:
            fields[param.name] = (annotation, ...)
        else:
            fields[param.name] = (annotation | None, None)
    model_name = "".join(part.capitalize() for part in definition.name.split("-"))
    return create_model(
        f"{model_name}Arguments",
        __config__=ConfigDict(extra="ignore"),
        **fields,
    )


def _reason_for(error_type: str) -> str:
    if error_type == "missing":
        return "missing"
    if error_type == "value_error":
        return "invalid format"
    return "wrong type"


def validate_arguments(definition: ToolDefinition, arguments: Any) -> dict[str, Any]:
    """Validate *arguments* for *definition* and return the accepted subset.

    Undeclared keys are dropped. Optional parameters passed as ``None``
    are treated as absent.

    Raises:
        SchemaViolationError: On the first missing, mistyped or
            malformed parameter.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise SchemaViolationError(
            definition.name,
            "arguments",
            "wrong type",
            f"expected an object, got {type(arguments).__name__}",
        )

    model = build_arguments_model(definition)
    try:
        validated = model.model_validate(dict(arguments))
    except ValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc") or ("arguments",)
        parameter = str(loc[0])
        spec = next((p for p in definition.parameters if p.name == parameter), None)
        reason = _reason_for(first["type"])
        if reason == "wrong type" and spec is not None:
            detail = f"expected {spec.type.value}, got {type(arguments.get(parameter)).__name__}"
        elif reason == "invalid format":
            detail = str(first.get("ctx", {}).get("error", first["msg"]))
        else:
            detail = None
        raise SchemaViolationError(definition.name, parameter, reason, detail) from e

    return {k: v for k, v in validated.model_dump().items() if v is not None}
