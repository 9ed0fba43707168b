from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ollama_params.schema import JsonStructure, UnsupportedSchemaError

logger = logging.getLogger(__name__)


class SchemaParseError(ValueError):
    """A `format` value was neither "json" nor a usable root schema document."""

    def __init__(self, diagnostic: str) -> None:
        super().__init__(f"Invalid format schema: {diagnostic}")
        self.diagnostic = diagnostic


@dataclass(frozen=True, slots=True)
class FormatJson:
    """Ask for any well-formed JSON."""


@dataclass(frozen=True, slots=True)
class StructuredJson:
    """Ask for JSON matching a schema (needs Ollama 0.5.0 or newer)."""

    schema: JsonStructure


FormatType: TypeAlias = FormatJson | StructuredJson

JSON = FormatJson()


class _RootSchemaDocument(BaseModel):
    """Shape check for decoded schemas; unknown keywords are kept as extras."""

    model_config = ConfigDict(extra="allow", strict=True)

    meta_schema: str | None = Field(default=None, alias="$schema")
    title: str | None = None
    description: str | None = None
    type: str | list[str] | None = None
    properties: dict[str, dict[str, Any] | bool] | None = None
    required: list[str] | None = None
    definitions: dict[str, dict[str, Any] | bool] | None = None
    defs: dict[str, dict[str, Any] | bool] | None = Field(default=None, alias="$defs")


def structured(tp: Any) -> StructuredJson:
    return StructuredJson(JsonStructure.from_type(tp))


def encode_format(fmt: FormatType) -> str | dict[str, Any]:
    """Wire value for the `format` request field.

    The structured case is embedded as a JSON object, not a JSON-encoded string.
    """

    match fmt:
        case FormatJson():
            return "json"
        case StructuredJson(schema=structure):
            return structure.schema


def decode_format(raw: Any) -> FormatType:
    """Rebuild a FormatType from wire data.

    Accepts "json", a JSON-encoded schema string, or the embedded schema
    object that `encode_format` produces.
    """

    if raw == "json":
        return JSON

    try:
        if isinstance(raw, str):
            doc = _RootSchemaDocument.model_validate_json(raw)
        elif isinstance(raw, Mapping):
            doc = _RootSchemaDocument.model_validate(dict(raw))
        else:
            raise SchemaParseError(f"expected a string or an object, got {type(raw).__name__}")
    except ValidationError as e:
        logger.debug("Rejected format value: %s", e)
        raise SchemaParseError(str(e)) from e

    document = doc.model_dump(by_alias=True, exclude_unset=True)
    try:
        return StructuredJson(JsonStructure.from_schema(document))
    except UnsupportedSchemaError as e:
        raise SchemaParseError(str(e)) from e
