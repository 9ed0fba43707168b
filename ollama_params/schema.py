from __future__ import annotations

import copy
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter

logger = logging.getLogger(__name__)

DRAFT_07 = "http://json-schema.org/draft-07/schema#"

_DEFINITION_TABLES = ("$defs", "definitions")

# Values under these keywords are instance data, not subschemas.
_DATA_KEYWORDS = frozenset({"const", "enum", "default", "examples"})
_SCHEMA_MAPS = frozenset({"properties", "patternProperties", "definitions", "$defs"})


class UnsupportedSchemaError(ValueError):
    pass


@runtime_checkable
class SchemaDescribable(Protocol):
    """Anything that can describe its own JSON shape (every pydantic model does)."""

    @classmethod
    def model_json_schema(cls, *args: Any, **kwargs: Any) -> dict[str, Any]:  # pragma: no cover
        ...


def describe_type(tp: Any) -> dict[str, Any]:
    """Generate a JSON Schema for `tp`.

    Pydantic models describe themselves; dataclasses, TypedDicts and plain
    containers go through a TypeAdapter.
    """

    if isinstance(tp, type) and isinstance(tp, SchemaDescribable):
        return tp.model_json_schema()
    return TypeAdapter(tp).json_schema()


def _pointer(table: str, name: str) -> str:
    escaped = name.replace("~", "~0").replace("/", "~1")
    return f"#/{table}/{escaped}"


def _walk_keywords(node: dict[str, Any], fn: Callable[[Any], Any]) -> dict[str, Any]:
    """Apply `fn` to every subschema of one schema object.

    Literal data (`const`, `enum`, ...) is copied untouched; name-to-schema
    maps (`properties`, ...) apply `fn` to their values only.
    """

    out: dict[str, Any] = {}
    for key, value in node.items():
        if key in _DATA_KEYWORDS:
            out[key] = copy.deepcopy(value)
        elif key in _SCHEMA_MAPS and isinstance(value, dict):
            out[key] = {name: fn(sub) for name, sub in value.items()}
        elif isinstance(value, list):
            out[key] = [fn(item) for item in value]
        else:
            out[key] = fn(value)
    return out


def _inline(node: Any, definitions: Mapping[str, Any], stack: tuple[str, ...]) -> Any:
    if not isinstance(node, dict):
        return copy.deepcopy(node)

    def recurse(sub: Any) -> Any:
        return _inline(sub, definitions, stack)

    ref = node.get("$ref")
    if not isinstance(ref, str):
        return _walk_keywords(node, recurse)

    if ref in stack or ref == "#":
        raise UnsupportedSchemaError(f"Recursive reference {ref!r} cannot be inlined")
    if ref not in definitions:
        raise UnsupportedSchemaError(f"Unresolvable reference {ref!r}")

    target = _inline(definitions[ref], definitions, (*stack, ref))
    siblings = _walk_keywords({key: value for key, value in node.items() if key != "$ref"}, recurse)
    if not isinstance(target, dict):
        # Boolean schemas (`true`/`false`) have nothing to merge siblings into.
        return target if not siblings else {"allOf": [target], **siblings}
    return {**target, **siblings}


def _to_draft07(node: Any) -> Any:
    if not isinstance(node, dict):
        return node

    out = _walk_keywords(node, _to_draft07)
    prefix = out.get("prefixItems")
    if isinstance(prefix, list):
        del out["prefixItems"]
        trailing = out.pop("items", None)
        out["items"] = prefix
        if trailing is not None:
            out["additionalItems"] = trailing
    return out


def inline_references(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of `document` with every local `$ref` replaced by its target.

    The service consuming these schemas cannot resolve references, so the
    definitions tables are dropped once everything is inlined.
    """

    definitions: dict[str, Any] = {}
    for table in _DEFINITION_TABLES:
        for name, sub in (document.get(table) or {}).items():
            definitions[_pointer(table, name)] = sub

    root = {key: value for key, value in document.items() if key not in _DEFINITION_TABLES}
    return _inline(root, definitions, ())


def normalize_root_schema(document: Mapping[str, Any]) -> dict[str, Any]:
    inlined = _to_draft07(inline_references(document))
    inlined.pop("$schema", None)
    return {"$schema": DRAFT_07, **inlined}


class JsonStructure:
    """A self-contained draft-07 root schema: no `$ref`, no definitions table.

    Build one from a type:

        class Output(BaseModel):
            answer: str

        structure = JsonStructure.from_type(Output)
    """

    __slots__ = ("_schema",)

    def __init__(self, schema: Mapping[str, Any]) -> None:
        self._schema = normalize_root_schema(schema)

    @classmethod
    def from_type(cls, tp: type[SchemaDescribable] | Any) -> JsonStructure:
        raw = describe_type(tp)
        structure = cls(raw)
        logger.debug(
            "Generated schema for %s (%d definitions inlined)",
            getattr(tp, "__name__", repr(tp)),
            sum(len(raw.get(table) or {}) for table in _DEFINITION_TABLES),
        )
        return structure

    @classmethod
    def from_schema(cls, document: Mapping[str, Any]) -> JsonStructure:
        return cls(document)

    @property
    def schema(self) -> dict[str, Any]:
        # Callers get a copy; the held document never changes after construction.
        return copy.deepcopy(self._schema)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonStructure):
            return NotImplemented
        return self._schema == other._schema

    def __hash__(self) -> int:
        return hash(json.dumps(self._schema, sort_keys=True))

    def __repr__(self) -> str:
        title = self._schema.get("title")
        return f"JsonStructure(title={title!r})"
