"""Request-parameter encoding for the Ollama HTTP API.

Two value types with exact wire encodings: the response `format`
(plain JSON or a reference-free JSON Schema) and the `keep_alive` duration.
No transport lives here; `request` only builds the JSON body.
"""

from ollama_params.config import OllamaSettings, settings_from_env
from ollama_params.format import (
    JSON,
    FormatJson,
    FormatType,
    SchemaParseError,
    StructuredJson,
    decode_format,
    encode_format,
    structured,
)
from ollama_params.keep_alive import (
    INDEFINITELY,
    UNLOAD_ON_COMPLETION,
    Indefinitely,
    KeepAlive,
    KeepAliveParseError,
    TimeUnit,
    UnloadOnCompletion,
    Until,
    decode_keep_alive,
    encode_keep_alive,
)
from ollama_params.request import ChatMessage, ChatRequest, GenerateRequest
from ollama_params.schema import JsonStructure, SchemaDescribable, UnsupportedSchemaError

__all__ = [
    "INDEFINITELY",
    "JSON",
    "UNLOAD_ON_COMPLETION",
    "ChatMessage",
    "ChatRequest",
    "FormatJson",
    "FormatType",
    "GenerateRequest",
    "Indefinitely",
    "JsonStructure",
    "KeepAlive",
    "KeepAliveParseError",
    "OllamaSettings",
    "SchemaDescribable",
    "SchemaParseError",
    "StructuredJson",
    "TimeUnit",
    "UnloadOnCompletion",
    "UnsupportedSchemaError",
    "Until",
    "decode_format",
    "decode_keep_alive",
    "encode_format",
    "encode_keep_alive",
    "settings_from_env",
    "structured",
]
