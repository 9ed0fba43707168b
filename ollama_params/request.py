from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator

from ollama_params.format import FormatJson, FormatType, StructuredJson, decode_format, encode_format
from ollama_params.keep_alive import (
    Indefinitely,
    KeepAlive,
    UnloadOnCompletion,
    Until,
    decode_keep_alive,
    encode_keep_alive,
)


def _coerce_format(value: Any) -> FormatType:
    if isinstance(value, (FormatJson, StructuredJson)):
        return value
    return decode_format(value)


def _coerce_keep_alive(value: Any) -> KeepAlive:
    if isinstance(value, (Indefinitely, UnloadOnCompletion, Until)):
        return value
    return decode_keep_alive(value)


FormatField = Annotated[FormatType, PlainValidator(_coerce_format), PlainSerializer(encode_format)]
KeepAliveField = Annotated[KeepAlive, PlainValidator(_coerce_keep_alive), PlainSerializer(encode_keep_alive)]


class _ModelRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    model: str = Field(..., min_length=1)
    format: FormatField | None = None
    options: dict[str, Any] | None = None
    keep_alive: KeepAliveField | None = None
    stream: bool = False

    def to_body(self) -> dict[str, Any]:
        """JSON body for the HTTP layer; unset optional fields are left out."""

        return self.model_dump(mode="json", exclude_none=True)


class GenerateRequest(_ModelRequest):
    """Body of `POST /api/generate`."""

    prompt: str
    suffix: str | None = None
    system: str | None = None
    images: list[str] | None = None
    raw: bool | None = None


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="forbid")

    role: str
    content: str
    images: list[str] | None = None


class ChatRequest(_ModelRequest):
    """Body of `POST /api/chat`."""

    messages: list[ChatMessage] = Field(default_factory=list)
