"""Wire models for the xAI REST API.

Request models are frozen and reject unknown fields; response models ignore
fields they do not use. Optional request fields left as ``None`` are omitted
from the serialized body.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, JsonValue

MAX_TOKENS_LIMIT = 2**32 - 1


class Role(StrEnum):
    """Closed set of conversation roles accepted by the chat endpoint."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class _RequestModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_wire(self) -> dict[str, JsonValue]:
        """Return the JSON body with absent optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class _ResponseModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Message(_RequestModel):
    """One conversation turn.

    ``content`` is either plain text or an ordered list of multimodal parts
    and is forwarded unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    role: Role
    content: JsonValue | None = None
    tool_calls: list[JsonValue] | None = None
    tool_call_id: str | None = None


class ChatRequest(_RequestModel):
    """Body of ``POST /chat/completions``."""

    model: str
    messages: list[Message]
    temperature: float | None = None
    max_tokens: int | None = Field(default=None, ge=0, le=MAX_TOKENS_LIMIT)
    response_format: dict[str, JsonValue] | None = None
    tools: list[JsonValue] | None = None


class SearchInput(_RequestModel):
    """One text turn of a Responses API request."""

    role: Role
    content: str


class SearchRequest(_RequestModel):
    """Body of ``POST /responses`` with server-side search tools enabled."""

    model: str
    input: list[SearchInput]
    temperature: float | None = None
    max_output_tokens: int | None = Field(default=None, ge=0, le=MAX_TOKENS_LIMIT)
    tools: list[dict[str, JsonValue]] | None = None


class EmbeddingRequest(_RequestModel):
    """Body of ``POST /embeddings``."""

    model: str
    input: str | list[str]


class ChatResponseMessage(_ResponseModel):
    role: str
    content: str | None = None
    tool_calls: list[JsonValue] | None = None


class ChatChoice(_ResponseModel):
    message: ChatResponseMessage
    finish_reason: str | None = None


class ChatUsage(_ResponseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ChatResponse(_ResponseModel):
    """Parsed chat completion response."""

    choices: list[ChatChoice]
    usage: ChatUsage | None = None


class SearchOutputContent(_ResponseModel):
    type: str
    text: str | None = None


class SearchOutputItem(_ResponseModel):
    type: str
    role: str | None = None
    content: list[SearchOutputContent] | None = None


class SearchUsage(_ResponseModel):
    input_tokens: int
    output_tokens: int
    total_tokens: int


class SearchResponse(_ResponseModel):
    """Parsed Responses API result.

    Besides ``message`` items the output may contain tool-call records for
    the searches the server ran; citations are URLs or objects with a
    ``url`` key.
    """

    output: list[SearchOutputItem] = Field(default_factory=list)
    citations: list[JsonValue] | None = None
    usage: SearchUsage | None = None


class EmbeddingData(_ResponseModel):
    embedding: list[float]
    index: int


class EmbeddingUsage(_ResponseModel):
    prompt_tokens: int
    total_tokens: int


class EmbeddingResponse(_ResponseModel):
    """Parsed embeddings response."""

    data: list[EmbeddingData]
    usage: EmbeddingUsage | None = None


class ModelInfo(_ResponseModel):
    id: str
    owned_by: str | None = None


class ModelsResponse(_ResponseModel):
    """Parsed ``GET /models`` response."""

    data: list[ModelInfo]
