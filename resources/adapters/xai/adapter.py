"""Transport-agnostic xAI adapter contract and error types."""

from __future__ import annotations

from typing import Protocol

from resources.adapters.xai.models import (
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    ModelsResponse,
    SearchRequest,
    SearchResponse,
)


class AdapterError(Exception):
    """Base exception for adapter-level failures."""


class AdapterTransportError(AdapterError):
    """The request never produced an HTTP response (connect, timeout, TLS)."""

    def __init__(self, cause: object) -> None:
        super().__init__(f"HTTP request failed: {cause}")
        self.cause = cause


class AdapterApiError(AdapterError):
    """The API answered with a non-success status."""

    def __init__(self, *, status_code: int, body: str) -> None:
        super().__init__(f"xAI API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class AdapterSerializationError(AdapterError):
    """A success response body could not be decoded into the expected shape."""

    def __init__(self, detail: object) -> None:
        super().__init__(f"Failed to parse xAI API response: {detail}")
        self.detail = detail


class XaiAdapter(Protocol):
    """Protocol for the four xAI API calls used by the tool service."""

    async def chat_completions(self, *, request: ChatRequest) -> ChatResponse:
        """Issue one chat completion."""

    async def responses(self, *, request: SearchRequest) -> SearchResponse:
        """Issue one search-augmented Responses API call."""

    async def embeddings(self, *, request: EmbeddingRequest) -> EmbeddingResponse:
        """Generate embeddings for one input."""

    async def list_models(self) -> ModelsResponse:
        """List models available to the configured credential."""

    async def aclose(self) -> None:
        """Release transport resources."""
