"""Request shaping for chat, search and embedding calls."""

from __future__ import annotations

import json
from typing import assert_never

from pydantic import JsonValue

from packages.grok_shared.errors import ErrorDetail, invalid_params_error
from resources.adapters.xai.models import (
    ChatRequest,
    EmbeddingRequest,
    Message,
    Role,
    SearchInput,
    SearchRequest,
)
from services.action.grok_tools.validation import SearchType

SCHEMA_NAME = "structured_output"
EMBEDDING_INPUT_ERROR = (
    "Invalid input JSON (must be a quoted string or array of strings)"
)


def build_response_format(
    response_schema: str,
) -> tuple[dict[str, JsonValue] | None, list[ErrorDetail]]:
    """Wrap a JSON schema document in the strict structured-output envelope."""
    try:
        schema = json.loads(response_schema)
    except (json.JSONDecodeError, RecursionError) as exc:
        return None, [_schema_error(str(exc))]
    if not isinstance(schema, dict):
        return None, [_schema_error("schema must be a JSON object")]
    return {
        "type": "json_schema",
        "json_schema": {"name": SCHEMA_NAME, "strict": True, "schema": schema},
    }, []


def build_chat_request(
    *,
    model: str | None,
    messages: list[Message],
    temperature: float | None,
    max_tokens: int | None,
    response_schema: str | None,
    default_model: str,
    tools: list[JsonValue] | None = None,
) -> tuple[ChatRequest | None, list[ErrorDetail]]:
    """Build a chat completion request, applying the default model."""
    response_format = None
    if response_schema is not None:
        response_format, errors = build_response_format(response_schema)
        if errors:
            return None, errors

    return ChatRequest(
        model=model if model is not None else default_model,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
        response_format=response_format,
        tools=tools,
    ), []


def search_tools(search_type: SearchType) -> list[dict[str, JsonValue]]:
    """Return the server-side tool list enabling the requested lookups."""
    match search_type:
        case SearchType.WEB:
            names: tuple[str, ...] = ("web_search",)
        case SearchType.X:
            names = ("x_search",)
        case SearchType.BOTH:
            names = ("web_search", "x_search")
        case _:
            assert_never(search_type)
    return [{"type": name} for name in names]


def build_search_request(
    *,
    model: str | None,
    system_prompt: str | None,
    prompt: str,
    temperature: float | None,
    max_tokens: int | None,
    search_type: SearchType | None,
    default_model: str,
) -> SearchRequest:
    """Build a Responses API request with search tools attached."""
    turns: list[SearchInput] = []
    if system_prompt is not None:
        turns.append(SearchInput(role=Role.SYSTEM, content=system_prompt))
    turns.append(SearchInput(role=Role.USER, content=prompt))

    return SearchRequest(
        model=model if model is not None else default_model,
        input=turns,
        temperature=temperature,
        max_output_tokens=max_tokens,
        tools=search_tools(search_type or SearchType.BOTH),
    )


def build_embedding_request(
    *,
    raw_input: str,
    model: str | None,
    default_model: str,
) -> tuple[EmbeddingRequest | None, list[ErrorDetail]]:
    """Parse the JSON-encoded input (string or array of strings)."""
    try:
        parsed = json.loads(raw_input)
    except (json.JSONDecodeError, RecursionError) as exc:
        return None, [_embedding_error(str(exc))]

    if not isinstance(parsed, str) and not (
        isinstance(parsed, list) and all(isinstance(item, str) for item in parsed)
    ):
        return None, [
            _embedding_error(
                f"expected a string or an array of strings, got {type(parsed).__name__}"
            )
        ]

    return EmbeddingRequest(
        model=model if model is not None else default_model,
        input=parsed,
    ), []


def _schema_error(detail: str) -> ErrorDetail:
    return invalid_params_error(
        f"Invalid response_schema JSON: {detail}",
        metadata={"field": "response_schema"},
    )


def _embedding_error(detail: str) -> ErrorDetail:
    return invalid_params_error(
        f"{EMBEDDING_INPUT_ERROR}: {detail}", metadata={"field": "input"}
    )
