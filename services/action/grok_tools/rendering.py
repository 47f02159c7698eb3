"""Deterministic text rendering of xAI API responses."""

from __future__ import annotations

import json

from resources.adapters.xai.models import (
    ChatResponse,
    EmbeddingResponse,
    ModelsResponse,
    Role,
    SearchResponse,
)

EMBEDDING_PREVIEW_LENGTH = 5
DEFAULT_OWNER = "xai"


def render_chat_response(response: ChatResponse) -> str:
    """Render choices in order followed by an optional token usage line."""
    parts: list[str] = []
    for choice in response.choices:
        message = choice.message
        text = ""
        if message.role != Role.ASSISTANT.value:
            text += f"[{message.role}] "
        if message.content is not None:
            text += message.content
        if message.tool_calls is not None:
            text += f"\nTool calls: {_format_tool_calls(message.tool_calls)}"
        if choice.finish_reason is not None:
            text += f"\n[finish_reason: {choice.finish_reason}]"
        parts.append(text)

    rendered = "\n".join(parts)
    if response.usage is not None:
        usage = response.usage
        rendered += (
            f"\n[tokens: {usage.prompt_tokens} prompt + "
            f"{usage.completion_tokens} completion = {usage.total_tokens} total]"
        )
    return rendered


def render_search_response(response: SearchResponse) -> str:
    """Render the assistant output text, cited sources and token usage."""
    segments: list[str] = []
    for item in response.output:
        if item.type != "message" or item.content is None:
            continue
        segments.extend(
            part.text
            for part in item.content
            if part.type == "output_text" and part.text is not None
        )

    rendered = "\n".join(segments)
    if response.citations:
        sources = "\n".join(f"- {_citation_url(item)}" for item in response.citations)
        rendered += f"\n\nSources:\n{sources}"
    if response.usage is not None:
        usage = response.usage
        rendered += (
            f"\n[tokens: {usage.input_tokens} input + "
            f"{usage.output_tokens} output = {usage.total_tokens} total]"
        )
    return rendered


def render_embedding_response(response: EmbeddingResponse) -> str:
    """Render one preview line per vector followed by token usage."""
    lines = []
    for item in response.data:
        preview = ", ".join(
            f"{value:.6f}" for value in item.embedding[:EMBEDDING_PREVIEW_LENGTH]
        )
        lines.append(f"[{item.index}] dim={len(item.embedding)} [{preview}, ...]")

    rendered = "\n".join(lines)
    if response.usage is not None:
        rendered += (
            f"\n[tokens: {response.usage.prompt_tokens} prompt, "
            f"{response.usage.total_tokens} total]"
        )
    return rendered


def render_model_listing(response: ModelsResponse) -> str:
    """Render one ``- id (owner)`` line per model."""
    return "\n".join(
        f"- {model.id} ({model.owned_by or DEFAULT_OWNER})" for model in response.data
    )


def _format_tool_calls(tool_calls: object) -> str:
    try:
        return json.dumps(tool_calls, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        return f"<failed to format tool calls: {exc}>"


def _citation_url(citation: object) -> str:
    if isinstance(citation, str):
        return citation
    if isinstance(citation, dict) and isinstance(citation.get("url"), str):
        return citation["url"]
    return json.dumps(citation, ensure_ascii=False)
