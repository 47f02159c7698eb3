"""Conversation assembly for chat and vision requests."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, JsonValue, TypeAdapter, ValidationError

from packages.grok_shared.errors import ErrorDetail, invalid_params_error
from resources.adapters.xai.models import Message, Role
from services.action.grok_tools.validation import ImageDetail

VALID_ROLES: tuple[str, ...] = tuple(role.value for role in Role)


class _HistoryEntry(BaseModel):
    """Shape of one caller-supplied history item before role checking."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    role: str
    content: JsonValue | None = None
    tool_calls: list[JsonValue] | None = None
    tool_call_id: str | None = None


_HISTORY_ADAPTER = TypeAdapter(list[_HistoryEntry])


def build_messages(
    *,
    system_prompt: str | None,
    history_json: str | None,
    prompt: str,
) -> tuple[list[Message] | None, list[ErrorDetail]]:
    """Assemble system turn, validated history and the new user turn in order.

    History parsing is all-or-nothing: any malformed item or unknown role
    rejects the whole call.
    """
    messages: list[Message] = []
    if system_prompt is not None:
        messages.append(Message(role=Role.SYSTEM, content=system_prompt))

    if history_json is not None:
        history, errors = parse_history(history_json)
        if errors:
            return None, errors
        assert history is not None
        messages.extend(history)

    messages.append(Message(role=Role.USER, content=prompt))
    return messages, []


def parse_history(raw: str) -> tuple[list[Message] | None, list[ErrorDetail]]:
    """Parse a JSON array of prior conversation turns."""
    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        return None, [_history_error(f"Invalid messages JSON: {exc}")]

    try:
        entries = _HISTORY_ADAPTER.validate_python(decoded)
    except ValidationError as exc:
        return None, [_history_error(f"Invalid messages JSON: {_first_issue(exc)}")]

    for entry in entries:
        if entry.role not in VALID_ROLES:
            return None, [
                _history_error(
                    f"Invalid role '{entry.role}' in messages; "
                    f"must be one of: {', '.join(VALID_ROLES)}"
                )
            ]

    return [
        Message(
            role=Role(entry.role),
            content=entry.content,
            tool_calls=entry.tool_calls,
            tool_call_id=entry.tool_call_id,
        )
        for entry in entries
    ], []


def build_vision_message(
    *,
    prompt: str,
    image_url: str,
    detail: ImageDetail = ImageDetail.HIGH,
) -> Message:
    """Build one user turn carrying a text part followed by an image part."""
    return Message(
        role=Role.USER,
        content=[
            {"type": "text", "text": prompt},
            {
                "type": "image_url",
                "image_url": {"url": image_url, "detail": ImageDetail(detail).value},
            },
        ],
    )


def _first_issue(exc: ValidationError) -> str:
    issue = exc.errors()[0]
    location = ".".join(str(item) for item in issue.get("loc", ()))
    message = issue.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def _history_error(message: str) -> ErrorDetail:
    return invalid_params_error(message, metadata={"field": "messages"})
