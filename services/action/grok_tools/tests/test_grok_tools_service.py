"""Behavior tests for the Grok tool service implementation."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable

import httpx
import pytest

from packages.grok_shared.config import ConfigurationError, GrokSettings
from packages.grok_shared.errors import ErrorCategory, codes
from packages.grok_shared.result import Result
from resources.adapters.xai import (
    AdapterApiError,
    AdapterSerializationError,
    AdapterTransportError,
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    HttpXaiAdapter,
    ModelsResponse,
    SearchRequest,
    SearchResponse,
    XaiAdapter,
    XaiAdapterSettings,
)
from services.action.grok_tools.cache import ModelCache
from services.action.grok_tools.config import (
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_MODEL,
    GrokToolsServiceSettings,
    resolve_grok_tools_service_settings,
)
from services.action.grok_tools.implementation import DefaultGrokToolsService
from services.action.grok_tools.service import build_grok_tools_service
from services.action.grok_tools.validation import ImageDetail, SearchType

_CHAT_OK = {
    "choices": [
        {"message": {"role": "assistant", "content": "Hello!"}, "finish_reason": "stop"}
    ],
    "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
}


class _FakeAdapter(XaiAdapter):
    """In-memory adapter fake recording every request."""

    def __init__(self) -> None:
        self.chat_requests: list[ChatRequest] = []
        self.search_requests: list[SearchRequest] = []
        self.embedding_requests: list[EmbeddingRequest] = []
        self.list_calls = 0
        self.closed = False
        self.raise_error: Exception | None = None
        self.models_payload: dict[str, Any] = {
            "data": [{"id": "grok-3", "owned_by": "xai"}, {"id": "grok-2"}]
        }

    async def chat_completions(self, *, request: ChatRequest) -> ChatResponse:
        self.chat_requests.append(request)
        self._maybe_raise()
        return ChatResponse.model_validate(_CHAT_OK)

    async def responses(self, *, request: SearchRequest) -> SearchResponse:
        self.search_requests.append(request)
        self._maybe_raise()
        return SearchResponse.model_validate(
            {
                "output": [
                    {
                        "type": "message",
                        "content": [{"type": "output_text", "text": "Found."}],
                    }
                ],
                "citations": ["https://news.example"],
            }
        )

    async def embeddings(self, *, request: EmbeddingRequest) -> EmbeddingResponse:
        self.embedding_requests.append(request)
        self._maybe_raise()
        return EmbeddingResponse.model_validate(
            {"data": [{"embedding": [0.5, 0.25], "index": 0}]}
        )

    async def list_models(self) -> ModelsResponse:
        self.list_calls += 1
        self._maybe_raise()
        return ModelsResponse.model_validate(self.models_payload)

    async def aclose(self) -> None:
        self.closed = True

    def _maybe_raise(self) -> None:
        if self.raise_error is not None:
            raise self.raise_error


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _service(
    adapter: XaiAdapter, *, clock: _Clock | None = None
) -> DefaultGrokToolsService:
    return DefaultGrokToolsService(
        settings=GrokToolsServiceSettings(),
        adapter=adapter,
        cache=ModelCache(ttl_seconds=300, clock=clock or _Clock()),
    )


def _run(call: Callable[[], Awaitable[Result[str]]]) -> Result[str]:
    return asyncio.run(call())


def test_chat_uses_default_model_and_renders_response() -> None:
    adapter = _FakeAdapter()
    service = _service(adapter)

    result = _run(lambda: service.chat(prompt="hi", system_prompt="Be nice."))

    assert result.ok
    assert result.payload == (
        "Hello!\n[finish_reason: stop]\n[tokens: 10 prompt + 5 completion = 15 total]"
    )
    assert len(adapter.chat_requests) == 1
    sent = adapter.chat_requests[0].to_wire()
    assert sent == {
        "model": DEFAULT_MODEL,
        "messages": [
            {"role": "system", "content": "Be nice."},
            {"role": "user", "content": "hi"},
        ],
    }


def test_chat_appends_prompt_after_history_and_wraps_schema() -> None:
    adapter = _FakeAdapter()
    service = _service(adapter)
    history = json.dumps([{"role": "user", "content": "a"}, {"role": "assistant", "content": "b"}])

    result = _run(
        lambda: service.chat(
            prompt="c",
            messages=history,
            model="grok-3",
            temperature=1.0,
            max_tokens=64,
            response_schema='{"type": "object"}',
        )
    )

    assert result.ok
    request = adapter.chat_requests[0]
    assert [item.content for item in request.messages] == ["a", "b", "c"]
    assert request.model == "grok-3"
    assert request.temperature == 1.0
    assert request.max_tokens == 64
    assert request.response_format == {
        "type": "json_schema",
        "json_schema": {
            "name": "structured_output",
            "strict": True,
            "schema": {"type": "object"},
        },
    }


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature": 2.5},
        {"max_tokens": -1},
        {"messages": '[{"role": "robot", "content": "x"}]'},
        {"messages": "not json"},
        {"response_schema": "{oops"},
    ],
)
def test_chat_invalid_params_never_reach_adapter(kwargs: dict[str, Any]) -> None:
    adapter = _FakeAdapter()
    service = _service(adapter)

    result = _run(lambda: service.chat(prompt="hi", **kwargs))

    assert not result.ok
    assert result.invalid_params
    assert result.errors[0].code == codes.INVALID_PARAMS
    assert adapter.chat_requests == []


def test_chat_invalid_temperature_message() -> None:
    service = _service(_FakeAdapter())

    result = _run(lambda: service.chat(prompt="hi", temperature=2.5))

    assert result.error_text() == (
        "temperature must be a finite number between 0.0 and 2.0, got 2.5"
    )


@pytest.mark.parametrize(
    ("error", "code", "expected_text"),
    [
        (
            AdapterApiError(status_code=500, body="Internal Server Error"),
            codes.UPSTREAM_STATUS,
            "xAI API error (500): Internal Server Error",
        ),
        (
            AdapterApiError(status_code=429, body="slow down"),
            codes.UPSTREAM_STATUS,
            "xAI API error (429): slow down",
        ),
        (
            AdapterTransportError("connection refused"),
            codes.DEPENDENCY_UNAVAILABLE,
            "HTTP request failed: connection refused",
        ),
        (
            AdapterSerializationError("missing field `choices`"),
            codes.UPSTREAM_RESPONSE_INVALID,
            "Failed to parse xAI API response: missing field `choices`",
        ),
    ],
)
def test_chat_adapter_failures_become_error_results(
    error: Exception, code: str, expected_text: str
) -> None:
    adapter = _FakeAdapter()
    adapter.raise_error = error
    service = _service(adapter)

    result = _run(lambda: service.chat(prompt="hi"))

    assert not result.ok
    assert not result.invalid_params
    assert result.errors[0].code == code
    assert result.errors[0].category is ErrorCategory.DEPENDENCY
    assert result.error_text() == expected_text


def test_upstream_status_error_carries_status_metadata() -> None:
    adapter = _FakeAdapter()
    adapter.raise_error = AdapterApiError(status_code=429, body="slow down")

    result = _run(lambda: _service(adapter).chat(prompt="hi"))

    assert result.errors[0].metadata["status_code"] == "429"
    assert result.errors[0].retryable is True


def test_vision_sends_text_and_image_parts() -> None:
    adapter = _FakeAdapter()
    service = _service(adapter)

    result = _run(
        lambda: service.chat_with_vision(
            prompt="What is this?", image_url="https://example.com/cat.png"
        )
    )

    assert result.ok
    message = adapter.chat_requests[0].messages[0].to_wire()
    assert message == {
        "role": "user",
        "content": [
            {"type": "text", "text": "What is this?"},
            {
                "type": "image_url",
                "image_url": {"url": "https://example.com/cat.png", "detail": "high"},
            },
        ],
    }


def test_vision_rejects_non_http_image_url() -> None:
    adapter = _FakeAdapter()

    result = _run(
        lambda: _service(adapter).chat_with_vision(
            prompt="p", image_url="ftp://example.com/a.png", detail=ImageDetail.AUTO
        )
    )

    assert result.invalid_params
    assert result.error_text() == "image_url must start with http:// or https://"
    assert adapter.chat_requests == []


def test_search_defaults_to_web_and_x_tools() -> None:
    adapter = _FakeAdapter()

    result = _run(lambda: _service(adapter).chat_with_search(prompt="news?"))

    assert result.ok
    assert result.payload == "Found.\n\nSources:\n- https://news.example"
    request = adapter.search_requests[0]
    assert request.tools == [{"type": "web_search"}, {"type": "x_search"}]
    assert request.model == DEFAULT_MODEL


def test_search_with_explicit_type_and_limits() -> None:
    adapter = _FakeAdapter()

    result = _run(
        lambda: _service(adapter).chat_with_search(
            prompt="q",
            system_prompt="s",
            search_type=SearchType.WEB,
            max_tokens=32,
        )
    )

    assert result.ok
    request = adapter.search_requests[0]
    assert request.tools == [{"type": "web_search"}]
    assert request.max_output_tokens == 32
    assert [turn.content for turn in request.input] == ["s", "q"]


def test_search_rejects_invalid_temperature() -> None:
    adapter = _FakeAdapter()

    result = _run(
        lambda: _service(adapter).chat_with_search(prompt="q", temperature=-1.0)
    )

    assert result.invalid_params
    assert adapter.search_requests == []


def test_embedding_uses_default_model_and_renders_vectors() -> None:
    adapter = _FakeAdapter()

    result = _run(lambda: _service(adapter).embedding(input='["a", "b"]'))

    assert result.ok
    assert result.payload == "[0] dim=2 [0.500000, 0.250000, ...]"
    assert adapter.embedding_requests[0].to_wire() == {
        "model": DEFAULT_EMBEDDING_MODEL,
        "input": ["a", "b"],
    }


def test_embedding_rejects_unquoted_input() -> None:
    adapter = _FakeAdapter()

    result = _run(lambda: _service(adapter).embedding(input="hello"))

    assert result.invalid_params
    assert result.error_text().startswith(
        "Invalid input JSON (must be a quoted string or array of strings): "
    )
    assert adapter.embedding_requests == []


def test_list_models_is_served_from_cache_while_fresh() -> None:
    adapter = _FakeAdapter()
    clock = _Clock()
    service = _service(adapter, clock=clock)

    first = _run(service.list_models)
    adapter.models_payload = {"data": [{"id": "grok-9"}]}
    clock.now = 299.0
    second = _run(service.list_models)

    assert first.payload == "- grok-3 (xai)\n- grok-2 (xai)"
    assert second.payload == first.payload
    assert adapter.list_calls == 1


def test_list_models_refetches_after_ttl() -> None:
    adapter = _FakeAdapter()
    clock = _Clock()
    service = _service(adapter, clock=clock)

    _run(service.list_models)
    adapter.models_payload = {"data": [{"id": "grok-9"}]}
    clock.now = 300.0
    refreshed = _run(service.list_models)

    assert refreshed.payload == "- grok-9 (xai)"
    assert adapter.list_calls == 2


def test_list_models_failure_is_not_cached() -> None:
    adapter = _FakeAdapter()
    service = _service(adapter)
    adapter.raise_error = AdapterApiError(status_code=503, body="unavailable")

    failed = _run(service.list_models)
    adapter.raise_error = None
    recovered = _run(service.list_models)

    assert not failed.ok
    assert failed.error_text() == "xAI API error (503): unavailable"
    assert recovered.ok
    assert adapter.list_calls == 2


def test_http_stack_maps_500_to_error_result() -> None:
    """A real HTTP adapter over a mock transport should surface status and body."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="Internal Server Error")

    adapter = HttpXaiAdapter(
        settings=XaiAdapterSettings(base_url="https://api.example.test/v1"),
        api_key="k",
        transport=httpx.MockTransport(handler),
    )
    service = _service(adapter)

    async def _call() -> Result[str]:
        try:
            return await service.chat(prompt="hi")
        finally:
            await service.aclose()

    result = asyncio.run(_call())

    assert not result.ok
    assert "500" in result.error_text()
    assert "Internal Server Error" in result.error_text()


def test_http_stack_maps_unparsable_success_body_to_error_result() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    adapter = HttpXaiAdapter(
        settings=XaiAdapterSettings(base_url="https://api.example.test/v1"),
        api_key="k",
        transport=httpx.MockTransport(handler),
    )
    service = _service(adapter)

    async def _call() -> Result[str]:
        try:
            return await service.list_models()
        finally:
            await service.aclose()

    result = asyncio.run(_call())

    assert result.errors[0].code == codes.UPSTREAM_RESPONSE_INVALID
    assert result.error_text().startswith("Failed to parse xAI API response: ")


def test_resolve_service_settings_defaults_and_overrides() -> None:
    assert resolve_grok_tools_service_settings(
        GrokSettings(components={})
    ) == GrokToolsServiceSettings()

    resolved = resolve_grok_tools_service_settings(
        GrokSettings(
            components={
                "service": {
                    "grok_tools": {
                        "default_model": "grok-3",
                        "models_cache_ttl_seconds": 60,
                    }
                }
            }
        )
    )

    assert resolved.default_model == "grok-3"
    assert resolved.default_embedding_model == DEFAULT_EMBEDDING_MODEL
    assert resolved.models_cache_ttl_seconds == 60.0


def test_build_service_with_injected_adapter() -> None:
    adapter = _FakeAdapter()
    service = build_grok_tools_service(settings=GrokSettings(components={}), adapter=adapter)

    result = _run(lambda: service.chat(prompt="hi"))

    assert result.ok
    assert len(adapter.chat_requests) == 1


def test_build_service_without_credential_fails_at_startup(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("XAI_API_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        build_grok_tools_service(settings=GrokSettings(components={}))


def _http_service(
    handler: Callable[[httpx.Request], httpx.Response],
) -> DefaultGrokToolsService:
    adapter = HttpXaiAdapter(
        settings=XaiAdapterSettings(base_url="https://api.example.test/v1"),
        api_key="k",
        transport=httpx.MockTransport(handler),
    )
    return _service(adapter)


def test_http_stack_maps_redirect_to_upstream_status_error() -> None:
    service = _http_service(lambda request: httpx.Response(307, text="moved elsewhere"))

    async def _call() -> Result[str]:
        try:
            return await service.chat(prompt="hi")
        finally:
            await service.aclose()

    result = asyncio.run(_call())

    assert result.errors[0].code == codes.UPSTREAM_STATUS
    assert result.errors[0].metadata["status_code"] == "307"
    assert result.error_text() == "xAI API error (307): moved elsewhere"


def test_http_stack_maps_deeply_nested_success_body_to_error_result() -> None:
    service = _http_service(lambda request: httpx.Response(200, text="[" * 100_000))

    async def _call() -> Result[str]:
        try:
            return await service.list_models()
        finally:
            await service.aclose()

    result = asyncio.run(_call())

    assert result.errors[0].code == codes.UPSTREAM_RESPONSE_INVALID
    assert result.error_text().startswith("Failed to parse xAI API response: ")


@pytest.mark.parametrize(
    ("kwargs", "prefix"),
    [
        ({"messages": "[" * 100_000}, "Invalid messages JSON: "),
        ({"response_schema": "[" * 100_000}, "Invalid response_schema JSON: "),
    ],
)
def test_chat_deeply_nested_json_is_invalid_params(
    kwargs: dict[str, Any], prefix: str
) -> None:
    adapter = _FakeAdapter()

    result = _run(lambda: _service(adapter).chat(prompt="hi", **kwargs))

    assert result.invalid_params
    assert result.error_text().startswith(prefix)
    assert adapter.chat_requests == []


def test_embedding_deeply_nested_input_is_invalid_params() -> None:
    adapter = _FakeAdapter()

    result = _run(lambda: _service(adapter).embedding(input="[" * 100_000))

    assert result.invalid_params
    assert result.error_text().startswith(
        "Invalid input JSON (must be a quoted string or array of strings): "
    )
    assert adapter.embedding_requests == []


def test_vision_without_detail_requests_high_detail() -> None:
    adapter = _FakeAdapter()

    result = _run(
        lambda: _service(adapter).chat_with_vision(
            prompt="p", image_url="https://example.com/a.png", detail=None
        )
    )

    assert result.ok
    content = adapter.chat_requests[0].messages[0].content
    assert isinstance(content, list)
    assert content[1] == {
        "type": "image_url",
        "image_url": {"url": "https://example.com/a.png", "detail": "high"},
    }
