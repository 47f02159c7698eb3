"""Concrete Grok tool service implementation."""

from __future__ import annotations

from pydantic import BaseModel, ValidationError

from packages.grok_shared.errors import (
    ErrorDetail,
    codes,
    dependency_error,
    internal_error,
    invalid_params_error,
)
from packages.grok_shared.logging import get_logger, public_api_logged
from packages.grok_shared.result import Result, failure, success
from resources.adapters.xai.adapter import (
    AdapterApiError,
    AdapterError,
    AdapterSerializationError,
    AdapterTransportError,
    XaiAdapter,
)
from resources.adapters.xai.component import RESOURCE_COMPONENT_ID
from services.action.grok_tools.cache import ModelCache
from services.action.grok_tools.component import SERVICE_COMPONENT_ID
from services.action.grok_tools.config import GrokToolsServiceSettings
from services.action.grok_tools.messages import build_messages, build_vision_message
from services.action.grok_tools.rendering import (
    render_chat_response,
    render_embedding_response,
    render_model_listing,
    render_search_response,
)
from services.action.grok_tools.requests import (
    build_chat_request,
    build_embedding_request,
    build_search_request,
)
from services.action.grok_tools.service import GrokToolsService
from services.action.grok_tools.validation import (
    ImageDetail,
    SamplingParams,
    SearchType,
    VisionParams,
    issue_reason,
)

_LOGGER = get_logger(__name__)


class DefaultGrokToolsService(GrokToolsService):
    """Default tool service backed by an xAI adapter resource."""

    def __init__(
        self,
        *,
        settings: GrokToolsServiceSettings,
        adapter: XaiAdapter,
        cache: ModelCache | None = None,
    ) -> None:
        self._settings = settings
        self._adapter = adapter
        self._cache = cache or ModelCache(
            ttl_seconds=settings.models_cache_ttl_seconds
        )

    async def aclose(self) -> None:
        """Release adapter resources."""
        await self._adapter.aclose()

    @public_api_logged(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("model",)
    )
    async def chat(
        self,
        *,
        prompt: str,
        system_prompt: str | None = None,
        messages: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_schema: str | None = None,
    ) -> Result[str]:
        """Validate, assemble the conversation and run one chat completion."""
        _, errors = _validate_request(
            SamplingParams, temperature=temperature, max_tokens=max_tokens
        )
        if errors:
            return failure(errors=errors)

        conversation, errors = build_messages(
            system_prompt=system_prompt, history_json=messages, prompt=prompt
        )
        if errors:
            return failure(errors=errors)
        assert conversation is not None

        request, errors = build_chat_request(
            model=model,
            messages=conversation,
            temperature=temperature,
            max_tokens=max_tokens,
            response_schema=response_schema,
            default_model=self._settings.default_model,
        )
        if errors:
            return failure(errors=errors)
        assert request is not None

        try:
            response = await self._adapter.chat_completions(request=request)
        except AdapterError as exc:
            return _adapter_failure(exc)
        return success(payload=render_chat_response(response))

    @public_api_logged(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("model",)
    )
    async def chat_with_vision(
        self,
        *,
        prompt: str,
        image_url: str,
        detail: ImageDetail | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Result[str]:
        """Send one text + image user turn to the chat endpoint."""
        _, errors = _validate_request(
            VisionParams,
            image_url=image_url,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if errors:
            return failure(errors=errors)

        request, errors = build_chat_request(
            model=model,
            messages=[
                build_vision_message(
                    prompt=prompt,
                    image_url=image_url,
                    detail=detail or ImageDetail.HIGH,
                )
            ],
            temperature=temperature,
            max_tokens=max_tokens,
            response_schema=None,
            default_model=self._settings.default_model,
        )
        if errors:
            return failure(errors=errors)
        assert request is not None

        try:
            response = await self._adapter.chat_completions(request=request)
        except AdapterError as exc:
            return _adapter_failure(exc)
        return success(payload=render_chat_response(response))

    @public_api_logged(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("model",)
    )
    async def chat_with_search(
        self,
        *,
        prompt: str,
        system_prompt: str | None = None,
        search_type: SearchType | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Result[str]:
        """Run one Responses API call with search tools enabled."""
        _, errors = _validate_request(
            SamplingParams, temperature=temperature, max_tokens=max_tokens
        )
        if errors:
            return failure(errors=errors)

        request = build_search_request(
            model=model,
            system_prompt=system_prompt,
            prompt=prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            search_type=search_type,
            default_model=self._settings.default_model,
        )
        try:
            response = await self._adapter.responses(request=request)
        except AdapterError as exc:
            return _adapter_failure(exc)
        return success(payload=render_search_response(response))

    @public_api_logged(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("model",)
    )
    async def embedding(
        self,
        *,
        input: str,
        model: str | None = None,
    ) -> Result[str]:
        """Parse the JSON input and generate embeddings."""
        request, errors = build_embedding_request(
            raw_input=input,
            model=model,
            default_model=self._settings.default_embedding_model,
        )
        if errors:
            return failure(errors=errors)
        assert request is not None

        try:
            response = await self._adapter.embeddings(request=request)
        except AdapterError as exc:
            return _adapter_failure(exc)
        return success(payload=render_embedding_response(response))

    @public_api_logged(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    async def list_models(self) -> Result[str]:
        """Return the cached listing while fresh, otherwise fetch and cache it.

        Failed fetches are returned as errors and never cached.
        """
        cached = self._cache.get()
        if cached is not None:
            return success(payload=cached)

        try:
            response = await self._adapter.list_models()
        except AdapterError as exc:
            return _adapter_failure(exc)

        rendered = render_model_listing(response)
        self._cache.put(rendered)
        return success(payload=rendered)


def _validate_request(
    model: type[BaseModel], **values: object
) -> tuple[BaseModel | None, list[ErrorDetail]]:
    """Validate ingress values, reporting every rejected field."""
    try:
        return model.model_validate(values), []
    except ValidationError as exc:
        errors: list[ErrorDetail] = []
        for issue in exc.errors():
            field, reason = issue_reason(issue)
            errors.append(invalid_params_error(reason, metadata={"field": field}))
        return None, errors


def _adapter_failure(exc: AdapterError) -> Result[str]:
    """Map one adapter exception into a failed result carrying its text."""
    metadata = {"adapter": RESOURCE_COMPONENT_ID}
    if isinstance(exc, AdapterTransportError):
        error = dependency_error(
            str(exc), code=codes.DEPENDENCY_UNAVAILABLE, metadata=metadata
        )
    elif isinstance(exc, AdapterApiError):
        error = dependency_error(
            str(exc),
            code=codes.UPSTREAM_STATUS,
            retryable=exc.status_code >= 500 or exc.status_code == 429,
            metadata={**metadata, "status_code": str(exc.status_code)},
        )
    elif isinstance(exc, AdapterSerializationError):
        error = dependency_error(
            str(exc),
            code=codes.UPSTREAM_RESPONSE_INVALID,
            retryable=False,
            metadata=metadata,
        )
    else:
        error = internal_error(str(exc) or "xai adapter failure", metadata=metadata)
    return failure(errors=[error])
