"""HTTP implementation of the xAI adapter over the shared async client."""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from packages.grok_shared.http import (
    AsyncHttpClient,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
)
from packages.grok_shared.logging import fields, get_logger, log_context, public_api_logged
from resources.adapters.xai.adapter import (
    AdapterApiError,
    AdapterSerializationError,
    AdapterTransportError,
    XaiAdapter,
)
from resources.adapters.xai.component import RESOURCE_COMPONENT_ID
from resources.adapters.xai.config import XaiAdapterSettings
from resources.adapters.xai.models import (
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    ModelsResponse,
    SearchRequest,
    SearchResponse,
)

_LOGGER = get_logger(__name__)

TResponse = TypeVar("TResponse", bound=BaseModel)


class HttpXaiAdapter(XaiAdapter):
    """xAI adapter issuing bearer-authenticated JSON calls with ``httpx``.

    One instance owns one connection pool shared by all concurrent calls.
    """

    def __init__(
        self,
        *,
        settings: XaiAdapterSettings,
        api_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = AsyncHttpClient(
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            bearer_token=api_key,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @public_api_logged(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    async def chat_completions(self, *, request: ChatRequest) -> ChatResponse:
        """Issue ``POST /chat/completions``."""
        return await self._call(
            "POST", "/chat/completions", body=request.to_wire(), response=ChatResponse
        )

    @public_api_logged(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    async def responses(self, *, request: SearchRequest) -> SearchResponse:
        """Issue ``POST /responses``."""
        return await self._call(
            "POST", "/responses", body=request.to_wire(), response=SearchResponse
        )

    @public_api_logged(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    async def embeddings(self, *, request: EmbeddingRequest) -> EmbeddingResponse:
        """Issue ``POST /embeddings``."""
        return await self._call(
            "POST", "/embeddings", body=request.to_wire(), response=EmbeddingResponse
        )

    @public_api_logged(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    async def list_models(self) -> ModelsResponse:
        """Issue ``GET /models``."""
        return await self._call("GET", "/models", body=None, response=ModelsResponse)

    async def _call(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | None,
        response: type[TResponse],
    ) -> TResponse:
        """Send one request and decode the body into ``response``."""
        try:
            payload = await self._client.send_json(method, path, body=body)
        except HttpStatusError as exc:
            with log_context(
                {
                    fields.HTTP_METHOD: method,
                    fields.HTTP_PATH: path,
                    fields.STATUS_CODE: exc.status_code,
                }
            ):
                _LOGGER.warning("xAI API request failed")
            raise AdapterApiError(
                status_code=exc.status_code, body=exc.response_body
            ) from None
        except HttpJsonDecodeError as exc:
            raise AdapterSerializationError(exc.cause or exc) from None
        except HttpRequestError as exc:
            raise AdapterTransportError(exc.cause or exc) from None

        try:
            return response.model_validate(payload)
        except ValidationError as exc:
            raise AdapterSerializationError(exc) from None
