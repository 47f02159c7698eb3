"""xAI adapter resource exports."""

from resources.adapters.xai.adapter import (
    AdapterApiError,
    AdapterError,
    AdapterSerializationError,
    AdapterTransportError,
    XaiAdapter,
)
from resources.adapters.xai.component import RESOURCE_COMPONENT_ID
from resources.adapters.xai.config import (
    DEFAULT_BASE_URL,
    XaiAdapterSettings,
    resolve_api_key,
    resolve_xai_adapter_settings,
)
from resources.adapters.xai.models import (
    MAX_TOKENS_LIMIT,
    ChatChoice,
    ChatRequest,
    ChatResponse,
    ChatResponseMessage,
    ChatUsage,
    EmbeddingData,
    EmbeddingRequest,
    EmbeddingResponse,
    EmbeddingUsage,
    Message,
    ModelInfo,
    ModelsResponse,
    Role,
    SearchInput,
    SearchOutputContent,
    SearchOutputItem,
    SearchRequest,
    SearchResponse,
    SearchUsage,
)
from resources.adapters.xai.xai_adapter import HttpXaiAdapter

__all__ = [
    "AdapterApiError",
    "AdapterError",
    "AdapterSerializationError",
    "AdapterTransportError",
    "ChatChoice",
    "ChatRequest",
    "ChatResponse",
    "ChatResponseMessage",
    "ChatUsage",
    "DEFAULT_BASE_URL",
    "EmbeddingData",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "EmbeddingUsage",
    "HttpXaiAdapter",
    "MAX_TOKENS_LIMIT",
    "Message",
    "ModelInfo",
    "ModelsResponse",
    "RESOURCE_COMPONENT_ID",
    "Role",
    "SearchInput",
    "SearchOutputContent",
    "SearchOutputItem",
    "SearchRequest",
    "SearchResponse",
    "SearchUsage",
    "XaiAdapter",
    "XaiAdapterSettings",
    "resolve_api_key",
    "resolve_xai_adapter_settings",
]
