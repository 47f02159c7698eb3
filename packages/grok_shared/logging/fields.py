"""Canonical logging field names for grok-chat components."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"

# Upstream call fields.
HTTP_METHOD = "http_method"
HTTP_PATH = "http_path"
STATUS_CODE = "status_code"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
