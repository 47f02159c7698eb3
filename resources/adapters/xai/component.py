"""Component identity for the xAI adapter resource."""

RESOURCE_COMPONENT_ID = "adapter_xai"
