"""Component identity for the Grok tool service."""

SERVICE_COMPONENT_ID = "service_grok_tools"
