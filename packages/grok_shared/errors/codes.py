"""Shared error code constants.

These constants are stable machine-readable identifiers. Component-specific
codes should extend this set locally rather than modifying it for one caller.
"""

# Validation
INVALID_PARAMS = "INVALID_PARAMS"

# Dependency / external system
DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
UPSTREAM_STATUS = "UPSTREAM_STATUS"
UPSTREAM_RESPONSE_INVALID = "UPSTREAM_RESPONSE_INVALID"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"
