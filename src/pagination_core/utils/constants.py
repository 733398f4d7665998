"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

# ============================================================================
# Error Codes
# ============================================================================

# Configuration Errors
ERROR_CODE_INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

# State Errors
ERROR_CODE_SUBSCRIBER_ALREADY_REGISTERED = "SUBSCRIBER_ALREADY_REGISTERED"
ERROR_CODE_STATE_MACHINE_CLOSED = "STATE_MACHINE_CLOSED"
ERROR_CODE_MANAGER_CLOSED = "MANAGER_CLOSED"

# ============================================================================
# Pagination Constraints
# ============================================================================

FIRST_PAGE = 1
DEFAULT_LIMIT_PER_PAGE = 20
DEFAULT_LIMIT_PER_PAGE_IN_SEARCH = 20
MIN_LIMIT_PER_PAGE = 1

# ============================================================================
# Search Constraints
# ============================================================================

DEFAULT_DEBOUNCE_MS = 300
MIN_DEBOUNCE_MS = 0
DEFAULT_SEARCH_FIELD = "title"

# ============================================================================
# User-facing Failure Messages
# ============================================================================

MESSAGE_MALFORMED_PAGE = "The data format is incorrect. Please check the response format."
MESSAGE_FETCH_TIMEOUT = "The request took too long to process. Please try again."
MESSAGE_FETCH_UNAVAILABLE = "Unable to connect to required services. Please try again later."
MESSAGE_FETCH_UNEXPECTED = "We encountered an issue loading more items. Please try again."

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_LIMIT_PER_PAGE = "PAGINATION_LIMIT_PER_PAGE"
ENV_LIMIT_PER_PAGE_IN_SEARCH = "PAGINATION_LIMIT_PER_PAGE_IN_SEARCH"
ENV_DEBOUNCE_MS = "PAGINATION_DEBOUNCE_MS"

# ============================================================================
# Helper Functions
# ============================================================================


def debounce_seconds(debounce_ms: int) -> float:
    """Convert a debounce delay in milliseconds to seconds for asyncio."""
    return debounce_ms / 1000.0
