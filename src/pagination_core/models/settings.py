"""
Pydantic model for pagination configuration.
"""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pagination_core.models.errors import InvalidConfigurationError
from pagination_core.utils.constants import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_LIMIT_PER_PAGE,
    DEFAULT_LIMIT_PER_PAGE_IN_SEARCH,
    ENV_DEBOUNCE_MS,
    ENV_LIMIT_PER_PAGE,
    ENV_LIMIT_PER_PAGE_IN_SEARCH,
    MIN_DEBOUNCE_MS,
    MIN_LIMIT_PER_PAGE,
)
from pagination_core.utils.validators import validate_model


class PaginationSettings(BaseModel):
    """
    Configuration surface of a paginated view.

    All values are fixed once a manager is constructed:
    - limit_per_page → page size for plain pagination
    - limit_per_page_in_search → page size for keyword search
    - debounce_ms → quiet period before a search is fetched
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    limit_per_page: int = Field(
        default=DEFAULT_LIMIT_PER_PAGE,
        ge=MIN_LIMIT_PER_PAGE,
        description="Items per page in plain pagination",
    )
    limit_per_page_in_search: int = Field(
        default=DEFAULT_LIMIT_PER_PAGE_IN_SEARCH,
        ge=MIN_LIMIT_PER_PAGE,
        description="Items per page in search pagination",
    )
    debounce_ms: int = Field(
        default=DEFAULT_DEBOUNCE_MS,
        ge=MIN_DEBOUNCE_MS,
        description="Search debounce delay in milliseconds",
    )

    @classmethod
    def build(cls, **values: Any) -> "PaginationSettings":
        """Validate keyword values, raising InvalidConfigurationError on failure."""
        is_valid, result = validate_model(cls, values)
        if not is_valid:
            raise InvalidConfigurationError(
                message="Invalid pagination settings",
                details={"errors": result},
            )

        settings: PaginationSettings = result
        return settings

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PaginationSettings":
        """Load settings from environment variables, falling back to defaults.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            InvalidConfigurationError: If a variable holds an invalid value
        """
        source = os.environ if environ is None else environ

        env_fields = {
            ENV_LIMIT_PER_PAGE: "limit_per_page",
            ENV_LIMIT_PER_PAGE_IN_SEARCH: "limit_per_page_in_search",
            ENV_DEBOUNCE_MS: "debounce_ms",
        }

        values: dict[str, Any] = {}
        for env_name, field in env_fields.items():
            raw = source.get(env_name)
            if raw is not None and raw.strip():
                values[field] = raw.strip()

        return cls.build(**values)
