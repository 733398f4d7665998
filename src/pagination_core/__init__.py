"""Pagination Manager Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Page accumulation, debounced search and list state management for paginated views"
)

__all__ = ["models", "pagination", "state", "repositories"]
