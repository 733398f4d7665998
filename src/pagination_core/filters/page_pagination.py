"""
Page-number pagination utilities.
"""

from typing import Any

from pagination_core.utils.constants import FIRST_PAGE, MIN_LIMIT_PER_PAGE


class PagePagination:
    """
    Page-number pagination helper.

    Pages are numbered from 1. Page `n` with page size `limit` covers
    offsets `[(n - 1) * limit, n * limit)`.

    Typical usage:
    1. Validate page and limit parameters
    2. Slice a list of items for the requested page
    """

    @staticmethod
    def offset_for(page: int, limit: int) -> int:
        """Return the offset of the first item on `page`."""
        return (page - FIRST_PAGE) * limit

    @staticmethod
    def paginate(
        items: list[Any],
        page: int = FIRST_PAGE,
        limit: int = MIN_LIMIT_PER_PAGE,
    ) -> tuple[list[Any], int, bool]:
        """
        Slice a list of items for one page.

        Args:
            items: Full list of items to paginate
            page: 1-based page number
            limit: Maximum number of items to include in the page

        Returns:
            A tuple containing:
            - page_items: List of items for the requested page
            - total_count: Total number of items before pagination
            - has_more: True if more items exist beyond this page

        Example:
            items = [1, 2, 3, 4, 5]
            page = 2
            limit = 2

            → ([3, 4], 5, True)
        """
        offset = PagePagination.offset_for(page, limit)
        total_count = len(items)
        page_items = items[offset : offset + limit]
        has_more = offset + limit < total_count

        return page_items, total_count, has_more

    @staticmethod
    def validate(page: int, limit: int) -> tuple[bool, str]:
        """
        Validate pagination parameters.

        Validation rules:
        - page must be at least FIRST_PAGE
        - limit must be at least MIN_LIMIT_PER_PAGE

        Returns:
            A tuple of:
            - is_valid: Whether parameters are valid
            - error_message: Human-readable error message if invalid
        """
        if page < FIRST_PAGE:
            return False, f"Page must be at least {FIRST_PAGE}"

        if limit < MIN_LIMIT_PER_PAGE:
            return False, f"Limit must be at least {MIN_LIMIT_PER_PAGE}"

        return True, ""
