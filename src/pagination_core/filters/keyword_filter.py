"""Keyword-based filtering for in-memory items."""

from collections.abc import Callable
from typing import Any

from pagination_core.utils.constants import DEFAULT_SEARCH_FIELD

TextExtractor = Callable[[Any], str]


class KeywordFilter:
    """Filter items by a case-insensitive substring of their searchable text.

    Items may be mappings (the text is read from `field_name`) or arbitrary
    objects, in which case a `text_of` extractor must be supplied.
    Order of the input is preserved.
    """

    @staticmethod
    def apply(
        items: list[Any],
        keyword: str,
        *,
        field_name: str = DEFAULT_SEARCH_FIELD,
        text_of: TextExtractor | None = None,
    ) -> list[Any]:
        """Return the items whose text contains `keyword`, ignoring case."""
        if not KeywordFilter.validate(keyword):
            return items

        extract = text_of or (lambda item: str(item.get(field_name, "")))
        keyword_lower = keyword.lower()
        return [item for item in items if keyword_lower in extract(item).lower()]

    @staticmethod
    def validate(keyword: str | None) -> bool:
        """Validate keyword filter search term."""
        return bool(keyword and keyword.strip())
