"""Pagination model."""

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr


class PaginationInfo(BaseModel):
    """Snapshot of an accumulator's cursor, used for logging and inspection."""

    page: StrictInt = Field(..., description="Page that the next fetch will request")
    limit: StrictInt = Field(..., description="Maximum number of items requested per page")
    has_more: StrictBool = Field(..., description="Whether more pages may be available")
    is_loading: StrictBool = Field(..., description="Whether a fetch is currently outstanding")
    item_count: StrictInt = Field(..., description="Number of items accumulated so far")
    next_page: StrictInt | None = Field(
        None,
        description="Page to request next, if more pages are available",
    )
    keyword: StrictStr | None = Field(
        None,
        description="Search keyword the items were fetched under, if any",
    )
