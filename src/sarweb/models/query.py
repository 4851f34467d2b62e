"""Report query models — pagination and query DSL construction."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field

# Free-text search is limited to these report fields.
SEARCH_FIELDS: tuple[str, ...] = (
    "financial_institution_name",
    "suspect_name",
    "suspect_entity_name",
    "account_number",
    "address",
)

# Most recent first: ingestion time, then the report's own date.
REPORT_SORT: list[dict[str, Any]] = [
    {"@timestamp": {"order": "desc"}},
    {"report_date": {"order": "desc"}},
]


class PageRequest(BaseModel):
    """One page of a report listing, optionally filtered by free text."""

    page: int = Field(default=1, ge=1, description="1-based page number")
    size: int = Field(default=10, ge=1, description="Reports per page")
    search: str | None = Field(default=None, description="Free-text search string")

    @property
    def offset(self) -> int:
        """Zero-based index of the first report on this page."""
        return (self.page - 1) * self.size

    @property
    def search_text(self) -> str | None:
        if self.search is None or not self.search.strip():
            return None
        return self.search

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.size) if total > 0 else 0

    def build_query(self) -> dict[str, Any]:
        """Translate the request into an Elasticsearch query clause."""
        text = self.search_text
        if text is None:
            return {"match_all": {}}
        return {
            "multi_match": {
                "query": text,
                "fields": list(SEARCH_FIELDS),
            }
        }
