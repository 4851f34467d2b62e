"""Report service — listing, detail and health use cases over a search adapter.

The service holds no per-request state: it is built once at startup around
the configured adapter and shared by every request.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sarweb.adapters.base.adapter import ClusterHealth, SearchAdapter
from sarweb.models.query import REPORT_SORT, PageRequest
from sarweb.models.report import Report, hit_to_report
from sarweb.models.response import ReportListResponse

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current time as an ISO 8601 string with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ReportService:
    """Translate report requests into adapter calls and reshape the results.

    Attributes:
        adapter: The report store adapter.
    """

    def __init__(self, adapter: SearchAdapter) -> None:
        self.adapter = adapter

    async def list_reports(self, request: PageRequest) -> ReportListResponse:
        """Fetch one page of reports, newest first.

        Raises:
            AdapterError: If the backend call fails.
        """
        query = request.build_query()
        logger.debug(
            "Listing reports page=%d size=%d search=%r",
            request.page,
            request.size,
            request.search_text,
        )
        raw = await self.adapter.search(
            query,
            from_=request.offset,
            size=request.size,
            sort=REPORT_SORT,
        )
        return ReportListResponse(
            reports=[hit_to_report(hit) for hit in raw.documents],
            total=raw.total_hits,
            page=request.page,
            total_pages=request.total_pages(raw.total_hits),
        )

    async def get_report(self, report_id: str) -> Report:
        """Fetch a single report.

        Raises:
            DocumentNotFoundError: If no report has this identifier.
            AdapterError: For any other backend failure.
        """
        return hit_to_report(await self.adapter.fetch_document(report_id))

    async def cluster_health(self) -> ClusterHealth:
        return await self.adapter.health_check()
