"""SAR report endpoints — paginated listing and single-report retrieval."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, status

from sarweb.adapters.base.exceptions import AdapterError, DocumentNotFoundError
from sarweb.api.deps import get_report_service, get_settings
from sarweb.api.errors import APIError
from sarweb.config.settings import Settings
from sarweb.core.reports import ReportService
from sarweb.models.query import PageRequest
from sarweb.models.response import ErrorResponse, ReportListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sar-reports", tags=["sar-reports"])


@router.get(
    "",
    response_model=ReportListResponse,
    summary="List SAR Reports",
    description=(
        "Return one page of SAR reports, most recent first (by `@timestamp`, then "
        "`report_date`). When `search` is given, reports are matched on institution "
        "name, suspect name, suspect entity name, account number and address."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid `page` or `size`"},
        500: {"model": ErrorResponse, "description": "Search backend failure"},
    },
)
async def list_reports(
    page: int = Query(default=1, ge=1, description="1-based page number"),
    size: int | None = Query(default=None, ge=1, description="Reports per page"),
    search: str | None = Query(default=None, description="Free-text search string"),
    service: ReportService = Depends(get_report_service),
    settings: Settings = Depends(get_settings),
) -> ReportListResponse:
    """List SAR reports with pagination and optional free-text search."""
    if size is None:
        size = settings.pagination.default_page_size
    elif size > settings.pagination.max_page_size:
        raise APIError(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request parameters",
            details=[
                {
                    "param": "size",
                    "message": f"Input should be less than or equal to {settings.pagination.max_page_size}",
                }
            ],
        )

    request = PageRequest(page=page, size=size, search=search)
    try:
        return await service.list_reports(request)
    except AdapterError as e:
        logger.error("Error fetching SAR reports: %s", e, exc_info=True)
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch SAR reports",
            cause=e,
        ) from e


@router.get(
    "/{report_id}",
    summary="Get SAR Report",
    description="Return a single SAR report by its store identifier.",
    responses={
        404: {"model": ErrorResponse, "description": "No report with this identifier"},
        500: {"model": ErrorResponse, "description": "Search backend failure"},
    },
)
async def get_report(
    report_id: str,
    service: ReportService = Depends(get_report_service),
) -> dict[str, Any]:
    """Fetch one SAR report as ``{id, ...fields}``."""
    try:
        return await service.get_report(report_id)
    except DocumentNotFoundError as e:
        logger.info("SAR report not found: %s", report_id)
        raise APIError(status.HTTP_404_NOT_FOUND, "SAR report not found") from e
    except AdapterError as e:
        logger.error("Error fetching SAR report %s: %s", report_id, e, exc_info=True)
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch SAR report",
            cause=e,
        ) from e
