"""Health check endpoint — Service and backing cluster health."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from sarweb.adapters.base.exceptions import AdapterError
from sarweb.api.deps import get_report_service
from sarweb.core.reports import ReportService, utc_timestamp
from sarweb.models.response import ElasticsearchStatus, HealthResponse, UnhealthyResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

UNREACHABLE_MESSAGE = "Cannot connect to Elasticsearch"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System Health Check",
    description=(
        "Query the Elasticsearch cluster health on every call. Returns 200 with the "
        "cluster status and node count, or 503 when the cluster cannot be reached."
    ),
    responses={503: {"model": UnhealthyResponse, "description": "Elasticsearch unreachable"}},
)
async def health_check(
    service: ReportService = Depends(get_report_service),
) -> HealthResponse | JSONResponse:
    try:
        health = await service.cluster_health()
    except AdapterError as e:
        logger.warning("Health check failed: %s", e)
        body = UnhealthyResponse(error=UNREACHABLE_MESSAGE, timestamp=utc_timestamp())
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(),
        )

    return HealthResponse(
        elasticsearch=ElasticsearchStatus(
            cluster_status=health.cluster_status,
            number_of_nodes=health.number_of_nodes,
        ),
        timestamp=utc_timestamp(),
    )
