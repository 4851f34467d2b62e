"""API response models — JSON bodies returned by the gateway."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ReportListResponse(BaseModel):
    """One page of SAR reports with pagination metadata."""

    model_config = ConfigDict(populate_by_name=True)

    reports: list[dict[str, Any]] = Field(description="Reports on this page, each with its store `id`")
    total: int = Field(description="Total number of matching reports")
    page: int = Field(description="1-based page number that was served")
    total_pages: int = Field(
        alias="totalPages",
        description="Number of pages at the requested size (0 when nothing matched)",
    )


class ElasticsearchStatus(BaseModel):
    """Backing cluster status reported by the health check."""

    cluster_status: str = Field(description="Cluster status (green, yellow, red)")
    number_of_nodes: int = Field(description="Number of nodes in the cluster")


class HealthResponse(BaseModel):
    """Health check response when the backing store is reachable."""

    status: str = Field(default="healthy", description="Always 'healthy'")
    elasticsearch: ElasticsearchStatus
    timestamp: str = Field(description="ISO 8601 time of the check (UTC)")


class UnhealthyResponse(BaseModel):
    """Health check response when the backing store cannot be reached."""

    status: str = Field(default="unhealthy", description="Always 'unhealthy'")
    error: str = Field(description="Short description of the failure")
    timestamp: str = Field(description="ISO 8601 time of the check (UTC)")


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint.

    ``details`` is only present in development mode, or for request
    validation errors where it describes the client's own input.
    """

    error: str = Field(description="Human-readable error message")
    details: Any | None = Field(default=None, description="Error detail (development mode only)")
