"""API dependencies — Dependency injection for FastAPI endpoints.

Collaborators are constructed once in ``create_app`` and stored on
``app.state``; endpoints resolve them per request from there.
"""

from __future__ import annotations

from fastapi import Request

from sarweb.config.settings import Settings
from sarweb.core.reports import ReportService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_report_service(request: Request) -> ReportService:
    """Get the report service built at application startup.

    Raises:
        RuntimeError: If the application was created without one.
    """
    service = getattr(request.app.state, "report_service", None)
    if service is None:
        raise RuntimeError("Report service not initialized. Was the app built with create_app()?")
    return service
