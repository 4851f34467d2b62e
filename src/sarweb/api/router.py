"""API router — SAR report and health endpoints, mounted under ``/api``."""

from __future__ import annotations

from fastapi import APIRouter

from sarweb.api.endpoints.health import router as health_router
from sarweb.api.endpoints.reports import router as reports_router

router = APIRouter()
router.include_router(reports_router)
router.include_router(health_router)
