"""
Dashboard API package initialization.

This package contains the FastAPI router modules, all mounted under /api:
- reference: lookup lists and the active agent listing
- kpis: home-page headcount KPIs
- skills: skills matrix and agent skill rows
- staffing: activity sizing vs assigned headcount
- planning: planning reports, daily utilization and planning KPIs
"""

from fastapi import APIRouter

from wfm_dashboard.api.reference import router as reference_router
from wfm_dashboard.api.kpis import router as kpis_router
from wfm_dashboard.api.skills import router as skills_router
from wfm_dashboard.api.staffing import router as staffing_router
from wfm_dashboard.api.planning import router as planning_router

# Create main API router
api_router = APIRouter()

api_router.include_router(reference_router, tags=["reference"])
api_router.include_router(kpis_router, prefix="/kpis", tags=["kpis"])
api_router.include_router(skills_router, prefix="/skills", tags=["skills"])
api_router.include_router(staffing_router, prefix="/staffing", tags=["staffing"])
api_router.include_router(planning_router, prefix="/planning", tags=["planning"])

__all__ = [
    "api_router",
    "reference_router",
    "kpis_router",
    "skills_router",
    "staffing_router",
    "planning_router",
]
