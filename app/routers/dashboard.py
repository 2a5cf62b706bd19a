# =============================================================================
# app/routers/dashboard.py - Admin Dashboard Endpoint
# =============================================================================

from fastapi import APIRouter

from app.dependencies import CatalogDep
from core.models import DashboardStats

router = APIRouter()


@router.get("", response_model=DashboardStats)
async def get_dashboard(catalog: CatalogDep):
    """Catalog counters and the five most recently added products."""
    return catalog.dashboard_stats()
