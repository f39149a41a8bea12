"""
Dashboard Router

Endpoints:
- GET /dashboard-stats - Record counts (admin)
- GET /search?q=&type= - Search people and documents
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user, require_admin
from app.core.database import get_db
from app.modules.dashboard import service
from app.modules.dashboard.schemas import DashboardStats, SearchResponse, SearchType
from app.modules.users.models import User

router = APIRouter()


@router.get("/dashboard-stats", response_model=DashboardStats)
async def get_dashboard_stats(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> DashboardStats:
    return await service.get_stats(db)


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query("", max_length=100),
    search_type: SearchType = Query(SearchType.ALL, alias="type"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> SearchResponse:
    return SearchResponse(results=await service.search(db, q, search_type))
