"""
Parents Router

Endpoints (admin only):
- GET /parents - All parents
- POST /parents - Add a parent
- PUT /parents/{parent_id} - Edit a parent
- DELETE /parents/{parent_id} - Delete a parent
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_admin
from app.core.database import get_db
from app.modules.parents import service
from app.modules.parents.repository import ParentRepository
from app.modules.parents.schemas import ParentCreate, ParentResponse
from app.modules.users.models import User

router = APIRouter()


@router.get("/parents", response_model=list[ParentResponse])
async def list_parents(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> list[ParentResponse]:
    parents = await ParentRepository.list_all(db)
    return [service.to_response(p) for p in parents]


@router.post("/parents", response_model=ParentResponse, status_code=status.HTTP_201_CREATED)
async def create_parent(
    data: ParentCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ParentResponse:
    parent = await service.create_parent(db, data)
    return service.to_response(parent)


@router.put("/parents/{parent_id}", response_model=ParentResponse)
async def update_parent(
    parent_id: str,
    data: ParentCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ParentResponse:
    parent = await service.update_parent(db, parent_id, data)
    return service.to_response(parent)


@router.delete("/parents/{parent_id}")
async def delete_parent(
    parent_id: str,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> dict[str, str]:
    await service.delete_parent(db, parent_id)
    return {"message": "Parent deleted"}
