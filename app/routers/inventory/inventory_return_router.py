from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.enums.inventory_return_status import ReturnStatus
from app.schemas.inventory.inventory_return_schemas import (
    InventoryReturnCreateSchema,
    InventoryReturnUpdateSchema,
    InventoryReturnTableSchema,
)
from app.services.inventory.inventory_return_service import (
    create_return,
    update_return,
    list_returns,
)

router = APIRouter(prefix="/inventory/returns", tags=["Inventory Returns"])


@router.get("", response_model=list[InventoryReturnTableSchema])
async def list_returns_api(
    db: AsyncSession = Depends(get_db),
    status: ReturnStatus | None = Query(None),
):
    return await list_returns(db, status=status)


@router.post(
    "",
    response_model=InventoryReturnTableSchema,
    status_code=201,
)
async def create_return_api(
    payload: InventoryReturnCreateSchema,
    db: AsyncSession = Depends(get_db),
):
    return await create_return(db, payload)


@router.put("/{return_id}", response_model=InventoryReturnTableSchema)
async def update_return_api(
    return_id: int,
    payload: InventoryReturnUpdateSchema,
    db: AsyncSession = Depends(get_db),
):
    return await update_return(db, return_id, payload)
