from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.services.inventory.warehouse_service import (
    list_warehouses,
    get_warehouse,
    create_warehouse,
    update_warehouse,
)
from app.schemas.inventory.warehouse_schemas import (
    WarehouseCreateSchema,
    WarehouseUpdateSchema,
    WarehouseTableSchema,
)

router = APIRouter(
    prefix="/warehouses",
    tags=["Warehouses"],
)


# =========================
# LIST
# =========================
@router.get("", response_model=list[WarehouseTableSchema])
async def list_warehouses_api(db: AsyncSession = Depends(get_db)):
    return await list_warehouses(db)


# =========================
# GET
# =========================
@router.get("/{warehouse_id}", response_model=WarehouseTableSchema)
async def get_warehouse_api(
    warehouse_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await get_warehouse(db, warehouse_id)


# =========================
# CREATE
# =========================
@router.post(
    "",
    response_model=WarehouseTableSchema,
    status_code=status.HTTP_201_CREATED,
)
async def create_warehouse_api(
    payload: WarehouseCreateSchema,
    db: AsyncSession = Depends(get_db),
):
    return await create_warehouse(db, payload)


# =========================
# UPDATE
# =========================
@router.put("/{warehouse_id}", response_model=WarehouseTableSchema)
async def update_warehouse_api(
    warehouse_id: int,
    payload: WarehouseUpdateSchema,
    db: AsyncSession = Depends(get_db),
):
    return await update_warehouse(db, warehouse_id, payload)
