from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.services.inventory.inventory_item_service import (
    list_inventory_items,
    get_inventory_item,
    list_low_stock_items,
)
from app.schemas.inventory.inventory_item_schemas import (
    InventoryItemTableSchema,
    InventoryItemDetailSchema,
)

router = APIRouter(
    prefix="/inventory/items",
    tags=["Inventory Items"],
)


# =========================
# LIST INVENTORY ITEMS
# =========================
@router.get("", response_model=list[InventoryItemTableSchema])
async def list_inventory_items_api(
    db: AsyncSession = Depends(get_db),
    warehouse_id: int | None = Query(None),
    product_id: int | None = Query(None),
    search: str | None = Query(None),
):
    return await list_inventory_items(
        db,
        warehouse_id=warehouse_id,
        product_id=product_id,
        search=search,
    )


# =========================
# LOW STOCK ALERTS
# =========================
@router.get("/low-stock", response_model=list[InventoryItemTableSchema])
async def list_low_stock_items_api(
    db: AsyncSession = Depends(get_db),
    warehouse_id: int | None = Query(None),
):
    return await list_low_stock_items(db, warehouse_id=warehouse_id)


# =========================
# GET INVENTORY ITEM
# =========================
@router.get("/{item_id}", response_model=InventoryItemDetailSchema)
async def get_inventory_item_api(
    item_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await get_inventory_item(db, item_id)
