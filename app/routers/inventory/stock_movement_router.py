from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.config import MOVEMENT_LIST_DEFAULT_LIMIT, MOVEMENT_LIST_MAX_LIMIT
from app.models.enums.stock_movement_direction import MovementDirection
from app.schemas.inventory.stock_movement_schemas import (
    InboundMovementCreateSchema,
    OutboundMovementCreateSchema,
    StockTransferCreateSchema,
    MovementCreatedResponse,
    TransferCreatedResponse,
    StockMovementTableSchema,
)
from app.services.inventory.stock_movement_service import (
    record_inbound,
    record_outbound,
    transfer_stock,
    list_movements,
)

router = APIRouter(prefix="/inventory/movements", tags=["Stock Movements"])


@router.get("", response_model=list[StockMovementTableSchema])
async def list_movements_api(
    db: AsyncSession = Depends(get_db),
    warehouse_id: int | None = Query(None),
    product_id: int | None = Query(None),
    direction: MovementDirection | None = Query(None),
    limit: int = Query(MOVEMENT_LIST_DEFAULT_LIMIT, ge=1, le=MOVEMENT_LIST_MAX_LIMIT),
):
    return await list_movements(
        db,
        warehouse_id=warehouse_id,
        product_id=product_id,
        direction=direction,
        limit=limit,
    )


@router.post(
    "/inbound",
    response_model=MovementCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_inbound_api(
    payload: InboundMovementCreateSchema,
    db: AsyncSession = Depends(get_db),
):
    return {
        "message": "Stock receipt recorded",
        "movement_id": await record_inbound(db, payload),
    }


@router.post(
    "/outbound",
    response_model=MovementCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_outbound_api(
    payload: OutboundMovementCreateSchema,
    db: AsyncSession = Depends(get_db),
):
    return {
        "message": "Stock issue recorded",
        "movement_id": await record_outbound(db, payload),
    }


@router.post(
    "/transfer",
    response_model=TransferCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def transfer_stock_api(
    payload: StockTransferCreateSchema,
    db: AsyncSession = Depends(get_db),
):
    outbound_id, inbound_id = await transfer_stock(db, payload)
    return {
        "message": "Transfer completed",
        "outbound_movement_id": outbound_id,
        "inbound_movement_id": inbound_id,
    }
