from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from app.models.inventory.warehouse_models import Warehouse
from app.schemas.inventory.warehouse_schemas import (
    WarehouseCreateSchema,
    WarehouseUpdateSchema,
    WarehouseTableSchema,
)
from app.core.exceptions import ConflictError, NotFoundError
from app.constants.error_codes import ErrorCode
import logging

logger = logging.getLogger(__name__)


# =====================================================
# MAPPER
# =====================================================
def _map_warehouse(w: Warehouse) -> WarehouseTableSchema:
    return WarehouseTableSchema.model_validate(w)


async def _get_warehouse_or_404(db: AsyncSession, warehouse_id: int) -> Warehouse:
    warehouse = await db.get(Warehouse, warehouse_id)
    if not warehouse:
        raise NotFoundError("Warehouse not found", ErrorCode.WAREHOUSE_NOT_FOUND)
    return warehouse


# =====================================================
# LIST WAREHOUSES
# =====================================================
# Inactive warehouses are listed too; only the movement paths check is_active.
async def list_warehouses(db: AsyncSession) -> list[WarehouseTableSchema]:
    result = await db.execute(
        select(Warehouse).order_by(Warehouse.name.asc(), Warehouse.id.asc())
    )
    return [_map_warehouse(w) for w in result.scalars().all()]


# =====================================================
# GET WAREHOUSE
# =====================================================
async def get_warehouse(db: AsyncSession, warehouse_id: int) -> WarehouseTableSchema:
    return _map_warehouse(await _get_warehouse_or_404(db, warehouse_id))


# =====================================================
# CREATE WAREHOUSE
# =====================================================
async def create_warehouse(
    db: AsyncSession,
    payload: WarehouseCreateSchema,
) -> WarehouseTableSchema:
    exists = await db.scalar(
        select(Warehouse.id).where(Warehouse.code == payload.code)
    )
    if exists:
        raise ConflictError(
            "Warehouse code already exists",
            ErrorCode.WAREHOUSE_CODE_EXISTS,
        )

    warehouse = Warehouse(**payload.model_dump())
    db.add(warehouse)

    try:
        await db.flush()
        await db.commit()
    except IntegrityError:
        # lost a race on the unique code
        await db.rollback()
        raise ConflictError(
            "Warehouse code already exists",
            ErrorCode.WAREHOUSE_CODE_EXISTS,
        )

    await db.refresh(warehouse)
    logger.info(
        "Warehouse created",
        extra={"warehouse_id": warehouse.id, "code": warehouse.code},
    )
    return _map_warehouse(warehouse)


# =====================================================
# UPDATE WAREHOUSE (COALESCE PATCH)
# =====================================================
async def update_warehouse(
    db: AsyncSession,
    warehouse_id: int,
    payload: WarehouseUpdateSchema,
) -> WarehouseTableSchema:
    warehouse = await _get_warehouse_or_404(db, warehouse_id)

    updates = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value not in (None, "")
    }

    changes: list[str] = []
    for field, value in updates.items():
        old = getattr(warehouse, field)
        if old != value:
            changes.append(f"{field}: {old} → {value}")
        setattr(warehouse, field, value)

    # always stamped, even for an empty patch
    warehouse.updated_at = func.now()

    try:
        await db.flush()
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(warehouse)
    logger.info(
        "Warehouse updated",
        extra={"warehouse_id": warehouse.id, "changes": ", ".join(changes)},
    )
    return _map_warehouse(warehouse)
