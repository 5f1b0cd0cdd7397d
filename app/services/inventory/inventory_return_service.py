from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.models.inventory.inventory_return_models import InventoryReturn
from app.models.inventory.warehouse_models import Warehouse
from app.models.masters.product_models import Product
from app.models.enums.inventory_return_status import (
    ReturnStatus,
    ReturnDisposition,
    RESOLVED_RETURN_STATUSES,
)
from app.constants.inventory_movement_type import (
    InventoryMovementType,
    MovementReferenceType,
)
from app.constants.error_codes import ErrorCode
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.schemas.inventory.inventory_return_schemas import (
    InventoryReturnCreateSchema,
    InventoryReturnUpdateSchema,
    InventoryReturnTableSchema,
)
from app.services.inventory.inventory_item_service import ensure_product
from app.services.inventory.stock_movement_service import apply_inbound_movement
import logging

logger = logging.getLogger(__name__)


# =====================================================
# SHARED
# =====================================================
def _return_query():
    return (
        select(
            *InventoryReturn.__table__.columns,
            Product.sku,
            Product.name_en,
            Product.name_fa,
            Warehouse.name.label("warehouse_name"),
        )
        .join(Product, InventoryReturn.product_id == Product.id)
        .join(Warehouse, InventoryReturn.warehouse_id == Warehouse.id)
    )


async def _fetch_return_out(db: AsyncSession, return_id: int) -> InventoryReturnTableSchema:
    row = (
        await db.execute(_return_query().where(InventoryReturn.id == return_id))
    ).first()
    return InventoryReturnTableSchema(**dict(row._mapping))


async def _restock(
    db: AsyncSession,
    record: InventoryReturn,
    *,
    note: str | None,
    created_by: str | None,
) -> None:
    """Put the returned units back on hand and link the movement (no commit)."""
    movement = await apply_inbound_movement(
        db,
        product_id=record.product_id,
        warehouse_id=record.warehouse_id,
        quantity=record.quantity,
        movement_type=InventoryMovementType.RETURN_RESTOCK,
        reference_type=MovementReferenceType.RETURN.value,
        reference_code=record.reference_code or f"RET-{record.id}",
        note=note,
        created_by=created_by,
    )

    record.status = ReturnStatus.restocked
    record.disposition = ReturnDisposition.restock
    record.restock_movement_id = movement.id
    record.restocked_at = func.now()
    record.resolved_at = func.now()

    logger.info(
        "Return restocked",
        extra={"return_id": record.id, "movement_id": movement.id},
    )


# =====================================================
# CREATE
# =====================================================
async def create_return(
    db: AsyncSession,
    payload: InventoryReturnCreateSchema,
) -> InventoryReturnTableSchema:
    await ensure_product(db, payload.product_id)

    warehouse = await db.get(Warehouse, payload.warehouse_id)
    if not warehouse:
        raise NotFoundError("Warehouse not found", ErrorCode.WAREHOUSE_NOT_FOUND)

    try:
        record = InventoryReturn(
            product_id=payload.product_id,
            warehouse_id=payload.warehouse_id,
            quantity=payload.quantity,
            source=payload.source,
            reason=payload.reason,
            reference_code=payload.reference_code,
            status=ReturnStatus.pending,
            disposition=payload.disposition,
            note=payload.note,
        )
        db.add(record)
        await db.flush()

        if payload.restock_now and payload.disposition == ReturnDisposition.restock:
            await _restock(
                db,
                record,
                note=payload.note or payload.reason,
                created_by=payload.created_by,
            )
            await db.flush()

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Return created",
        extra={"return_id": record.id, "product_id": record.product_id},
    )
    return await _fetch_return_out(db, record.id)


# =====================================================
# UPDATE
# =====================================================
async def update_return(
    db: AsyncSession,
    return_id: int,
    payload: InventoryReturnUpdateSchema,
) -> InventoryReturnTableSchema:
    record = await db.scalar(
        select(InventoryReturn)
        .where(InventoryReturn.id == return_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    if not record:
        raise NotFoundError("Return request not found", ErrorCode.RETURN_NOT_FOUND)

    has_field_changes = any(
        v is not None for v in (payload.status, payload.disposition, payload.note)
    )

    if record.status == ReturnStatus.restocked:
        if has_field_changes:
            raise ConflictError(
                "Restocked returns cannot be modified",
                ErrorCode.RETURN_ALREADY_RESTOCKED,
            )
        return await _fetch_return_out(db, record.id)

    if payload.status == ReturnStatus.restocked and not payload.restock:
        raise ValidationError(
            "Use restock to mark a return as restocked",
            ErrorCode.RETURN_INVALID_STATUS,
        )

    try:
        if payload.status is not None:
            record.status = payload.status
            if payload.status in RESOLVED_RETURN_STATUSES:
                record.resolved_at = func.now()

        if payload.disposition is not None:
            record.disposition = payload.disposition

        if payload.note is not None:
            record.note = payload.note

        if payload.restock and record.restock_movement_id is None:
            await _restock(
                db,
                record,
                note=payload.note or record.note,
                created_by=payload.created_by,
            )

        await db.flush()
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Return updated",
        extra={"return_id": record.id, "return_status": record.status},
    )
    return await _fetch_return_out(db, record.id)


# =====================================================
# LIST
# =====================================================
async def list_returns(
    db: AsyncSession,
    *,
    status: ReturnStatus | None = None,
) -> list[InventoryReturnTableSchema]:
    filters = []
    if status:
        filters.append(InventoryReturn.status == status)

    rows = (
        await db.execute(
            _return_query()
            .where(*filters)
            .order_by(InventoryReturn.created_at.desc(), InventoryReturn.id.desc())
        )
    ).all()

    return [InventoryReturnTableSchema(**dict(r._mapping)) for r in rows]
