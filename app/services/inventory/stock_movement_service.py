from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.models.inventory.inventory_batch_models import InventoryBatch
from app.models.inventory.stock_movement_models import StockMovement
from app.models.inventory.warehouse_models import Warehouse
from app.models.masters.product_models import Product
from app.models.enums.stock_movement_direction import MovementDirection
from app.constants.inventory_movement_type import (
    InventoryMovementType,
    MovementReferenceType,
)
from app.constants.error_codes import ErrorCode
from app.core.config import DEFAULT_ACTOR, MOVEMENT_LIST_DEFAULT_LIMIT
from app.core.exceptions import InsufficientStockError, ValidationError
from app.schemas.inventory.stock_movement_schemas import (
    InboundMovementCreateSchema,
    OutboundMovementCreateSchema,
    StockTransferCreateSchema,
    StockMovementTableSchema,
)
from app.services.inventory.inventory_item_service import (
    ensure_active_warehouse,
    ensure_inventory_item,
)
from app.utils.decimal_utils import to_decimal, weighted_average_cost
import logging

logger = logging.getLogger(__name__)


def _enum_value(value):
    return getattr(value, "value", value)


# =====================================================
# INBOUND (NO COMMIT HERE)
# =====================================================
async def apply_inbound_movement(
    db: AsyncSession,
    *,
    product_id: int,
    warehouse_id: int,
    quantity: int,
    movement_type: InventoryMovementType | str,
    unit_cost: Decimal | None = None,
    reference_type: str | None = None,
    reference_code: str | None = None,
    note: str | None = None,
    batch_number: str | None = None,
    expiry_date: date | None = None,
    created_by: str | None = None,
    from_warehouse_id: int | None = None,
    to_warehouse_id: int | None = None,
) -> StockMovement:
    """Receive stock into a warehouse inside the caller's transaction.

    Inbound never rejects on existing stock. The running average cost is
    only recomputed when a unit cost is supplied.
    """
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")

    # ------------------------------------
    # 1. Ledger row (locked)
    # ------------------------------------
    item = await ensure_inventory_item(db, product_id, warehouse_id)

    previous_qty = item.stock_on_hand or 0
    new_qty = previous_qty + quantity

    # ------------------------------------
    # 2. Weighted average cost
    # ------------------------------------
    if unit_cost is not None:
        item.average_unit_cost = weighted_average_cost(
            item.average_unit_cost or Decimal("0"),
            previous_qty,
            unit_cost,
            quantity,
        )

    item.stock_on_hand = new_qty

    # ------------------------------------
    # 3. Batch upsert
    # ------------------------------------
    # Serialised by the item row lock above.
    if batch_number:
        batch = await db.scalar(
            select(InventoryBatch)
            .where(
                InventoryBatch.inventory_item_id == item.id,
                InventoryBatch.batch_number == batch_number,
            )
            .execution_options(populate_existing=True)
        )
        if batch is None:
            db.add(
                InventoryBatch(
                    inventory_item_id=item.id,
                    batch_number=batch_number,
                    expiry_date=expiry_date,
                    quantity=quantity,
                )
            )
        else:
            batch.quantity = batch.quantity + quantity
            if expiry_date is not None:
                batch.expiry_date = expiry_date

    # ------------------------------------
    # 4. Movement log
    # ------------------------------------
    movement = StockMovement(
        product_id=product_id,
        warehouse_id=warehouse_id,
        direction=MovementDirection.inbound.value,
        movement_type=_enum_value(movement_type),
        quantity=quantity,
        reference_type=reference_type,
        reference_code=reference_code,
        note=note,
        unit_cost=to_decimal(unit_cost) if unit_cost is not None else None,
        created_by=created_by or DEFAULT_ACTOR,
        from_warehouse_id=from_warehouse_id,
        to_warehouse_id=to_warehouse_id,
    )
    db.add(movement)
    await db.flush()

    logger.info(
        "Inbound movement recorded",
        extra={
            "movement_id": movement.id,
            "product_id": product_id,
            "warehouse_id": warehouse_id,
            "quantity": quantity,
            "stock_on_hand": new_qty,
        },
    )
    return movement


# =====================================================
# OUTBOUND (NO COMMIT HERE)
# =====================================================
async def apply_outbound_movement(
    db: AsyncSession,
    *,
    product_id: int,
    warehouse_id: int,
    quantity: int,
    movement_type: InventoryMovementType | str,
    reference_type: str | None = None,
    reference_code: str | None = None,
    note: str | None = None,
    batch_number: str | None = None,
    created_by: str | None = None,
    from_warehouse_id: int | None = None,
    to_warehouse_id: int | None = None,
) -> StockMovement:
    """Issue stock from a warehouse inside the caller's transaction.

    Every check runs before the first write, so a rejected call leaves the
    session clean even before the caller rolls back.
    """
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")

    warehouse = await ensure_active_warehouse(db, warehouse_id)
    item = await ensure_inventory_item(db, product_id, warehouse_id)

    # ------------------------------------
    # 1. Stock policy
    # ------------------------------------
    if not warehouse.allow_negatives and item.stock_on_hand < quantity:
        logger.warning(
            "Outbound rejected: insufficient stock",
            extra={
                "product_id": product_id,
                "warehouse_id": warehouse_id,
                "requested": quantity,
                "stock_on_hand": item.stock_on_hand,
            },
        )
        raise InsufficientStockError(
            details={
                "stock_on_hand": item.stock_on_hand,
                "requested": quantity,
            },
        )

    # ------------------------------------
    # 2. Batch check
    # ------------------------------------
    batch = None
    if batch_number:
        batch = await db.scalar(
            select(InventoryBatch)
            .where(
                InventoryBatch.inventory_item_id == item.id,
                InventoryBatch.batch_number == batch_number,
            )
            .execution_options(populate_existing=True)
        )
        if batch is None or batch.quantity < quantity:
            logger.warning(
                "Outbound rejected: insufficient batch quantity",
                extra={
                    "product_id": product_id,
                    "warehouse_id": warehouse_id,
                    "batch_number": batch_number,
                    "requested": quantity,
                },
            )
            raise InsufficientStockError(
                "Insufficient batch quantity for outbound movement",
                ErrorCode.INSUFFICIENT_BATCH_QUANTITY,
                details={
                    "batch_number": batch_number,
                    "batch_quantity": batch.quantity if batch else 0,
                    "requested": quantity,
                },
            )

    # ------------------------------------
    # 3. Writes
    # ------------------------------------
    new_qty = item.stock_on_hand - quantity
    item.stock_on_hand = new_qty

    if batch is not None:
        batch.quantity = batch.quantity - quantity

    movement = StockMovement(
        product_id=product_id,
        warehouse_id=warehouse_id,
        direction=MovementDirection.outbound.value,
        movement_type=_enum_value(movement_type),
        quantity=quantity,
        reference_type=reference_type,
        reference_code=reference_code,
        note=note,
        created_by=created_by or DEFAULT_ACTOR,
        from_warehouse_id=from_warehouse_id,
        to_warehouse_id=to_warehouse_id,
    )
    db.add(movement)
    await db.flush()

    logger.info(
        "Outbound movement recorded",
        extra={
            "movement_id": movement.id,
            "product_id": product_id,
            "warehouse_id": warehouse_id,
            "quantity": quantity,
            "stock_on_hand": new_qty,
        },
    )
    return movement


# =====================================================
# PUBLIC OPERATIONS (ONE TRANSACTION EACH)
# =====================================================
async def record_inbound(
    db: AsyncSession,
    payload: InboundMovementCreateSchema,
) -> int:
    try:
        movement = await apply_inbound_movement(
            db,
            product_id=payload.product_id,
            warehouse_id=payload.warehouse_id,
            quantity=payload.quantity,
            movement_type=payload.movement_type,
            unit_cost=payload.unit_cost,
            reference_type=payload.reference_type,
            reference_code=payload.reference_code,
            note=payload.note,
            batch_number=payload.batch_number,
            expiry_date=payload.expiry_date,
            created_by=payload.created_by,
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    return movement.id


async def record_outbound(
    db: AsyncSession,
    payload: OutboundMovementCreateSchema,
) -> int:
    try:
        movement = await apply_outbound_movement(
            db,
            product_id=payload.product_id,
            warehouse_id=payload.warehouse_id,
            quantity=payload.quantity,
            movement_type=payload.movement_type,
            reference_type=payload.reference_type,
            reference_code=payload.reference_code,
            note=payload.note,
            batch_number=payload.batch_number,
            created_by=payload.created_by,
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    return movement.id


async def transfer_stock(
    db: AsyncSession,
    payload: StockTransferCreateSchema,
) -> tuple[int, int]:
    """Move stock between warehouses: outbound on source, inbound on destination.

    Both legs share one transaction. If the inbound leg fails the outbound
    leg is rolled back with it.
    """
    if payload.from_warehouse_id == payload.to_warehouse_id:
        raise ValidationError(
            "Source and destination warehouses must differ",
            ErrorCode.TRANSFER_SAME_WAREHOUSE,
        )

    try:
        outbound = await apply_outbound_movement(
            db,
            product_id=payload.product_id,
            warehouse_id=payload.from_warehouse_id,
            quantity=payload.quantity,
            movement_type=InventoryMovementType.TRANSFER_OUT,
            reference_type=MovementReferenceType.TRANSFER.value,
            reference_code=payload.reference_code,
            note=payload.note,
            created_by=payload.created_by,
            from_warehouse_id=payload.from_warehouse_id,
            to_warehouse_id=payload.to_warehouse_id,
        )

        inbound = await apply_inbound_movement(
            db,
            product_id=payload.product_id,
            warehouse_id=payload.to_warehouse_id,
            quantity=payload.quantity,
            movement_type=InventoryMovementType.TRANSFER_IN,
            reference_type=MovementReferenceType.TRANSFER.value,
            reference_code=payload.reference_code,
            note=payload.note,
            created_by=payload.created_by,
            from_warehouse_id=payload.from_warehouse_id,
            to_warehouse_id=payload.to_warehouse_id,
        )

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    return outbound.id, inbound.id


# =====================================================
# MOVEMENT LOG
# =====================================================
async def list_movements(
    db: AsyncSession,
    *,
    warehouse_id: int | None = None,
    product_id: int | None = None,
    direction: MovementDirection | None = None,
    limit: int = MOVEMENT_LIST_DEFAULT_LIMIT,
) -> list[StockMovementTableSchema]:
    filters = []

    if warehouse_id:
        filters.append(StockMovement.warehouse_id == warehouse_id)

    if product_id:
        filters.append(StockMovement.product_id == product_id)

    if direction:
        filters.append(StockMovement.direction == _enum_value(direction))

    rows = (
        await db.execute(
            select(
                *StockMovement.__table__.columns,
                Product.sku,
                Product.name_en,
                Product.name_fa,
                Warehouse.code.label("warehouse_code"),
                Warehouse.name.label("warehouse_name"),
            )
            .join(Product, StockMovement.product_id == Product.id)
            .join(Warehouse, StockMovement.warehouse_id == Warehouse.id)
            .where(*filters)
            # same-second timestamps fall back to insertion order
            .order_by(StockMovement.created_at.desc(), StockMovement.id.desc())
            .limit(limit)
        )
    ).all()

    return [StockMovementTableSchema(**dict(r._mapping)) for r in rows]
