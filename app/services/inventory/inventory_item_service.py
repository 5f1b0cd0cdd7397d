from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError

from app.models.inventory.inventory_item_models import InventoryItem
from app.models.inventory.inventory_batch_models import InventoryBatch
from app.models.inventory.warehouse_models import Warehouse
from app.models.masters.product_models import Product
from app.schemas.inventory.inventory_item_schemas import (
    InventoryBatchSchema,
    InventoryItemTableSchema,
    InventoryItemDetailSchema,
)
from app.core.exceptions import NotFoundError
from app.constants.error_codes import ErrorCode
import logging

logger = logging.getLogger(__name__)


# =====================================================
# LOOKUPS
# =====================================================
async def ensure_product(db: AsyncSession, product_id: int) -> None:
    exists = await db.scalar(select(Product.id).where(Product.id == product_id))
    if not exists:
        raise NotFoundError("Product not found", ErrorCode.PRODUCT_NOT_FOUND)


async def ensure_active_warehouse(db: AsyncSession, warehouse_id: int) -> Warehouse:
    warehouse = await db.get(Warehouse, warehouse_id)
    if not warehouse or not warehouse.is_active:
        raise NotFoundError("Warehouse not found", ErrorCode.WAREHOUSE_NOT_FOUND)
    return warehouse


def _locked_item_stmt(product_id: int, warehouse_id: int):
    return (
        select(InventoryItem)
        .where(
            InventoryItem.product_id == product_id,
            InventoryItem.warehouse_id == warehouse_id,
        )
        .with_for_update()
        .execution_options(populate_existing=True)
    )


# =====================================================
# GET OR CREATE LEDGER ROW
# =====================================================
async def ensure_inventory_item(
    db: AsyncSession,
    product_id: int,
    warehouse_id: int,
) -> InventoryItem:
    """Return the (product, warehouse) ledger row, creating a zero row if absent.

    The row comes back locked for the rest of the caller's transaction on
    backends that support ``FOR UPDATE``. Two first movements racing on the
    same pair both try the insert; the loser's savepoint is rolled back on
    the unique constraint and it re-reads the winner's row.
    """
    await ensure_product(db, product_id)
    await ensure_active_warehouse(db, warehouse_id)

    stmt = _locked_item_stmt(product_id, warehouse_id)
    item = await db.scalar(stmt)
    if item is not None:
        return item

    try:
        async with db.begin_nested():
            item = InventoryItem(
                product_id=product_id,
                warehouse_id=warehouse_id,
                stock_on_hand=0,
                reserved_quantity=0,
                incoming_quantity=0,
                damaged_quantity=0,
                reorder_level=0,
                safety_stock=0,
                average_unit_cost=Decimal("0.00"),
            )
            db.add(item)
    except IntegrityError:
        logger.info(
            "Inventory item created concurrently, re-reading",
            extra={"product_id": product_id, "warehouse_id": warehouse_id},
        )
        item = (await db.execute(stmt)).scalar_one()
    else:
        logger.debug(
            "Inventory item created",
            extra={
                "inventory_item_id": item.id,
                "product_id": product_id,
                "warehouse_id": warehouse_id,
            },
        )

    return item


# =====================================================
# READS (ENRICHED)
# =====================================================
def _enriched_item_query():
    return (
        select(
            *InventoryItem.__table__.columns,
            Product.sku,
            Product.name_en,
            Product.name_fa,
            Product.image_url,
            Warehouse.code.label("warehouse_code"),
            Warehouse.name.label("warehouse_name"),
        )
        .join(Product, InventoryItem.product_id == Product.id)
        .join(Warehouse, InventoryItem.warehouse_id == Warehouse.id)
    )


def _map_item(row) -> dict:
    data = dict(row._mapping)
    data["available_quantity"] = max(
        0, (data["stock_on_hand"] or 0) - (data["reserved_quantity"] or 0)
    )
    return data


async def list_inventory_items(
    db: AsyncSession,
    *,
    warehouse_id: int | None = None,
    product_id: int | None = None,
    search: str | None = None,
) -> list[InventoryItemTableSchema]:
    filters = []

    if warehouse_id:
        filters.append(InventoryItem.warehouse_id == warehouse_id)

    if product_id:
        filters.append(InventoryItem.product_id == product_id)

    if search:
        filters.append(
            or_(
                Product.sku.ilike(f"%{search}%"),
                Product.name_en.ilike(f"%{search}%"),
                Product.name_fa.ilike(f"%{search}%"),
            )
        )

    rows = (
        await db.execute(
            _enriched_item_query()
            .where(*filters)
            .order_by(Warehouse.name.asc(), Product.name_en.asc())
        )
    ).all()

    return [InventoryItemTableSchema(**_map_item(r)) for r in rows]


async def get_inventory_item(
    db: AsyncSession,
    item_id: int,
) -> InventoryItemDetailSchema:
    row = (
        await db.execute(_enriched_item_query().where(InventoryItem.id == item_id))
    ).first()

    if not row:
        raise NotFoundError(
            "Inventory item not found",
            ErrorCode.INVENTORY_ITEM_NOT_FOUND,
        )

    batch_rows = (
        await db.execute(
            select(*InventoryBatch.__table__.columns)
            .where(InventoryBatch.inventory_item_id == item_id)
            .order_by(InventoryBatch.id.asc())
        )
    ).all()

    return InventoryItemDetailSchema(
        **_map_item(row),
        batches=[InventoryBatchSchema(**dict(b._mapping)) for b in batch_rows],
    )


# =====================================================
# LOW STOCK
# =====================================================
async def list_low_stock_items(
    db: AsyncSession,
    *,
    warehouse_id: int | None = None,
) -> list[InventoryItemTableSchema]:
    logger.info("Fetch low stock inventory items")

    filters = [InventoryItem.stock_on_hand <= InventoryItem.reorder_level]
    if warehouse_id:
        filters.append(InventoryItem.warehouse_id == warehouse_id)

    rows = (
        await db.execute(
            _enriched_item_query()
            .where(*filters)
            .order_by(Warehouse.name.asc(), Product.name_en.asc())
        )
    ).all()

    return [InventoryItemTableSchema(**_map_item(r)) for r in rows]
