from datetime import date

from app.schemas.inventory.stock_movement_schemas import (
    InboundMovementCreateSchema,
    OutboundMovementCreateSchema,
)
from app.services.inventory.batch_expiry_service import auto_expire_batches
from app.services.inventory.stock_movement_service import record_inbound, record_outbound


async def _receive(db, product_id, warehouse_id, batch_number, expiry_date):
    await record_inbound(
        db,
        InboundMovementCreateSchema(
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=5,
            batch_number=batch_number,
            expiry_date=expiry_date,
        ),
    )


async def test_expires_only_batches_past_their_date(
    db, make_product, make_warehouse, fetch_item, fetch_batch
):
    product_id = await make_product()
    warehouse_id = await make_warehouse()
    await _receive(db, product_id, warehouse_id, "OLD", date(2025, 5, 1))
    await _receive(db, product_id, warehouse_id, "TODAY", date(2025, 6, 1))
    await _receive(db, product_id, warehouse_id, "NEW", date(2026, 1, 1))
    await _receive(db, product_id, warehouse_id, "UNDATED", None)

    expired = await auto_expire_batches(db, today=date(2025, 6, 1))

    assert expired == 1
    item = await fetch_item(product_id, warehouse_id)
    statuses = {
        number: (await fetch_batch(item.id, number)).status
        for number in ("OLD", "TODAY", "NEW", "UNDATED")
    }
    assert statuses == {
        "OLD": "expired",
        "TODAY": "available",
        "NEW": "available",
        "UNDATED": "available",
    }


async def test_second_run_finds_nothing(db, make_product, make_warehouse):
    product_id = await make_product()
    warehouse_id = await make_warehouse()
    await _receive(db, product_id, warehouse_id, "OLD", date(2020, 1, 1))

    assert await auto_expire_batches(db, today=date(2025, 1, 1)) == 1
    assert await auto_expire_batches(db, today=date(2025, 1, 1)) == 0


async def test_expired_batch_can_still_be_issued(
    db, make_product, make_warehouse, fetch_item, fetch_batch
):
    product_id = await make_product()
    warehouse_id = await make_warehouse()
    await _receive(db, product_id, warehouse_id, "OLD", date(2020, 1, 1))
    await auto_expire_batches(db, today=date(2025, 1, 1))

    await record_outbound(
        db,
        OutboundMovementCreateSchema(
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=2,
            batch_number="OLD",
        ),
    )

    item = await fetch_item(product_id, warehouse_id)
    assert item.stock_on_hand == 3
    assert (await fetch_batch(item.id, "OLD")).quantity == 3
