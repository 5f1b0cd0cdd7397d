from datetime import date

from sqlalchemy import update, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.inventory.inventory_batch_models import InventoryBatch
from app.models.enums.inventory_batch_status import BatchStatus
import logging

logger = logging.getLogger(__name__)


def _expire_batches_stmt(today: date):
    return (
        update(InventoryBatch)
        .where(
            InventoryBatch.status == BatchStatus.available.value,
            InventoryBatch.expiry_date.isnot(None),
            InventoryBatch.expiry_date < today,
        )
        .values(
            status=BatchStatus.expired.value,
            updated_at=func.now(),
        )
        .returning(InventoryBatch.id)
    )


async def auto_expire_batches(db: AsyncSession, today: date | None = None) -> int:
    """Flag available batches past their expiry date. Outbound is not blocked."""
    today = today or date.today()

    result = await db.execute(
        _expire_batches_stmt(today),
        execution_options={"synchronize_session": False},
    )
    expired_ids = result.scalars().all()

    await db.commit()

    if expired_ids:
        logger.info(
            "Batches expired",
            extra={"count": len(expired_ids), "as_of": today.isoformat()},
        )
    return len(expired_ids)
