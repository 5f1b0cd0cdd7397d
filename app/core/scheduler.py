from apscheduler.schedulers.asyncio import AsyncIOScheduler
from app.core.db import AsyncSessionLocal

from app.services.inventory.batch_expiry_service import auto_expire_batches

scheduler = AsyncIOScheduler()


@scheduler.scheduled_job("cron", hour=0, minute=5)  # daily at 00:05
async def expire_batches_job():
    async with AsyncSessionLocal() as db:
        await auto_expire_batches(db)
