from sqlalchemy import select

from app.models.inventory.warehouse_models import Warehouse
from app.core.db import AsyncSessionLocal
import asyncio

DEFAULT_WAREHOUSES = [
    {
        "code": "MAIN",
        "name": "Main Fulfillment Center",
        "type": "fulfillment",
        "address": "Tehran - Shahrak Sanati",
        "city": "Tehran",
        "contact_person": "Hossein Sadeghi",
        "phone": "+98-21-1111-2222",
        "capacity": 10000,
        "allow_negatives": False,
    },
    {
        "code": "SEC",
        "name": "Secondary Storage",
        "type": "reserve",
        "address": "Karaj - Fardis",
        "city": "Karaj",
        "contact_person": "Sara Ahmadi",
        "phone": "+98-26-3333-4444",
        "capacity": 6000,
        "allow_negatives": False,
    },
]


async def seed_warehouses():
    async with AsyncSessionLocal() as session:
        existing = set(
            (await session.scalars(select(Warehouse.code))).all()
        )
        created = 0
        for data in DEFAULT_WAREHOUSES:
            if data["code"] in existing:
                continue
            session.add(Warehouse(**data))
            created += 1
        await session.commit()
        print(f"Seeded {created} warehouse(s)")


if __name__ == "__main__":
    asyncio.run(seed_warehouses())
