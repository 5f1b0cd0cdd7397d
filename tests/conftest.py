"""
Pytest fixtures for the inventory API test suite.

Each test gets its own SQLite file database built from the model metadata.
HTTP tests go through ``client`` (the app with ``get_db`` overridden);
service tests use ``db`` directly. Seed and read helpers open and close
their own sessions so they never hold a lock while a request is writing.
"""

import itertools
import os

os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("DB_TYPE", "sqlite")

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from app.core.db import Base, get_db, configure_sqlite_engine
from app.models.inventory.inventory_item_models import InventoryItem
from app.models.inventory.inventory_batch_models import InventoryBatch
from app.models.inventory.stock_movement_models import StockMovement
from app.models.inventory.warehouse_models import Warehouse
from app.models.masters.product_models import Product
from main import app


# =============================================================================
# Database
# =============================================================================


@pytest_asyncio.fixture
async def engine(tmp_path):
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'inventory_test.db'}",
        poolclass=NullPool,
    )
    configure_sqlite_engine(test_engine)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


# =============================================================================
# Seed helpers
# =============================================================================


@pytest.fixture
def make_product(session_factory):
    counter = itertools.count(1)

    async def _make(**overrides) -> int:
        n = next(counter)
        data = {
            "sku": f"PMP-{n:03d}",
            "name_en": f"Variable Speed Pump {n}",
            "name_fa": f"پمپ دور متغیر {n}",
            "price": Decimal("1200.00"),
        }
        data.update(overrides)
        async with session_factory() as session:
            product = Product(**data)
            session.add(product)
            await session.commit()
            return product.id

    return _make


@pytest.fixture
def make_warehouse(session_factory):
    counter = itertools.count(1)

    async def _make(**overrides) -> int:
        n = next(counter)
        data = {
            "code": f"WH{n}",
            "name": f"Warehouse {n}",
            "type": "fulfillment",
            "allow_negatives": False,
            "is_active": True,
        }
        data.update(overrides)
        async with session_factory() as session:
            warehouse = Warehouse(**data)
            session.add(warehouse)
            await session.commit()
            return warehouse.id

    return _make


@pytest.fixture
def make_item(session_factory):
    async def _make(product_id: int, warehouse_id: int, **overrides) -> int:
        async with session_factory() as session:
            item = InventoryItem(
                product_id=product_id,
                warehouse_id=warehouse_id,
                **overrides,
            )
            session.add(item)
            await session.commit()
            return item.id

    return _make


# =============================================================================
# Read helpers
# =============================================================================


@pytest.fixture
def fetch_item(session_factory):
    async def _fetch(product_id: int, warehouse_id: int) -> InventoryItem | None:
        async with session_factory() as session:
            return await session.scalar(
                select(InventoryItem).where(
                    InventoryItem.product_id == product_id,
                    InventoryItem.warehouse_id == warehouse_id,
                )
            )

    return _fetch


@pytest.fixture
def fetch_batch(session_factory):
    async def _fetch(item_id: int, batch_number: str) -> InventoryBatch | None:
        async with session_factory() as session:
            return await session.scalar(
                select(InventoryBatch).where(
                    InventoryBatch.inventory_item_id == item_id,
                    InventoryBatch.batch_number == batch_number,
                )
            )

    return _fetch


@pytest.fixture
def count_movements(session_factory):
    async def _count() -> int:
        async with session_factory() as session:
            return await session.scalar(
                select(func.count()).select_from(StockMovement)
            )

    return _count
