# app/routers/__init__.py

from .inventory.warehouse_router import router as warehouse_router
from .inventory.inventory_item_router import router as inventory_item_router
from .inventory.stock_movement_router import router as stock_movement_router
from .inventory.inventory_return_router import router as inventory_return_router


__all__ = [
"warehouse_router",
"inventory_item_router",
"stock_movement_router",
"inventory_return_router",
]
