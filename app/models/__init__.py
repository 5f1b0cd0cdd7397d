# Inventory
from app.models.inventory.warehouse_models import Warehouse
from app.models.inventory.inventory_item_models import InventoryItem
from app.models.inventory.inventory_batch_models import InventoryBatch
from app.models.inventory.stock_movement_models import StockMovement
from app.models.inventory.inventory_return_models import InventoryReturn

# Masters
from app.models.masters.product_models import Product
