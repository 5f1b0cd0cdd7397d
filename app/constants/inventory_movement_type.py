# app/constants/inventory_movement_type.py

from enum import Enum


class InventoryMovementType(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"
    RETURN_RESTOCK = "return_restock"
    ADJUSTMENT = "adjustment"
    DAMAGE = "damage"


class MovementReferenceType(str, Enum):
    PURCHASE_ORDER = "purchase_order"
    SALES_ORDER = "sales_order"
    TRANSFER = "transfer"
    RETURN = "return"
    ADJUSTMENT = "adjustment"
