# app/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- WAREHOUSES ----------------
    WAREHOUSE_NOT_FOUND = "WAREHOUSE_NOT_FOUND"
    WAREHOUSE_CODE_EXISTS = "WAREHOUSE_CODE_EXISTS"

    # ---------------- INVENTORY ----------------
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    INVENTORY_ITEM_NOT_FOUND = "INVENTORY_ITEM_NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INSUFFICIENT_BATCH_QUANTITY = "INSUFFICIENT_BATCH_QUANTITY"
    TRANSFER_SAME_WAREHOUSE = "TRANSFER_SAME_WAREHOUSE"

    # ---------------- RETURNS ----------------
    RETURN_NOT_FOUND = "RETURN_NOT_FOUND"
    RETURN_ALREADY_RESTOCKED = "RETURN_ALREADY_RESTOCKED"
    RETURN_INVALID_STATUS = "RETURN_INVALID_STATUS"
