from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from app.constants.inventory_movement_type import InventoryMovementType
from app.models.enums.stock_movement_direction import MovementDirection


# -------------------------
# REQUESTS
# -------------------------
class InboundMovementCreateSchema(BaseModel):
    product_id: int
    warehouse_id: int
    quantity: int = Field(gt=0)
    movement_type: InventoryMovementType = InventoryMovementType.PURCHASE
    unit_cost: Optional[Decimal] = Field(None, ge=0)
    reference_type: Optional[str] = Field(None, max_length=50)
    reference_code: Optional[str] = Field(None, max_length=100)
    note: Optional[str] = None
    batch_number: Optional[str] = Field(None, max_length=100)
    expiry_date: Optional[date] = None
    created_by: Optional[str] = Field(None, max_length=150)


class OutboundMovementCreateSchema(BaseModel):
    product_id: int
    warehouse_id: int
    quantity: int = Field(gt=0)
    movement_type: InventoryMovementType = InventoryMovementType.SALE
    reference_type: Optional[str] = Field(None, max_length=50)
    reference_code: Optional[str] = Field(None, max_length=100)
    note: Optional[str] = None
    batch_number: Optional[str] = Field(None, max_length=100)
    created_by: Optional[str] = Field(None, max_length=150)


class StockTransferCreateSchema(BaseModel):
    product_id: int
    from_warehouse_id: int
    to_warehouse_id: int
    quantity: int = Field(gt=0)
    reference_code: Optional[str] = Field(None, max_length=100)
    note: Optional[str] = None
    created_by: Optional[str] = Field(None, max_length=150)


# -------------------------
# RESPONSES
# -------------------------
class MovementCreatedResponse(BaseModel):
    message: str
    movement_id: int


class TransferCreatedResponse(BaseModel):
    message: str
    outbound_movement_id: int
    inbound_movement_id: int


class StockMovementTableSchema(BaseModel):
    id: int
    product_id: int
    warehouse_id: int
    direction: MovementDirection
    movement_type: str
    quantity: int
    unit_cost: Optional[float]

    reference_type: Optional[str]
    reference_code: Optional[str]
    reference_id: Optional[int]
    note: Optional[str]

    from_warehouse_id: Optional[int]
    to_warehouse_id: Optional[int]
    created_by: str
    created_at: datetime

    sku: Optional[str]
    name_en: str
    name_fa: str
    warehouse_code: str
    warehouse_name: str

    class Config:
        from_attributes = True
