from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime


class InventoryBatchSchema(BaseModel):
    id: int
    batch_number: str
    expiry_date: Optional[date]
    quantity: int
    reserved_quantity: int
    status: str
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class InventoryItemTableSchema(BaseModel):
    id: int
    product_id: int
    warehouse_id: int

    stock_on_hand: int
    reserved_quantity: int
    incoming_quantity: int
    damaged_quantity: int
    reorder_level: int
    safety_stock: int
    available_quantity: int
    average_unit_cost: float
    last_count_date: Optional[date]

    sku: Optional[str]
    name_en: str
    name_fa: str
    image_url: Optional[str]

    warehouse_code: str
    warehouse_name: str

    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class InventoryItemDetailSchema(InventoryItemTableSchema):
    batches: List[InventoryBatchSchema] = []
