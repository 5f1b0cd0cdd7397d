from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.models.enums.inventory_return_status import (
    ReturnStatus,
    ReturnDisposition,
    ReturnSource,
)


class InventoryReturnCreateSchema(BaseModel):
    product_id: int
    warehouse_id: int
    quantity: int = Field(gt=0)
    source: ReturnSource = ReturnSource.customer
    reason: Optional[str] = None
    reference_code: Optional[str] = Field(None, max_length=100)
    disposition: ReturnDisposition = ReturnDisposition.pending
    note: Optional[str] = None
    restock_now: bool = False
    created_by: Optional[str] = Field(None, max_length=150)


class InventoryReturnUpdateSchema(BaseModel):
    status: Optional[ReturnStatus] = None
    disposition: Optional[ReturnDisposition] = None
    note: Optional[str] = None
    restock: bool = False
    created_by: Optional[str] = Field(None, max_length=150)


class InventoryReturnTableSchema(BaseModel):
    id: int
    product_id: int
    warehouse_id: int
    quantity: int
    source: ReturnSource
    reason: Optional[str]
    reference_code: Optional[str]
    status: ReturnStatus
    disposition: ReturnDisposition
    note: Optional[str]
    restock_movement_id: Optional[int]
    restocked_at: Optional[datetime]
    resolved_at: Optional[datetime]
    created_at: datetime

    sku: Optional[str] = None
    name_en: Optional[str] = None
    name_fa: Optional[str] = None
    warehouse_name: Optional[str] = None

    class Config:
        from_attributes = True
