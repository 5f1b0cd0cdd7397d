# app/schemas/inventory/warehouse_schemas.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class WarehouseCreateSchema(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=150)
    type: str = Field("store", max_length=50)
    address: Optional[str] = None
    city: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    capacity: int = Field(0, ge=0)
    allow_negatives: bool = False


class WarehouseUpdateSchema(BaseModel):
    """Patch: fields left out, sent as null or sent empty keep their stored value."""

    name: Optional[str] = Field(None, max_length=150)
    type: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    city: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    allow_negatives: Optional[bool] = None
    is_active: Optional[bool] = None


class WarehouseTableSchema(BaseModel):
    id: int
    code: str
    name: str
    type: str
    address: Optional[str]
    city: Optional[str]
    contact_person: Optional[str]
    phone: Optional[str]
    capacity: int
    allow_negatives: bool
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
