from sqlalchemy import Column, Integer, String, Boolean, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Warehouse(Base, TimestampMixin):
    """Storage location. Never hard-deleted; disabled through ``is_active``."""

    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True)
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(150), nullable=False)
    type = Column(String(50), nullable=False, default="store")  # fulfillment | reserve | store
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    contact_person = Column(String(150), nullable=True)
    phone = Column(String(50), nullable=True)
    capacity = Column(Integer, nullable=False, default=0)
    allow_negatives = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (Index("ix_warehouse_active", "is_active"),)

    def __repr__(self):
        return f"<Warehouse id={self.id} code={self.code} active={self.is_active}>"
