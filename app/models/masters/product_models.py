from sqlalchemy import Column, Integer, String, Boolean, Numeric
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Product(Base, TimestampMixin):
    """Catalog product as seen by the inventory ledger (display fields only)."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    sku = Column(String(50), nullable=True, unique=True, index=True)
    name_en = Column(String(255), nullable=False, index=True)
    name_fa = Column(String(255), nullable=False)
    image_url = Column(String(500), nullable=True)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Product id={self.id} sku={self.sku} name={self.name_en}>"
