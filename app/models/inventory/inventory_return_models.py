from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, ForeignKey, CheckConstraint, Index
from app.core.db import Base
from app.models.base.mixins import CreatedAtMixin
from app.models.enums.inventory_return_status import ReturnStatus, ReturnDisposition, ReturnSource


class InventoryReturn(Base, CreatedAtMixin):
    """Customer or vendor return awaiting a disposition. Immutable once restocked."""

    __tablename__ = "inventory_returns"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    source = Column(Enum(ReturnSource), nullable=False, default=ReturnSource.customer)
    reason = Column(Text, nullable=True)
    reference_code = Column(String(100), nullable=True)
    status = Column(Enum(ReturnStatus), nullable=False, default=ReturnStatus.pending, index=True)
    disposition = Column(Enum(ReturnDisposition), nullable=False, default=ReturnDisposition.pending)
    note = Column(Text, nullable=True)
    restock_movement_id = Column(Integer, ForeignKey("stock_movements.id", ondelete="SET NULL"), nullable=True)
    restocked_at = Column(DateTime(timezone=True), nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_inventory_return_quantity_positive"),
        Index("ix_inventory_return_product_warehouse", "product_id", "warehouse_id"),
    )

    def __repr__(self):
        return f"<InventoryReturn id={self.id} product_id={self.product_id} qty={self.quantity} status={self.status}>"
