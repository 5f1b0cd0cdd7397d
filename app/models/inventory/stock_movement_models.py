from sqlalchemy import Column, Integer, String, Text, Numeric, CheckConstraint, ForeignKey, Index
from app.core.db import Base
from app.models.base.mixins import CreatedAtMixin


class StockMovement(Base, CreatedAtMixin):
    """Immutable stock ledger entry. APPEND-ONLY. Never updated, never deleted."""

    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False, index=True)
    direction = Column(String(10), nullable=False)  # inbound | outbound
    movement_type = Column(String(50), nullable=False)
    quantity = Column(Integer, nullable=False)
    reference_type = Column(String(50), nullable=True)
    reference_code = Column(String(100), nullable=True)
    reference_id = Column(Integer, nullable=True)
    note = Column(Text, nullable=True)
    unit_cost = Column(Numeric(10, 2), nullable=True)
    from_warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=True)
    to_warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=True)
    created_by = Column(String(150), nullable=False, default="system")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_stock_movement_quantity_positive"),
        CheckConstraint("direction IN ('inbound', 'outbound')", name="ck_stock_movement_direction"),
        Index("ix_stock_movement_product_warehouse", "product_id", "warehouse_id"),
        Index("ix_stock_movement_reference", "reference_type", "reference_code"),
    )

    def __repr__(self):
        return f"<StockMovement id={self.id} {self.direction}:{self.movement_type} product_id={self.product_id} warehouse_id={self.warehouse_id} qty={self.quantity}>"
