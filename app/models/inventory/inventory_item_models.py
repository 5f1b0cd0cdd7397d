from sqlalchemy import Column, Integer, ForeignKey, Numeric, Date, UniqueConstraint
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class InventoryItem(Base, TimestampMixin):
    """Ledger row: stock of one product in one warehouse.

    ``stock_on_hand`` may go negative when the owning warehouse allows it,
    so it carries no check constraint.
    """

    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False, index=True)
    stock_on_hand = Column(Integer, nullable=False, default=0)
    reserved_quantity = Column(Integer, nullable=False, default=0)
    incoming_quantity = Column(Integer, nullable=False, default=0)
    damaged_quantity = Column(Integer, nullable=False, default=0)
    reorder_level = Column(Integer, nullable=False, default=0)
    safety_stock = Column(Integer, nullable=False, default=0)
    average_unit_cost = Column(Numeric(10, 2), nullable=False, default=0)
    last_count_date = Column(Date, nullable=True)

    __table_args__ = (
        UniqueConstraint("product_id", "warehouse_id", name="uq_inventory_item_product_warehouse"),
    )

    def __repr__(self):
        return f"<InventoryItem id={self.id} product_id={self.product_id} warehouse_id={self.warehouse_id} on_hand={self.stock_on_hand}>"
