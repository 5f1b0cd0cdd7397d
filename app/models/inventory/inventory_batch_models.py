from sqlalchemy import Column, Integer, String, Date, ForeignKey, UniqueConstraint, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.models.enums.inventory_batch_status import BatchStatus


class InventoryBatch(Base, TimestampMixin):
    __tablename__ = "inventory_batches"

    id = Column(Integer, primary_key=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id", ondelete="CASCADE"), nullable=False, index=True)
    batch_number = Column(String(100), nullable=False)
    expiry_date = Column(Date, nullable=True)
    quantity = Column(Integer, nullable=False, default=0)
    reserved_quantity = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=BatchStatus.available.value)

    __table_args__ = (
        UniqueConstraint("inventory_item_id", "batch_number", name="uq_inventory_batch_item_number"),
        Index("ix_inventory_batch_status_expiry", "status", "expiry_date"),
    )

    def __repr__(self):
        return f"<InventoryBatch id={self.id} item_id={self.inventory_item_id} batch={self.batch_number} qty={self.quantity}>"
