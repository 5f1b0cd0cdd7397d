# app/models/enums/inventory_return_status.py
import enum


class ReturnStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    restocked = "restocked"


class ReturnDisposition(str, enum.Enum):
    pending = "pending"
    restock = "restock"
    scrap = "scrap"
    vendor_return = "vendor_return"


class ReturnSource(str, enum.Enum):
    customer = "customer"
    vendor = "vendor"


RESOLVED_RETURN_STATUSES = {
    ReturnStatus.approved,
    ReturnStatus.rejected,
    ReturnStatus.restocked,
}
