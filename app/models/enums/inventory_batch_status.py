import enum


class BatchStatus(str, enum.Enum):
    available = "available"
    expired = "expired"
