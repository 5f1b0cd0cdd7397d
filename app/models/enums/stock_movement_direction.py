import enum


class MovementDirection(str, enum.Enum):
    inbound = "inbound"
    outbound = "outbound"
