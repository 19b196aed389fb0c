from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class PaymentMethod(Enum):
    CASH = "CASH"


class PaymentStatus(Enum):
    PENDING = "PENDING"


@dataclass
class Order:
    customer_ref: str
    product_ref: str
    quantity: int
    total: float
    placed_at: date = field(default_factory=date.today)
    id: Optional[int] = None
