from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List


class TransactionType(Enum):
    CREW = "CREW"
    REPRESENTATION = "REPRESENTATION"


class RepresentationType(Enum):
    CHARTERER = "CHARTERER"
    OWNER = "OWNER"


@dataclass(slots=True)
class TransactionItem:
    product_id: str = ""
    # Name and price are snapshots taken at checkout
    product_name: str = ""
    quantity: int = 1
    unit_price: float = 0.0

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


def compute_total(items: Iterable[TransactionItem]) -> float:
    """Sum of quantity x unit price over the items."""
    return sum(item.quantity * item.unit_price for item in items)


@dataclass(slots=True)
class Transaction:
    id: str = ""
    # Date of issue; time of day is not tracked
    timestamp: date = field(default_factory=date.today)
    type: TransactionType = TransactionType.CREW
    # Crew id for CREW, free-text name for REPRESENTATION
    recipient_id: str = ""
    recipient_name: str = ""
    representation_type: RepresentationType | None = None
    items: List[TransactionItem] = field(default_factory=list)
    total_amount: float = 0.0

    def quantity_of(self, product_id: str) -> int:
        return sum(i.quantity for i in self.items if i.product_id == product_id)
