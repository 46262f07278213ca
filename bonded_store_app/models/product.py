"""
Product catalog model.

Stock quantities are single units of the product's unit type; the price is per
pack/carton in EUR. A period has an opening stock and up to three supplies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class Product:
    id: str = ""
    name: str = ""
    category: str = "Other"

    # EUR per pack/carton
    price: float = 0.0
    unit_type: str = "pcs"
    # Units per pack, always >= 1
    pack_size: int = 1

    # Stock at period start
    initial_stock: int = 0
    # Supplies received during the period (0 when absent)
    added_stock_1: int = 0
    added_stock_2: int = 0
    added_stock_3: int = 0

    @property
    def supplies(self) -> Tuple[int, int, int]:
        return (self.added_stock_1, self.added_stock_2, self.added_stock_3)

    @property
    def total_supplied(self) -> int:
        return self.added_stock_1 + self.added_stock_2 + self.added_stock_3

    @property
    def price_per_unit(self) -> float:
        return self.price / (self.pack_size or 1)
