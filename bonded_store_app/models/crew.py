from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Currency(Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"


@dataclass(slots=True)
class CrewMember:
    id: str = ""
    name: str = ""
    # Free text; ordered against config.constants.RANKS for listings
    rank: str = ""
    # Inactive (signed off) members stay on this month's payroll and are purged at rollover
    is_active: bool = True
    # Salary currency: EUR or USD
    currency: Currency = Currency.EUR
