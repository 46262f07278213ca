"""
Domain models for the bonded store application.

These are pure Python/domain classes, separate from the persistence layer.
"""

from .crew import CrewMember, Currency
from .product import Product
from .transaction import (
    RepresentationType,
    Transaction,
    TransactionItem,
    TransactionType,
    compute_total,
)
from .report_settings import ReportSettings
from .app_state import AppState

__all__ = [
    "CrewMember",
    "Currency",
    "Product",
    "RepresentationType",
    "Transaction",
    "TransactionItem",
    "TransactionType",
    "compute_total",
    "ReportSettings",
    "AppState",
]
