"""
Stock ledger: quantities derived from the catalog and the transaction list.

Everything here is a pure function of its arguments. Stock is never stored;
it is recomputed from opening stock, supplies and issued quantities on every
read:

    current = initial + supply 1 + supply 2 + supply 3 - issued

Negative results mean more was issued than received and are returned as-is
so reports can show the over-issue.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List

from bonded_store_app.config.constants import DAYS_PER_WEEK, WEEKS_PER_MONTH
from bonded_store_app.models import (
    Product,
    RepresentationType,
    Transaction,
    TransactionType,
)


@dataclass(frozen=True, slots=True)
class ConsumptionBreakdown:
    crew: int = 0
    charterer: int = 0
    owner: int = 0

    @property
    def representation(self) -> int:
        return self.charterer + self.owner

    @property
    def total(self) -> int:
        return self.crew + self.charterer + self.owner


def is_owner(tr: Transaction) -> bool:
    """Representation issues without a sub-type are booked to the charterer."""
    return tr.representation_type == RepresentationType.OWNER


def consumed_quantity(
    product_id: str,
    transactions: Iterable[Transaction],
    type_filter: TransactionType | None = None,
    representation_type: RepresentationType | None = None,
) -> int:
    """
    Units of product_id issued across transactions.

    type_filter restricts to CREW or REPRESENTATION; representation_type
    further restricts representation issues to charterer or owner.
    """
    total = 0
    for tr in transactions:
        if type_filter is not None and tr.type != type_filter:
            continue
        if representation_type is not None:
            if tr.type != TransactionType.REPRESENTATION:
                continue
            if is_owner(tr) != (representation_type == RepresentationType.OWNER):
                continue
        total += tr.quantity_of(product_id)
    return total


def consumption_breakdown(product_id: str, transactions: Iterable[Transaction]) -> ConsumptionBreakdown:
    """Crew, charterer and owner quantities in a single pass."""
    crew = charterer = owner = 0
    for tr in transactions:
        qty = tr.quantity_of(product_id)
        if not qty:
            continue
        if tr.type == TransactionType.CREW:
            crew += qty
        elif is_owner(tr):
            owner += qty
        else:
            charterer += qty
    return ConsumptionBreakdown(crew=crew, charterer=charterer, owner=owner)


def available_stock(product: Product) -> int:
    """Opening stock plus all supplies of the period."""
    return product.initial_stock + product.total_supplied


def current_stock(product: Product, transactions: Iterable[Transaction]) -> int:
    return available_stock(product) - consumed_quantity(product.id, transactions)


def week_of_month(day_of_month: int) -> int:
    """1-based week of month; days 29-31 stay in week 5."""
    return min(math.ceil(day_of_month / DAYS_PER_WEEK), WEEKS_PER_MONTH)


def _bucket(
    transactions: Iterable[Transaction],
    product_id: str,
    tx_type: TransactionType,
    owner: bool | None = None,
) -> List[int]:
    buckets = [0] * WEEKS_PER_MONTH
    for tr in transactions:
        if tr.type != tx_type:
            continue
        if owner is not None and is_owner(tr) != owner:
            continue
        qty = tr.quantity_of(product_id)
        if qty:
            buckets[week_of_month(tr.timestamp.day) - 1] += qty
    return buckets


def weekly_buckets(transactions: Iterable[Transaction], product_id: str) -> List[int]:
    """Crew issues of product_id per week of month (five buckets, 0-indexed)."""
    return _bucket(transactions, product_id, TransactionType.CREW)


def representation_weekly_buckets(
    transactions: Iterable[Transaction],
    product_id: str,
    representation_type: RepresentationType,
) -> List[int]:
    """Charterer or owner issues of product_id per week of month."""
    return _bucket(
        transactions,
        product_id,
        TransactionType.REPRESENTATION,
        owner=representation_type == RepresentationType.OWNER,
    )
