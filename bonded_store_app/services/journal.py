"""
Transaction journal for the active period.

Transactions are appended at checkout and changed only through the report
correction workflow. The journal trusts its callers: recipient and cart checks
belong to the checkout service.
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable, List, Optional

from bonded_store_app.models import Product, Transaction, TransactionItem, compute_total

_LOG = logging.getLogger(__name__)


class TransactionJournal:
    def __init__(self, transactions: Iterable[Transaction] | None = None) -> None:
        self._transactions: List[Transaction] = list(transactions or [])

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self):
        return iter(list(self._transactions))

    def list_all(self) -> List[Transaction]:
        return list(self._transactions)

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    def record(self, transaction: Transaction) -> None:
        self._transactions = [*self._transactions, transaction]

    def apply_edit(self, transaction_id: str, new_items: Iterable[TransactionItem]) -> Optional[Transaction]:
        """
        Replace the items of a transaction and recompute its total.

        Items with quantity <= 0 are dropped. Returns the updated transaction,
        or None when it no longer exists (unknown id, or no items left and the
        transaction was removed).
        """
        existing = self.get(transaction_id)
        if existing is None:
            return None
        items = [copy.copy(i) for i in new_items if i.quantity > 0]
        if not items:
            self._transactions = [t for t in self._transactions if t.id != transaction_id]
            _LOG.info("Transaction %s removed (no items left)", transaction_id)
            return None
        updated = copy.copy(existing)
        updated.items = items
        updated.total_amount = compute_total(items)
        self._transactions = [updated if t.id == transaction_id else t for t in self._transactions]
        return updated

    def remove(self, transaction_id: str) -> None:
        self.apply_edit(transaction_id, [])

    def clear(self) -> None:
        self._transactions = []


# --- Correction workflow helpers (operate on a working copy of the items) ---


def change_quantity(items: List[TransactionItem], index: int, quantity: int) -> List[TransactionItem]:
    """Set a line's quantity; zero or less marks it for removal on save."""
    updated = [copy.copy(i) for i in items]
    if 0 <= index < len(updated):
        updated[index].quantity = max(0, quantity)
    return updated


def remove_item(items: List[TransactionItem], index: int) -> List[TransactionItem]:
    return [copy.copy(i) for n, i in enumerate(items) if n != index]


def add_product_to_items(items: List[TransactionItem], product: Product) -> List[TransactionItem]:
    """
    Add one unit of product: bump an existing line, or append a new line with
    the product's current name and price.
    """
    updated = [copy.copy(i) for i in items]
    for item in updated:
        if item.product_id == product.id:
            item.quantity += 1
            return updated
    updated.append(
        TransactionItem(
            product_id=product.id,
            product_name=product.name,
            quantity=1,
            unit_price=product.price,
        )
    )
    return updated
