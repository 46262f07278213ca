"""
Checkout: turn a cart and a recipient into a journal transaction.

All checks run before anything is built, so a rejected checkout leaves the
journal untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List

from bonded_store_app.models import (
    CrewMember,
    Product,
    RepresentationType,
    Transaction,
    TransactionItem,
    TransactionType,
    compute_total,
)
from bonded_store_app.services.errors import CheckoutValidationError
from bonded_store_app.services.ledger import current_stock
from bonded_store_app.utils.ids import new_id

UNKNOWN_RECIPIENT = "Unknown"


@dataclass(slots=True)
class CheckoutRequest:
    mode: TransactionType
    # product id -> quantity
    cart: Dict[str, int] = field(default_factory=dict)
    crew_id: str = ""
    representative_name: str = ""
    representation_type: RepresentationType = RepresentationType.CHARTERER
    issue_date: date = field(default_factory=date.today)


def available_products(products: Iterable[Product], transactions: Iterable[Transaction]) -> List[tuple]:
    """(product, stock) pairs with stock left to issue."""
    txs = list(transactions)
    out = []
    for p in products:
        stock = current_stock(p, txs)
        if stock > 0:
            out.append((p, stock))
    return out


def cart_total(cart: Dict[str, int], products: Iterable[Product]) -> float:
    by_id = {p.id: p for p in products}
    return sum(by_id[pid].price * qty for pid, qty in cart.items() if pid in by_id)


def add_to_cart(cart: Dict[str, int], product: Product, transactions: Iterable[Transaction]) -> Dict[str, int]:
    """One more unit of product, unless that would exceed its stock."""
    updated = dict(cart)
    if updated.get(product.id, 0) < current_stock(product, transactions):
        updated[product.id] = updated.get(product.id, 0) + 1
    return updated


def remove_from_cart(cart: Dict[str, int], product_id: str) -> Dict[str, int]:
    updated = dict(cart)
    qty = updated.get(product_id, 0)
    if qty > 1:
        updated[product_id] = qty - 1
    else:
        updated.pop(product_id, None)
    return updated


def build_transaction(
    request: CheckoutRequest,
    crew: Iterable[CrewMember],
    products: Iterable[Product],
    transactions: Iterable[Transaction],
) -> Transaction:
    """
    Validate request against the registries and current stock and build the
    transaction to record. Raises CheckoutValidationError.
    """
    cart = {pid: qty for pid, qty in request.cart.items() if qty > 0}
    if not cart:
        raise CheckoutValidationError("The cart is empty.")

    if request.mode == TransactionType.CREW:
        if not request.crew_id:
            raise CheckoutValidationError("Select a crew member.")
        member = next((c for c in crew if c.id == request.crew_id), None)
        recipient_id = request.crew_id
        recipient_name = member.name if member else UNKNOWN_RECIPIENT
        rep_type = None
    else:
        name = request.representative_name.strip()
        if not name:
            raise CheckoutValidationError("Enter the representation recipient.")
        recipient_id = name
        recipient_name = name
        rep_type = request.representation_type

    txs = list(transactions)
    by_id = {p.id: p for p in products}
    items: List[TransactionItem] = []
    for pid, qty in cart.items():
        product = by_id.get(pid)
        if product is None:
            raise CheckoutValidationError(f"Product {pid} is no longer in the catalog.")
        stock = current_stock(product, txs)
        if qty > stock:
            raise CheckoutValidationError(
                f"Only {stock} {product.unit_type} of {product.name} in stock, {qty} requested."
            )
        items.append(
            TransactionItem(
                product_id=product.id,
                product_name=product.name,
                quantity=qty,
                unit_price=product.price,
            )
        )

    return Transaction(
        id=new_id(),
        timestamp=request.issue_date,
        type=request.mode,
        recipient_id=recipient_id,
        recipient_name=recipient_name,
        representation_type=rep_type,
        items=items,
        total_amount=compute_total(items),
    )
