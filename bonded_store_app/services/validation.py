"""
Consistency checks over the store state.

Detects over-issued products (negative derived stock), transactions that
reference deleted products or crew, totals that disagree with their items and
supply slots holding negative quantities. Nothing here blocks an operation:
the issues are reported for the operator to correct.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from bonded_store_app.models import AppState, TransactionType, compute_total
from bonded_store_app.services.ledger import current_stock

# Floating-point tolerance for money comparisons
EPS = 1e-9


class ValidationSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: ValidationSeverity
    message: str
    value: float | None = None
    limit: float | None = None


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.severity == ValidationSeverity.ERROR for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == ValidationSeverity.WARNING for i in self.issues)


def safe_divide(a: float, b: float, default: float = 0.0) -> float:
    """Avoid zero divisions."""
    if abs(b) < EPS:
        return default
    return a / b


def validate_state(state: AppState) -> ValidationResult:
    """
    Run all consistency checks on the current period's data.
    """
    issues: List[ValidationIssue] = []
    product_ids = {p.id for p in state.products}
    crew_ids = {c.id for c in state.crew}

    # 1. Over-issued stock
    for product in state.products:
        stock = current_stock(product, state.transactions)
        if stock < 0:
            issues.append(
                ValidationIssue(
                    code="STOCK_NEGATIVE",
                    severity=ValidationSeverity.ERROR,
                    message=f"{product.name}: {-stock} unit(s) issued beyond available stock.",
                    value=float(stock),
                    limit=0.0,
                )
            )
        if any(s < 0 for s in product.supplies) or product.initial_stock < 0:
            issues.append(
                ValidationIssue(
                    code="SUPPLY_NEGATIVE",
                    severity=ValidationSeverity.WARNING,
                    message=f"{product.name}: opening stock or a supply slot is negative.",
                )
            )

    for tr in state.transactions:
        # 2. Items pointing at deleted products
        for item in tr.items:
            if item.product_id not in product_ids:
                issues.append(
                    ValidationIssue(
                        code="PRODUCT_UNKNOWN",
                        severity=ValidationSeverity.WARNING,
                        message=f"Transaction for {tr.recipient_name} references deleted product "
                        f"'{item.product_name}'. Ignored in stock figures.",
                        value=float(item.quantity),
                    )
                )
        # 3. Crew transactions for deleted crew
        if tr.type == TransactionType.CREW and tr.recipient_id not in crew_ids:
            issues.append(
                ValidationIssue(
                    code="CREW_UNKNOWN",
                    severity=ValidationSeverity.WARNING,
                    message=f"Transaction for {tr.recipient_name} references a deleted crew member. "
                    "Not included in payroll.",
                    value=tr.total_amount,
                )
            )
        # 4. Stored total out of line with items
        expected = compute_total(tr.items)
        if abs(expected - tr.total_amount) > 1e-6:
            issues.append(
                ValidationIssue(
                    code="TOTAL_MISMATCH",
                    severity=ValidationSeverity.ERROR,
                    message=f"Transaction {tr.id} total {tr.total_amount:.2f} differs from items {expected:.2f}.",
                    value=tr.total_amount,
                    limit=expected,
                )
            )

    valid = not any(i.severity == ValidationSeverity.ERROR for i in issues)
    return ValidationResult(valid=valid, issues=issues)
