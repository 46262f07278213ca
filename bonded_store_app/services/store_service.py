"""
Application service for the bonded store.

Owns the in-memory AppState, routes every change through the registries and
the journal, and writes the changed collection back immediately. Derived
figures (stock, reports) are recomputed on each call.
"""

from __future__ import annotations

import copy
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from sqlalchemy.orm import Session

from bonded_store_app.models import AppState, CrewMember, Product, ReportSettings, Transaction, TransactionItem
from bonded_store_app.repositories.state_repository import StateRepository
from bonded_store_app.services import report_service
from bonded_store_app.services.backup_service import load_backup_from_file, save_backup_to_file
from bonded_store_app.services.checkout_service import CheckoutRequest, build_transaction
from bonded_store_app.services.currency import purchase_price_to_eur
from bonded_store_app.services.errors import SettingsValidationError
from bonded_store_app.services.journal import TransactionJournal
from bonded_store_app.services.ledger import current_stock
from bonded_store_app.services.registry import CrewRegistry, ProductCatalog
from bonded_store_app.services.rollover_service import RolloverResult, hard_reset, rollover_month, validate_period
from bonded_store_app.services.validation import ValidationResult, validate_state

_LOG = logging.getLogger(__name__)


class BondedStoreService:
    def __init__(self, db: Session) -> None:
        self._repo = StateRepository(db)
        self._state = self._repo.load_state()

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def settings(self) -> ReportSettings:
        return self._state.settings

    def reload(self) -> AppState:
        self._state = self._repo.load_state()
        return self._state

    # --- Crew -------------------------------------------------------------

    def list_crew(self) -> List[CrewMember]:
        return CrewRegistry(self._state.crew).list_sorted()

    def list_active_crew(self) -> List[CrewMember]:
        return CrewRegistry(self._state.crew).list_active()

    def save_crew_member(self, member: CrewMember) -> CrewMember:
        registry = CrewRegistry(self._state.crew)
        saved = registry.save(member)
        self._state.crew = registry.list_all()
        self._repo.save_crew(self._state.crew)
        return saved

    def delete_crew_member(self, crew_id: str) -> None:
        registry = CrewRegistry(self._state.crew)
        registry.delete(crew_id)
        self._state.crew = registry.list_all()
        self._repo.save_crew(self._state.crew)

    # --- Products ---------------------------------------------------------

    def list_products(self) -> List[Product]:
        return ProductCatalog(self._state.products).list_sorted()

    def save_product(self, product: Product, price_in_entry_currency: bool = False) -> Product:
        """
        Create or update a product. With price_in_entry_currency the price is
        taken as typed by the operator (GBP when GBP purchases are enabled).
        """
        if price_in_entry_currency:
            product = copy.copy(product)
            product.price = purchase_price_to_eur(product.price, self._state.settings)
        catalog = ProductCatalog(self._state.products)
        saved = catalog.save(product)
        self._state.products = catalog.list_all()
        self._repo.save_products(self._state.products)
        return saved

    def delete_product(self, product_id: str) -> None:
        catalog = ProductCatalog(self._state.products)
        catalog.delete(product_id)
        self._state.products = catalog.list_all()
        self._repo.save_products(self._state.products)

    def stock_of(self, product_id: str) -> Optional[int]:
        product = ProductCatalog(self._state.products).get(product_id)
        if product is None:
            return None
        return current_stock(product, self._state.transactions)

    # --- Settings ---------------------------------------------------------

    def save_settings(self, settings: ReportSettings) -> ReportSettings:
        month, year = validate_period(settings.report_month, settings.report_year)
        if settings.exchange_rate <= 0 or settings.gbp_exchange_rate <= 0:
            raise SettingsValidationError("Exchange rates must be greater than zero.")
        saved = copy.copy(settings)
        saved.report_month = month
        saved.report_year = year
        self._state.settings = saved
        self._repo.save_settings(saved)
        return saved

    def set_sidebar_pinned(self, pinned: bool) -> None:
        self._state.sidebar_pinned = pinned
        self._repo.save_layout(pinned)

    # --- Journal ----------------------------------------------------------

    def checkout(self, request: CheckoutRequest) -> Transaction:
        tr = build_transaction(request, self._state.crew, self._state.products, self._state.transactions)
        journal = TransactionJournal(self._state.transactions)
        journal.record(tr)
        self._state.transactions = journal.list_all()
        self._repo.save_transactions(self._state.transactions)
        _LOG.info(
            "Checkout %s to %s: %d item(s), EUR %.2f",
            tr.type.value, tr.recipient_name, len(tr.items), tr.total_amount,
        )
        return tr

    def edit_transaction(self, transaction_id: str, items: List[TransactionItem]) -> Optional[Transaction]:
        journal = TransactionJournal(self._state.transactions)
        updated = journal.apply_edit(transaction_id, items)
        self._state.transactions = journal.list_all()
        self._repo.save_transactions(self._state.transactions)
        if updated is not None:
            _LOG.info(
                "Transaction %s corrected: %d item(s), EUR %.2f",
                transaction_id, len(updated.items), updated.total_amount,
            )
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        journal = TransactionJournal(self._state.transactions)
        journal.remove(transaction_id)
        self._state.transactions = journal.list_all()
        self._repo.save_transactions(self._state.transactions)

    # --- Reports ----------------------------------------------------------

    def payroll(self) -> report_service.PayrollReport:
        return report_service.build_payroll(self._state.crew, self._state.transactions, self.settings)

    def inventory(self) -> List[report_service.InventoryRow]:
        return report_service.build_inventory(self._state.products, self._state.transactions, self.settings)

    def inventory_totals(self) -> report_service.InventoryTotals:
        return report_service.build_inventory_totals(self._state.products, self._state.transactions)

    def monthly(self) -> report_service.MonthlyReport:
        return report_service.build_monthly(self._state.products, self._state.transactions, self.settings)

    def representation(self) -> report_service.RepresentationReport:
        return report_service.build_representation(self._state.products, self._state.transactions, self.settings)

    def history(self, recipient_filter: str = report_service.HISTORY_ALL) -> List[Transaction]:
        return report_service.build_history(self._state.transactions, self.settings, recipient_filter)

    def order_sheet(self) -> report_service.OrderSheet:
        return report_service.build_order_sheet(self._state.crew, self._state.products)

    def dashboard(self) -> report_service.DashboardStats:
        return report_service.build_dashboard_stats(self._state.crew, self._state.products, self._state.transactions)

    def check_consistency(self) -> ValidationResult:
        return validate_state(self._state)

    # --- Period boundary --------------------------------------------------

    def rollover(self, next_month: str, next_year: str) -> RolloverResult:
        result = rollover_month(self._state, next_month, next_year)
        self._repo.save_state(result.state)
        self._state = result.state
        return result

    def hard_reset(self, confirmed: bool, today: date | None = None) -> bool:
        """Returns True when the data was wiped."""
        new_state = hard_reset(self._state, confirmed, today)
        if new_state is self._state:
            return False
        self._repo.save_state(new_state)
        self._state = new_state
        return True

    # --- Backup -----------------------------------------------------------

    def export_backup(self, filepath: Path) -> None:
        save_backup_to_file(filepath, self._state)

    def restore_backup(self, filepath: Path) -> AppState:
        new_state = load_backup_from_file(filepath, sidebar_pinned=self._state.sidebar_pinned)
        self._repo.save_state(new_state)
        self._state = new_state
        _LOG.info(
            "Restored backup %s: %d crew, %d products, %d transactions",
            filepath, len(new_state.crew), len(new_state.products), len(new_state.transactions),
        )
        return new_state
