"""
Report aggregators for one reporting period.

Each builder reads the registries and the journal, keeps only transactions
dated inside the settings' (month, year) and returns plain rows and totals.
Values are EUR unless a row states otherwise. No formatting happens here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from bonded_store_app.config.constants import CIGARETTES_CATEGORY, CIGARETTES_PER_CARTON, WEEKS_PER_MONTH
from bonded_store_app.models import (
    CrewMember,
    Currency,
    Product,
    ReportSettings,
    RepresentationType,
    Transaction,
    TransactionType,
)
from bonded_store_app.services.currency import eur_to_usd
from bonded_store_app.services.ledger import (
    consumption_breakdown,
    current_stock,
    representation_weekly_buckets,
)
from bonded_store_app.utils.sorting import (
    get_crew_sort_key,
    get_product_sort_key,
    get_roster_sort_key,
    ordered_categories,
)

HISTORY_ALL = "ALL"
HISTORY_REPRESENTATION = "REPRESENTATION"


def period_transactions(transactions: Iterable[Transaction], settings: ReportSettings) -> List[Transaction]:
    """Transactions dated inside the reporting month."""
    return [t for t in transactions if settings.in_period(t.timestamp)]


def _group_by_category(products: Sequence[Product]) -> List[Tuple[str, List[Product]]]:
    groups = []
    for category in ordered_categories(p.category for p in products):
        groups.append((category, [p for p in products if p.category == category]))
    return groups


# --- Payroll -----------------------------------------------------------------


@dataclass(slots=True)
class PayrollRow:
    member: CrewMember
    deduction_eur: float
    # Amount in the member's salary currency
    final_deduction: float
    currency: Currency
    transactions: List[Transaction] = field(default_factory=list)


@dataclass(slots=True)
class PayrollReport:
    eur_rows: List[PayrollRow]
    usd_rows: List[PayrollRow]
    total_eur: float
    total_usd: float
    # All deductions in EUR, before conversion
    grand_total_eur: float
    exchange_rate: float

    @property
    def rows(self) -> List[PayrollRow]:
        return self.eur_rows + self.usd_rows


def build_payroll(
    crew: Iterable[CrewMember],
    transactions: Iterable[Transaction],
    settings: ReportSettings,
) -> PayrollReport:
    """
    Canteen deductions per crew member (active and signed off).

    USD members are converted with the EUR->USD rate; the grand total stays in
    EUR so it does not move when the rate changes.
    """
    in_period = period_transactions(transactions, settings)
    rows: List[PayrollRow] = []
    for member in sorted(crew, key=get_crew_sort_key):
        own = [t for t in in_period if t.type == TransactionType.CREW and t.recipient_id == member.id]
        deduction_eur = sum(t.total_amount for t in own)
        if member.currency == Currency.USD:
            final = eur_to_usd(deduction_eur, settings.exchange_rate)
        else:
            final = deduction_eur
        rows.append(
            PayrollRow(
                member=member,
                deduction_eur=deduction_eur,
                final_deduction=final,
                currency=member.currency,
                transactions=own,
            )
        )

    eur_rows = [r for r in rows if r.currency == Currency.EUR]
    usd_rows = [r for r in rows if r.currency == Currency.USD]
    return PayrollReport(
        eur_rows=eur_rows,
        usd_rows=usd_rows,
        total_eur=sum(r.final_deduction for r in eur_rows),
        total_usd=sum(r.final_deduction for r in usd_rows),
        grand_total_eur=sum(r.deduction_eur for r in rows),
        exchange_rate=settings.exchange_rate,
    )


# --- Inventory ---------------------------------------------------------------


@dataclass(slots=True)
class InventoryRow:
    product_id: str
    name: str
    category: str
    unit_type: str
    initial_stock: int
    supply_1: int
    supply_2: int
    supply_3: int
    total_supplied: int
    sold_to_crew: int
    given_to_representation: int
    total_out: int
    final_stock: int


def build_inventory(
    products: Iterable[Product],
    transactions: Iterable[Transaction],
    settings: ReportSettings,
) -> List[InventoryRow]:
    in_period = period_transactions(transactions, settings)
    rows: List[InventoryRow] = []
    for p in products:
        out = consumption_breakdown(p.id, in_period)
        rows.append(
            InventoryRow(
                product_id=p.id,
                name=p.name,
                category=p.category,
                unit_type=p.unit_type,
                initial_stock=p.initial_stock,
                supply_1=p.added_stock_1,
                supply_2=p.added_stock_2,
                supply_3=p.added_stock_3,
                total_supplied=p.total_supplied,
                sold_to_crew=out.crew,
                given_to_representation=out.representation,
                total_out=out.total,
                final_stock=p.initial_stock + p.total_supplied - out.total,
            )
        )
    return rows


@dataclass(slots=True)
class InventoryTotals:
    """Catalog valuation at pack price, as shown under the inventory table."""

    initial_value: float = 0.0
    supply_1_value: float = 0.0
    supply_2_value: float = 0.0
    supply_3_value: float = 0.0
    current_value: float = 0.0
    crew_out_value: float = 0.0
    representation_out_value: float = 0.0
    cigarette_cartons: int = 0

    @property
    def cigarette_units(self) -> int:
        return self.cigarette_cartons * CIGARETTES_PER_CARTON


def build_inventory_totals(products: Iterable[Product], transactions: Iterable[Transaction]) -> InventoryTotals:
    """Valuation over the whole journal (the active period)."""
    txs = list(transactions)
    totals = InventoryTotals()
    for p in products:
        out = consumption_breakdown(p.id, txs)
        stock = p.initial_stock + p.total_supplied - out.total
        totals.initial_value += p.initial_stock * p.price
        totals.supply_1_value += p.added_stock_1 * p.price
        totals.supply_2_value += p.added_stock_2 * p.price
        totals.supply_3_value += p.added_stock_3 * p.price
        totals.current_value += stock * p.price
        totals.crew_out_value += out.crew * p.price
        totals.representation_out_value += out.representation * p.price
        if p.category == CIGARETTES_CATEGORY:
            totals.cigarette_cartons += stock
    return totals


# --- Monthly (per category) --------------------------------------------------


@dataclass(slots=True)
class MonthlyRow:
    product_id: str
    name: str
    unit_type: str
    pack_size: int
    price_per_pack: float
    price_per_unit: float
    initial_qty: int
    initial_value: float
    supply_1_value: float
    supply_2_value: float
    supply_3_value: float
    total_supply: int
    total_supply_value: float
    crew_qty: int
    crew_value: float
    charterer_qty: int
    charterer_value: float
    owner_qty: int
    owner_value: float
    total_consumption: int
    consumption_value: float
    ending_stock: int
    ending_value: float


@dataclass(slots=True)
class MonthlyTotals:
    initial_value: float = 0.0
    supply_1_value: float = 0.0
    supply_2_value: float = 0.0
    supply_3_value: float = 0.0
    total_supply_value: float = 0.0
    crew_value: float = 0.0
    charterer_value: float = 0.0
    owner_value: float = 0.0
    consumption_value: float = 0.0
    ending_value: float = 0.0

    def add(self, row: MonthlyRow) -> None:
        self.initial_value += row.initial_value
        self.supply_1_value += row.supply_1_value
        self.supply_2_value += row.supply_2_value
        self.supply_3_value += row.supply_3_value
        self.total_supply_value += row.total_supply_value
        self.crew_value += row.crew_value
        self.charterer_value += row.charterer_value
        self.owner_value += row.owner_value
        self.consumption_value += row.consumption_value
        self.ending_value += row.ending_value


@dataclass(slots=True)
class MonthlyGroup:
    category: str
    rows: List[MonthlyRow]
    totals: MonthlyTotals


@dataclass(slots=True)
class MonthlyReport:
    groups: List[MonthlyGroup]
    totals: MonthlyTotals


def _monthly_row(p: Product, in_period: List[Transaction]) -> MonthlyRow:
    pack_size = p.pack_size or 1
    unit = p.price / pack_size
    out = consumption_breakdown(p.id, in_period)
    supplied = p.total_supplied
    ending = p.initial_stock + supplied - out.total
    return MonthlyRow(
        product_id=p.id,
        name=p.name,
        unit_type=p.unit_type or "pcs",
        pack_size=pack_size,
        price_per_pack=p.price,
        price_per_unit=unit,
        initial_qty=p.initial_stock,
        initial_value=p.initial_stock * unit,
        supply_1_value=p.added_stock_1 * unit,
        supply_2_value=p.added_stock_2 * unit,
        supply_3_value=p.added_stock_3 * unit,
        total_supply=supplied,
        total_supply_value=supplied * unit,
        crew_qty=out.crew,
        crew_value=out.crew * unit,
        charterer_qty=out.charterer,
        charterer_value=out.charterer * unit,
        owner_qty=out.owner,
        owner_value=out.owner * unit,
        total_consumption=out.total,
        consumption_value=out.total * unit,
        ending_stock=ending,
        ending_value=ending * unit,
    )


def build_monthly(
    products: Sequence[Product],
    transactions: Iterable[Transaction],
    settings: ReportSettings,
) -> MonthlyReport:
    """
    Monthly bonded store account: quantities and values per category.

    Values use the unit price (pack price / pack size). Category and grand
    totals add up value columns only.
    """
    in_period = period_transactions(transactions, settings)
    grand = MonthlyTotals()
    groups: List[MonthlyGroup] = []
    for category, members in _group_by_category(products):
        totals = MonthlyTotals()
        rows = [_monthly_row(p, in_period) for p in members]
        for row in rows:
            totals.add(row)
            grand.add(row)
        groups.append(MonthlyGroup(category=category, rows=rows, totals=totals))
    return MonthlyReport(groups=groups, totals=grand)


# --- Representation ----------------------------------------------------------


@dataclass(slots=True)
class RepresentationRow:
    product_id: str
    name: str
    unit_type: str
    price: float
    current_stock: int
    charterer_weeks: List[int]
    charterer_qty: int
    charterer_value: float
    owner_weeks: List[int]
    owner_qty: int
    owner_value: float


@dataclass(slots=True)
class RepresentationGroup:
    category: str
    rows: List[RepresentationRow]


@dataclass(slots=True)
class RepresentationReport:
    groups: List[RepresentationGroup]
    charterer_total: float
    owner_total: float

    @property
    def total(self) -> float:
        return self.charterer_total + self.owner_total


def build_representation(
    products: Sequence[Product],
    transactions: Iterable[Transaction],
    settings: ReportSettings,
) -> RepresentationReport:
    """Charterer and owner issues per week of month, valued at pack price."""
    in_period = period_transactions(transactions, settings)
    groups: List[RepresentationGroup] = []
    charterer_total = 0.0
    owner_total = 0.0
    for category, members in _group_by_category(products):
        rows: List[RepresentationRow] = []
        for p in members:
            chart_weeks = representation_weekly_buckets(in_period, p.id, RepresentationType.CHARTERER)
            own_weeks = representation_weekly_buckets(in_period, p.id, RepresentationType.OWNER)
            chart_qty = sum(chart_weeks)
            own_qty = sum(own_weeks)
            row = RepresentationRow(
                product_id=p.id,
                name=p.name,
                unit_type=p.unit_type,
                price=p.price,
                current_stock=current_stock(p, in_period),
                charterer_weeks=chart_weeks,
                charterer_qty=chart_qty,
                charterer_value=chart_qty * p.price,
                owner_weeks=own_weeks,
                owner_qty=own_qty,
                owner_value=own_qty * p.price,
            )
            charterer_total += row.charterer_value
            owner_total += row.owner_value
            rows.append(row)
        groups.append(RepresentationGroup(category=category, rows=rows))
    return RepresentationReport(groups=groups, charterer_total=charterer_total, owner_total=owner_total)


# --- History -----------------------------------------------------------------


def build_history(
    transactions: Iterable[Transaction],
    settings: ReportSettings,
    recipient_filter: str = HISTORY_ALL,
) -> List[Transaction]:
    """
    Period transactions, crew issues before representation, newest first.

    recipient_filter is HISTORY_ALL, HISTORY_REPRESENTATION or a crew id.
    """
    rows = period_transactions(transactions, settings)
    if recipient_filter == HISTORY_REPRESENTATION:
        rows = [t for t in rows if t.type == TransactionType.REPRESENTATION]
    elif recipient_filter != HISTORY_ALL:
        rows = [t for t in rows if t.recipient_id == recipient_filter]
    # Same-day issues: later journal entries first
    ordered = sorted(
        enumerate(rows),
        key=lambda pair: (
            0 if pair[1].type == TransactionType.CREW else 1,
            -pair[1].timestamp.toordinal(),
            -pair[0],
        ),
    )
    return [t for _, t in ordered]


# --- Order sheet and dashboard ---------------------------------------------


@dataclass(slots=True)
class OrderSheet:
    """Blank order form: one line per active crew member, one column per product."""

    crew: List[CrewMember]
    products: List[Product]


def build_order_sheet(crew: Iterable[CrewMember], products: Iterable[Product]) -> OrderSheet:
    return OrderSheet(
        crew=sorted((c for c in crew if c.is_active), key=get_roster_sort_key),
        products=sorted(products, key=get_product_sort_key),
    )


@dataclass(slots=True)
class DashboardStats:
    active_crew: int
    stock_value: float
    period_sales: float


def build_dashboard_stats(
    crew: Iterable[CrewMember],
    products: Iterable[Product],
    transactions: Iterable[Transaction],
) -> DashboardStats:
    txs = list(transactions)
    return DashboardStats(
        active_crew=sum(1 for c in crew if c.is_active),
        stock_value=sum(current_stock(p, txs) * p.price for p in products),
        period_sales=sum(t.total_amount for t in txs),
    )


def weeks_header() -> List[str]:
    return [f"Wk {n}" for n in range(1, WEEKS_PER_MONTH + 1)]
