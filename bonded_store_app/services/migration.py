"""
Conversion between persisted JSON and the domain models.

Stored documents may come from older versions of the application: fields
added later are missing there. `migrate_*` fills those defaults once, at the
persistence boundary, so the rest of the application only sees complete
objects. `dump_*` produces the current JSON shape.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List

from bonded_store_app.config.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_PACK_SIZE,
    DEFAULT_UNIT_TYPE,
)
from bonded_store_app.models import (
    CrewMember,
    Currency,
    Product,
    ReportSettings,
    RepresentationType,
    Transaction,
    TransactionItem,
    TransactionType,
    compute_total,
)

_LOG = logging.getLogger(__name__)

# Shape written by dump_*; older documents carry no version
SCHEMA_VERSION = 2


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_day(value: Any) -> date:
    """
    Issue date from either an ISO date string or a millisecond epoch
    timestamp (earlier documents).
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000.0).date()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            pass
    raise ValueError(f"invalid transaction date: {value!r}")


# --- Crew ----------------------------------------------------------------


def migrate_crew_member(raw: Dict[str, Any]) -> CrewMember:
    # Salaries are paid in EUR or USD only
    currency = raw.get("currency") or DEFAULT_CURRENCY
    cur = Currency.USD if currency == Currency.USD.value else Currency.EUR
    if currency not in (Currency.EUR.value, Currency.USD.value):
        _LOG.warning("Crew member %s: unsupported salary currency %r, using EUR", raw.get("id", ""), currency)
    active = raw.get("isActive")
    return CrewMember(
        id=str(raw.get("id", "")),
        name=str(raw.get("name", "")),
        rank=str(raw.get("rank", "")),
        is_active=True if active is None else bool(active),
        currency=cur,
    )


def dump_crew_member(member: CrewMember) -> Dict[str, Any]:
    return {
        "id": member.id,
        "name": member.name,
        "rank": member.rank,
        "isActive": member.is_active,
        "currency": member.currency.value,
    }


# --- Products ------------------------------------------------------------


def migrate_product(raw: Dict[str, Any]) -> Product:
    return Product(
        id=str(raw.get("id", "")),
        name=str(raw.get("name", "")),
        category=str(raw.get("category", "") or "Other"),
        price=_as_float(raw.get("price")),
        unit_type=raw.get("unitType") or DEFAULT_UNIT_TYPE,
        pack_size=_as_int(raw.get("packSize")) or DEFAULT_PACK_SIZE,
        initial_stock=_as_int(raw.get("initialStock")),
        added_stock_1=_as_int(raw.get("addedStock1")),
        added_stock_2=_as_int(raw.get("addedStock2")),
        added_stock_3=_as_int(raw.get("addedStock3")),
    )


def dump_product(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "price": product.price,
        "unitType": product.unit_type,
        "packSize": product.pack_size,
        "initialStock": product.initial_stock,
        "addedStock1": product.added_stock_1,
        "addedStock2": product.added_stock_2,
        "addedStock3": product.added_stock_3,
    }


# --- Transactions --------------------------------------------------------


def migrate_transaction(raw: Dict[str, Any]) -> Transaction:
    tx_type = TransactionType(raw.get("type", TransactionType.CREW.value))
    rep_raw = raw.get("representationType")
    rep_type = None
    if tx_type == TransactionType.REPRESENTATION:
        rep_type = RepresentationType(rep_raw) if rep_raw else RepresentationType.CHARTERER
    items = [
        TransactionItem(
            product_id=str(i.get("productId", "")),
            product_name=str(i.get("productName", "")),
            quantity=_as_int(i.get("quantity")),
            unit_price=_as_float(i.get("unitPrice")),
        )
        for i in raw.get("items") or []
    ]
    # Totals are derived, never taken from the document
    return Transaction(
        id=str(raw.get("id", "")),
        timestamp=_parse_day(raw.get("timestamp")),
        type=tx_type,
        recipient_id=str(raw.get("recipientId", "")),
        recipient_name=str(raw.get("recipientName", "")),
        representation_type=rep_type,
        items=items,
        total_amount=compute_total(items),
    )


def dump_transaction(tr: Transaction) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": tr.id,
        "timestamp": tr.timestamp.isoformat(),
        "type": tr.type.value,
        "recipientId": tr.recipient_id,
        "recipientName": tr.recipient_name,
        "items": [
            {
                "productId": i.product_id,
                "productName": i.product_name,
                "quantity": i.quantity,
                "unitPrice": i.unit_price,
            }
            for i in tr.items
        ],
        "totalAmount": tr.total_amount,
    }
    if tr.representation_type is not None:
        data["representationType"] = tr.representation_type.value
    return data


# --- Settings ------------------------------------------------------------


def migrate_settings(raw: Dict[str, Any] | None, today: date | None = None) -> ReportSettings:
    """Stored settings merged over blank defaults for the current month."""
    settings = ReportSettings.blank(today)
    if not raw:
        return settings
    if "vesselName" in raw:
        settings.vessel_name = str(raw["vesselName"] or "")
    if "masterName" in raw:
        settings.master_name = str(raw["masterName"] or "")
    if raw.get("reportMonth"):
        month = _as_int(raw["reportMonth"])
        if 1 <= month <= 12:
            settings.report_month = f"{month:02d}"
        else:
            _LOG.warning("Ignoring invalid report month %r", raw["reportMonth"])
    if raw.get("reportYear"):
        year = _as_int(raw["reportYear"])
        if year >= 1:
            settings.report_year = str(year)
        else:
            _LOG.warning("Ignoring invalid report year %r", raw["reportYear"])
    if raw.get("exchangeRate") is not None:
        settings.exchange_rate = _as_float(raw["exchangeRate"], settings.exchange_rate)
    if raw.get("gpbExchangeRate") is not None:
        settings.gbp_exchange_rate = _as_float(raw["gpbExchangeRate"], settings.gbp_exchange_rate)
    if "useGbpForPurchases" in raw:
        settings.use_gbp_for_purchases = bool(raw["useGbpForPurchases"])
    return settings


def dump_settings(settings: ReportSettings) -> Dict[str, Any]:
    return {
        "vesselName": settings.vessel_name,
        "masterName": settings.master_name,
        "reportMonth": settings.report_month,
        "reportYear": settings.report_year,
        "exchangeRate": settings.exchange_rate,
        "gpbExchangeRate": settings.gbp_exchange_rate,
        "useGbpForPurchases": settings.use_gbp_for_purchases,
    }


# --- Collections ---------------------------------------------------------


def _migrate_list(raw: Any, convert, label: str) -> List:
    if not isinstance(raw, list):
        return []
    out = []
    for entry in raw:
        if not isinstance(entry, dict):
            _LOG.warning("Skipping malformed %s entry: %r", label, entry)
            continue
        out.append(convert(entry))
    return out


def migrate_crew(raw: Any) -> List[CrewMember]:
    return _migrate_list(raw, migrate_crew_member, "crew")


def migrate_products(raw: Any) -> List[Product]:
    return _migrate_list(raw, migrate_product, "product")


def migrate_transactions(raw: Any) -> List[Transaction]:
    return _migrate_list(raw, migrate_transaction, "transaction")
