"""
Currency conversion against the configured exchange rates.

EUR is the canonical currency: prices and transaction totals are stored in
EUR. Rates express 1 EUR in the foreign currency, so conversion out of EUR is
a multiplication and conversion into EUR a division.
"""

from __future__ import annotations

from bonded_store_app.models import Currency, ReportSettings
from bonded_store_app.services.validation import safe_divide


def _effective_rate(rate: float) -> float:
    # An unset (zero) rate leaves amounts unconverted
    return rate or 1.0


def eur_to_usd(amount_eur: float, rate: float) -> float:
    return amount_eur * _effective_rate(rate)


def usd_to_eur(amount_usd: float, rate: float) -> float:
    return safe_divide(amount_usd, _effective_rate(rate))


def eur_to_gbp(amount_eur: float, rate: float) -> float:
    return amount_eur * _effective_rate(rate)


def gbp_to_eur(amount_gbp: float, rate: float) -> float:
    return safe_divide(amount_gbp, _effective_rate(rate))


def convert_from_eur(amount_eur: float, currency: Currency, settings: ReportSettings) -> float:
    """Express a EUR amount in the given currency using the settings' rates."""
    if currency == Currency.USD:
        return eur_to_usd(amount_eur, settings.exchange_rate)
    if currency == Currency.GBP:
        return eur_to_gbp(amount_eur, settings.gbp_exchange_rate)
    return amount_eur


def purchase_price_to_eur(entered_price: float, settings: ReportSettings) -> float:
    """Canonical EUR price for a purchase price typed by the operator."""
    if settings.use_gbp_for_purchases:
        return gbp_to_eur(entered_price, settings.gbp_exchange_rate)
    return entered_price


def purchase_price_for_entry(price_eur: float, settings: ReportSettings) -> float:
    """Stored EUR price shown in the entry currency (GBP when enabled)."""
    if settings.use_gbp_for_purchases:
        return eur_to_gbp(price_eur, settings.gbp_exchange_rate)
    return price_eur
