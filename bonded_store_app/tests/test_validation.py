"""Tests for consistency checks and currency conversion."""

from __future__ import annotations

from datetime import date

import pytest

from bonded_store_app.models import AppState, Currency, Product, ReportSettings
from bonded_store_app.services.currency import (
    convert_from_eur,
    eur_to_usd,
    purchase_price_for_entry,
    purchase_price_to_eur,
    usd_to_eur,
)
from bonded_store_app.services.validation import ValidationSeverity, safe_divide, validate_state


def test_severity_levels():
    assert [s.value for s in ValidationSeverity] == ["warning", "error"]


def test_safe_divide():
    assert safe_divide(10, 2) == 5
    assert safe_divide(10, 0) == 0.0
    assert safe_divide(10, 0, default=-1.0) == -1.0


class TestValidateState:
    def test_clean_state_is_valid(self, sample_state):
        result = validate_state(sample_state)
        assert result.valid
        assert not result.issues

    def test_over_issue_reported(self, tx_factory):
        p = Product(id="p", name="Cola", price=1.0, initial_stock=1)
        state = AppState(products=[p], transactions=[tx_factory("t", date(2024, 3, 1), [(p, 3)], recipient_id="x")])
        result = validate_state(state)
        assert not result.valid
        issue = next(i for i in result.issues if i.code == "STOCK_NEGATIVE")
        assert issue.severity == ValidationSeverity.ERROR
        assert issue.value == -2.0

    def test_total_mismatch(self, sample_state):
        sample_state.transactions[0].total_amount = 1.0
        result = validate_state(sample_state)
        assert result.has_errors
        assert "TOTAL_MISMATCH" in {i.code for i in result.issues}

    def test_deleted_references_are_warnings(self, sample_state):
        sample_state.crew = [c for c in sample_state.crew if c.id != "c1"]
        sample_state.products = [p for p in sample_state.products if p.id != "p-cola"]
        result = validate_state(sample_state)
        codes = {i.code for i in result.issues}
        assert {"CREW_UNKNOWN", "PRODUCT_UNKNOWN"} <= codes
        assert result.valid
        assert result.has_warnings


class TestCurrency:
    def test_usd_round_trip(self):
        assert eur_to_usd(20.0, 1.10) == pytest.approx(22.0)
        assert usd_to_eur(22.0, 1.10) == pytest.approx(20.0)

    def test_zero_rate_leaves_amount(self):
        assert eur_to_usd(20.0, 0) == pytest.approx(20.0)
        assert usd_to_eur(20.0, 0) == pytest.approx(20.0)

    def test_convert_from_eur(self, report_settings):
        assert convert_from_eur(10.0, Currency.EUR, report_settings) == pytest.approx(10.0)
        assert convert_from_eur(10.0, Currency.USD, report_settings) == pytest.approx(11.0)
        assert convert_from_eur(10.0, Currency.GBP, report_settings) == pytest.approx(8.5)

    def test_purchase_price_entry(self):
        settings = ReportSettings(gbp_exchange_rate=0.85, use_gbp_for_purchases=True)
        assert purchase_price_to_eur(8.5, settings) == pytest.approx(10.0)
        assert purchase_price_for_entry(10.0, settings) == pytest.approx(8.5)
        settings.use_gbp_for_purchases = False
        assert purchase_price_to_eur(8.5, settings) == pytest.approx(8.5)
