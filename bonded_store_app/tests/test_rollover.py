"""Tests for month rollover and hard reset."""

from __future__ import annotations

from datetime import date

import pytest

from bonded_store_app.models import AppState, CrewMember, Product
from bonded_store_app.services.errors import SettingsValidationError
from bonded_store_app.services.ledger import current_stock
from bonded_store_app.services.rollover_service import (
    PeriodState,
    hard_reset,
    next_period,
    rollover_month,
    validate_period,
)
from bonded_store_app.services.store_service import BondedStoreService


class TestNextPeriod:
    @pytest.mark.parametrize(
        "current,expected",
        [(("03", "2024"), ("04", "2024")), (("12", "2024"), ("01", "2025")), (("9", "2024"), ("10", "2024"))],
    )
    def test_next_period(self, current, expected):
        assert next_period(*current) == expected

    def test_validate_period_pads_month(self):
        assert validate_period("4", "2024") == ("04", "2024")

    @pytest.mark.parametrize("month,year", [("0", "2024"), ("13", "2024"), ("", "2024"), ("03", "abc")])
    def test_validate_period_rejects(self, month, year):
        with pytest.raises(SettingsValidationError):
            validate_period(month, year)


class TestRolloverMonth:
    def test_closing_stock_becomes_opening_stock(self, sample_state):
        expected = {p.id: current_stock(p, sample_state.transactions) for p in sample_state.products}
        result = rollover_month(sample_state, "04", "2024")
        new = result.state
        for p in new.products:
            assert p.initial_stock == expected[p.id]
            assert p.supplies == (0, 0, 0)
            # Stock is unchanged across the boundary
            assert current_stock(p, new.transactions) == expected[p.id]
        assert new.transactions == []
        assert [c.id for c in new.crew] == ["c1", "c2", "c4"]
        assert [c.id for c in result.removed_crew] == ["c3"]
        assert [c.id for c in sample_state.crew] == ["c1", "c2", "c3", "c4"]
        assert (new.settings.report_month, new.settings.report_year) == ("04", "2024")
        assert result.previous_period == ("03", "2024")
        assert result.period_state == PeriodState.ROLLED_OVER
        assert result.landing_view == "DASHBOARD"

    def test_input_state_untouched(self, sample_state):
        rollover_month(sample_state, "04", "2024")
        assert len(sample_state.transactions) == 4
        assert len(sample_state.crew) == 4
        assert sample_state.products[0].initial_stock == 100
        assert sample_state.settings.report_month == "03"

    def test_deterministic(self, sample_state):
        first = rollover_month(sample_state, "04", "2024").state
        second = rollover_month(sample_state, "04", "2024").state
        assert first == second

    def test_negative_stock_carried_over(self, tx_factory):
        p = Product(id="p", price=1.0, initial_stock=1)
        state = AppState(products=[p], transactions=[tx_factory("t", date(2024, 3, 1), [(p, 3)])])
        new = rollover_month(state, "04", "2024").state
        assert new.products[0].initial_stock == -2

    def test_invalid_period_rejected(self, sample_state):
        with pytest.raises(SettingsValidationError):
            rollover_month(sample_state, "13", "2024")


class TestHardReset:
    def test_unconfirmed_is_noop(self, sample_state):
        assert hard_reset(sample_state, confirmed=False) is sample_state
        assert len(sample_state.crew) == 4

    def test_confirmed_wipes(self, sample_state):
        sample_state.sidebar_pinned = False
        new = hard_reset(sample_state, confirmed=True, today=date(2025, 1, 15))
        assert new.crew == [] and new.products == [] and new.transactions == []
        assert (new.settings.report_month, new.settings.report_year) == ("01", "2025")
        assert new.settings.vessel_name == ""
        assert new.sidebar_pinned is False


class TestServiceBoundary:
    def test_rollover_persisted(self, db_session):
        service = BondedStoreService(db_session)
        service.save_crew_member(CrewMember(name="Gone", rank="Cook", is_active=False))
        service.save_product(Product(name="Water", price=1.0, initial_stock=5, added_stock_1=5))
        result = service.rollover("05", "2024")
        assert len(result.removed_crew) == 1

        reloaded = BondedStoreService(db_session)
        assert reloaded.state.crew == []
        assert reloaded.state.products[0].initial_stock == 10
        assert reloaded.state.products[0].added_stock_1 == 0
        assert reloaded.settings.report_month == "05"

    def test_hard_reset_requires_confirmation(self, db_session):
        service = BondedStoreService(db_session)
        service.save_product(Product(name="Water", price=1.0, initial_stock=5))
        assert service.hard_reset(confirmed=False) is False
        assert len(BondedStoreService(db_session).state.products) == 1
        assert service.hard_reset(confirmed=True) is True
        assert BondedStoreService(db_session).state.products == []
