"""Tests for the report aggregators."""

from __future__ import annotations

from datetime import date

import pytest

from bonded_store_app.models import (
    CrewMember,
    Currency,
    Product,
    ReportSettings,
    RepresentationType,
    TransactionType,
)
from bonded_store_app.services import report_service
from bonded_store_app.services.journal import TransactionJournal


class TestPayroll:
    def test_usd_conversion_scenario(self, tx_factory):
        crew = [CrewMember(id="jd", name="J. Doe", rank="A.B", currency=Currency.USD)]
        p = Product(id="p", price=10.0, initial_stock=10)
        txs = [
            tx_factory("a", date(2024, 3, 2), [(p, 1)], recipient_id="jd"),
            tx_factory("b", date(2024, 3, 5), [(p, 1)], recipient_id="jd"),
        ]
        settings = ReportSettings(report_month="03", report_year="2024", exchange_rate=1.10)
        report = report_service.build_payroll(crew, txs, settings)
        assert report.usd_rows[0].deduction_eur == pytest.approx(20.0)
        assert report.usd_rows[0].final_deduction == pytest.approx(22.0)
        assert report.total_usd == pytest.approx(22.0)
        assert report.grand_total_eur == pytest.approx(20.0)

    def test_rate_change_only_moves_converted_amount(self, sample_crew, sample_transactions, report_settings):
        first = report_service.build_payroll(sample_crew, sample_transactions, report_settings)
        report_settings.exchange_rate = 1.25
        second = report_service.build_payroll(sample_crew, sample_transactions, report_settings)
        assert second.grand_total_eur == pytest.approx(first.grand_total_eur)
        assert second.usd_rows[0].deduction_eur == pytest.approx(first.usd_rows[0].deduction_eur)
        assert second.usd_rows[0].final_deduction == pytest.approx(60.0 * 1.25)

    def test_grouping_and_order(self, sample_crew, sample_transactions, report_settings):
        report = report_service.build_payroll(sample_crew, sample_transactions, report_settings)
        # Active first by rank (unknown rank last), signed-off after
        assert [r.member.id for r in report.eur_rows] == ["c2", "c4", "c3"]
        assert [r.member.id for r in report.usd_rows] == ["c1"]
        assert report.total_eur == pytest.approx(80.0)
        assert report.grand_total_eur == pytest.approx(140.0)

    def test_representation_and_other_periods_ignored(self, sample_crew, sample_products, sample_transactions,
                                                      report_settings, tx_factory):
        water = sample_products[0]
        txs = sample_transactions + [tx_factory("old", date(2024, 2, 28), [(water, 3)], recipient_id="c2")]
        report = report_service.build_payroll(sample_crew, txs, report_settings)
        master = next(r for r in report.eur_rows if r.member.id == "c2")
        assert master.deduction_eur == pytest.approx(80.0)

    def test_name_breaks_rank_ties(self):
        crew = [
            CrewMember(id="2", name="Zed", rank="A.B"),
            CrewMember(id="1", name="Adam", rank="A.B"),
        ]
        settings = ReportSettings(report_month="03", report_year="2024")
        report = report_service.build_payroll(crew, [], settings)
        assert [r.member.name for r in report.eur_rows] == ["Adam", "Zed"]

    def test_name_order_ignores_case(self):
        crew = [
            CrewMember(id="2", name="Zed", rank="A.B"),
            CrewMember(id="1", name="adam", rank="A.B"),
        ]
        settings = ReportSettings(report_month="03", report_year="2024")
        report = report_service.build_payroll(crew, [], settings)
        assert [r.member.name for r in report.eur_rows] == ["adam", "Zed"]
        assert [c.name for c in report_service.build_order_sheet(crew, []).crew] == ["adam", "Zed"]


class TestInventory:
    def test_rows(self, sample_products, sample_transactions, report_settings):
        rows = {r.product_id: r for r in report_service.build_inventory(sample_products, sample_transactions, report_settings)}
        water = rows["p-water"]
        assert water.total_supplied == 50
        assert water.sold_to_crew == 15
        assert water.given_to_representation == 0
        assert water.final_stock == 135
        cig = rows["p-cig"]
        assert (cig.supply_1, cig.supply_2, cig.supply_3) == (0, 10, 0)
        assert cig.sold_to_crew == 2
        assert cig.given_to_representation == 1
        assert cig.total_out == 3
        assert cig.final_stock == 27

    def test_totals(self, sample_products, sample_transactions):
        totals = report_service.build_inventory_totals(sample_products, sample_transactions)
        assert totals.cigarette_cartons == 27
        assert totals.cigarette_units == 27 * 200
        assert totals.initial_value == pytest.approx(100 * 6.0 + 20 * 25.0 + 48 * 2.0)
        assert totals.representation_out_value == pytest.approx(3 * 2.0 + 1 * 25.0)


class TestMonthly:
    def test_category_order_and_values(self, sample_products, sample_transactions, report_settings):
        report = report_service.build_monthly(sample_products, sample_transactions, report_settings)
        assert [g.category for g in report.groups] == ["Cigarettes", "Soft Drinks", "Water"]
        water = report.groups[2].rows[0]
        assert water.price_per_unit == pytest.approx(1.0)
        assert water.initial_value == pytest.approx(100.0)
        assert water.supply_1_value == pytest.approx(50.0)
        assert water.crew_qty == 15
        assert water.crew_value == pytest.approx(15.0)
        assert water.ending_stock == 135
        assert water.ending_value == pytest.approx(135.0)

    def test_totals_sum_values_only(self, sample_products, sample_transactions, report_settings):
        report = report_service.build_monthly(sample_products, sample_transactions, report_settings)
        expected = sum(r.consumption_value for g in report.groups for r in g.rows)
        assert report.totals.consumption_value == pytest.approx(expected)
        assert report.totals.charterer_value == pytest.approx(6.0)
        assert report.totals.owner_value == pytest.approx(25.0)
        assert report.groups[0].totals.ending_value == pytest.approx(27 * 25.0)

    def test_unknown_category_rendered_last(self, sample_products, report_settings):
        products = sample_products + [Product(id="x", name="Razor", category="Toiletries", price=3.0)]
        report = report_service.build_monthly(products, [], report_settings)
        assert report.groups[-1].category == "Toiletries"


class TestRepresentation:
    def test_week_scenario(self, tx_factory):
        x = Product(id="x", name="X", category="Snacks", price=2.0, initial_stock=10)
        tr = tx_factory(
            "r", date(2024, 3, 9), [(x, 3)], recipient_id="Charter Co",
            tx_type=TransactionType.REPRESENTATION, rep_type=RepresentationType.CHARTERER,
        )
        settings = ReportSettings(report_month="03", report_year="2024")
        report = report_service.build_representation([x], [tr], settings)
        row = report.groups[0].rows[0]
        assert row.charterer_weeks == [0, 3, 0, 0, 0]
        assert row.charterer_qty == 3
        assert row.charterer_value == pytest.approx(6.0)
        assert row.owner_weeks == [0, 0, 0, 0, 0]
        assert row.owner_value == 0
        assert row.current_stock == 7
        assert report.charterer_total == pytest.approx(6.0)

    def test_owner_totals(self, sample_products, sample_transactions, report_settings):
        report = report_service.build_representation(sample_products, sample_transactions, report_settings)
        assert report.owner_total == pytest.approx(25.0)
        assert report.charterer_total == pytest.approx(6.0)
        assert report.total == pytest.approx(31.0)


class TestHistory:
    def test_crew_first_then_newest(self, sample_transactions, report_settings):
        rows = report_service.build_history(sample_transactions, report_settings)
        assert [t.id for t in rows] == ["t2", "t1", "t4", "t3"]

    def test_filter_by_crew(self, sample_transactions, report_settings):
        rows = report_service.build_history(sample_transactions, report_settings, "c1")
        assert [t.id for t in rows] == ["t1"]

    def test_filter_representation(self, sample_transactions, report_settings):
        rows = report_service.build_history(
            sample_transactions, report_settings, report_service.HISTORY_REPRESENTATION
        )
        assert [t.id for t in rows] == ["t4", "t3"]

    def test_same_day_latest_recorded_first(self, tx_factory, report_settings):
        p = Product(id="p", price=1.0, initial_stock=10)
        txs = [
            tx_factory("first", date(2024, 3, 5), [(p, 1)], recipient_id="c1"),
            tx_factory("second", date(2024, 3, 5), [(p, 1)], recipient_id="c1"),
            tx_factory("older", date(2024, 3, 1), [(p, 1)], recipient_id="c1"),
        ]
        rows = report_service.build_history(txs, report_settings)
        assert [t.id for t in rows] == ["second", "first", "older"]

    def test_deleted_transaction_disappears(self, sample_crew, sample_products, sample_transactions, report_settings):
        journal = TransactionJournal(sample_transactions)
        journal.apply_edit("t2", [])
        txs = journal.list_all()
        assert "t2" not in [t.id for t in report_service.build_history(txs, report_settings)]
        payroll = report_service.build_payroll(sample_crew, txs, report_settings)
        assert next(r for r in payroll.eur_rows if r.member.id == "c2").deduction_eur == 0
        inv = report_service.build_inventory(sample_products, txs, report_settings)
        assert inv[0].sold_to_crew == 10


class TestOrderSheetAndDashboard:
    def test_order_sheet(self, sample_crew, sample_products):
        sheet = report_service.build_order_sheet(sample_crew, sample_products)
        assert [c.id for c in sheet.crew] == ["c2", "c1", "c4"]
        assert [p.category for p in sheet.products] == ["Cigarettes", "Soft Drinks", "Water"]

    def test_dashboard(self, sample_crew, sample_products, sample_transactions):
        stats = report_service.build_dashboard_stats(sample_crew, sample_products, sample_transactions)
        assert stats.active_crew == 3
        assert stats.period_sales == pytest.approx(60.0 + 80.0 + 6.0 + 25.0)
        assert stats.stock_value == pytest.approx(135 * 6.0 + 27 * 25.0 + 45 * 2.0)


class TestIdempotentReads:
    def test_repeated_calls_identical(self, sample_state):
        s = sample_state
        for build in (
            lambda: report_service.build_payroll(s.crew, s.transactions, s.settings),
            lambda: report_service.build_monthly(s.products, s.transactions, s.settings),
            lambda: report_service.build_representation(s.products, s.transactions, s.settings),
            lambda: report_service.build_inventory(s.products, s.transactions, s.settings),
        ):
            assert build() == build()
