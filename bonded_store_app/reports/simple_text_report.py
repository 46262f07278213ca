"""
Simple text-based summary of the reporting period.
"""

from __future__ import annotations

from bonded_store_app.models import AppState
from bonded_store_app.services import report_service
from bonded_store_app.services.validation import validate_state


def build_period_summary_text(state: AppState) -> str:
    settings = state.settings
    stats = report_service.build_dashboard_stats(state.crew, state.products, state.transactions)
    payroll = report_service.build_payroll(state.crew, state.transactions, settings)
    monthly = report_service.build_monthly(state.products, state.transactions, settings)
    rep = report_service.build_representation(state.products, state.transactions, settings)
    totals = report_service.build_inventory_totals(state.products, state.transactions)

    lines: list[str] = []
    lines.append(f"Vessel: {settings.vessel_name} (Master: {settings.master_name})")
    lines.append(f"Period: {settings.report_month}/{settings.report_year}")
    lines.append("")
    lines.append(f"Active crew: {stats.active_crew}")
    lines.append(f"Sales this month: EUR {stats.period_sales:.2f}")
    lines.append(f"Stock value: EUR {stats.stock_value:.2f}")
    lines.append(f"Cigarettes in stock: {totals.cigarette_cartons} ctn ({totals.cigarette_units} pcs)")
    lines.append("")
    lines.append(f"Payroll EUR: {payroll.total_eur:.2f}")
    lines.append(f"Payroll USD: {payroll.total_usd:.2f} (rate {settings.exchange_rate})")
    lines.append(f"Payroll total (EUR): {payroll.grand_total_eur:.2f}")
    lines.append(f"Consumption value: EUR {monthly.totals.consumption_value:.2f}")
    lines.append(f"Representation charterers: EUR {rep.charterer_total:.2f}")
    lines.append(f"Representation owners: EUR {rep.owner_total:.2f}")

    check = validate_state(state)
    if check.issues:
        lines.append("")
        lines.append("Issues:")
        for issue in check.issues:
            lines.append(f"  [{issue.severity.value}] {issue.message}")
    return "\n".join(lines)
