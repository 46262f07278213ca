"""
Excel report generation for a reporting period.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill

from ..models import TransactionType
from ..services import report_service

if TYPE_CHECKING:
    from ..models import AppState


def _style_header(ws) -> None:
    """Apply a simple header style to the first row."""
    header_fill = PatternFill(fill_type="solid", fgColor="1E3A8A")
    header_font = Font(bold=True, color="FFFFFF")
    header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment


def _style_body_table(ws, *, start_row: int = 2, stripe: bool = True, bold_last_row: bool = False) -> None:
    """
    Zebra striping, left-aligned first column and an optional bold totals row.
    """
    stripe_fill = PatternFill(fill_type="solid", fgColor="F5F5F5")
    for row in ws.iter_rows(min_row=start_row, max_row=ws.max_row, min_col=1, max_col=ws.max_column):
        for cell in row:
            if stripe and cell.row % 2 == 0:
                cell.fill = stripe_fill
            if cell.column == 1:
                cell.alignment = Alignment(horizontal="left", vertical="center", wrap_text=True)
    if bold_last_row and ws.max_row >= start_row:
        for cell in ws[ws.max_row]:
            cell.font = Font(bold=True)


def _write_sheet(writer, df: pd.DataFrame, name: str, first_col_width: int = 32, totals: bool = False) -> None:
    df.to_excel(writer, sheet_name=name, index=False)
    ws = writer.sheets[name]
    ws.column_dimensions["A"].width = first_col_width
    _style_header(ws)
    _style_body_table(ws, start_row=2, stripe=True, bold_last_row=totals)
    ws.freeze_panes = "A2"


def _payroll_frame(report: report_service.PayrollReport) -> pd.DataFrame:
    rows = []
    for group, total, cur in (
        (report.eur_rows, report.total_eur, "EUR"),
        (report.usd_rows, report.total_usd, "USD"),
    ):
        for idx, r in enumerate(group, start=1):
            name = r.member.name if r.member.is_active else f"{r.member.name} (signed off)"
            rows.append({
                "#": idx,
                "Name": name,
                "Rank": r.member.rank,
                "Currency": cur,
                "Deduction EUR": round(r.deduction_eur, 2),
                "Deduction": round(r.final_deduction, 2),
            })
        if group:
            rows.append({"#": "", "Name": "", "Rank": f"TOTAL {cur}", "Currency": cur,
                         "Deduction EUR": "", "Deduction": round(total, 2)})
    rows.append({"#": "", "Name": "", "Rank": "GRAND TOTAL", "Currency": "EUR",
                 "Deduction EUR": round(report.grand_total_eur, 2), "Deduction": ""})
    return pd.DataFrame(rows)


def _inventory_frame(rows: list[report_service.InventoryRow]) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "Product": r.name,
            "Start": r.initial_stock,
            "Sup 1": r.supply_1,
            "Sup 2": r.supply_2,
            "Sup 3": r.supply_3,
            "In": r.total_supplied,
            "Out crew": r.sold_to_crew,
            "Out rep.": r.given_to_representation,
            "Total out": r.total_out,
            "End": r.final_stock,
        }
        for r in rows
    ], columns=["Product", "Start", "Sup 1", "Sup 2", "Sup 3", "In", "Out crew", "Out rep.", "Total out", "End"])


def _monthly_frame(report: report_service.MonthlyReport) -> pd.DataFrame:
    rows = []
    for group in report.groups:
        rows.append({"Product": group.category})
        for r in group.rows:
            rows.append({
                "Product": r.name,
                "Unit": r.unit_type,
                "Units/pack": r.pack_size,
                "Price/pack": round(r.price_per_pack, 2),
                "Price/unit": round(r.price_per_unit, 2),
                "Initial qty": r.initial_qty,
                "Initial value": round(r.initial_value, 2),
                "Supply qty": r.total_supply,
                "Supply value": round(r.total_supply_value, 2),
                "Crew qty": r.crew_qty,
                "Crew value": round(r.crew_value, 2),
                "Charterer qty": r.charterer_qty,
                "Charterer value": round(r.charterer_value, 2),
                "Owner qty": r.owner_qty,
                "Owner value": round(r.owner_value, 2),
                "Consumption qty": r.total_consumption,
                "Consumption value": round(r.consumption_value, 2),
                "Ending qty": r.ending_stock,
                "Ending value": round(r.ending_value, 2),
            })
    t = report.totals
    rows.append({
        "Product": "TOTAL",
        "Initial value": round(t.initial_value, 2),
        "Supply value": round(t.total_supply_value, 2),
        "Crew value": round(t.crew_value, 2),
        "Charterer value": round(t.charterer_value, 2),
        "Owner value": round(t.owner_value, 2),
        "Consumption value": round(t.consumption_value, 2),
        "Ending value": round(t.ending_value, 2),
    })
    return pd.DataFrame(rows)


def _representation_frame(report: report_service.RepresentationReport) -> pd.DataFrame:
    weeks = report_service.weeks_header()
    rows = []
    for group in report.groups:
        rows.append({"Product": group.category})
        for r in group.rows:
            row = {"Product": r.name, "Unit": r.unit_type, "Price": r.price, "Stock": r.current_stock}
            for label, qty in zip(weeks, r.charterer_weeks):
                row[f"Charterers {label}"] = qty
            row["Charterers qty"] = r.charterer_qty
            row["Charterers value"] = round(r.charterer_value, 2)
            for label, qty in zip(weeks, r.owner_weeks):
                row[f"Owners {label}"] = qty
            row["Owners qty"] = r.owner_qty
            row["Owners value"] = round(r.owner_value, 2)
            rows.append(row)
    rows.append({
        "Product": "TOTAL",
        "Charterers value": round(report.charterer_total, 2),
        "Owners value": round(report.owner_total, 2),
    })
    return pd.DataFrame(rows)


def _history_frame(history) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "Date": tr.timestamp.strftime("%d/%m/%Y"),
            "Recipient": tr.recipient_name,
            "Type": "Crew" if tr.type == TransactionType.CREW else "Representation",
            "Items": ", ".join(f"{i.product_name} ({i.quantity})" for i in tr.items),
            "Amount EUR": round(tr.total_amount, 2),
        }
        for tr in history
    ], columns=["Date", "Recipient", "Type", "Items", "Amount EUR"])


def report_filename(prefix: str, state: "AppState", ext: str) -> str:
    return f"{prefix}_{state.settings.report_year}_{state.settings.report_month}.{ext}"


def export_period_to_excel(filepath: Path, state: "AppState") -> None:
    """
    Write the period's payroll, monthly, representation, inventory and
    history reports to one workbook.
    """
    settings = state.settings
    summary = pd.DataFrame([
        {"Parameter": "Vessel", "Value": settings.vessel_name},
        {"Parameter": "Master", "Value": settings.master_name},
        {"Parameter": "Period", "Value": f"{settings.report_month}/{settings.report_year}"},
        {"Parameter": "Exchange rate EUR/USD", "Value": settings.exchange_rate},
        {"Parameter": "Exchange rate EUR/GBP", "Value": settings.gbp_exchange_rate},
    ])
    payroll = report_service.build_payroll(state.crew, state.transactions, settings)
    monthly = report_service.build_monthly(state.products, state.transactions, settings)
    representation = report_service.build_representation(state.products, state.transactions, settings)
    inventory = report_service.build_inventory(state.products, state.transactions, settings)
    history = report_service.build_history(state.transactions, settings)

    with pd.ExcelWriter(str(filepath), engine="openpyxl") as writer:
        _write_sheet(writer, summary, "Summary")
        writer.sheets["Summary"].column_dimensions["B"].width = 32
        _write_sheet(writer, _payroll_frame(payroll), "Payroll", first_col_width=6, totals=True)
        _write_sheet(writer, _monthly_frame(monthly), "Monthly", totals=True)
        _write_sheet(writer, _representation_frame(representation), "Representation", totals=True)
        _write_sheet(writer, _inventory_frame(inventory), "Inventory")
        _write_sheet(writer, _history_frame(history), "History", first_col_width=12)
