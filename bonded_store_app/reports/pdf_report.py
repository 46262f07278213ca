"""
PDF report generation for payroll and inventory.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, List

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..services import report_service

if TYPE_CHECKING:
    from ..models import AppState, ReportSettings

_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), "#1E3A8A"),
        ("TEXTCOLOR", (0, 0), (-1, 0), "white"),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
        ("GRID", (0, 0), (-1, -1), 0.5, "gray"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
    ]
)


def _fmt(value: object, fmt: str) -> str:
    """Safely format numeric values for PDF tables."""
    if value is None:
        return ""
    try:
        return format(float(value), fmt)
    except (TypeError, ValueError):
        return str(value)


def _header(story: list, settings: "ReportSettings", title: str, styles) -> None:
    title_style = ParagraphStyle("ReportTitle", parent=styles["Heading1"], fontSize=14)
    story.append(Paragraph(settings.vessel_name or "", styles["Heading3"]))
    story.append(Paragraph(f"Master: {settings.master_name}", styles["Normal"]))
    story.append(Paragraph(f"Period: {settings.report_month}/{settings.report_year}", styles["Normal"]))
    story.append(Paragraph(f"Exchange rate: {settings.exchange_rate}", styles["Normal"]))
    story.append(Paragraph(title, title_style))
    story.append(Spacer(1, 0.3 * cm))


def _signatures(story: list) -> None:
    story.append(Spacer(1, 1.5 * cm))
    sig = Table(
        [["_" * 25, "", "_" * 25], ["Master", "", "Bonded store keeper"]],
        colWidths=[6 * cm, 4 * cm, 6 * cm],
    )
    sig.setStyle(TableStyle([("ALIGN", (0, 0), (-1, -1), "CENTER"), ("FONTSIZE", (0, 0), (-1, -1), 9)]))
    story.append(sig)


def _payroll_table(rows: List[report_service.PayrollRow], currency: str, total: float) -> Table:
    data = [["#", "Name", "Rank", "Deduction"]]
    for idx, r in enumerate(rows, start=1):
        name = r.member.name if r.member.is_active else f"{r.member.name} (signed off)"
        data.append([str(idx), name, r.member.rank, f"{currency} {_fmt(r.final_deduction, '.2f')}"])
    data.append(["", "", f"TOTAL {currency}", f"{currency} {_fmt(total, '.2f')}"])
    table = Table(data, colWidths=[1.2 * cm, 7 * cm, 4 * cm, 4 * cm])
    table.setStyle(_TABLE_STYLE)
    return table


def export_payroll_to_pdf(filepath: Path, state: "AppState") -> None:
    """
    Payroll deductions: EUR crew on the first page, USD crew on the next,
    each with its own total and signature lines.
    """
    report = report_service.build_payroll(state.crew, state.transactions, state.settings)
    doc = SimpleDocTemplate(
        str(filepath),
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
    )
    styles = getSampleStyleSheet()
    story: list = []
    sections = [
        (rows, cur, total)
        for rows, cur, total in (
            (report.eur_rows, "EUR", report.total_eur),
            (report.usd_rows, "USD", report.total_usd),
        )
        if rows
    ]
    for n, (rows, cur, total) in enumerate(sections):
        if n:
            story.append(PageBreak())
        _header(story, state.settings, f"Payroll deductions ({cur})", styles)
        story.append(_payroll_table(rows, cur, total))
        _signatures(story)
    if not sections:
        _header(story, state.settings, "Payroll deductions", styles)
        story.append(Paragraph("No crew on record.", styles["Normal"]))
    doc.build(story)


def export_inventory_to_pdf(filepath: Path, state: "AppState") -> None:
    rows = report_service.build_inventory(state.products, state.transactions, state.settings)
    doc = SimpleDocTemplate(
        str(filepath),
        pagesize=landscape(A4),
        rightMargin=1 * cm,
        leftMargin=1 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
    )
    styles = getSampleStyleSheet()
    story: list = []
    _header(story, state.settings, f"Inventory report ({date.today().strftime('%d/%m/%Y')})", styles)

    def _slot(qty: int) -> str:
        return str(qty) if qty > 0 else "-"

    data = [["Product", "Start", "Sup 1", "Sup 2", "Sup 3", "In", "Out crew", "Out rep.", "Total out", "End"]]
    for r in rows:
        data.append([
            r.name, str(r.initial_stock), _slot(r.supply_1), _slot(r.supply_2), _slot(r.supply_3),
            str(r.total_supplied), str(r.sold_to_crew), str(r.given_to_representation),
            str(r.total_out), str(r.final_stock),
        ])
    table = Table(data, colWidths=[7 * cm] + [2.2 * cm] * 9, repeatRows=1)
    table.setStyle(_TABLE_STYLE)
    story.append(table)
    doc.build(story)
