"""
Reporting utilities (PDF/Excel/text) for the bonded store.
"""

from bonded_store_app.reports.simple_text_report import build_period_summary_text
from bonded_store_app.reports.pdf_report import export_inventory_to_pdf, export_payroll_to_pdf
from bonded_store_app.reports.excel_report import export_period_to_excel, report_filename

__all__ = [
    "build_period_summary_text",
    "export_inventory_to_pdf",
    "export_payroll_to_pdf",
    "export_period_to_excel",
    "report_filename",
]
