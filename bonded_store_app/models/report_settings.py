from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Tuple

from bonded_store_app.config.constants import DEFAULT_EXCHANGE_RATE, DEFAULT_GBP_EXCHANGE_RATE


@dataclass(slots=True)
class ReportSettings:
    vessel_name: str = ""
    master_name: str = ""
    # Reporting period: month "01".."12" and four-digit year
    report_month: str = "01"
    report_year: str = "2024"
    # 1 EUR expressed in USD / GBP
    exchange_rate: float = DEFAULT_EXCHANGE_RATE
    gbp_exchange_rate: float = DEFAULT_GBP_EXCHANGE_RATE
    # Purchase prices are typed in GBP; stored prices stay in EUR
    use_gbp_for_purchases: bool = False

    @classmethod
    def blank(cls, today: date | None = None) -> "ReportSettings":
        """Fresh settings for the current calendar month."""
        today = today or date.today()
        return cls(report_month=f"{today.month:02d}", report_year=str(today.year))

    @property
    def period(self) -> Tuple[int, int]:
        """(month, year) as integers."""
        return int(self.report_month), int(self.report_year)

    def in_period(self, day: date) -> bool:
        month, year = self.period
        return day.month == month and day.year == year
