"""
Period-boundary transforms: month rollover and hard reset.

Both build a complete new AppState from the current one and leave the input
untouched, so the caller swaps state in a single assignment.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Tuple

from bonded_store_app.config.constants import LANDING_VIEW
from bonded_store_app.models import AppState, CrewMember, ReportSettings
from bonded_store_app.services.errors import SettingsValidationError
from bonded_store_app.services.ledger import current_stock
from bonded_store_app.services.registry import CrewRegistry

_LOG = logging.getLogger(__name__)


class PeriodState(Enum):
    ACTIVE = "active"
    ROLLED_OVER = "rolled_over"


@dataclass(slots=True)
class RolloverResult:
    state: AppState
    removed_crew: List[CrewMember]
    previous_period: Tuple[str, str]
    period_state: PeriodState = PeriodState.ROLLED_OVER
    landing_view: str = LANDING_VIEW


def next_period(report_month: str, report_year: str) -> Tuple[str, str]:
    """Month after (report_month, report_year) as ("MM", "YYYY")."""
    month, year = int(report_month), int(report_year)
    if month >= 12:
        return "01", str(year + 1)
    return f"{month + 1:02d}", str(year)


def validate_period(month: str, year: str) -> Tuple[str, str]:
    try:
        m = int(month)
        y = int(year)
    except (TypeError, ValueError):
        raise SettingsValidationError(f"Invalid reporting period {month}/{year}.") from None
    if not 1 <= m <= 12:
        raise SettingsValidationError(f"Report month must be between 01 and 12, got {month}.")
    if y < 1:
        raise SettingsValidationError(f"Invalid report year {year}.")
    return f"{m:02d}", str(y)


def rollover_month(state: AppState, next_month: str, next_year: str) -> RolloverResult:
    """
    Close the current period and open (next_month, next_year).

    Closing stock becomes the new opening stock, supply slots are cleared,
    signed-off crew are removed and the journal is emptied.
    """
    month, year = validate_period(next_month, next_year)
    new_state = state.clone()

    for product in new_state.products:
        product.initial_stock = current_stock(product, state.transactions)
        product.added_stock_1 = 0
        product.added_stock_2 = 0
        product.added_stock_3 = 0

    registry = CrewRegistry(new_state.crew)
    removed = registry.purge_inactive()
    new_state.crew = registry.list_all()
    new_state.transactions = []

    previous = (state.settings.report_month, state.settings.report_year)
    new_state.settings = copy.copy(state.settings)
    new_state.settings.report_month = month
    new_state.settings.report_year = year

    _LOG.info(
        "Month rollover %s/%s -> %s/%s: %d product(s) carried over, %d crew removed, %d transaction(s) cleared",
        previous[0], previous[1], month, year,
        len(new_state.products), len(removed), len(state.transactions),
    )
    return RolloverResult(state=new_state, removed_crew=removed, previous_period=previous)


def hard_reset(state: AppState, confirmed: bool, today: date | None = None) -> AppState:
    """
    Wipe crew, products and transactions and restore blank settings.

    Without confirmation the given state is returned unchanged.
    """
    if not confirmed:
        return state
    _LOG.warning("Hard reset: all crew, products and transactions deleted")
    return AppState(
        crew=[],
        products=[],
        transactions=[],
        settings=ReportSettings.blank(today),
        sidebar_pinned=state.sidebar_pinned,
    )
