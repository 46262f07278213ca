"""
Whole-application state: the registries, the journal and the settings.

Owned by BondedStoreService and persisted through StateRepository; nothing
else holds a module-level copy.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List

from .crew import CrewMember
from .product import Product
from .report_settings import ReportSettings
from .transaction import Transaction


@dataclass(slots=True)
class AppState:
    crew: List[CrewMember] = field(default_factory=list)
    products: List[Product] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)
    settings: ReportSettings = field(default_factory=ReportSettings.blank)
    # UI layout preference (sidebar pinned)
    sidebar_pinned: bool = True

    def clone(self) -> "AppState":
        return copy.deepcopy(self)
