"""
Sorting utilities for consistent row ordering across all listings and reports.
"""

from __future__ import annotations

from typing import Any

from bonded_store_app.config.constants import CATEGORIES, RANKS, UNKNOWN_RANK_INDEX


def rank_index(rank: str) -> int:
    """Position of rank in the rank table; unknown ranks sort after all known ones."""
    try:
        return RANKS.index(rank)
    except ValueError:
        return UNKNOWN_RANK_INDEX


def category_index(category: str) -> int:
    """Position of category in the fixed category order; unknown categories go last."""
    try:
        return CATEGORIES.index(category)
    except ValueError:
        return len(CATEGORIES)


def name_sort_key(name: str | None) -> tuple:
    """Alphabetical name order; case only separates otherwise equal names."""
    name = name or ""
    return (name.casefold(), name)


def get_crew_sort_key(member: Any) -> tuple:
    """
    Return tuple (status, rank_order, name) for 3-level sorting of crew.

    Sorting order:
    1. Primary: active members before signed-off members
    2. Secondary: rank table position (custom ranks at the end)
    3. Tertiary: name, letters compared case-insensitively first
    """
    active = bool(getattr(member, "is_active", True))
    rank = getattr(member, "rank", "") or ""
    return (0 if active else 1, rank_index(rank), name_sort_key(getattr(member, "name", "")))


def get_roster_sort_key(member: Any) -> tuple:
    """Rank then name, ignoring status (order sheet lists active crew only)."""
    return (rank_index(getattr(member, "rank", "") or ""), name_sort_key(getattr(member, "name", "")))


def get_product_sort_key(product: Any) -> tuple:
    """Return tuple (category_order, category, name) for catalog listings."""
    category = getattr(product, "category", "") or ""
    return (category_index(category), category, name_sort_key(getattr(product, "name", "")))


def ordered_categories(categories) -> list[str]:
    """Known categories in fixed order, then any others alphabetically."""
    present = set(categories)
    known = [c for c in CATEGORIES if c in present]
    extra = sorted(c for c in present if c not in CATEGORIES)
    return known + extra
