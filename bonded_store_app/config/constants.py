"""
Fixed tables and defaults for the bonded store.

Rank and category order drive every sorted listing and report; values not in
these tables are tolerated and placed after the known ones.
"""

from __future__ import annotations

# Crew ranks in report order (Master first, cadets last)
RANKS = (
    "Master", "Ch. Off", "1st Off", "2nd Off", "3rd Off", "JDO",
    "Ch. Eng", "2nd Eng", "3rd Eng", "4th Eng", "ETO", "JEO", "JETO",
    "Fitter", "M/Man", "Bosun", "A.B", "O.S", "Cook", "Steward",
    "Deck Cad.", "Eng Cad.",
)

# Sort index for ranks not found in RANKS
UNKNOWN_RANK_INDEX = 999

# Product categories in report order
CATEGORIES = ("Cigarettes", "Soft Drinks", "Water", "Snacks", "Other")

CIGARETTES_CATEGORY = "Cigarettes"

# Single cigarettes per carton (cigarette stock is kept in cartons)
CIGARETTES_PER_CARTON = 200

# Default exchange rates: 1 EUR in USD / GBP
DEFAULT_EXCHANGE_RATE = 1.10
DEFAULT_GBP_EXCHANGE_RATE = 0.85

DEFAULT_CURRENCY = "EUR"
DEFAULT_UNIT_TYPE = "pcs"
DEFAULT_PACK_SIZE = 1

# At most three supply (restock) events per reporting period
SUPPLY_SLOTS = 3

# Week-of-month buckets used by the weekly reports (days 29-31 fold into week 5)
WEEKS_PER_MONTH = 5
DAYS_PER_WEEK = 7

# Persistence keys, one JSON document each
KEY_CREW = "bsm_crew"
KEY_PRODUCTS = "bsm_products"
KEY_TRANSACTIONS = "bsm_transactions"
KEY_SETTINGS = "bsm_settings"
KEY_LAYOUT = "bsm_sidebar_pinned"
KEY_SCHEMA = "bsm_schema_version"

# Backup document format version
BACKUP_VERSION = "1.5"

# Landing view shown after a month rollover
LANDING_VIEW = "DASHBOARD"
