"""
Backup service for exporting and restoring the complete store state.

A backup is one JSON document:
    {version, timestamp, crew, products, transactions, settings}
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict

from bonded_store_app.config.constants import BACKUP_VERSION
from bonded_store_app.models import AppState
from bonded_store_app.services import migration
from bonded_store_app.services.errors import BackupFormatError

_LOG = logging.getLogger(__name__)


def backup_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"BSM_Backup_{today.isoformat()}.json"


def state_to_backup(state: AppState) -> Dict[str, Any]:
    return {
        "version": BACKUP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "crew": [migration.dump_crew_member(c) for c in state.crew],
        "products": [migration.dump_product(p) for p in state.products],
        "transactions": [migration.dump_transaction(t) for t in state.transactions],
        "settings": migration.dump_settings(state.settings),
    }


def save_backup_to_file(filepath: Path, state: AppState) -> None:
    """
    Save the full state to a JSON backup file.

    Args:
        filepath: Path where to save the file
        state: The state to save
    """
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(state_to_backup(state), f, indent=2)
    _LOG.info("Backup written to %s", filepath)


def backup_to_state(data: Any, sidebar_pinned: bool = True) -> AppState:
    """
    Build a new AppState from a parsed backup document.

    At least one of crew/products must be a list. Any structural problem
    raises BackupFormatError before a state is returned.
    """
    if not isinstance(data, dict):
        raise BackupFormatError("Backup file is not a JSON object.")
    if not isinstance(data.get("crew"), list) and not isinstance(data.get("products"), list):
        raise BackupFormatError("Backup file contains neither a crew nor a product list.")
    transactions = data.get("transactions")
    if transactions is not None and not isinstance(transactions, list):
        raise BackupFormatError("Backup transactions must be a list.")
    settings = data.get("settings")
    if settings is not None and not isinstance(settings, dict):
        raise BackupFormatError("Backup settings must be an object.")
    try:
        return AppState(
            crew=migration.migrate_crew(data.get("crew")),
            products=migration.migrate_products(data.get("products")),
            transactions=migration.migrate_transactions(transactions),
            settings=migration.migrate_settings(settings),
            sidebar_pinned=sidebar_pinned,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise BackupFormatError(f"Backup file is incompatible: {exc}") from exc


def load_backup_from_file(filepath: Path, sidebar_pinned: bool = True) -> AppState:
    """
    Load and validate a backup file. The caller swaps the returned state in;
    on BackupFormatError nothing has changed.
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        _LOG.warning("Rejected backup %s: %s", filepath, exc)
        raise BackupFormatError(f"Backup file is not valid JSON: {exc}") from exc
    try:
        return backup_to_state(data, sidebar_pinned=sidebar_pinned)
    except BackupFormatError as exc:
        _LOG.warning("Rejected backup %s: %s", filepath, exc.message)
        raise
