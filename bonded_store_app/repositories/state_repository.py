"""
Repository for the persisted store state.

Each collection is one JSON document under its own key, rewritten whole on
every save.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, Session

from bonded_store_app.config.constants import (
    KEY_CREW,
    KEY_LAYOUT,
    KEY_PRODUCTS,
    KEY_SCHEMA,
    KEY_SETTINGS,
    KEY_TRANSACTIONS,
)
from bonded_store_app.models import AppState, CrewMember, Product, ReportSettings, Transaction
from bonded_store_app.repositories.database import Base
from bonded_store_app.services import migration

_LOG = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StoreEntryORM(Base):
    __tablename__ = "store_entries"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload_json: Mapped[str] = mapped_column(Text, default="null")
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, default=_utc_now, nullable=True)


class StateRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def get_raw(self, key: str) -> Optional[Any]:
        obj = self._db.get(StoreEntryORM, key)
        if obj is None:
            return None
        return json.loads(obj.payload_json or "null")

    def put_raw(self, key: str, value: Any, commit: bool = True) -> None:
        payload = json.dumps(value)
        obj = self._db.get(StoreEntryORM, key)
        if obj is None:
            obj = StoreEntryORM(key=key, payload_json=payload, updated_at=_utc_now())
            self._db.add(obj)
        else:
            obj.payload_json = payload
            obj.updated_at = _utc_now()
        if commit:
            self._db.commit()

    def load_state(self) -> AppState:
        """Read every collection, applying field defaults for older documents."""
        stored_version = self.get_raw(KEY_SCHEMA) or 1
        if stored_version < migration.SCHEMA_VERSION:
            _LOG.info("Upgrading stored documents from schema v%s to v%s", stored_version, migration.SCHEMA_VERSION)
        layout = self.get_raw(KEY_LAYOUT)
        return AppState(
            crew=migration.migrate_crew(self.get_raw(KEY_CREW)),
            products=migration.migrate_products(self.get_raw(KEY_PRODUCTS)),
            transactions=migration.migrate_transactions(self.get_raw(KEY_TRANSACTIONS)),
            settings=migration.migrate_settings(self.get_raw(KEY_SETTINGS)),
            sidebar_pinned=True if layout is None else bool(layout),
        )

    def save_crew(self, crew: list[CrewMember], commit: bool = True) -> None:
        self.put_raw(KEY_CREW, [migration.dump_crew_member(c) for c in crew], commit)

    def save_products(self, products: list[Product], commit: bool = True) -> None:
        self.put_raw(KEY_PRODUCTS, [migration.dump_product(p) for p in products], commit)

    def save_transactions(self, transactions: list[Transaction], commit: bool = True) -> None:
        self.put_raw(KEY_TRANSACTIONS, [migration.dump_transaction(t) for t in transactions], commit)

    def save_settings(self, settings: ReportSettings, commit: bool = True) -> None:
        self.put_raw(KEY_SETTINGS, migration.dump_settings(settings), commit)

    def save_layout(self, sidebar_pinned: bool, commit: bool = True) -> None:
        self.put_raw(KEY_LAYOUT, sidebar_pinned, commit)

    def save_state(self, state: AppState) -> None:
        """Write all collections in one database transaction."""
        try:
            self.save_crew(state.crew, commit=False)
            self.save_products(state.products, commit=False)
            self.save_transactions(state.transactions, commit=False)
            self.save_settings(state.settings, commit=False)
            self.save_layout(state.sidebar_pinned, commit=False)
            self.put_raw(KEY_SCHEMA, migration.SCHEMA_VERSION, commit=False)
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
