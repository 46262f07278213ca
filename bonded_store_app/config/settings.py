"""
Basic settings and logging configuration for the bonded store app.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path


def _get_resource_root() -> Path:

    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS)
    return Path(__file__).resolve().parents[2]


def _get_user_data_dir(resource_root: Path) -> Path:

    if getattr(sys, "frozen", False):
        exe_path = Path(getattr(sys, "executable", resource_root))
        return exe_path.parent / "bonded_store_app_data"
    return resource_root / "bonded_store_app_data"


@dataclass(slots=True)
class Settings:
    """Application-level settings."""

    project_root: Path
    data_dir: Path
    db_path: Path
    backup_dir: Path

    @classmethod
    def default(cls) -> "Settings":
        resource_root = _get_resource_root()
        return cls.for_data_dir(_get_user_data_dir(resource_root), project_root=resource_root)

    @classmethod
    def for_data_dir(cls, data_dir: Path, project_root: Path | None = None) -> "Settings":
        """Build settings rooted at an explicit data directory (tests, --data-dir)."""
        data_dir = Path(data_dir)
        data_dir.mkdir(parents=True, exist_ok=True)
        backup_dir = data_dir / "backups"
        backup_dir.mkdir(exist_ok=True)
        return cls(
            project_root=project_root or _get_resource_root(),
            data_dir=data_dir,
            db_path=data_dir / "bonded_store.db",
            backup_dir=backup_dir,
        )


def init_logging(settings: Settings) -> None:
    """Configure basic logging to the data directory log file."""
    log_file = settings.data_dir / "bonded_store.log"

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )

    logging.getLogger(__name__).info("Logging initialized. DB at %s", settings.db_path)
