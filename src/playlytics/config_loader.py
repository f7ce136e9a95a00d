"""Load service settings from JSON profiles and environment variables."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from playlytics.config import DEFAULT_THRESHOLDS, InsightThresholds


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "PLAYLYTICS_DB_PATH"
_CORS_ENV = "PLAYLYTICS_CORS_ORIGINS"
_LOG_LEVEL_ENV = "PLAYLYTICS_LOG_LEVEL"
_THRESHOLD_ENV = {
    "leader_ratio": "PLAYLYTICS_LEADER_RATIO",
    "consistency_ratio": "PLAYLYTICS_CONSISTENCY_RATIO",
    "trend_band": "PLAYLYTICS_TREND_BAND",
}

DEFAULT_DB_PATH = Path(__file__).resolve().parent / "playlytics.sqlite"


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; keeping configured value", name, raw)
        return None


@dataclass
class Settings:
    db_path: Path = DEFAULT_DB_PATH
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS

    @classmethod
    def load(cls, path: Path) -> "Settings":
        data = json.loads(path.read_text(encoding="utf-8"))
        settings = cls()
        if data.get("db_path"):
            settings.db_path = Path(data["db_path"])
        if data.get("cors_origins"):
            settings.cors_origins = list(data["cors_origins"])
        if data.get("log_level"):
            settings.log_level = str(data["log_level"]).upper()
        if data.get("thresholds"):
            settings.thresholds = InsightThresholds.from_mapping(data["thresholds"])
        return settings

    def save(self, path: Path) -> None:
        payload = {
            "db_path": str(self.db_path),
            "cors_origins": self.cors_origins,
            "log_level": self.log_level,
            "thresholds": self.thresholds.to_dict(),
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    @classmethod
    def from_env(cls, base: Optional["Settings"] = None) -> "Settings":
        """Overlay ``PLAYLYTICS_*`` environment variables on ``base``."""

        settings = replace(base) if base is not None else cls()
        db_path = os.getenv(_DB_PATH_ENV)
        if db_path:
            settings.db_path = Path(db_path)
        origins = os.getenv(_CORS_ENV)
        if origins:
            settings.cors_origins = [item.strip() for item in origins.split(",") if item.strip()]
        log_level = os.getenv(_LOG_LEVEL_ENV)
        if log_level:
            settings.log_level = log_level.strip().upper()
        overrides = {key: _env_float(env_name) for key, env_name in _THRESHOLD_ENV.items()}
        settings.thresholds = settings.thresholds.with_overrides(**overrides)
        return settings


@dataclass
class ImportProfile:
    """Saved CSV column mapping for ``playlytics import``."""

    column_mapping: dict[str, str]
    default_sport: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> "ImportProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            column_mapping=data.get("column_mapping", {}),
            default_sport=data.get("default_sport"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "column_mapping": self.column_mapping,
            "default_sport": self.default_sport,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
