"""Helpers to load player stat CSVs and insert them into the store."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from playlytics.models import STAT_FIELDS, PlayerDraft, PlayerRecord
from playlytics.persistence import PlayerStore


logger = logging.getLogger(__name__)

DEFAULT_PLAYER_MAPPING: dict[str, str] = {
    "name": "name",
    "sport": "sport",
    "matches": "matches",
    "score": "score",
    "assists": "assists",
    "rebounds": "rebounds",
    "wins": "wins",
}


@dataclass
class ImportReport:
    total_rows: int = 0
    imported: int = 0
    skipped_rows: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "imported": self.imported,
            "skipped_rows": list(self.skipped_rows),
        }


def _parse_spec(spec: str) -> str | Tuple[str, ...]:
    if "|" in spec:
        return tuple(part.strip() for part in spec.split("|"))
    return spec


def _extract(row: Mapping[str, str], spec: Optional[str | Sequence[str]]) -> str:
    if spec is None:
        return ""
    if isinstance(spec, str):
        value = row.get(spec)
        return value.strip() if value is not None else ""
    parts = [(row.get(col) or "").strip() for col in spec]
    return " ".join(part for part in parts if part)


def _parse_count(raw: str) -> int:
    cleaned = raw.replace(",", "").strip()
    if not cleaned:
        return 0
    value = float(cleaned)
    if not value.is_integer():
        raise ValueError(f"count {raw.strip()!r} is not a whole number")
    return int(value)


def row_to_draft(
    row: Mapping[str, str],
    mapping: Mapping[str, str],
    *,
    default_sport: str | None = None,
) -> PlayerDraft:
    """Build a draft from one CSV row; raises ValueError on bad input."""

    resolved = {**DEFAULT_PLAYER_MAPPING, **mapping}
    data: dict[str, object] = {
        "name": _extract(row, _parse_spec(resolved["name"])),
        "sport": _extract(row, _parse_spec(resolved["sport"])) or (default_sport or ""),
    }
    for stat in STAT_FIELDS:
        data[stat] = _parse_count(_extract(row, _parse_spec(resolved[stat])))
    try:
        return PlayerDraft(**data)
    except PydanticValidationError as exc:
        fields = ", ".join(str(error["loc"][0]) for error in exc.errors())
        raise ValueError(f"invalid {fields}") from exc


def load_player_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
    default_sport: str | None = None,
) -> Tuple[List[PlayerDraft], ImportReport]:
    """Read ``path`` into drafts; rows that fail checks are reported, not raised."""

    mapping = dict(mapping or {})
    report = ImportReport()
    drafts: List[PlayerDraft] = []
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        for line_no, row in enumerate(reader, start=2):
            report.total_rows += 1
            try:
                drafts.append(row_to_draft(row, mapping, default_sport=default_sport))
            except (ValueError, OverflowError) as exc:
                label = _extract(row, _parse_spec(mapping.get("name", "name"))) or "<unnamed>"
                report.skipped_rows.append(f"line {line_no} ({label}): {exc}")
    if report.skipped_rows:
        logger.info("Skipped %s of %s rows from %s", len(report.skipped_rows), report.total_rows, path)
    return drafts, report


def import_players(
    store: PlayerStore,
    drafts: Iterable[PlayerDraft],
    report: ImportReport | None = None,
) -> Tuple[List[PlayerRecord], ImportReport]:
    report = report or ImportReport()
    created: List[PlayerRecord] = []
    for draft in drafts:
        created.append(store.create_player(draft))
    report.imported += len(created)
    return created, report
