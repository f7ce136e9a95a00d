"""Sport categories offered when recording players."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable


@dataclass(frozen=True)
class SportCategory:
    key: str
    label: str


_SPORTS: Dict[str, SportCategory] = {
    "BASKETBALL": SportCategory(key="BASKETBALL", label="Basketball"),
    "FOOTBALL": SportCategory(key="FOOTBALL", label="Football"),
    "SOCCER": SportCategory(key="SOCCER", label="Soccer"),
    "BASEBALL": SportCategory(key="BASEBALL", label="Baseball"),
    "HOCKEY": SportCategory(key="HOCKEY", label="Hockey"),
}


def iter_sports() -> Iterable[SportCategory]:
    """Return the configured categories in display order."""

    return _SPORTS.values()


def get_sport(name: str) -> SportCategory:
    """Fetch a category by key or label, raising KeyError if missing."""

    key = name.strip().upper()
    if key not in _SPORTS:
        raise KeyError(f"No sport category configured for {name!r}")
    return _SPORTS[key]
