"""Thresholds used when turning comparison metrics into insight sentences."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class InsightThresholds:
    # A total must exceed the other by this factor to name a leader.
    leader_ratio: float = 1.2
    # Same, for stats-per-match.
    consistency_ratio: float = 1.15
    # Slopes outside +/- this band produce a trend sentence.
    trend_band: float = 0.5

    def with_overrides(
        self,
        *,
        leader_ratio: Optional[float] = None,
        consistency_ratio: Optional[float] = None,
        trend_band: Optional[float] = None,
    ) -> "InsightThresholds":
        changes = {
            key: value
            for key, value in (
                ("leader_ratio", leader_ratio),
                ("consistency_ratio", consistency_ratio),
                ("trend_band", trend_band),
            )
            if value is not None
        }
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InsightThresholds":
        known = {field.name for field in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown threshold keys: {', '.join(sorted(unknown))}")
        return DEFAULT_THRESHOLDS.with_overrides(**{key: float(value) for key, value in data.items()})

    def to_dict(self) -> dict[str, float]:
        return {field.name: getattr(self, field.name) for field in fields(self)}


DEFAULT_THRESHOLDS = InsightThresholds()
