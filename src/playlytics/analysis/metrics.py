"""Derived per-player metrics used by the comparison views."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from playlytics.models import STAT_FIELDS, PlayerRecord


def consistency_ratio(player: PlayerRecord) -> float:
    """Total stats per match, 0 when no matches were played."""

    if player.matches > 0:
        return player.total / player.matches
    return 0


def win_rate(player: PlayerRecord) -> float:
    """Wins as a percentage of matches, 0 when no matches were played."""

    if player.matches > 0:
        return (player.wins / player.matches) * 100
    return 0


class StatLine(Protocol):
    matches: int
    score: int
    assists: int
    rebounds: int
    wins: int


def stat_deltas(player1: StatLine, player2: StatLine) -> dict[str, int]:
    """Per-stat difference ``player1 - player2``."""

    return {field: getattr(player1, field) - getattr(player2, field) for field in STAT_FIELDS}


def format_one_decimal(value: float) -> str:
    """Render ``value`` with one decimal, rounding halves away from zero."""

    if value == 0:
        return "0.0"
    quantized = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{quantized}"
