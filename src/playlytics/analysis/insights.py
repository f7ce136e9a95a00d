"""Templated natural-language observations about two players.

Sentences are emitted in a fixed order: overall totals, consistency, win
rate, per-player trend, per-player specialization. Within a step player 1
precedes player 2.
"""

from __future__ import annotations

from typing import List

from playlytics.analysis.metrics import consistency_ratio, format_one_decimal, win_rate
from playlytics.analysis.trend import linear_regression_slope
from playlytics.config import DEFAULT_THRESHOLDS, InsightThresholds
from playlytics.models import PlayerRecord


def _overall_insight(player1: PlayerRecord, player2: PlayerRecord, ratio: float) -> str:
    p1_total = player1.total
    p2_total = player2.total
    if p1_total > p2_total * ratio:
        return (
            f"{player1.name} demonstrates significantly higher overall performance "
            f"with {p1_total} total stats vs {p2_total}."
        )
    if p2_total > p1_total * ratio:
        return (
            f"{player2.name} demonstrates significantly higher overall performance "
            f"with {p2_total} total stats vs {p1_total}."
        )
    return "Both players show comparable overall performance levels."


def _consistency_insight(player1: PlayerRecord, player2: PlayerRecord, ratio: float) -> str | None:
    p1_ratio = consistency_ratio(player1)
    p2_ratio = consistency_ratio(player2)
    if p1_ratio > p2_ratio * ratio:
        leader, best, other = player1, p1_ratio, p2_ratio
    elif p2_ratio > p1_ratio * ratio:
        leader, best, other = player2, p2_ratio, p1_ratio
    else:
        return None
    return (
        f"{leader.name} shows better consistency with {format_one_decimal(best)} "
        f"stats per match vs {format_one_decimal(other)}."
    )


def _win_rate_insight(player1: PlayerRecord, player2: PlayerRecord) -> str | None:
    p1_rate = win_rate(player1)
    p2_rate = win_rate(player2)
    if p1_rate > p2_rate:
        leader, best, other = player1, p1_rate, p2_rate
    elif p2_rate > p1_rate:
        leader, best, other = player2, p2_rate, p1_rate
    else:
        return None
    return (
        f"{leader.name} has a superior win rate of {format_one_decimal(best)}% "
        f"compared to {format_one_decimal(other)}%."
    )


def _trend_insight(player: PlayerRecord, band: float) -> str | None:
    slope = linear_regression_slope(player.stat_line())
    if slope > band:
        return f"{player.name} shows an improving performance trend across different metrics."
    if slope < -band:
        return f"{player.name} shows a declining trend in certain performance areas."
    return None


def _specialization_insight(player: PlayerRecord) -> str | None:
    # Rebound-led or tied profiles get no sentence; only strict scorer or
    # playmaker leads are reported.
    if player.score > player.assists and player.score > player.rebounds:
        return f"{player.name} is primarily a scorer with {player.score} points."
    if player.assists > player.score and player.assists > player.rebounds:
        return f"{player.name} excels in playmaking with {player.assists} assists."
    return None


def generate_insights(
    player1: PlayerRecord,
    player2: PlayerRecord,
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> List[str]:
    """Return the ordered insight sentences (between 1 and 7) for two players."""

    insights: List[str] = [_overall_insight(player1, player2, thresholds.leader_ratio)]
    optional = [
        _consistency_insight(player1, player2, thresholds.consistency_ratio),
        _win_rate_insight(player1, player2),
        _trend_insight(player1, thresholds.trend_band),
        _trend_insight(player2, thresholds.trend_band),
        _specialization_insight(player1),
        _specialization_insight(player2),
    ]
    insights.extend(sentence for sentence in optional if sentence is not None)
    return insights
