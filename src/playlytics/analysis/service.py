"""Resolve two players and assemble the comparison payload."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, List, Mapping, Tuple

from playlytics.analysis.insights import generate_insights
from playlytics.analysis.trend import TrendSummary, summarize_trend
from playlytics.config import DEFAULT_THRESHOLDS, InsightThresholds
from playlytics.errors import ComparisonError, NotFoundError, ValidationError
from playlytics.models import PlayerRecord
from playlytics.persistence import PlayerStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparedPlayer:
    name: str
    matches: int
    score: int
    assists: int
    rebounds: int
    wins: int

    @classmethod
    def from_record(cls, record: PlayerRecord) -> "ComparedPlayer":
        return cls(
            name=record.name,
            matches=record.matches,
            score=record.score,
            assists=record.assists,
            rebounds=record.rebounds,
            wins=record.wins,
        )


@dataclass(frozen=True)
class ComparisonResult:
    player1: ComparedPlayer
    player2: ComparedPlayer
    trend1: TrendSummary
    trend2: TrendSummary
    insights: List[str]

    def to_payload(self) -> dict[str, Any]:
        return {
            "comparison": {
                "player1": asdict(self.player1),
                "player2": asdict(self.player2),
            },
            "trends": {
                "player1": asdict(self.trend1),
                "player2": asdict(self.trend2),
            },
            "insights": list(self.insights),
        }


class RequestPhase(str, Enum):
    AWAITING_INPUT = "awaiting-input"
    COMPUTING = "computing"
    RESPONDED = "responded"
    FAILED = "failed"


def decode_compare_body(body: bytes | str) -> Any:
    """Decode a raw JSON request body; an empty body decodes to ``None``."""

    if not body:
        return None
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError(f"Invalid JSON body: {exc}") from exc


def parse_compare_request(payload: Any) -> Tuple[str, str]:
    """Extract ``(player1Id, player2Id)``, raising ValidationError when absent."""

    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    player1_id = payload.get("player1Id")
    player2_id = payload.get("player2Id")
    if not isinstance(player1_id, str) or not isinstance(player2_id, str):
        raise ValidationError("Both player IDs are required")
    if not player1_id or not player2_id:
        raise ValidationError("Both player IDs are required")
    return player1_id, player2_id


def lookup_pair(store: PlayerStore, player1_id: str, player2_id: str) -> Tuple[PlayerRecord, PlayerRecord]:
    """Fetch both players with a single query.

    Any result count other than two (missing rows or a repeated id) is a
    NotFoundError. StoreError from the store propagates unchanged.
    """

    players = store.fetch_players([player1_id, player2_id])
    if len(players) != 2:
        raise NotFoundError("Could not find both players")
    by_id = {player.id: player for player in players}
    return by_id[player1_id], by_id[player2_id]


def build_comparison(
    player1: PlayerRecord,
    player2: PlayerRecord,
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> ComparisonResult:
    return ComparisonResult(
        player1=ComparedPlayer.from_record(player1),
        player2=ComparedPlayer.from_record(player2),
        trend1=summarize_trend(player1.stat_line()),
        trend2=summarize_trend(player2.stat_line()),
        insights=generate_insights(player1, player2, thresholds),
    )


def compare_players(
    store: PlayerStore,
    player1_id: str,
    player2_id: str,
    *,
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> ComparisonResult:
    player1, player2 = lookup_pair(store, player1_id, player2_id)
    return build_comparison(player1, player2, thresholds)


class CompareRequestHandler:
    """Single-use handler for one compare request.

    Moves from ``awaiting-input`` through ``computing`` to ``responded``;
    any failure moves it to ``failed`` and is raised as a ComparisonError so
    the boundary can render the error envelope. Unexpected exceptions are
    wrapped in the base ComparisonError. No partial result is returned.
    """

    def __init__(self, store: PlayerStore, *, thresholds: InsightThresholds = DEFAULT_THRESHOLDS):
        self._store = store
        self._thresholds = thresholds
        self.phase = RequestPhase.AWAITING_INPUT

    def _transition(self, phase: RequestPhase) -> None:
        logger.debug("compare-players %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def _fail(self, exc: ComparisonError) -> None:
        self._transition(RequestPhase.FAILED)
        logger.warning("compare-players failed (%s): %s", exc.kind, exc.render())

    def handle(self, payload: Any) -> ComparisonResult:
        return self._run(payload, decode=False)

    def handle_body(self, body: bytes | str) -> ComparisonResult:
        """Like :meth:`handle`, but starts from the raw JSON request body."""

        return self._run(body, decode=True)

    def _run(self, payload: Any, *, decode: bool) -> ComparisonResult:
        if self.phase is not RequestPhase.AWAITING_INPUT:
            raise RuntimeError(f"Handler already used (phase={self.phase.value})")
        try:
            if decode:
                payload = decode_compare_body(payload)
            player1_id, player2_id = parse_compare_request(payload)
            self._transition(RequestPhase.COMPUTING)
            result = compare_players(
                self._store,
                player1_id,
                player2_id,
                thresholds=self._thresholds,
            )
        except ComparisonError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            error = ComparisonError(str(exc))
            self._fail(error)
            raise error from exc
        self._transition(RequestPhase.RESPONDED)
        return result
