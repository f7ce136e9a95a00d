"""Pydantic models for API I/O."""

from .comparison import (
    CompareRequest,
    ComparedPlayerResponse,
    ComparisonResponse,
    ErrorResponse,
    PlayerPairResponse,
    TrendPairResponse,
    TrendResponse,
)
from .player import PlayerResponse, SportResponse

__all__ = [
    "CompareRequest",
    "ComparedPlayerResponse",
    "ComparisonResponse",
    "ErrorResponse",
    "PlayerPairResponse",
    "PlayerResponse",
    "SportResponse",
    "TrendPairResponse",
    "TrendResponse",
]
