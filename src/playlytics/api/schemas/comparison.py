from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class CompareRequest(BaseModel):
    """Documented request shape; the handler validates presence itself."""

    player1Id: str = Field(..., min_length=1)
    player2Id: str = Field(..., min_length=1)


class ComparedPlayerResponse(BaseModel):
    name: str
    matches: int
    score: int
    assists: int
    rebounds: int
    wins: int


class PlayerPairResponse(BaseModel):
    player1: ComparedPlayerResponse
    player2: ComparedPlayerResponse


class TrendResponse(BaseModel):
    slope: float
    direction: str


class TrendPairResponse(BaseModel):
    player1: TrendResponse
    player2: TrendResponse


class ComparisonResponse(BaseModel):
    comparison: PlayerPairResponse
    trends: TrendPairResponse
    insights: List[str]


class ErrorResponse(BaseModel):
    error: str
