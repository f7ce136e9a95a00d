"""Canonical player models shared across the store, API and comparison layers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


STAT_FIELDS = ("matches", "score", "assists", "rebounds", "wins")


class PlayerDraft(BaseModel):
    """Payload for inserting a new player row."""

    name: str = Field(..., min_length=1)
    sport: str = Field(..., min_length=1)
    matches: int = Field(default=0, ge=0)
    score: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    rebounds: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)


class PlayerUpdate(BaseModel):
    """Named optional overrides for an existing player; unset fields are kept."""

    name: Optional[str] = Field(default=None, min_length=1)
    sport: Optional[str] = Field(default=None, min_length=1)
    matches: Optional[int] = Field(default=None, ge=0)
    score: Optional[int] = Field(default=None, ge=0)
    assists: Optional[int] = Field(default=None, ge=0)
    rebounds: Optional[int] = Field(default=None, ge=0)
    wins: Optional[int] = Field(default=None, ge=0)

    def overrides(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PlayerRecord(BaseModel):
    """Stored player row.

    Counters are not re-validated on read: rows written outside this package
    may carry any integer, and ``wins`` may exceed ``matches``.
    """

    id: str = Field(..., min_length=1)
    name: str
    sport: str
    matches: int = 0
    score: int = 0
    assists: int = 0
    rebounds: int = 0
    wins: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @property
    def total(self) -> int:
        return self.score + self.assists + self.rebounds

    def stat_line(self) -> list[int]:
        """Ordered sequence used for trend estimation."""

        return [self.score, self.assists, self.rebounds]

    def with_overrides(self, update: PlayerUpdate) -> "PlayerRecord":
        return self.model_copy(update=update.overrides())
