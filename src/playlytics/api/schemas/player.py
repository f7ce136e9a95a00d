from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from playlytics.models import PlayerRecord


class PlayerResponse(BaseModel):
    id: str
    name: str
    sport: str
    matches: int
    score: int
    assists: int
    rebounds: int
    wins: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: PlayerRecord) -> "PlayerResponse":
        return cls.model_validate(record.model_dump())


class SportResponse(BaseModel):
    key: str
    label: str
