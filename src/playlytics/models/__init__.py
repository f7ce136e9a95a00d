"""Player data models."""

from .player import STAT_FIELDS, PlayerDraft, PlayerRecord, PlayerUpdate

__all__ = ["STAT_FIELDS", "PlayerDraft", "PlayerRecord", "PlayerUpdate"]
