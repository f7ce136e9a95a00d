"""Input adapters that turn raw stat files into player drafts."""

from .players import (
    DEFAULT_PLAYER_MAPPING,
    ImportReport,
    import_players,
    load_player_csv,
    row_to_draft,
)

__all__ = [
    "DEFAULT_PLAYER_MAPPING",
    "ImportReport",
    "import_players",
    "load_player_csv",
    "row_to_draft",
]
