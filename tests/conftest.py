from pathlib import Path

import pytest

from playlytics.persistence import PlayerStore


@pytest.fixture
def store(tmp_path: Path) -> PlayerStore:
    return PlayerStore(tmp_path / "players.sqlite")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
