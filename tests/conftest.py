# tests/conftest.py

from pathlib import Path

import pytest

from flowmate.config import Settings
from flowmate.domain.board.models import Columns

from .fakes import CollectingSink, FixedClock, make_board


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture()
def board() -> Columns:
    return make_board()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings with short timers so debounce and window tests run quickly.
    """
    return Settings(
        data_file=tmp_path / "board.json",
        autosave_debounce_seconds=0.05,
        manual_move_window_seconds=0.1,
    )
