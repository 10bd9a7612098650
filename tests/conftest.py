import io
from datetime import date

import pytest

from wordbox.config import IMMEDIATE_POLICY
from wordbox.database import WordStore
from wordbox.line import LineInterface

TODAY = date(2024, 1, 10)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "words.db"


@pytest.fixture
def store(db_path):
    store = WordStore.create(db_path, policy=IMMEDIATE_POLICY, today=TODAY)
    yield store
    store.close()


@pytest.fixture
def make_line():
    """Build a LineInterface fed from a string; output is captured."""
    def _make(text=""):
        return LineInterface(io.StringIO(text), io.StringIO())
    return _make
