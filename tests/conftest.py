import os
import sys

import numpy as np
import pytest

# Ensure repository root is on sys.path so `import numbers4` works during tests
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from helpers import make_draws, make_window  # noqa: E402


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def constant_window():
    """100 draws that all came out 1234"""
    return make_window(["1234"] * 100)


@pytest.fixture
def mixed_draws():
    """150 chronological draws with a deterministic spread of digits"""
    numbers = [f"{(i * 7919 + 1234) % 10000:04d}" for i in range(150)]
    return make_draws(numbers)


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point the database module at a throwaway SQLite file"""
    import numbers4.database as db
    db_path = str(tmp_path / "numbers4_test.db")
    monkeypatch.setattr(db, "get_db_path", lambda: db_path, raising=True)
    db.initialize_database()
    return db_path
