import sqlite3

import pandas as pd
import pytest

from numbers4 import database as db
from numbers4.draw_history import DrawHistory
from numbers4.exceptions import MalformedDrawError


def _frame(rows):
    return pd.DataFrame(rows, columns=['draw_number', 'draw_date', 'winning_number'])


def test_get_db_connection_returns_sqlite_connection(temp_db):
    conn = db.get_db_connection()
    assert isinstance(conn, sqlite3.Connection)
    conn.close()


def test_initialize_database_creates_draws_table(temp_db):
    # Idempotent
    db.initialize_database()

    conn = db.get_db_connection()
    try:
        cur = conn.cursor()
        cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in cur.fetchall()}
        assert db.DRAWS_TABLE in tables
    finally:
        conn.close()


def test_bulk_insert_and_read_back(temp_db):
    inserted = db.bulk_insert_draws(_frame([
        (2, '2024-01-02', 102),
        (1, '2024-01-01', '9876'),
        (3, '2024-01-03', '0007'),
    ]))
    assert inserted == 3

    df = db.get_all_draws()
    assert df['draw_number'].tolist() == [1, 2, 3]
    assert df['winning_number'].tolist() == ['9876', '0102', '0007']

    before = db.get_all_draws(max_draw_number=3)
    assert before['draw_number'].tolist() == [1, 2]

    latest = db.get_latest_draw()
    assert latest == {'draw_number': 3, 'draw_date': '2024-01-03', 'winning_number': '0007'}


def test_history_from_database(temp_db):
    db.bulk_insert_draws(_frame([(1, '2024-01-01', '0102'), (2, '2024-01-02', '3456')]))
    history = DrawHistory.from_database()
    assert len(history) == 2
    assert history.latest().winning_number == '3456'
    assert history.latest_window(2).numbers == ['3456', '0102']


def test_empty_table(temp_db):
    assert db.get_latest_draw() is None
    assert db.bulk_insert_draws(_frame([])) == 0
    assert len(DrawHistory.from_database()) == 0


def test_malformed_rows_rejected(temp_db):
    with pytest.raises(MalformedDrawError):
        db.bulk_insert_draws(_frame([(1, '2024-01-01', '12a4')]))


def test_connections_are_closed_after_use(temp_db, monkeypatch):
    opened = []
    connect = db.get_db_connection

    def tracking_connection():
        conn = connect()
        opened.append(conn)
        return conn

    monkeypatch.setattr(db, "get_db_connection", tracking_connection)
    db.bulk_insert_draws(_frame([(1, '2024-01-01', '1234')]))
    db.get_all_draws()
    db.get_latest_draw()

    assert len(opened) == 3
    for conn in opened:
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")
