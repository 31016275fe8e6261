import sqlite3
import os
from contextlib import closing
from typing import Optional

import pandas as pd
from loguru import logger

from numbers4.config import PROJECT_ROOT, load_config
from numbers4.draws import normalize_winning_number

DRAWS_TABLE = "numbers4_draws"


def get_db_path() -> str:
    """Reads the database file path from the configuration file."""
    db_file = load_config().database_file
    db_path = db_file if os.path.isabs(db_file) else os.path.join(PROJECT_ROOT, db_file)
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    return db_path


def get_db_connection() -> sqlite3.Connection:
    """
    Establishes a connection to the SQLite database.

    Returns:
        sqlite3.Connection: A connection object to the database.

    Raises:
        sqlite3.Error: If database connection fails
    """
    db_path = get_db_path()
    try:
        conn = sqlite3.connect(db_path, timeout=30)
        conn.execute("PRAGMA busy_timeout=5000")
        logger.debug(f"Connected to database at {db_path}")
        return conn
    except sqlite3.Error as e:
        logger.error(f"Error connecting to database at {db_path}: {e}")
        raise


def initialize_database() -> None:
    """Create the draws table and its indexes if they don't exist. Idempotent."""
    try:
        with closing(get_db_connection()) as conn:
            cursor = conn.cursor()
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {DRAWS_TABLE} (
                    draw_number INTEGER PRIMARY KEY,
                    draw_date TEXT NOT NULL,
                    winning_number TEXT NOT NULL CHECK (length(winning_number) = 4)
                )
            """)
            cursor.execute(f"CREATE INDEX IF NOT EXISTS idx_{DRAWS_TABLE}_date ON {DRAWS_TABLE}(draw_date)")
            conn.commit()
        logger.info("Database initialized successfully.")
    except sqlite3.Error as e:
        logger.error(f"Database error during initialization: {e}")
        raise


def prepare_draws_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize a DataFrame to [draw_number, draw_date, winning_number].

    Winning numbers are zero-padded to 4 characters; malformed values raise
    MalformedDrawError.
    """
    prepared = pd.DataFrame({
        'draw_number': df['draw_number'].astype(int),
        'draw_date': pd.to_datetime(df['draw_date']).dt.strftime('%Y-%m-%d'),
        'winning_number': [
            normalize_winning_number(v if isinstance(v, str) else int(v))
            for v in df['winning_number']
        ],
    })
    return prepared.sort_values('draw_number').reset_index(drop=True)


def bulk_insert_draws(df: pd.DataFrame) -> int:
    """
    Insert a batch of draws from a DataFrame.

    Args:
        df: DataFrame with columns [draw_number, draw_date, winning_number]

    Returns:
        Number of rows inserted/updated
    """
    if df.empty:
        logger.info("No new draws to insert.")
        return 0

    prepared = prepare_draws_frame(df)
    try:
        with closing(get_db_connection()) as conn:
            prepared.to_sql(DRAWS_TABLE, conn, if_exists='append', index=False)
            conn.commit()
            logger.info(f"Successfully inserted {len(prepared)} draws into the database.")
            return len(prepared)
    except sqlite3.IntegrityError as e:
        logger.warning(f"Integrity constraint violation during bulk insert: {e}. Using upsert method.")
        return _upsert_draws(prepared)


def _upsert_draws(df: pd.DataFrame) -> int:
    """Row-by-row insert/replace for batches that overlap existing draws."""
    with closing(get_db_connection()) as conn:
        cursor = conn.cursor()
        for row in df.itertuples(index=False):
            cursor.execute(
                f"INSERT OR REPLACE INTO {DRAWS_TABLE} (draw_number, draw_date, winning_number) VALUES (?, ?, ?)",
                (int(row.draw_number), row.draw_date, row.winning_number),
            )
        conn.commit()
    logger.info(f"Successfully upserted {len(df)} draws.")
    return len(df)


def get_all_draws(max_draw_number: Optional[int] = None) -> pd.DataFrame:
    """Retrieve historical draws ordered oldest first.

    Args:
        max_draw_number: Only return draws strictly before this draw number.
                         Used to keep backtests free of future data.
    """
    query = f"SELECT draw_number, draw_date, winning_number FROM {DRAWS_TABLE}"
    params = ()
    if max_draw_number is not None:
        query += " WHERE draw_number < ?"
        params = (int(max_draw_number),)
    query += " ORDER BY draw_number ASC"

    with closing(get_db_connection()) as conn:
        df = pd.read_sql_query(query, conn, params=params, parse_dates=['draw_date'])
    logger.info(f"Loaded {len(df)} draws from the database.")
    return df


def get_latest_draw() -> Optional[dict]:
    """Most recent draw as a dict, or None for an empty table."""
    with closing(get_db_connection()) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT draw_number, draw_date, winning_number FROM {DRAWS_TABLE} ORDER BY draw_number DESC LIMIT 1"
        )
        row = cursor.fetchone()
    if not row:
        logger.info(f"No existing data found in '{DRAWS_TABLE}'.")
        return None
    return {'draw_number': row[0], 'draw_date': row[1], 'winning_number': row[2]}
