import os
import sqlite3

from wordsprint.app.errors import DatabaseError

DB_PATH = "data/highscore.db"


def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS high_score(
        id INTEGER PRIMARY KEY CHECK (id = 1),
        wpm INTEGER NOT NULL,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)


def get_conn(path: str = DB_PATH):
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    conn = sqlite3.connect(path)
    _ensure_schema(conn)
    return conn


def read_high_score(path: str = DB_PATH) -> int:
    conn = None
    try:
        conn = get_conn(path)
        row = conn.execute("SELECT wpm FROM high_score WHERE id = 1").fetchone()
        return int(row[0]) if row else 0
    except (sqlite3.Error, OSError) as e:
        raise DatabaseError(str(e)) from e
    finally:
        if conn is not None:
            conn.close()


def write_high_score(wpm: int, path: str = DB_PATH):
    conn = None
    try:
        conn = get_conn(path)
        conn.execute(
            "INSERT INTO high_score(id, wpm) VALUES (1, ?) "
            "ON CONFLICT(id) DO UPDATE SET wpm = excluded.wpm, updated_at = CURRENT_TIMESTAMP",
            (int(wpm),),
        )
        conn.commit()
    except (sqlite3.Error, OSError) as e:
        raise DatabaseError(str(e)) from e
    finally:
        if conn is not None:
            conn.close()
