import sqlite3

from config import DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def get_db():
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA busy_timeout = 3000")
    return conn


def init_db():
    conn = get_db()
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()


# ── Key/value ──

def get_value(conn, key, default=None):
    row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else default


def set_value(conn, key, value):
    conn.execute(
        "INSERT INTO kv_store (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
        (key, value),
    )
    conn.commit()


class SqliteStore:
    """get/set key-value store over the kv_store table, one connection per call.

    DB_PATH is read at call time so tests can point the module elsewhere.
    """

    def __init__(self):
        init_db()

    def get(self, key):
        conn = get_db()
        try:
            return get_value(conn, key)
        finally:
            conn.close()

    def set(self, key, value):
        conn = get_db()
        try:
            set_value(conn, key, value)
        finally:
            conn.close()
