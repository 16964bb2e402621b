import sqlite3
from contextlib import contextmanager
import logging
from shiftclock.core.config import ServerConfig # Import ServerConfig

logger = logging.getLogger(__name__)

@contextmanager
def get_db():
    conn = sqlite3.connect(ServerConfig.DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    except Exception as e:
        conn.rollback()
        raise e
    finally:
        conn.close()

def init_database():
    with get_db() as conn:
        cursor = conn.cursor()

        # Timestamps are ISO-8601 strings with a UTC offset; clock_out NULL = open shift
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS time_entries (
                id TEXT PRIMARY KEY,
                clock_in TEXT NOT NULL,
                clock_out TEXT,
                notes TEXT NOT NULL DEFAULT ''
            )
        ''')

        cursor.execute('''
            CREATE INDEX IF NOT EXISTS idx_time_entries_clock_in
            ON time_entries (clock_in)
        ''')

        # Single-row JSON documents (pay rate configuration)
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS settings (
                name TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        conn.commit()
        logger.info(f"Database initialized at {ServerConfig.DATABASE_PATH}")
