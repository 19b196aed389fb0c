from contextlib import contextmanager

import psycopg2

from perfulandia import config


@contextmanager
def db_conn():
    """
    psycopg2's own connection context manager ends the transaction but leaves
    the connection open, so close it here.
    """
    if not config.DATABASE_URL:
        raise RuntimeError("DATABASE_URL not set")

    conn = psycopg2.connect(config.DATABASE_URL)
    try:
        with conn:
            yield conn
    finally:
        conn.close()
