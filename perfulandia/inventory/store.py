from dataclasses import dataclass
from typing import List, Optional

from perfulandia.db import db_conn

_COLUMNS = "id, product_id, quantity_available, location"


@dataclass
class StockRecord:
    product_id: int
    quantity_available: int
    location: Optional[str] = None
    id: Optional[int] = None


def init_db():
    with db_conn() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS inventory (
                    id SERIAL PRIMARY KEY,
                    product_id BIGINT NOT NULL UNIQUE,
                    quantity_available INTEGER NOT NULL DEFAULT 0,
                    location TEXT
                );
                """
            )


def _row_to_record(row) -> StockRecord:
    return StockRecord(id=row[0], product_id=row[1], quantity_available=row[2], location=row[3])


class StockStore:
    """
    Stock records, written by two independent paths: the REST adjust
    endpoints and the queue worker. Both go through adjust_quantity, a
    single-statement UPDATE, so concurrent deltas on one row serialize on the
    row lock instead of racing a read-then-write.
    """

    def list(self) -> List[StockRecord]:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM inventory ORDER BY id ASC")
                rows = cur.fetchall()
        return [_row_to_record(r) for r in rows]

    def get(self, record_id: int) -> Optional[StockRecord]:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM inventory WHERE id=%s", (record_id,))
                row = cur.fetchone()
        return _row_to_record(row) if row else None

    def find_by_product(self, product_id: int) -> Optional[StockRecord]:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM inventory WHERE product_id=%s", (product_id,))
                row = cur.fetchone()
        return _row_to_record(row) if row else None

    def create(self, record: StockRecord) -> StockRecord:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO inventory (product_id, quantity_available, location)
                    VALUES (%s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (record.product_id, record.quantity_available, record.location),
                )
                return _row_to_record(cur.fetchone())

    def save(self, record: StockRecord) -> Optional[StockRecord]:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE inventory
                    SET product_id=%s, quantity_available=%s, location=%s
                    WHERE id=%s
                    RETURNING {_COLUMNS}
                    """,
                    (record.product_id, record.quantity_available, record.location, record.id),
                )
                row = cur.fetchone()
        return _row_to_record(row) if row else None

    def adjust_quantity(self, product_id: int, delta: int) -> Optional[StockRecord]:
        """Adds delta to the product's stock. None when no record matches."""
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE inventory
                    SET quantity_available = quantity_available + %s
                    WHERE product_id=%s
                    RETURNING {_COLUMNS}
                    """,
                    (delta, product_id),
                )
                row = cur.fetchone()
        return _row_to_record(row) if row else None

    def delete(self, record_id: int) -> bool:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM inventory WHERE id=%s", (record_id,))
                return cur.rowcount > 0
