from typing import List, Optional

from perfulandia.db import db_conn
from perfulandia.orders.models import Order

_COLUMNS = "id, customer_ref, product_ref, quantity, total, placed_at"


def init_db():
    with db_conn() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS orders (
                    id SERIAL PRIMARY KEY,
                    customer_ref TEXT NOT NULL,
                    product_ref TEXT NOT NULL,
                    quantity INTEGER NOT NULL,
                    total DOUBLE PRECISION NOT NULL,
                    placed_at DATE NOT NULL DEFAULT CURRENT_DATE
                );
                """
            )


def _row_to_order(row) -> Order:
    return Order(
        id=row[0],
        customer_ref=row[1],
        product_ref=row[2],
        quantity=row[3],
        total=row[4],
        placed_at=row[5],
    )


class OrderStore:
    """Orders table. The order service is its only writer."""

    def save(self, order: Order) -> Order:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO orders (customer_ref, product_ref, quantity, total, placed_at)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (order.customer_ref, order.product_ref, order.quantity, order.total, order.placed_at),
                )
                return _row_to_order(cur.fetchone())

    def get(self, order_id: int) -> Optional[Order]:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM orders WHERE id=%s", (order_id,))
                row = cur.fetchone()
        return _row_to_order(row) if row else None

    def list(self) -> List[Order]:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM orders ORDER BY id ASC")
                rows = cur.fetchall()
        return [_row_to_order(r) for r in rows]

    def update(self, order: Order) -> Optional[Order]:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE orders
                    SET customer_ref=%s, product_ref=%s, quantity=%s, total=%s, placed_at=%s
                    WHERE id=%s
                    RETURNING {_COLUMNS}
                    """,
                    (order.customer_ref, order.product_ref, order.quantity, order.total, order.placed_at, order.id),
                )
                row = cur.fetchone()
        return _row_to_order(row) if row else None

    def delete(self, order_id: int) -> None:
        with db_conn() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM orders WHERE id=%s", (order_id,))
