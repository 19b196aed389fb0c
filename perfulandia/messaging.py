"""
RabbitMQ plumbing shared by the order service (publisher side) and the
inventory worker (consumer side).

One queue carries stock-decrement events. The body is plain text,
"{product_id}:{delta}", e.g. "1:-3". No headers, no event id.
"""

from dataclasses import dataclass
from typing import Tuple

import pika

from perfulandia import config


@dataclass(frozen=True)
class StockDelta:
    product_id: int
    delta: int


def encode_stock_delta(product_id: int, delta: int) -> bytes:
    return f"{int(product_id)}:{int(delta)}".encode("utf-8")


def decode_stock_delta(body) -> StockDelta:
    """
    Raises ValueError on anything that is not exactly two integers
    separated by a colon.
    """
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")

    parts = body.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"malformed stock message: {body!r}")

    try:
        return StockDelta(product_id=int(parts[0]), delta=int(parts[1]))
    except ValueError:
        raise ValueError(f"malformed stock message: {body!r}") from None


def rabbit_connect() -> Tuple[pika.BlockingConnection, pika.adapters.blocking_connection.BlockingChannel]:
    if not config.RABBIT_URL:
        raise RuntimeError("RABBIT_URL not set")

    params = pika.URLParameters(config.RABBIT_URL)
    params.heartbeat = 30
    params.blocked_connection_timeout = 30
    connection = pika.BlockingConnection(params)
    channel = connection.channel()
    return connection, channel


def declare_stock_queue(channel, queue_name: str = None) -> str:
    # non-durable, matches the queue the inventory listener has always used
    queue_name = queue_name or config.STOCK_QUEUE
    channel.queue_declare(queue=queue_name, durable=False)
    return queue_name
