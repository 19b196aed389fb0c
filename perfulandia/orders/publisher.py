import logging

from perfulandia import config
from perfulandia.messaging import declare_stock_queue, encode_stock_delta, rabbit_connect

logger = logging.getLogger(__name__)


class StockEventPublisher:
    """
    Puts stock-decrement events on the inventory queue.

    A connection is opened per publish and closed right after. No publisher
    confirms are requested, so a returned call only means the broker socket
    accepted the frame.
    """

    def __init__(self, queue_name: str = None):
        self.queue_name = queue_name or config.STOCK_QUEUE

    def publish(self, product_id: int, delta: int) -> None:
        body = encode_stock_delta(product_id, delta)

        connection, channel = rabbit_connect()
        try:
            declare_stock_queue(channel, self.queue_name)
            channel.basic_publish(
                exchange="",
                routing_key=self.queue_name,
                body=body,
            )
        finally:
            connection.close()

        logger.info(f"stock event published queue={self.queue_name} body={body.decode('utf-8')}")
