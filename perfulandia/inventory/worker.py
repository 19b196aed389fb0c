"""
Inventory queue worker.

Drains the stock queue one message at a time and applies each
"{product_id}:{delta}" to the matching stock record.

    python -m perfulandia.inventory.worker

Delivery is at-most-once from the publisher's side and there is no dedup here:
the same message delivered twice is applied twice. Messages for unknown
products, malformed bodies and values the stock column cannot hold are acked
and dropped, there is no DLQ. Connection and other database errors leave the
message unacked and reconnect.
"""

import logging
import time
from typing import Optional

import pika
import psycopg2

from perfulandia import config
from perfulandia.inventory.store import StockRecord, StockStore
from perfulandia.messaging import declare_stock_queue, decode_stock_delta, rabbit_connect

logger = logging.getLogger(__name__)

RECONNECT_DELAY_S = 2


def handle_stock_message(store, body) -> Optional[StockRecord]:
    """Returns the updated record, or None when the message was dropped."""
    try:
        event = decode_stock_delta(body)
    except ValueError as e:
        logger.error(f"dropping message: {e}")
        return None

    try:
        record = store.adjust_quantity(event.product_id, event.delta)
    except psycopg2.DataError as e:
        # out-of-range values fail the same way on every redelivery
        logger.error(f"dropping message: product={event.product_id} delta={event.delta} rejected by db err={e}")
        return None

    if record is None:
        logger.warning(f"dropping message: no stock record for product={event.product_id} delta={event.delta}")
        return None

    logger.info(
        f"stock adjusted via queue product={event.product_id} delta={event.delta} "
        f"now={record.quantity_available}"
    )
    return record


def rabbit_get_channel():
    while True:
        try:
            conn, ch = rabbit_connect()
            queue_name = declare_stock_queue(ch)
            return conn, ch, queue_name
        except pika.exceptions.AMQPError as e:
            logger.error(f"rabbit connect failed err={e}")
            time.sleep(RECONNECT_DELAY_S)


def run_consumer(store=None):
    store = store or StockStore()
    logger.info(f"starting stock consumer on {config.STOCK_QUEUE} ...")

    while True:
        conn, ch, queue_name = rabbit_get_channel()
        try:
            ch.basic_qos(prefetch_count=1)

            def on_msg(channel, method, properties, body):
                logger.info(f"received {body!r}")
                handle_stock_message(store, body)
                channel.basic_ack(delivery_tag=method.delivery_tag)

            ch.basic_consume(queue=queue_name, on_message_callback=on_msg)
            logger.info(f"consuming {queue_name} ...")
            ch.start_consuming()

        except (pika.exceptions.AMQPError, psycopg2.Error) as e:
            # unacked message goes back to the queue when the channel closes
            logger.warning(f"consumer loop error (will reconnect) err={e}")
            if conn.is_open:
                conn.close()
            time.sleep(RECONNECT_DELAY_S)


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    try:
        run_consumer()
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    main()
