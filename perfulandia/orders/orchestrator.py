"""
Order placement workflow.

Flow, strictly sequential:
1. Resolve customer ref to an id, check the customer exists (users service)
2. Resolve product ref to an id, read available stock (inventory service)
3. Reject if stock < quantity
4. Persist the order            <- point of no return
5. Register a PENDING cash payment (payments service)
6. Publish "{product_id}:{-quantity}" on the inventory queue

Steps 5 and 6 are best-effort: their failures are logged and the caller still
gets the persisted order. There is no compensation and no stock reservation
between step 3 and the asynchronous decrement, so two concurrent orders for the
same product can both pass the check.
"""

import logging
from datetime import date
from typing import Optional

from perfulandia.orders.errors import (
    CustomerNotFound,
    InsufficientStock,
    InvalidInput,
    OrchestrationFailure,
    ProductNotFound,
)
from perfulandia.orders.models import Order, PaymentMethod, PaymentStatus

logger = logging.getLogger(__name__)


def _parse_ref(value, what: str) -> int:
    if isinstance(value, bool):
        raise InvalidInput(f"{what} must be an integer id, got {value!r}")
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidInput(f"{what} must be an integer id, got {value!r}") from None


class OrderOrchestrator:
    def __init__(self, validator, payments, store, publisher):
        self.validator = validator
        self.payments = payments
        self.store = store
        self.publisher = publisher

    def place_order(
        self,
        customer_ref,
        product_ref,
        quantity: int,
        total: float,
        placed_at: Optional[date] = None,
    ) -> Order:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidInput(f"quantity must be a positive integer, got {quantity!r}")
        if total is None or total < 0:
            raise InvalidInput(f"total must be non-negative, got {total!r}")

        customer_id = _parse_ref(customer_ref, "customer ref")
        if not self.validator.user_exists(customer_id):
            logger.info(f"order rejected: customer={customer_id} not found")
            raise CustomerNotFound(customer_id)

        product_id = _parse_ref(product_ref, "product ref")
        self.verify_stock(product_id, quantity)

        order = Order(
            customer_ref=str(customer_ref),
            product_ref=str(product_ref),
            quantity=quantity,
            total=float(total),
            placed_at=placed_at or date.today(),
        )
        try:
            order = self.store.save(order)
        except Exception as e:
            logger.error(f"order persistence failed customer={customer_id} product={product_id} err={e}")
            raise OrchestrationFailure(f"could not persist order: {e}") from e

        logger.info(f"order placed id={order.id} customer={customer_id} product={product_id} qty={quantity}")

        self._register_payment(order)
        self._notify_inventory(order.id, product_id, quantity)
        return order

    def stock_level(self, product_ref) -> int:
        product_id = _parse_ref(product_ref, "product ref")
        available = self.validator.query_stock(product_id)
        if available is None:
            logger.info(f"product={product_id} not found in inventory")
            raise ProductNotFound(product_id)
        return available

    def verify_stock(self, product_ref, quantity: int) -> int:
        """Returns the available quantity when it covers `quantity`."""
        product_id = _parse_ref(product_ref, "product ref")
        available = self.stock_level(product_id)
        if available < quantity:
            logger.info(f"insufficient stock product={product_id} available={available} requested={quantity}")
            raise InsufficientStock(product_id, available, quantity)
        return available

    def _register_payment(self, order: Order) -> None:
        try:
            self.payments.register_payment(
                order.id,
                order.total,
                PaymentMethod.CASH,
                PaymentStatus.PENDING,
            )
        except Exception as e:
            logger.warning(f"payment registration failed order={order.id} amount={order.total} err={e}")

    def _notify_inventory(self, order_id: int, product_id: int, quantity: int) -> None:
        try:
            self.publisher.publish(product_id, -quantity)
        except Exception as e:
            logger.warning(f"stock event lost order={order_id} product={product_id} delta={-quantity} err={e}")
