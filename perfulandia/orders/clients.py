"""
Outbound HTTP calls from the order service.

Every call carries its own timeout. The validation client folds transport
errors, timeouts and non-2xx answers into the same "not found" result: the
orchestrator cannot tell an unreachable service from a missing entity.
"""

import logging
from typing import Optional

import requests

from perfulandia import config
from perfulandia.orders.models import PaymentMethod, PaymentStatus

logger = logging.getLogger(__name__)


class RemoteValidationClient:
    def __init__(
        self,
        users_url: str = None,
        inventory_url: str = None,
        timeout: float = None,
        session=None,
    ):
        self.users_url = (users_url or config.USERS_URL).rstrip("/")
        self.inventory_url = (inventory_url or config.INVENTORY_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT
        self.http = session or requests

    def user_exists(self, user_id: int) -> bool:
        url = f"{self.users_url}/users/{user_id}"
        try:
            r = self.http.get(url, timeout=self.timeout)
            r.raise_for_status()
            return r.json() is not None
        except (requests.RequestException, ValueError) as e:
            logger.info(f"user lookup failed user={user_id} err={e}")
            return False

    def query_stock(self, product_id: int) -> Optional[int]:
        """Available quantity for product_id, or None when it cannot be found."""
        url = f"{self.inventory_url}/inventory/{product_id}"
        try:
            r = self.http.get(url, timeout=self.timeout)
            r.raise_for_status()
            quantity = r.json()["quantityAvailable"]
            if isinstance(quantity, bool) or not isinstance(quantity, int):
                raise ValueError(f"quantityAvailable is not an integer: {quantity!r}")
            return quantity
        except (requests.RequestException, ValueError, TypeError, KeyError) as e:
            logger.info(f"stock lookup failed product={product_id} err={e}")
            return None


class PaymentRegistrar:
    def __init__(self, payments_url: str = None, timeout: float = None, session=None):
        self.payments_url = (payments_url or config.PAYMENTS_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT
        self.http = session or requests

    def register_payment(
        self,
        order_id: int,
        amount: float,
        method: PaymentMethod = PaymentMethod.CASH,
        status: PaymentStatus = PaymentStatus.PENDING,
    ) -> None:
        # no idempotency key: a retried call after a lost response makes a second row
        r = self.http.post(
            f"{self.payments_url}/payments",
            json={
                "orderId": order_id,
                "amount": amount,
                "method": method.value,
                "status": status.value,
            },
            timeout=self.timeout,
        )
        r.raise_for_status()
