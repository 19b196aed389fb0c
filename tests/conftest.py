"""Pytest fixtures: in-memory stand-ins for the remote services, the stores and the queue."""

import itertools
import threading
from copy import copy

import pytest

from perfulandia.inventory.store import StockRecord
from perfulandia.messaging import encode_stock_delta
from perfulandia.orders.orchestrator import OrderOrchestrator


class FakeStockStore:
    def __init__(self):
        self.records = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, product_id, quantity_available, location="Warehouse A"):
        record = StockRecord(
            id=next(self._ids),
            product_id=product_id,
            quantity_available=quantity_available,
            location=location,
        )
        self.records[record.id] = record
        return record

    def quantity(self, product_id):
        return self.find_by_product(product_id).quantity_available

    def list(self):
        return list(self.records.values())

    def get(self, record_id):
        return self.records.get(record_id)

    def find_by_product(self, product_id):
        for record in self.records.values():
            if record.product_id == product_id:
                return record
        return None

    def create(self, record):
        return self.add(record.product_id, record.quantity_available, record.location)

    def save(self, record):
        if record.id not in self.records:
            return None
        self.records[record.id] = record
        return record

    def adjust_quantity(self, product_id, delta):
        with self._lock:
            record = self.find_by_product(product_id)
            if record is None:
                return None
            record.quantity_available += delta
            return record

    def delete(self, record_id):
        return self.records.pop(record_id, None) is not None


class FakeValidator:
    """Users are a set of ids; stock is read straight from a FakeStockStore."""

    def __init__(self, stock, users=(1,)):
        self.stock = stock
        self.users = set(users)
        self.user_calls = []
        self.stock_calls = []

    def user_exists(self, user_id):
        self.user_calls.append(user_id)
        return user_id in self.users

    def query_stock(self, product_id):
        self.stock_calls.append(product_id)
        record = self.stock.find_by_product(product_id)
        return record.quantity_available if record else None


class RecordingPayments:
    def __init__(self):
        self.calls = []
        self.error = None

    def register_payment(self, order_id, amount, method, status):
        if self.error:
            raise self.error
        self.calls.append((order_id, amount, method, status))


class InMemoryOrderStore:
    def __init__(self):
        self.orders = {}
        self.error = None
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save(self, order):
        if self.error:
            raise self.error
        with self._lock:
            saved = copy(order)
            saved.id = next(self._ids)
            self.orders[saved.id] = saved
        return copy(saved)

    def get(self, order_id):
        order = self.orders.get(order_id)
        return copy(order) if order else None

    def list(self):
        return [copy(o) for o in self.orders.values()]

    def update(self, order):
        if order.id not in self.orders:
            return None
        self.orders[order.id] = copy(order)
        return copy(order)

    def delete(self, order_id):
        self.orders.pop(order_id, None)


class QueuePublisher:
    """Keeps the encoded bodies, like a queue nobody has drained yet."""

    def __init__(self):
        self.messages = []
        self.error = None

    def publish(self, product_id, delta):
        if self.error:
            raise self.error
        self.messages.append(encode_stock_delta(product_id, delta))


@pytest.fixture
def stock():
    store = FakeStockStore()
    store.add(1, 10)
    return store


@pytest.fixture
def validator(stock):
    return FakeValidator(stock, users=(1, 2))


@pytest.fixture
def payments():
    return RecordingPayments()


@pytest.fixture
def orders():
    return InMemoryOrderStore()


@pytest.fixture
def publisher():
    return QueuePublisher()


@pytest.fixture
def orchestrator(validator, payments, orders, publisher):
    return OrderOrchestrator(validator, payments, orders, publisher)
