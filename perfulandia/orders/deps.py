from functools import lru_cache

from fastapi import Depends

from perfulandia.orders.clients import PaymentRegistrar, RemoteValidationClient
from perfulandia.orders.orchestrator import OrderOrchestrator
from perfulandia.orders.publisher import StockEventPublisher
from perfulandia.orders.store import OrderStore


@lru_cache
def get_order_store() -> OrderStore:
    return OrderStore()


@lru_cache
def get_validation_client() -> RemoteValidationClient:
    return RemoteValidationClient()


@lru_cache
def get_payment_registrar() -> PaymentRegistrar:
    return PaymentRegistrar()


@lru_cache
def get_publisher() -> StockEventPublisher:
    return StockEventPublisher()


def get_orchestrator(
    validator=Depends(get_validation_client),
    payments=Depends(get_payment_registrar),
    store=Depends(get_order_store),
    publisher=Depends(get_publisher),
) -> OrderOrchestrator:
    return OrderOrchestrator(validator, payments, store, publisher)
