import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import PlainTextResponse

from perfulandia.orders.deps import get_orchestrator, get_order_store
from perfulandia.orders.errors import (
    CustomerNotFound,
    InsufficientStock,
    InvalidInput,
    OrderError,
    ProductNotFound,
)
from perfulandia.orders.models import Order
from perfulandia.orders.schemas import OrderOut, PatchOrderReq, PlaceOrderReq, UpdateOrderReq

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def to_http_error(err: OrderError) -> HTTPException:
    if isinstance(err, (InvalidInput, CustomerNotFound)):
        return HTTPException(status_code=400, detail=str(err))
    if isinstance(err, ProductNotFound):
        return HTTPException(status_code=404, detail=str(err))
    if isinstance(err, InsufficientStock):
        return HTTPException(status_code=409, detail={"message": str(err), "available": err.available})
    return HTTPException(status_code=500, detail=str(err))


@router.post("", response_model=OrderOut)
@router.post("/", response_model=OrderOut, include_in_schema=False)
def place_order(body: PlaceOrderReq, orchestrator=Depends(get_orchestrator)):
    try:
        order = orchestrator.place_order(
            body.customer_ref,
            body.product_ref,
            body.quantity,
            body.total,
            placed_at=body.placed_at,
        )
    except OrderError as e:
        raise to_http_error(e)
    return OrderOut.from_order(order)


@router.get("", response_model=List[OrderOut])
def list_orders(store=Depends(get_order_store)):
    return [OrderOut.from_order(o) for o in store.list()]


@router.get("/verify-stock/{product_id}/{quantity}", response_class=PlainTextResponse)
def verify_stock(product_id: str, quantity: int, orchestrator=Depends(get_orchestrator)):
    try:
        available = orchestrator.verify_stock(product_id, quantity)
    except InvalidInput as e:
        return PlainTextResponse(str(e), status_code=400)
    except ProductNotFound:
        return PlainTextResponse("Product not found in inventory", status_code=404)
    except InsufficientStock as e:
        return PlainTextResponse(f"Insufficient stock. Available: {e.available}", status_code=409)
    return f"Sufficient stock: {available}"


@router.get("/stock/{product_id}")
def stock_level(product_id: str, orchestrator=Depends(get_orchestrator)):
    try:
        available = orchestrator.stock_level(product_id)
    except OrderError as e:
        raise to_http_error(e)
    return {"productId": product_id, "quantityAvailable": available}


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, store=Depends(get_order_store)):
    order = store.get(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderOut.from_order(order)


@router.put("/{order_id}", response_model=OrderOut)
def update_order(order_id: int, body: UpdateOrderReq, store=Depends(get_order_store)):
    existing = store.get(order_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Order not found")

    updated = store.update(
        Order(
            id=order_id,
            customer_ref=str(body.customer_ref),
            product_ref=str(body.product_ref),
            quantity=body.quantity,
            total=body.total,
            placed_at=body.placed_at or existing.placed_at,
        )
    )
    return OrderOut.from_order(updated)


@router.patch("/{order_id}", response_model=OrderOut)
def patch_order(order_id: int, body: PatchOrderReq, store=Depends(get_order_store)):
    order = store.get(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    changes = body.model_dump(exclude_unset=True)
    for name, value in changes.items():
        if value is None:
            raise HTTPException(status_code=422, detail=f"{name} cannot be null")
        if name in ("customer_ref", "product_ref"):
            value = str(value)
        setattr(order, name, value)

    logger.info(f"order patched id={order_id} fields={sorted(changes)}")
    return OrderOut.from_order(store.update(order))


@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, store=Depends(get_order_store)):
    store.delete(order_id)
    return Response(status_code=204)
