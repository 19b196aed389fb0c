import logging
from typing import List

import psycopg2
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from perfulandia.inventory.deps import get_stock_store
from perfulandia.inventory.schemas import StockIn, StockOut, StockPatchReq, StockUpdateReq
from perfulandia.inventory.store import StockRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("", response_model=List[StockOut])
def list_stock(store=Depends(get_stock_store)):
    return [StockOut.from_record(r) for r in store.list()]


@router.get("/{product_id}", response_model=StockOut)
def get_stock(product_id: int, store=Depends(get_stock_store)):
    record = store.find_by_product(product_id)
    if not record:
        raise HTTPException(status_code=404, detail="Product not found in inventory")
    return StockOut.from_record(record)


@router.post("", response_model=StockOut)
def create_stock(body: StockIn, store=Depends(get_stock_store)):
    if store.find_by_product(body.product_id):
        raise HTTPException(status_code=409, detail="Product already has a stock record")
    try:
        record = store.create(
            StockRecord(
                product_id=body.product_id,
                quantity_available=body.quantity_available,
                location=body.location,
            )
        )
    except psycopg2.IntegrityError:
        raise HTTPException(status_code=409, detail="Product already has a stock record")
    return StockOut.from_record(record)


@router.put("/{product_id}", response_model=StockOut)
def update_stock(product_id: int, body: StockUpdateReq, store=Depends(get_stock_store)):
    record = store.find_by_product(product_id)
    if not record:
        raise HTTPException(status_code=404, detail="Product not found in inventory")
    record.quantity_available = body.quantity_available
    record.location = body.location
    return StockOut.from_record(store.save(record))


def _adjust(store, product_id: int, delta: int) -> StockOut:
    try:
        record = store.adjust_quantity(product_id, delta)
    except psycopg2.DataError:
        raise HTTPException(status_code=422, detail="Stock quantity out of range")
    if not record:
        raise HTTPException(status_code=404, detail="Product not found in inventory")
    logger.info(f"stock adjusted via api product={product_id} delta={delta} now={record.quantity_available}")
    return StockOut.from_record(record)


@router.put("/{product_id}/increase", response_model=StockOut)
def increase_stock(product_id: int, quantity: int = Query(gt=0), store=Depends(get_stock_store)):
    return _adjust(store, product_id, quantity)


@router.put("/{product_id}/decrease", response_model=StockOut)
def decrease_stock(product_id: int, quantity: int = Query(gt=0), store=Depends(get_stock_store)):
    return _adjust(store, product_id, -quantity)


@router.patch("/{record_id}", response_model=StockOut)
def patch_stock(record_id: int, body: StockPatchReq, store=Depends(get_stock_store)):
    record = store.get(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Stock record not found")

    changes = body.model_dump(exclude_unset=True)
    for name in ("product_id", "quantity_available"):
        if name in changes and changes[name] is None:
            raise HTTPException(status_code=422, detail=f"{name} cannot be null")
    for name, value in changes.items():
        setattr(record, name, value)

    try:
        saved = store.save(record)
    except psycopg2.IntegrityError:
        raise HTTPException(status_code=409, detail="Product already has a stock record")
    return StockOut.from_record(saved)


@router.delete("/{record_id}", status_code=204)
def delete_stock(record_id: int, store=Depends(get_stock_store)):
    if not store.delete(record_id):
        raise HTTPException(status_code=404, detail="Stock record not found")
    return Response(status_code=204)
