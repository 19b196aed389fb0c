"""
Order service.

    uvicorn perfulandia.orders.main:app --port 8082
"""

import logging

from fastapi import FastAPI

from perfulandia import config
from perfulandia.orders.routers.orders import router as orders_router
from perfulandia.orders.store import init_db

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

app = FastAPI(title="Perfulandia Order Service")

app.include_router(orders_router)


@app.on_event("startup")
def startup():
    init_db()


@app.get("/health")
def health():
    return {"status": "ok", "service": "order-service"}
