"""
Inventory service HTTP API.

    uvicorn perfulandia.inventory.main:app --port 8083

The queue consumer runs as its own process, see perfulandia.inventory.worker.
"""

import logging

from fastapi import FastAPI

from perfulandia import config
from perfulandia.inventory.routers.inventory import router as inventory_router
from perfulandia.inventory.store import init_db

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

app = FastAPI(title="Perfulandia Inventory Service")

app.include_router(inventory_router)


@app.on_event("startup")
def startup():
    init_db()


@app.get("/health")
def health():
    return {"status": "ok", "service": "inventory-service"}
