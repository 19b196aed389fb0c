"""
Payments service mock. Records every POST /payments in memory.

    uvicorn perfulandia.mocks.payments:app --port 8084
"""

from datetime import datetime, timezone
from typing import Dict, List

from fastapi import FastAPI
from pydantic import BaseModel, ConfigDict, Field

PAYMENTS: List[Dict] = []

LAST = {
    "seen_at": None,
    "request_json": None,
    "response_json": None,
}

app = FastAPI(title="Payments Mock")


class PaymentReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: int = Field(alias="orderId")
    amount: float
    method: str
    status: str


@app.post("/payments")
def create_payment(body: PaymentReq):
    # duplicates are stored as-is, like the real service
    payment = {
        "id": len(PAYMENTS) + 1,
        "orderId": body.order_id,
        "amount": body.amount,
        "method": body.method,
        "status": body.status,
    }
    PAYMENTS.append(payment)

    LAST.update({
        "seen_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "request_json": body.model_dump(by_alias=True),
        "response_json": payment,
    })
    return payment


@app.get("/payments")
def list_payments():
    return PAYMENTS


@app.get("/last")
def last():
    return LAST


@app.get("/health")
def health():
    return {"status": "ok", "service": "payments-mock"}
