from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from perfulandia.orders.models import Order

# refs are opaque on the wire: "1" and 1 are both accepted
Ref = Union[str, int]


class PlaceOrderReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_ref: Ref = Field(alias="customerRef")
    product_ref: Ref = Field(alias="productRef")
    quantity: int = Field(gt=0)
    total: float = Field(ge=0)
    placed_at: Optional[date] = Field(default=None, alias="date")


class UpdateOrderReq(PlaceOrderReq):
    pass


class PatchOrderReq(BaseModel):
    """Only the fields listed here can be patched; anything else is a 422."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    customer_ref: Optional[Ref] = Field(default=None, alias="customerRef")
    product_ref: Optional[Ref] = Field(default=None, alias="productRef")
    quantity: Optional[int] = Field(default=None, gt=0)
    total: Optional[float] = Field(default=None, ge=0)
    placed_at: Optional[date] = Field(default=None, alias="date")


class OrderOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    customer_ref: str = Field(alias="customerRef")
    product_ref: str = Field(alias="productRef")
    quantity: int
    total: float
    placed_at: Optional[date] = Field(default=None, alias="date")

    @classmethod
    def from_order(cls, order: Order) -> "OrderOut":
        return cls(
            id=order.id,
            customer_ref=order.customer_ref,
            product_ref=order.product_ref,
            quantity=order.quantity,
            total=order.total,
            placed_at=order.placed_at,
        )
