from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from perfulandia.inventory.store import StockRecord


class StockIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId")
    quantity_available: int = Field(default=0, alias="quantityAvailable")
    location: Optional[str] = None


class StockUpdateReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quantity_available: int = Field(alias="quantityAvailable")
    location: Optional[str] = None


class StockPatchReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    product_id: Optional[int] = Field(default=None, alias="productId")
    quantity_available: Optional[int] = Field(default=None, alias="quantityAvailable")
    location: Optional[str] = None


class StockOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    product_id: int = Field(alias="productId")
    quantity_available: int = Field(alias="quantityAvailable")
    location: Optional[str] = None

    @classmethod
    def from_record(cls, record: StockRecord) -> "StockOut":
        return cls(
            id=record.id,
            product_id=record.product_id,
            quantity_available=record.quantity_available,
            location=record.location,
        )
