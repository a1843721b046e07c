"""Order intake wire schema (v1).

The storefront posts these fields as a multipart body to `POST /api/order`; the backend
answers with an `OrderResultV1` JSON document.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OrderFieldV1(str, Enum):
    DESCRIPTION = "description"
    QUANTITY = "quantity"
    PRICE = "price"
    SCREENSHOT = "screenshot"
    BUYER_USERNAME = "buyerUsername"
    BUYER_ID = "buyerId"
    RECIPIENT_USERNAME = "recipientUsername"
    RECIPIENT_ID = "recipientId"


class OrderFormV1(BaseModel):
    """Text fields of the multipart body. The screenshot travels as the file part."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    description: str | None = None
    quantity: str | None = None
    price: str = "0"

    buyer_username: str = Field(..., min_length=1, alias=OrderFieldV1.BUYER_USERNAME.value)
    buyer_id: str | None = Field(default=None, alias=OrderFieldV1.BUYER_ID.value)

    # Mutually exclusive: at most one is set.
    recipient_username: str | None = Field(
        default=None, alias=OrderFieldV1.RECIPIENT_USERNAME.value
    )
    recipient_id: str | None = Field(default=None, alias=OrderFieldV1.RECIPIENT_ID.value)

    def form_fields(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, exclude_none=True)


class OrderResultV1(BaseModel):
    success: bool
    error: str | None = None
