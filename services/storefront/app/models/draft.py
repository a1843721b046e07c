from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict


class OrderDraft(BaseModel):
    """The card the user picked, waiting for confirmation."""

    model_config = ConfigDict(frozen=True)

    item_label: str | None = None
    quantity: str | None = None
    price: str = "0"

    @property
    def is_contact_only(self) -> bool:
        return is_zero_price(self.price)


def draft_from_card(attributes: Mapping[str, str]) -> OrderDraft:
    """Normalize a card's data attributes into a draft.

    Star cards carry `stars`, package cards carry `desc`, Premium cards carry `duration`.
    """

    item_label = _attr(attributes, "desc") or _attr(attributes, "duration")
    quantity = _attr(attributes, "stars") or _attr(attributes, "quantity")
    price = _attr(attributes, "price") or "0"
    return OrderDraft(item_label=item_label, quantity=quantity, price=price)


def is_zero_price(price: str) -> bool:
    # "0" is the storefront's marker for negotiated orders; "0.00" means the same thing.
    if price == "0":
        return True
    try:
        return Decimal(price) == 0
    except InvalidOperation:
        return False


def _attr(attributes: Mapping[str, str], key: str) -> str | None:
    value = str(attributes.get(key) or "").strip()
    return value or None
