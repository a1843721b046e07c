from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from services.storefront.app import messages
from services.storefront.app.models.draft import OrderDraft
from services.storefront.app.models.identity import Identity
from services.storefront.app.ui.dom import (
    BUYER_ID_ID,
    BUYER_USERNAME_ID,
    MODAL_AMOUNT_ID,
    MODAL_ID,
    MODAL_TEXT_ID,
    RECIPIENT_ID,
    SCREENSHOT_ID,
    Document,
)

logger = logging.getLogger(__name__)

_NBSP = "\u00a0"
_MAX_FRACTION = Decimal("0.001")


class ModalController:
    """Shows and fills the order confirmation dialog.

    Every element is optional; a page without one of them just skips that write.
    """

    def __init__(self, document: Document) -> None:
        self._doc = document

    @property
    def is_open(self) -> bool:
        modal = self._doc.get(MODAL_ID)
        return modal is not None and not modal.hidden

    def open(self, draft: OrderDraft, identity: Identity) -> None:
        price = format_price(draft.price)

        text = self._doc.get(MODAL_TEXT_ID)
        if text is not None:
            text.text = summary_text(draft, price)

        amount = self._doc.get(MODAL_AMOUNT_ID)
        if amount is not None:
            amount.text = messages.AMOUNT.format(price=price)

        for element_id in (BUYER_USERNAME_ID, BUYER_ID_ID, RECIPIENT_ID):
            field = self._doc.get(element_id)
            if field is not None:
                field.value = ""

        buyer_username = self._doc.get(BUYER_USERNAME_ID)
        if buyer_username is not None and identity.username:
            buyer_username.value = identity.username

        buyer_id = self._doc.get(BUYER_ID_ID)
        if buyer_id is not None and identity.user_id:
            buyer_id.value = identity.user_id

        screenshot = self._doc.get(SCREENSHOT_ID)
        if screenshot is not None:
            screenshot.value = ""
            screenshot.files.clear()

        modal = self._doc.get(MODAL_ID)
        if modal is not None:
            modal.hidden = False
        logger.debug("Order modal opened for price=%s", draft.price)

    def close(self) -> None:
        modal = self._doc.get(MODAL_ID)
        if modal is not None:
            modal.hidden = True


def summary_text(draft: OrderDraft, formatted_price: str) -> str:
    if draft.quantity and not draft.item_label:
        return messages.SUMMARY_QUANTITY.format(quantity=draft.quantity, price=formatted_price)
    label = draft.item_label or messages.DEFAULT_ITEM_LABEL
    return messages.SUMMARY_LABEL.format(label=label, price=formatted_price)


def format_price(price: str) -> str:
    """Format a decimal string the way ru-RU pages show money: "15 000", "1 500,5".

    Text that is not a finite number is returned as given.
    """

    try:
        amount = Decimal(price.strip())
    except (InvalidOperation, ValueError):
        return price
    if not amount.is_finite():
        return price

    # room for every integer digit, a carry and the three fraction digits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 5)
        try:
            amount = amount.quantize(_MAX_FRACTION, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            return price

    integer, _, fraction = f"{amount.copy_abs():f}".partition(".")
    fraction = fraction.rstrip("0")
    grouped = f"{int(integer):,}".replace(",", _NBSP)

    sign = "-" if amount < 0 else ""
    return f"{sign}{grouped},{fraction}" if fraction else f"{sign}{grouped}"
