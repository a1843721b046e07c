from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx
from packages.shared.schemas.order_v1 import OrderFieldV1, OrderFormV1, OrderResultV1
from services.storefront.app.models.draft import OrderDraft
from services.storefront.app.services.order_base import (
    AttachmentMissingError,
    OrderRejectedError,
    OrderSubmission,
    OrderTransportError,
    SenderIdentityMissingError,
)
from services.storefront.app.ui.dom import (
    BUYER_ID_ID,
    BUYER_USERNAME_ID,
    RECIPIENT_ID,
    SCREENSHOT_ID,
    Document,
)

logger = logging.getLogger(__name__)


def collect_submission(document: Document, draft: OrderDraft | None) -> OrderSubmission:
    """Read the modal's fields into a submission, checking sender then attachment."""

    buyer_username = _field_value(document, BUYER_USERNAME_ID)
    if buyer_username.startswith("@"):
        buyer_username = buyer_username[1:]
    if not buyer_username:
        raise SenderIdentityMissingError()

    screenshot = document.get(SCREENSHOT_ID)
    if screenshot is None or not screenshot.files:
        raise AttachmentMissingError()

    recipient_username, recipient_id = split_recipient(_field_value(document, RECIPIENT_ID))

    form = OrderFormV1(
        description=draft.item_label if draft else None,
        quantity=draft.quantity if draft else None,
        price=(draft.price if draft else "") or "0",
        buyer_username=buyer_username,
        buyer_id=_field_value(document, BUYER_ID_ID) or None,
        recipient_username=recipient_username,
        recipient_id=recipient_id,
    )
    return OrderSubmission(form=form, screenshot=screenshot.files[0])


def split_recipient(raw: str) -> tuple[str | None, str | None]:
    """Return (username, id). `@name` is a username, anything else an id."""

    text = raw.strip()
    if not text:
        return None, None
    if text.startswith("@"):
        return text[1:] or None, None
    return None, text


def interpret_response(response: httpx.Response) -> OrderResultV1:
    try:
        payload = response.json()
    except (ValueError, RecursionError):
        # undecodable or too deeply nested to parse
        payload = None

    if isinstance(payload, Mapping) and "success" in payload:
        error = payload.get("error")
        return OrderResultV1(
            success=bool(payload["success"]),
            error=str(error) if error is not None else None,
        )

    # Not our JSON shape: the status code is all we have.
    return OrderResultV1(success=response.is_success)


class OrderSubmitter:
    def __init__(self, client: httpx.AsyncClient, *, endpoint: str = "/api/order") -> None:
        self._client = client
        self._endpoint = endpoint

    async def submit(self, submission: OrderSubmission) -> OrderResultV1:
        shot = submission.screenshot
        files = {
            OrderFieldV1.SCREENSHOT.value: (shot.filename, shot.content, shot.content_type)
        }

        try:
            response = await self._client.post(
                self._endpoint,
                data=submission.form.form_fields(),
                files=files,
            )
        except httpx.HTTPError as e:
            raise OrderTransportError(str(e) or type(e).__name__) from e

        result = interpret_response(response)
        if not response.is_success or not result.success:
            raise OrderRejectedError(status_code=response.status_code, error=result.error)

        logger.info("Order accepted by backend (status=%s)", response.status_code)
        return result


def _field_value(document: Document, element_id: str) -> str:
    element = document.get(element_id)
    return element.value.strip() if element is not None else ""
