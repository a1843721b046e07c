from __future__ import annotations

import httpx
import pytest
from services.storefront.app.models.draft import OrderDraft
from services.storefront.app.services.order_base import (
    AttachmentMissingError,
    OrderRejectedError,
    OrderTransportError,
    SenderIdentityMissingError,
)
from services.storefront.app.services.submitter import (
    OrderSubmitter,
    collect_submission,
    interpret_response,
    split_recipient,
)
from services.storefront.app.ui.dom import (
    BUYER_ID_ID,
    BUYER_USERNAME_ID,
    RECIPIENT_ID,
    SCREENSHOT_ID,
    Attachment,
    Document,
    Element,
    build_order_page,
)

SHOT = Attachment("proof.png", b"\x89PNG\r\n", "image/png")
DEEPLY_NESTED = b"[" * 200_000 + b"]" * 200_000


def _filled_page(username: str = "alice", recipient: str = "", attach: bool = True) -> Document:
    doc = build_order_page()
    values = {BUYER_USERNAME_ID: username, BUYER_ID_ID: "42", RECIPIENT_ID: recipient}
    for element_id, value in values.items():
        element = doc.get(element_id)
        assert element is not None
        element.value = value
    if attach:
        screenshot = doc.get(SCREENSHOT_ID)
        assert screenshot is not None
        screenshot.files.append(SHOT)
    return doc


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("@alice", ("alice", None)),
        ("  @alice  ", ("alice", None)),
        ("12345", (None, "12345")),
        ("", (None, None)),
        ("   ", (None, None)),
        ("@", (None, None)),
    ],
)
def test_split_recipient(raw: str, expected: tuple[str | None, str | None]) -> None:
    assert split_recipient(raw) == expected


def test_collect_submission_builds_form() -> None:
    doc = _filled_page(username="@alice", recipient="@bob")
    submission = collect_submission(doc, OrderDraft(quantity="50", price="15000"))

    assert submission.form.form_fields() == {
        "quantity": "50",
        "price": "15000",
        "buyerUsername": "alice",
        "buyerId": "42",
        "recipientUsername": "bob",
    }
    assert submission.screenshot == SHOT


def test_collect_submission_numeric_recipient_and_no_buyer_id() -> None:
    doc = _filled_page(recipient="12345")
    buyer_id = doc.get(BUYER_ID_ID)
    assert buyer_id is not None
    buyer_id.value = ""

    draft = OrderDraft(item_label="Пакет", price="99000")
    fields = collect_submission(doc, draft).form.form_fields()

    assert fields["description"] == "Пакет"
    assert fields["recipientId"] == "12345"
    assert "recipientUsername" not in fields
    assert "buyerId" not in fields
    assert "quantity" not in fields


def test_collect_submission_without_draft_sends_zero_price() -> None:
    fields = collect_submission(_filled_page(), None).form.form_fields()
    assert fields == {"price": "0", "buyerUsername": "alice", "buyerId": "42"}


@pytest.mark.parametrize("username", ["", "   ", "@"])
def test_collect_submission_requires_sender(username: str) -> None:
    with pytest.raises(SenderIdentityMissingError):
        collect_submission(_filled_page(username=username), OrderDraft(price="1"))


def test_sender_is_checked_before_attachment() -> None:
    with pytest.raises(SenderIdentityMissingError):
        collect_submission(_filled_page(username="", attach=False), OrderDraft(price="1"))


def test_collect_submission_requires_attachment() -> None:
    with pytest.raises(AttachmentMissingError) as exc_info:
        collect_submission(_filled_page(attach=False), OrderDraft(price="1"))
    assert exc_info.value.user_message == "Загрузите скриншот."


def test_collect_submission_requires_file_input() -> None:
    doc = Document([Element(id=BUYER_USERNAME_ID, value="alice")])
    with pytest.raises(AttachmentMissingError):
        collect_submission(doc, OrderDraft(price="1"))


@pytest.mark.parametrize(
    ("response", "success", "error"),
    [
        (httpx.Response(200, json={"success": True}), True, None),
        (httpx.Response(200, json={"success": False, "error": "duplicate"}), False, "duplicate"),
        (httpx.Response(500, json={"success": True}), True, None),
        (httpx.Response(200, text="OK"), True, None),
        (httpx.Response(502, text="<html>Bad Gateway</html>"), False, None),
        (httpx.Response(200, json=["unexpected"]), True, None),
        (httpx.Response(200, json={"status": "ok"}), True, None),
        (httpx.Response(200, content=DEEPLY_NESTED), True, None),
        (httpx.Response(502, content=DEEPLY_NESTED), False, None),
    ],
)
def test_interpret_response(response: httpx.Response, success: bool, error: str | None) -> None:
    result = interpret_response(response)
    assert result.success is success
    assert result.error == error


def _submission():
    return collect_submission(_filled_page(), OrderDraft(quantity="50", price="15000"))


@pytest.mark.asyncio()
async def test_submit_posts_multipart_to_endpoint() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True})

    async with httpx.AsyncClient(
        base_url="http://storefront.test", transport=httpx.MockTransport(handler)
    ) as client:
        result = await OrderSubmitter(client).submit(_submission())

    assert result.success
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url == "http://storefront.test/api/order"
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.content
    assert b'name="screenshot"; filename="proof.png"' in body
    assert b'name="quantity"' in body
    assert b'name="description"' not in body


@pytest.mark.asyncio()
async def test_submit_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(
        base_url="http://storefront.test", transport=httpx.MockTransport(handler)
    ) as client:
        with pytest.raises(OrderTransportError, match="connection refused"):
            await OrderSubmitter(client).submit(_submission())


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"success": False, "error": "bad screenshot"}),
        httpx.Response(500, json={"success": True}),
        httpx.Response(503, text="maintenance"),
    ],
)
async def test_submit_raises_on_rejection(response: httpx.Response) -> None:
    async with httpx.AsyncClient(
        base_url="http://storefront.test", transport=httpx.MockTransport(lambda _: response)
    ) as client:
        with pytest.raises(OrderRejectedError) as exc_info:
            await OrderSubmitter(client).submit(_submission())

    assert exc_info.value.status_code == response.status_code
