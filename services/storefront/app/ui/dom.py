"""Headless model of the storefront page.

Only the parts the order flow touches are modelled: elements addressable by id, their
text/value/visibility/enabled state, file inputs, and the card hierarchy buy buttons
live in.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

MODAL_ID = "orderModal"
MODAL_TEXT_ID = "modalText"
MODAL_AMOUNT_ID = "modalAmount"
RECIPIENT_ID = "orderRecipient"
SCREENSHOT_ID = "orderScreenshot"
BUYER_USERNAME_ID = "buyerUsername"
BUYER_ID_ID = "buyerId"
CONFIRM_ID = "confirmOrder"
CANCEL_ID = "cancelOrder"

CARD_CLASS = "card"
BUY_CLASS = "buy"


@dataclass(frozen=True, slots=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Path) -> "Attachment":
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )


@dataclass(eq=False)
class Element:
    id: str | None = None
    text: str = ""
    value: str = ""
    hidden: bool = False
    disabled: bool = False
    files: list[Attachment] = field(default_factory=list)
    dataset: dict[str, str] = field(default_factory=dict)
    classes: set[str] = field(default_factory=set)
    parent: Element | None = None

    def closest(self, class_name: str) -> Element | None:
        node: Element | None = self
        while node is not None:
            if class_name in node.classes:
                return node
            node = node.parent
        return None


class Document:
    def __init__(self, elements: Iterable[Element] = ()) -> None:
        self._elements: list[Element] = []
        self._by_id: dict[str, Element] = {}
        for element in elements:
            self.add(element)

    def add(self, element: Element) -> Element:
        self._elements.append(element)
        if element.id:
            self._by_id[element.id] = element
        return element

    def get(self, element_id: str) -> Element | None:
        return self._by_id.get(element_id)

    def select_class(self, class_name: str) -> list[Element]:
        return [e for e in self._elements if class_name in e.classes]


def build_order_page(
    cards: Iterable[Mapping[str, str]] = (),
    *,
    confirm_label: str = "Подтвердить",
) -> Document:
    """Build the order modal skeleton plus one card (with its buy button) per mapping."""

    doc = Document(
        [
            Element(id=MODAL_ID, hidden=True),
            Element(id=MODAL_TEXT_ID),
            Element(id=MODAL_AMOUNT_ID),
            Element(id=RECIPIENT_ID),
            Element(id=SCREENSHOT_ID),
            Element(id=BUYER_USERNAME_ID),
            Element(id=BUYER_ID_ID),
            Element(id=CONFIRM_ID, text=confirm_label),
            Element(id=CANCEL_ID, text="Отмена"),
        ]
    )

    for attrs in cards:
        card = doc.add(Element(classes={CARD_CLASS}, dataset=dict(attrs)))
        doc.add(Element(text="Купить", classes={"btn", BUY_CLASS}, parent=card))

    return doc
