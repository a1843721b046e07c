from __future__ import annotations

from dataclasses import dataclass

from packages.shared.schemas.order_v1 import OrderFormV1
from services.storefront.app import messages
from services.storefront.app.ui.dom import Attachment


class OrderValidationError(Exception):
    """Base class for problems caught before anything is sent."""

    user_message: str = ""

    def __init__(self) -> None:
        super().__init__(self.user_message)


class SenderIdentityMissingError(OrderValidationError):
    user_message = messages.SENDER_UNKNOWN


class AttachmentMissingError(OrderValidationError):
    user_message = messages.ATTACHMENT_REQUIRED


class OrderSubmitError(Exception):
    """Base class for failures once the order is on its way to the backend."""


class OrderTransportError(OrderSubmitError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Order request did not complete: {reason}")
        self.reason = reason


class OrderRejectedError(OrderSubmitError):
    def __init__(self, status_code: int, error: str | None) -> None:
        super().__init__(f"Order rejected. status={status_code} error={error or 'unspecified'}")
        self.status_code = status_code
        self.error = error


@dataclass(frozen=True, slots=True)
class OrderSubmission:
    form: OrderFormV1
    screenshot: Attachment
