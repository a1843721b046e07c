from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

import httpx
from packages.shared.schemas.events import EventTypeV1, SessionEventV1
from services.storefront.app import messages
from services.storefront.app.config import StorefrontConfig
from services.storefront.app.identity.base import IdentityBridge, resolve_identity
from services.storefront.app.models.draft import OrderDraft, draft_from_card
from services.storefront.app.services.guard import Sleep, SubmissionGuard
from services.storefront.app.services.order_base import OrderSubmitError, OrderValidationError
from services.storefront.app.services.submitter import OrderSubmitter, collect_submission
from services.storefront.app.ui.dom import CARD_CLASS, CONFIRM_ID, Document, Element
from services.storefront.app.ui.host import HostWindow
from services.storefront.app.ui.modal import ModalController

logger = logging.getLogger(__name__)


class SubmitOutcome(str, Enum):
    IGNORED = "IGNORED"
    REJECTED = "REJECTED"
    ACCEPTED = "ACCEPTED"
    FAILED = "FAILED"


class StorefrontSession:
    """One page's order flow: the current draft, the modal, the guard and the submitter."""

    def __init__(
        self,
        document: Document,
        *,
        client: httpx.AsyncClient,
        host: HostWindow,
        identity_bridge: IdentityBridge | None,
        config: StorefrontConfig,
        sleep: Sleep | None = None,
    ) -> None:
        self.id = uuid4().hex
        self.document = document
        self.config = config
        self.events: list[SessionEventV1] = []

        self._client = client
        self._host = host
        self._identity_bridge = identity_bridge
        self._draft: OrderDraft | None = None

        self.modal = ModalController(document)
        self.submitter = OrderSubmitter(client, endpoint=config.order_endpoint)

        guard_kwargs: dict[str, Any] = {}
        if sleep is not None:
            guard_kwargs["sleep"] = sleep
        self.guard = SubmissionGuard(
            document.get(CONFIRM_ID),
            cooldown_seconds=config.cooldown_seconds,
            tick_s=config.cooldown_tick_s,
            on_cooldown_finished=lambda: self._log_event(EventTypeV1.COOLDOWN_FINISHED),
            **guard_kwargs,
        )

    @property
    def current_draft(self) -> OrderDraft | None:
        return self._draft

    def on_buy_click(self, button: Element) -> OrderDraft | None:
        card = button.closest(CARD_CLASS)
        if card is None:
            return None
        return self.select(card.dataset)

    def select(self, attributes: Mapping[str, str]) -> OrderDraft | None:
        draft = draft_from_card(attributes)

        if draft.is_contact_only:
            self._host.open_url(self.config.contact_url, "_blank")
            self._log_event(EventTypeV1.CONTACT_REDIRECTED, {"url": self.config.contact_url})
            return None

        self._draft = draft
        self._log_event(EventTypeV1.DRAFT_SELECTED, draft.model_dump())

        identity = resolve_identity(self._identity_bridge)
        self.modal.open(draft, identity)
        self._log_event(EventTypeV1.MODAL_OPENED, {"sender_known": identity.is_known})
        return draft

    def cancel(self) -> None:
        self._close_modal()

    async def confirm(self) -> SubmitOutcome:
        if not self.guard.try_acquire():
            self._log_event(EventTypeV1.CONFIRM_IGNORED, {"guard_state": self.guard.state.value})
            return SubmitOutcome.IGNORED

        try:
            submission = collect_submission(self.document, self._draft)
        except OrderValidationError as e:
            self.guard.release()
            self._log_event(EventTypeV1.SUBMISSION_REJECTED, {"reason": type(e).__name__})
            self._host.alert(e.user_message)
            return SubmitOutcome.REJECTED

        self.guard.start_cooldown()
        self._log_event(
            EventTypeV1.SUBMISSION_STARTED,
            {"fields": submission.form.form_fields(), "file": submission.screenshot.filename},
        )

        try:
            await self.submitter.submit(submission)
        except OrderSubmitError as e:
            logger.error("Order submission failed: %s", e)
            self._log_event(EventTypeV1.SUBMISSION_FAILED, {"error": str(e)})
            self._host.alert(messages.ORDER_FAILED)
            outcome = SubmitOutcome.FAILED
        else:
            self._log_event(EventTypeV1.SUBMISSION_SUCCEEDED)
            self._host.alert(messages.ORDER_ACCEPTED)
            outcome = SubmitOutcome.ACCEPTED
        finally:
            self._close_modal()
            self.guard.release()

        return outcome

    async def aclose(self) -> None:
        await self.guard.aclose()
        await self._client.aclose()

    def _close_modal(self) -> None:
        was_open = self.modal.is_open
        self.modal.close()
        if was_open:
            self._log_event(EventTypeV1.MODAL_CLOSED)

    def _log_event(self, event_type: EventTypeV1, payload: dict[str, Any] | None = None) -> None:
        self.events.append(
            SessionEventV1(
                id=uuid4().hex,
                session_id=self.id,
                event_type=event_type,
                payload=payload or {},
                created_at=datetime.now(timezone.utc).isoformat(),
            )
        )

    def event_types(self) -> list[EventTypeV1]:
        return [e.event_type for e in self.events]
