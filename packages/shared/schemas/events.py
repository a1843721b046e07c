"""Storefront session event schema (v1).

Each storefront session keeps an append-only trail of these events so a page run can be
audited or asserted on after the fact.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventTypeV1(str, Enum):
    DRAFT_SELECTED = "DRAFT_SELECTED"
    CONTACT_REDIRECTED = "CONTACT_REDIRECTED"
    MODAL_OPENED = "MODAL_OPENED"
    MODAL_CLOSED = "MODAL_CLOSED"
    CONFIRM_IGNORED = "CONFIRM_IGNORED"
    SUBMISSION_REJECTED = "SUBMISSION_REJECTED"
    SUBMISSION_STARTED = "SUBMISSION_STARTED"
    SUBMISSION_SUCCEEDED = "SUBMISSION_SUCCEEDED"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    COOLDOWN_FINISHED = "COOLDOWN_FINISHED"


class SessionEventV1(BaseModel):
    id: str
    session_id: str

    event_type: EventTypeV1
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: str
