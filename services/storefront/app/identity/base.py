from __future__ import annotations

import logging
from typing import Protocol

from services.storefront.app.models.identity import ANONYMOUS, Identity

logger = logging.getLogger(__name__)


class IdentityBridge(Protocol):
    def read(self) -> Identity | None: ...


def resolve_identity(bridge: IdentityBridge | None) -> Identity:
    """Read the bridge once, never letting a host failure escape.

    An unreadable or missing bridge yields an anonymous identity; submission validation
    turns that into a user-facing message later.
    """

    if bridge is None:
        return ANONYMOUS

    try:
        identity = bridge.read()
    except Exception:
        logger.debug("Identity bridge read failed", exc_info=True)
        return ANONYMOUS

    return identity or ANONYMOUS
