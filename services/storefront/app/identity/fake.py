from __future__ import annotations

from services.storefront.app.models.identity import Identity


class StaticIdentityBridge:
    """Always reports the same sender. Used by the CLI driver and tests."""

    def __init__(self, username: str, user_id: str | None = None) -> None:
        self._identity = Identity(username=username, user_id=user_id)

    def read(self) -> Identity | None:
        return self._identity


class NullIdentityBridge:
    """No host application around the page."""

    def read(self) -> Identity | None:
        return None
