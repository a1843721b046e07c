from __future__ import annotations

import os

from services.storefront.app.identity.base import IdentityBridge
from services.storefront.app.identity.fake import NullIdentityBridge, StaticIdentityBridge


def get_identity_bridge() -> IdentityBridge:
    """Select the identity bridge.

    Default is no bridge so a page run outside Telegram behaves like a browser tab opened
    directly: the sender stays unknown and submission is refused.
    Set STARUZ_IDENTITY_PROVIDER=static with STARUZ_IDENTITY_USERNAME for local runs, or
    STARUZ_IDENTITY_PROVIDER=telegram with STARUZ_TELEGRAM_INIT_DATA.
    """

    provider = os.getenv("STARUZ_IDENTITY_PROVIDER", "none").strip().lower()

    if provider == "none":
        return NullIdentityBridge()

    if provider == "static":
        username = os.getenv("STARUZ_IDENTITY_USERNAME", "").strip()
        if not username:
            raise ValueError(
                "STARUZ_IDENTITY_USERNAME is required when STARUZ_IDENTITY_PROVIDER=static"
            )
        user_id = os.getenv("STARUZ_IDENTITY_USER_ID", "").strip() or None
        return StaticIdentityBridge(username=username, user_id=user_id)

    if provider == "telegram":
        from services.storefront.app.identity.telegram import TelegramWebAppBridge

        return TelegramWebAppBridge.from_init_data(os.getenv("STARUZ_TELEGRAM_INIT_DATA", ""))

    raise ValueError(
        f"Unknown STARUZ_IDENTITY_PROVIDER={provider!r}. Expected none, static or telegram."
    )
