"""StarUz storefront order flow entrypoint."""

from __future__ import annotations

import httpx
from services.storefront.app.config import StorefrontConfig
from services.storefront.app.identity.base import IdentityBridge
from services.storefront.app.identity.factory import get_identity_bridge
from services.storefront.app.services.guard import Sleep
from services.storefront.app.session import StorefrontSession
from services.storefront.app.ui.dom import Document
from services.storefront.app.ui.host import ConsoleHost, HostWindow


def build_session(
    document: Document,
    *,
    config: StorefrontConfig | None = None,
    host: HostWindow | None = None,
    identity_bridge: IdentityBridge | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleep | None = None,
) -> StorefrontSession:
    """Wire a session for one page.

    Anything not passed in is taken from the environment. That includes the identity
    bridge: `None` means STARUZ_IDENTITY_PROVIDER, so pass `NullIdentityBridge()` for a
    page that has no bridge at all.
    """

    config = config or StorefrontConfig.from_env()
    client = httpx.AsyncClient(
        base_url=config.api_base_url,
        timeout=config.request_timeout_s,
        transport=transport,
    )
    return StorefrontSession(
        document,
        client=client,
        host=host or ConsoleHost(),
        identity_bridge=identity_bridge if identity_bridge is not None else get_identity_bridge(),
        config=config,
        sleep=sleep,
    )
