from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from services.storefront.app.config import StorefrontConfig
from services.storefront.app.identity.base import IdentityBridge
from services.storefront.app.identity.fake import StaticIdentityBridge
from services.storefront.app.identity.telegram import TelegramWebAppBridge
from services.storefront.app.main import build_session
from services.storefront.app.session import SubmitOutcome
from services.storefront.app.ui.dom import (
    BUY_CLASS,
    RECIPIENT_ID,
    SCREENSHOT_ID,
    Attachment,
    build_order_page,
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Place one StarUz order from the terminal")
    parser.add_argument("--price", required=True, help="Card price in sum, e.g. 15000")
    parser.add_argument("--stars", help="Star count for star cards")
    parser.add_argument("--desc", help="Package or Premium description")
    parser.add_argument("--screenshot", type=Path, help="Payment proof image")
    parser.add_argument("--recipient", default="", help="@username or numeric Telegram id")
    parser.add_argument("--username", help="Sender Telegram username (overrides env)")
    parser.add_argument("--user-id", help="Sender Telegram id")
    parser.add_argument(
        "--init-data",
        default=os.getenv("STARUZ_TELEGRAM_INIT_DATA", ""),
        help="Raw Telegram WebApp initData query string",
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv("STARUZ_API_BASE_URL", "http://localhost:8000"),
        help="Backend base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=os.getenv("STARUZ_LOG_LEVEL", "INFO").upper(),
        stream=sys.stdout,
    )

    config = replace(StorefrontConfig.from_env(), api_base_url=args.base_url.rstrip("/"))

    bridge: IdentityBridge | None = None
    if args.username:
        bridge = StaticIdentityBridge(username=args.username, user_id=args.user_id)
    elif args.init_data:
        bridge = TelegramWebAppBridge.from_init_data(args.init_data)

    card = {"price": args.price}
    if args.stars:
        card["stars"] = args.stars
    if args.desc:
        card["desc"] = args.desc

    return asyncio.run(_run(args, config, card, bridge))


async def _run(
    args: argparse.Namespace,
    config: StorefrontConfig,
    card: dict[str, str],
    bridge: IdentityBridge | None,
) -> int:
    doc = build_order_page([card])
    session = build_session(doc, config=config, identity_bridge=bridge)
    try:
        draft = session.on_buy_click(doc.select_class(BUY_CLASS)[0])
        if draft is None:
            # no order was placed
            print("Free-form order: continue in the support chat.")
            return 1

        recipient = doc.get(RECIPIENT_ID)
        if recipient is not None:
            recipient.value = args.recipient

        screenshot = doc.get(SCREENSHOT_ID)
        if screenshot is not None and args.screenshot is not None:
            screenshot.files.append(Attachment.from_path(args.screenshot))

        outcome = await session.confirm()
    finally:
        await session.aclose()

    print(outcome.value)
    return 0 if outcome is SubmitOutcome.ACCEPTED else 1


if __name__ == "__main__":
    raise SystemExit(main())
