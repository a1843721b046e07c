from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from services.storefront.app.config import StorefrontConfig
from services.storefront.app.identity.fake import StaticIdentityBridge
from services.storefront.app.main import build_session
from services.storefront.app.session import StorefrontSession
from services.storefront.app.ui.dom import Document, build_order_page

STAR_CARD = {"stars": "50", "price": "15000"}
PACKAGE_CARD = {"desc": "Пакет Старт", "price": "99000"}
CUSTOM_CARD = {"desc": "Свой пакет", "price": "0"}


class ManualTicker:
    """Stand-in for asyncio.sleep that only returns when the test advances it."""

    def __init__(self) -> None:
        self._pending: list[asyncio.Future[None]] = []
        self.delays: list[float] = []

    async def sleep(self, delay: float) -> None:
        self.delays.append(delay)
        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._pending.append(fut)
        await fut

    async def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            await _settle()
            pending, self._pending = self._pending, []
            for fut in pending:
                if not fut.done():
                    fut.set_result(None)
            await _settle()


async def _settle() -> None:
    for _ in range(3):
        await asyncio.sleep(0)


class RecordingHost:
    def __init__(self) -> None:
        self.alerts: list[str] = []
        self.opened: list[tuple[str, str]] = []

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def open_url(self, url: str, target: str = "_blank") -> None:
        self.opened.append((url, target))


class FakeOrderBackend:
    """In-process `POST /api/order` that records what it was sent."""

    def __init__(self) -> None:
        self.orders: list[dict] = []
        self.entered = asyncio.Event()
        self.gate: asyncio.Event | None = None
        self.reply: Callable[[], Response] = lambda: JSONResponse({"success": True})

        self.app = FastAPI()
        self.app.add_api_route("/api/order", self._create_order, methods=["POST"])

    async def _create_order(self, request: Request) -> Response:
        form = await request.form()
        fields: dict[str, str] = {}
        files: dict[str, tuple[str, bytes, str]] = {}
        for key, value in form.multi_items():
            if isinstance(value, str):
                fields[key] = value
            else:
                files[key] = (value.filename, await value.read(), value.content_type)

        self.orders.append({"fields": fields, "files": files})
        self.entered.set()
        if self.gate is not None:
            await self.gate.wait()
        return self.reply()

    def transport(self) -> httpx.AsyncBaseTransport:
        return httpx.ASGITransport(app=self.app)


@pytest.fixture()
def config() -> StorefrontConfig:
    return StorefrontConfig(
        api_base_url="http://storefront.test",
        order_endpoint="/api/order",
        contact_url="https://t.me/echohex",
        cooldown_seconds=10,
        cooldown_tick_s=1.0,
        request_timeout_s=5.0,
    )


@pytest.fixture()
def page() -> Document:
    return build_order_page([STAR_CARD, PACKAGE_CARD, CUSTOM_CARD])


@pytest.fixture()
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture()
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture()
def backend() -> FakeOrderBackend:
    return FakeOrderBackend()


@pytest_asyncio.fixture()
async def session(
    page: Document,
    config: StorefrontConfig,
    host: RecordingHost,
    ticker: ManualTicker,
    backend: FakeOrderBackend,
) -> AsyncIterator[StorefrontSession]:
    s = build_session(
        page,
        config=config,
        host=host,
        identity_bridge=StaticIdentityBridge(username="alice_buyer", user_id="777"),
        transport=backend.transport(),
        sleep=ticker.sleep,
    )
    yield s
    await s.aclose()
