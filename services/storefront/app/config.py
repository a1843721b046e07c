from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StorefrontConfig:
    api_base_url: str
    order_endpoint: str
    contact_url: str
    cooldown_seconds: int
    cooldown_tick_s: float
    request_timeout_s: float

    @classmethod
    def from_env(cls) -> "StorefrontConfig":
        api_base_url = os.getenv("STARUZ_API_BASE_URL", "http://localhost:8000").rstrip("/")
        order_endpoint = (os.getenv("STARUZ_ORDER_ENDPOINT") or "").strip() or "/api/order"
        contact_url = (os.getenv("STARUZ_CONTACT_URL") or "").strip() or "https://t.me/echohex"

        cooldown_seconds = _parse_int("STARUZ_COOLDOWN_SECONDS", default=10)
        if cooldown_seconds < 1:
            raise ValueError("STARUZ_COOLDOWN_SECONDS must be at least 1")

        cooldown_tick_s = _parse_float("STARUZ_COOLDOWN_TICK_S", default=1.0)
        request_timeout_s = _parse_float("STARUZ_REQUEST_TIMEOUT_S", default=30.0)

        return cls(
            api_base_url=api_base_url,
            order_endpoint=order_endpoint,
            contact_url=contact_url,
            cooldown_seconds=cooldown_seconds,
            cooldown_tick_s=cooldown_tick_s,
            request_timeout_s=request_timeout_s,
        )


def _parse_int(name: str, *, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _parse_float(name: str, *, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
