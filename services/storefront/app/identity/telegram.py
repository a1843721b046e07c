from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import parse_qsl

from services.storefront.app.models.identity import Identity

logger = logging.getLogger(__name__)


class TelegramWebAppBridge:
    """Reads the sender from Telegram WebApp's `initDataUnsafe` object.

    The source is either the mapping itself or a zero-arg callable returning it, so a live
    host object can be re-read on every modal open. Shapes other than
    `{"user": {"username": ..., "id": ...}}` read as "no identity".
    """

    def __init__(self, init_data_unsafe: Mapping[str, Any] | Callable[[], Any] | None) -> None:
        self._source = init_data_unsafe

    @classmethod
    def from_init_data(cls, raw: str) -> "TelegramWebAppBridge":
        """Build a bridge from the raw `initData` query string.

        Telegram passes `user` as a JSON document inside the query string; the signature
        fields (`hash`, `auth_date`) are kept but not verified here.
        """

        fields: dict[str, Any] = dict(parse_qsl(raw or "", keep_blank_values=True))
        user_raw = fields.get("user")
        if user_raw:
            try:
                fields["user"] = json.loads(user_raw)
            except ValueError:
                logger.debug("Telegram initData carries an undecodable user field")
                fields.pop("user")
        return cls(fields)

    def read(self) -> Identity | None:
        data = self._source() if callable(self._source) else self._source
        if not isinstance(data, Mapping):
            return None

        user = data.get("user")
        if not isinstance(user, Mapping):
            return None

        username = user.get("username")
        user_id = user.get("id")
        return Identity(
            username=username if isinstance(username, str) else "",
            user_id=user_id if isinstance(user_id, (int, str)) else None,
        )
