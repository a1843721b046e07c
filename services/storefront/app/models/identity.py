from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class Identity(BaseModel):
    """Who is sending the order, as reported by the host application."""

    model_config = ConfigDict(frozen=True)

    username: str = ""
    user_id: str | None = None

    @field_validator("username", mode="before")
    @classmethod
    def _strip_at(cls, value: object) -> str:
        text = str(value or "").strip()
        return text[1:] if text.startswith("@") else text

    @field_validator("user_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> str | None:
        if value is None or isinstance(value, bool):
            return None
        text = str(value).strip()
        return text or None

    @property
    def is_known(self) -> bool:
        return bool(self.username)


ANONYMOUS = Identity()
