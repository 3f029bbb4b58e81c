import logging
import re
import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidatorFunctionWrapHandler, field_validator

from .selection import Identity
from .votes import Choice, choice_from_button

logger = logging.getLogger(__name__)

DAY_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class _Lenient(BaseModel):
    """Fields that fail validation read as missing instead of rejecting the body."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("*", mode="wrap")
    @classmethod
    def _drop_invalid(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None


class UntrustedData(_Lenient):
    fid: int | str | None = None
    button_index: int | None = Field(default=None, alias="buttonIndex")
    input_text: str | None = Field(default=None, alias="inputText")
    url: str | None = None
    timestamp: int | None = None
    network: int | None = None
    state: str | None = None


class TrustedData(_Lenient):
    message_bytes: str | None = Field(default=None, alias="messageBytes")


class FramePayload(_Lenient):
    """POST body a frame host sends when a button is pressed."""

    untrusted_data: UntrustedData | None = Field(default=None, alias="untrustedData")
    trusted_data: TrustedData | None = Field(default=None, alias="trustedData")
    date: str | None = None


def parse_payload(raw: bytes) -> FramePayload | None:
    if not raw or not raw.strip():
        return None
    try:
        return FramePayload.model_validate_json(raw)
    except ValidationError as e:
        logger.debug("Ignoring unparseable frame payload: %s", e.errors()[:1])
        return None


def _coerce_identity(value: Any) -> Identity | None:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    value = str(value).strip()
    if not value:
        return None
    # only canonical ASCII integers become ints, so "007" and "٢" keep their own key
    if value.isascii() and value.isdigit() and str(int(value)) == value:
        return int(value)
    return value


def resolve_identity(payload: FramePayload | None, query_fid: str | None = None) -> Identity | None:
    """Body fid first, then the ``fid`` query parameter (for local testing)."""
    if payload is not None and payload.untrusted_data is not None:
        fid = _coerce_identity(payload.untrusted_data.fid)
        if fid is not None:
            return fid
    return _coerce_identity(query_fid)


def resolve_choice(payload: FramePayload | None, query_choice: str | None = None) -> Choice | None:
    if payload is not None and payload.untrusted_data is not None:
        choice = choice_from_button(payload.untrusted_data.button_index)
        if choice is not None:
            return choice
    if query_choice:
        try:
            return Choice(query_choice.strip().lower())
        except ValueError:
            return None
    return None


def _is_day(value: str) -> bool:
    if not DAY_RE.fullmatch(value):
        return False
    try:
        datetime.date.fromisoformat(value)
    except ValueError:
        return False
    return True


def resolve_day(payload: FramePayload | None, query_day: str | None, default: str) -> str:
    """Explicit ``date`` override (body beats query), ignored unless YYYY-MM-DD."""
    for candidate in (payload.date if payload is not None else None, query_day):
        if candidate and _is_day(candidate):
            return candidate
    return default
