"""Keyset pagination over integer ids, newest first."""

import base64
import binascii
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

_CURSOR_PREFIX = "id:"


class PaginatedResponse(BaseModel, Generic[T]):
    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque; send it back as `cursor` for the next page. Absent on the last page.",
    )
    has_more: bool = False


def encode_cursor(last_id: int) -> str:
    """Cursor pointing just past ``last_id``."""
    return base64.urlsafe_b64encode(f"{_CURSOR_PREFIX}{last_id}".encode()).decode()


def decode_cursor(cursor: str) -> int:
    """Id the next page starts below.

    Raises:
        ValueError: Not a cursor produced by encode_cursor.
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError("Invalid cursor") from e
    if not raw.startswith(_CURSOR_PREFIX):
        raise ValueError("Invalid cursor")
    return int(raw.removeprefix(_CURSOR_PREFIX))
