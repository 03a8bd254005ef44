"""Byte-order-mark detection for PGN input."""

from __future__ import annotations

from typing import Final, TypeVar

UTF8_BOM: Final = "\ufeff"
UTF8_BOM_BYTES: Final = b"\xef\xbb\xbf"

_Buffer = TypeVar("_Buffer", str, bytes)


def has_utf8_bom(data: str | bytes) -> bool:
    """True when *data* starts with a UTF-8 byte-order mark."""
    if isinstance(data, bytes):
        return data.startswith(UTF8_BOM_BYTES)
    return data.startswith(UTF8_BOM)


def strip_utf8_bom(data: _Buffer) -> tuple[_Buffer, int]:
    """Remove one leading BOM; returns the rest and how many units were consumed."""
    if not has_utf8_bom(data):
        return data, 0
    consumed = len(UTF8_BOM_BYTES) if isinstance(data, bytes) else len(UTF8_BOM)
    return data[consumed:], consumed
