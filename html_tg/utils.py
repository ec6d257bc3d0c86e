"""UTF-16 helpers for Telegram entity offsets."""

from __future__ import annotations

from array import array
from collections.abc import Sequence
import sys

from html_tg.config import MessageEntity

# array('H') stores code units in native byte order
_UTF16_NATIVE = 'utf-16-le' if sys.byteorder == 'little' else 'utf-16-be'


def utf16_len(text: str) -> int:
    """Calculate length in UTF-16 code units (for Telegram API).

    Telegram API uses UTF-16 for calculating offsets and lengths in MessageEntity.

    Args:
        text: Input text string

    Returns:
        Length in UTF-16 code units

    Examples:
        >>> utf16_len("Hello")
        5
        >>> utf16_len("\N{EARTH GLOBE EUROPE-AFRICA}")
        2
    """
    return len(text.encode('utf-16-le')) // 2


def to_utf16(text: str) -> array[int]:
    """Encode text as UTF-16 code units.

    Raises:
        UnicodeEncodeError: If text contains lone surrogates
    """
    return array('H', text.encode(_UTF16_NATIVE))


def from_utf16(units: Sequence[int]) -> str:
    """Decode UTF-16 code units back to a string."""
    return array('H', units).tobytes().decode(_UTF16_NATIVE)


def entity_text(text: str, entity: MessageEntity) -> str:
    """Return the part of text covered by an entity.

    Offsets are UTF-16 based, so slicing the Python string directly is wrong
    as soon as text contains characters outside the BMP.
    """
    units = to_utf16(text)
    start = entity['offset']
    return from_utf16(units[start : start + entity['length']])
