"""Mapping from HTML tags to Telegram entity types.

https://core.telegram.org/bots/api#html-style

    Entity Type    Tags
    -----------    ----
    bold           <b>, <strong>
    code           <code>
    italic         <em>, <i>
    pre            <pre language="{language}">
    spoiler        <span class="tg-spoiler">, <tg-spoiler>
    strikethrough  <del>, <s>, <strike>
    text_link      <a href="https://...">
    text_mention   <a href="tg://user?id={user}">
    underline      <ins>, <u>
"""

from __future__ import annotations

from collections.abc import Sequence
import re

from html_tg.config import SIMPLE_TAGS, SPOILER_CLASS, USER_MENTION_PREFIX, OpenEntity

_USER_ID_RE = re.compile(r'[+-]?[0-9]+')

# Telegram user ids are signed 64-bit integers
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def get_attr(attrs: Sequence[tuple[str, str]], key: str) -> str:
    """Return the value of the first attribute named key, or '' if absent."""
    for name, value in attrs:
        if name == key:
            return value
    return ''


def has_attr(attrs: Sequence[tuple[str, str]], key: str) -> bool:
    return any(name == key for name, _ in attrs)


def _parse_user_id(raw: str) -> int:
    # Unparsable ids fall back to 0
    if _USER_ID_RE.fullmatch(raw) is None:
        return 0
    # Out of range ids saturate at the bounds
    return max(INT64_MIN, min(int(raw), INT64_MAX))


def classify_tag(name: str, attrs: Sequence[tuple[str, str]] = ()) -> OpenEntity | None:
    """Create an open entity for a tag.

    Args:
        name: Tag name as scanned (matched case-insensitively)
        attrs: Tag attributes as (name, value) pairs

    Returns:
        OpenEntity with offset 0, or None if the tag has no entity mapping
    """
    lowered = name.lower()

    if lowered == 'a':
        href = get_attr(attrs, 'href')
        if href.startswith(USER_MENTION_PREFIX):
            user_id = _parse_user_id(href[len(USER_MENTION_PREFIX) :])
            return OpenEntity(type='text_mention', tag=name, user_id=user_id)
        return OpenEntity(type='text_link', tag=name, url=href)

    if lowered == 'span':
        if get_attr(attrs, 'class') == SPOILER_CLASS:
            return OpenEntity(type='spoiler', tag=name)
        return None

    entity_type = SIMPLE_TAGS.get(lowered)
    if entity_type is None:
        return None

    entity = OpenEntity(type=entity_type, tag=name)
    if entity_type == 'pre' and has_attr(attrs, 'language'):
        entity.language = get_attr(attrs, 'language')
    return entity
