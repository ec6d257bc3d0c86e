"""HTML to Telegram plain text with message entities.

The converter keeps a LIFO stack of open entities. A recognized start tag pushes
an entity at the current UTF-16 offset, the matching end tag pops it and fixes
its length. Entities are therefore emitted in the order their end tags appear,
so a nested entity comes before the entity that encloses it.
"""

from __future__ import annotations

from array import array

from html_tg.classifier import classify_tag
from html_tg.config import MessageEntity, OpenEntity
from html_tg.errors import UnexpectedEndTag
from html_tg.tokenizer import EndTagToken, StartTagToken, TextToken, iter_tokens
from html_tg.utils import from_utf16, to_utf16


def html_to_entities(
    markup: str | bytes,
    strict: bool = False,
) -> tuple[str, list[MessageEntity]]:
    """Convert HTML to Telegram plain text and message entities.

    Offsets and lengths of the entities are UTF-16 code units, as the Bot API
    expects. The result can be sent as is, without a parse_mode:

        >>> text, entities = html_to_entities('<b>Hello</b> <i>World!</i>')
        >>> text
        'Hello World!'
        >>> [(e['type'], e['offset'], e['length']) for e in entities]
        [('bold', 0, 5), ('italic', 6, 6)]

    Unknown tags are dropped and their content kept. Entities without content
    are skipped, and entities still open at the end of input are discarded.

    Args:
        markup: HTML string (or UTF-8 bytes)
        strict: Raise on end tags that do not close the innermost open entity
            instead of ignoring them

    Returns:
        (plain_text, entities) tuple, entities ordered by end tag position

    Raises:
        UnexpectedEndTag: In strict mode, for an end tag that matches no open entity
        MalformedMarkup: If the markup cannot be decoded, regardless of strict
    """
    stack: list[OpenEntity] = []
    units: array[int] = array('H')
    entities: list[MessageEntity] = []

    for token in iter_tokens(markup):
        match token:
            case TextToken(data=data):
                units.extend(to_utf16(data))

            case StartTagToken(name=name, attrs=attrs):
                opened = classify_tag(name, attrs)
                if opened is None:
                    continue
                opened.offset = len(units)
                stack.append(opened)

            case EndTagToken(name=name):
                # End tags carry no attributes: </span> never maps to an entity
                if classify_tag(name) is None:
                    continue
                if not stack or stack[-1].tag != name:
                    if strict:
                        raise UnexpectedEndTag(name)
                    # The open entity stays on the stack
                    continue

                last = stack.pop()
                length = len(units) - last.offset
                if length == 0:
                    continue
                entities.append(last.to_entity(length))

    return from_utf16(units), entities
