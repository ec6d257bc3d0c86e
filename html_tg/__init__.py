"""HTML to Telegram message entities converter.

This module converts Telegram-style HTML (the subset accepted by the Bot API
with parse_mode=HTML) into plain text with message entities, so messages can be
sent without a parse mode.

Example:
    >>> from html_tg import html_to_entities
    >>> text, entities = html_to_entities('<b>Bold</b> and <i>italic</i> text')
    >>> print(text)
    Bold and italic text
    >>> # Returns list of MessageEntity dicts (TypedDict)
    >>> print(entities[0]['type'])
    bold
"""

from html_tg.config import MessageEntity
from html_tg.converter import html_to_entities
from html_tg.errors import HtmlEntitiesError, MalformedMarkup, UnexpectedEndTag
from html_tg.utils import utf16_len

__version__ = '0.1.0'

__all__ = [
    'html_to_entities',
    'MessageEntity',
    'HtmlEntitiesError',
    'MalformedMarkup',
    'UnexpectedEndTag',
    'utf16_len',
]
