"""Data models for HTML to Telegram entity conversion."""

from dataclasses import dataclass
from typing import Final, Literal, NotRequired, TypedDict

EntityType = Literal[
    'bold',
    'italic',
    'underline',
    'strikethrough',
    'spoiler',
    'code',
    'pre',
    'text_link',
    'text_mention',
]

# Tag name -> entity type for tags that need no attribute inspection.
# <a> and <span> depend on attributes and are handled by the classifier.
SIMPLE_TAGS: Final[dict[str, EntityType]] = {
    'b': 'bold',
    'strong': 'bold',
    'i': 'italic',
    'em': 'italic',
    'u': 'underline',
    'ins': 'underline',
    's': 'strikethrough',
    'strike': 'strikethrough',
    'del': 'strikethrough',
    'code': 'code',
    'pre': 'pre',
    'tg-spoiler': 'spoiler',
}

SPOILER_CLASS: Final = 'tg-spoiler'
USER_MENTION_PREFIX: Final = 'tg://user?id='


class MessageEntity(TypedDict):
    """Telegram MessageEntity structure.

    Follows the Bot API: https://core.telegram.org/bots/api#messageentity

    This is a TypedDict so the result can be attached to a sendMessage
    request as is (the API expects plain dicts).

    Required fields:
        type: Type of entity (bold, italic, code, pre, text_link, etc.)
        offset: Offset in UTF-16 code units to the start of the entity
        length: Length in UTF-16 code units
        tag: HTML tag the entity was created from (lowercase)

    Optional fields:
        url: For text_link only, URL that will be opened after user taps on the text
        user_id: For text_mention only, ID of the mentioned user
        language: For pre only, the programming language of the entity text
    """

    type: EntityType
    offset: int
    length: int
    tag: str
    url: NotRequired[str]
    user_id: NotRequired[int]
    language: NotRequired[str]


@dataclass
class OpenEntity:
    """Entity whose start tag was scanned but whose end tag was not yet seen.

    Attributes:
        type: Entity type the tag maps to
        tag: Tag name, used to match the end tag
        offset: Start offset in UTF-16 code units (set when pushed on the stack)
        url: text_link target
        user_id: text_mention user
        language: pre language, None when the attribute is absent
    """

    type: EntityType
    tag: str
    offset: int = 0
    url: str | None = None
    user_id: int | None = None
    language: str | None = None

    def to_entity(self, length: int) -> MessageEntity:
        """Close the entity with the given length in UTF-16 code units."""
        entity: MessageEntity = {
            'type': self.type,
            'offset': self.offset,
            'length': length,
            'tag': self.tag,
        }
        if self.url is not None:
            entity['url'] = self.url
        if self.user_id is not None:
            entity['user_id'] = self.user_id
        if self.language is not None:
            entity['language'] = self.language
        return entity
