from collections.abc import Sequence
from typing import overload

from aiogram.types import MessageEntity as AiogramEntity, User

from html_tg.config import MessageEntity as HtmlTgEntity


def _to_aiogram_entity(entity: HtmlTgEntity) -> AiogramEntity:
    user = None
    if 'user_id' in entity:
        # Bot API only reads the id of a text_mention user
        user = User(id=entity['user_id'], is_bot=False, first_name='')
    return AiogramEntity(
        type=entity['type'],
        offset=entity['offset'],
        length=entity['length'],
        url=entity.get('url'),
        user=user,
        language=entity.get('language'),
    )


@overload
def to_aiogram_entities(entities: HtmlTgEntity) -> AiogramEntity: ...


@overload
def to_aiogram_entities(entities: Sequence[HtmlTgEntity]) -> list[AiogramEntity]: ...


def to_aiogram_entities(
    entities: HtmlTgEntity | Sequence[HtmlTgEntity],
) -> AiogramEntity | list[AiogramEntity]:
    """Convert html_tg MessageEntity to aiogram MessageEntity format.

    Supports both single entity and list of entities. The diagnostic 'tag'
    key is not part of the Bot API and is dropped.

    Args:
        entities: Single MessageEntity dict or list of MessageEntity dicts from html_tg

    Returns:
        Single aiogram MessageEntity or list of aiogram MessageEntity instances

    Examples:
        >>> from html_tg import html_to_entities
        >>>
        >>> text, entities = html_to_entities('<b>Bold</b>')
        >>> await message.answer(text, entities=to_aiogram_entities(entities))
    """
    # Check if single entity (has 'type' key)
    if isinstance(entities, dict) and 'type' in entities:
        return _to_aiogram_entity(entities)

    return [_to_aiogram_entity(e) for e in entities]
