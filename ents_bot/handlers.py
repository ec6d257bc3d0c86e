"""
Handlers converting HTML messages to plain text with entities
"""

import html
import logging
from typing import Final

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import Message

from ents_bot.utils import to_aiogram_entities
from html_tg import HtmlEntitiesError, html_to_entities
from html_tg.config import MessageEntity
from html_tg.utils import entity_text

LOGGER = logging.getLogger(__name__)

WELCOME_HTML: Final = (
    'Hello, {name}!\n\n'
    'Send me a message with <i>HTML</i> tags and I will send it back formatted '
    'with message entities. See /help for the supported tags.'
)

HELP_HTML: Final = (
    '<b>Supported tags</b>\n'
    '<code>&lt;b&gt;</code>, <code>&lt;strong&gt;</code> - <b>bold</b>\n'
    '<code>&lt;i&gt;</code>, <code>&lt;em&gt;</code> - <i>italic</i>\n'
    '<code>&lt;u&gt;</code>, <code>&lt;ins&gt;</code> - <u>underline</u>\n'
    '<code>&lt;s&gt;</code>, <code>&lt;strike&gt;</code>, <code>&lt;del&gt;</code>'
    ' - <s>strikethrough</s>\n'
    '<code>&lt;tg-spoiler&gt;</code>'
    ' - <tg-spoiler>spoiler</tg-spoiler>\n'
    '<code>&lt;code&gt;</code> - <code>inline code</code>\n'
    '<code>&lt;pre language="python"&gt;</code> - code block\n'
    '<code>&lt;a href="https://..."&gt;</code> - link\n'
    '<code>&lt;a href="tg://user?id=123"&gt;</code> - user mention\n\n'
    '<b>Commands</b>\n'
    '/html <i>markup</i> - convert ignoring mismatched tags\n'
    '/strict <i>markup</i> - convert, failing on mismatched tags\n'
    '/entities <i>markup</i> - list the entities found in markup'
)

ents_router = Router(name=__name__)


def format_entities_listing(text: str, entities: list[MessageEntity]) -> str:
    """Describe entities one per line, for debugging markup.

    Args:
        text: Plain text the entities refer to
        entities: Entities in emission order

    Returns:
        Human readable listing
    """
    if not entities:
        return 'No entities found.'

    lines = []
    for number, entity in enumerate(entities, start=1):
        extra = ''
        if 'url' in entity:
            extra = f' url={entity["url"]}'
        elif 'user_id' in entity:
            extra = f' user_id={entity["user_id"]}'
        elif 'language' in entity:
            extra = f' language={entity["language"]}'
        lines.append(
            f'{number}. {entity["type"]} <{entity["tag"]}> '
            f'offset={entity["offset"]} length={entity["length"]}{extra}: '
            f'{entity_text(text, entity)!r}'
        )
    return '\n'.join(lines)


async def send_html_message(message: Message, markup: str, strict: bool = False) -> None:
    """Convert HTML markup and reply with plain text and entities.

    Conversion errors and messages rejected by Telegram are reported
    to the user instead of being raised.

    Args:
        message: Telegram message to reply to
        markup: HTML markup to convert
        strict: Fail on mismatched end tags
    """
    try:
        text, entities = html_to_entities(markup, strict=strict)
    except HtmlEntitiesError as e:
        LOGGER.warning('Failed to convert HTML: %s', e)
        await message.answer(f'❌ {e}', parse_mode=None)
        return

    # Telegram rejects messages without visible text
    if not text.strip():
        await message.answer('Nothing to send: the markup has no text.', parse_mode=None)
        return

    try:
        await message.answer(text, entities=to_aiogram_entities(entities), parse_mode=None)
    except TelegramBadRequest as e:
        LOGGER.warning('Telegram rejected converted message: %s', e.message)
        LOGGER.debug('Markup: %s', markup)
        await message.answer(f'❌ Telegram rejected the message: {e.message}', parse_mode=None)


@ents_router.message(CommandStart())
async def start_handler(message: Message) -> None:
    """Display welcome information."""
    if message.from_user:
        user = message.from_user
        name = f'<a href="tg://user?id={user.id}">{html.escape(user.first_name)}</a>'
    else:
        name = 'there'
    await send_html_message(message, WELCOME_HTML.format(name=name), strict=True)


@ents_router.message(Command('help'))
async def help_handler(message: Message) -> None:
    """Display supported tags and commands."""
    await send_html_message(message, HELP_HTML, strict=True)


@ents_router.message(Command('html'))
async def html_handler(message: Message, command: CommandObject) -> None:
    """Convert markup, ignoring mismatched end tags."""
    if not command.args:
        await message.answer('Usage: /html <markup>', parse_mode=None)
        return
    await send_html_message(message, command.args, strict=False)


@ents_router.message(Command('strict'))
async def strict_handler(message: Message, command: CommandObject) -> None:
    """Convert markup, failing on the first mismatched end tag."""
    if not command.args:
        await message.answer('Usage: /strict <markup>', parse_mode=None)
        return
    await send_html_message(message, command.args, strict=True)


@ents_router.message(Command('entities'))
async def entities_handler(message: Message, command: CommandObject, strict_html: bool) -> None:
    """List entities found in markup without formatting the reply."""
    if not command.args:
        await message.answer('Usage: /entities <markup>', parse_mode=None)
        return

    try:
        text, entities = html_to_entities(command.args, strict=strict_html)
    except HtmlEntitiesError as e:
        await message.answer(f'❌ {e}', parse_mode=None)
        return

    LOGGER.debug('Found %d entities in %d characters', len(entities), len(text))
    await message.answer(format_entities_listing(text, entities), parse_mode=None)


@ents_router.message(F.text)
async def text_handler(message: Message, strict_html: bool) -> None:
    """Convert any other text message with the configured strictness."""
    await send_html_message(message, message.text or '', strict=strict_html)
