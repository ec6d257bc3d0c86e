"""Send a message with entities converted from HTML.

The HTML is converted locally by html_tg and sent without a parse mode,
as plain text with a list of message entities.

Usage:
    uv run python -m devscripts.send_ents --chat-id -1001234567890
    uv run python -m devscripts.send_ents --chat-id 123 --html '<b>Hi</b> <i>there</i>'
    uv run python -m devscripts.send_ents --chat-id 123 --html '<b><i>x</b></i>' --strict
"""

import argparse
import asyncio
import sys

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError

from devscripts.bootstrap import env, print_config
from ents_bot.handlers import format_entities_listing
from ents_bot.utils import to_aiogram_entities
from html_tg import HtmlEntitiesError, MessageEntity, html_to_entities

DEFAULT_HTML = '<b>Hello</b> <i>World!</i>'


async def send(chat_id: int, text: str, entities: list[MessageEntity]) -> None:
    bot = Bot(env('BOT_TOKEN'))
    try:
        me = await bot.get_me()
        print(f'Bot: @{me.username}')
        sent = await bot.send_message(
            chat_id, text, entities=to_aiogram_entities(entities), parse_mode=None
        )
        print(f'Sent message {sent.message_id}')
    finally:
        await bot.session.close()


def main() -> None:
    parser = argparse.ArgumentParser(
        description='Send a message with entities converted from HTML',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--chat-id', type=int, required=True, help='Target chat ID')
    parser.add_argument('--html', default=DEFAULT_HTML, help='HTML markup to send')
    parser.add_argument('--strict', action='store_true', help='Fail on mismatched tags')
    parser.add_argument(
        '-n', '--dry-run', action='store_true', help='Print the conversion, do not send'
    )
    args = parser.parse_args()

    print('Send Message with Entities')
    print('-' * 26)
    print_config(chat_id=args.chat_id, strict=args.strict)

    try:
        text, entities = html_to_entities(args.html, strict=args.strict)
    except HtmlEntitiesError as e:
        print(f'Error converting message: {e}')
        sys.exit(1)

    print(f'\nText: {text!r}')
    print(format_entities_listing(text, entities))

    if args.dry_run:
        return

    try:
        asyncio.run(send(args.chat_id, text, entities))
    except TelegramAPIError as e:
        print(f'Error sending message: {e}')
        sys.exit(1)


if __name__ == '__main__':
    main()
