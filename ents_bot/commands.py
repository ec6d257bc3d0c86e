"""Bot command menu registration."""

import logging
from typing import Final

from aiogram import Bot
from aiogram.types import BotCommand, BotCommandScopeDefault

LOGGER = logging.getLogger(__name__)

BOT_COMMANDS: Final = (
    BotCommand(command='help', description='Supported tags and commands'),
    BotCommand(command='html', description='Convert HTML, ignoring mismatched tags'),
    BotCommand(command='strict', description='Convert HTML, failing on mismatched tags'),
    BotCommand(command='entities', description='List entities found in HTML'),
)


async def register_commands(bot: Bot) -> None:
    """Register the command menu for all chats."""
    await bot.set_my_commands(commands=list(BOT_COMMANDS), scope=BotCommandScopeDefault())
    LOGGER.info('Registered %d commands', len(BOT_COMMANDS))
