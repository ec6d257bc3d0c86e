"""Global error handler for unrecoverable exceptions.

Ensures users always get feedback when something goes wrong,
and errors are properly logged for debugging.
"""

import contextlib
import html
import logging
import traceback

from aiogram import Bot, Dispatcher
from aiogram.exceptions import TelegramAPIError
from aiogram.types import CallbackQuery, ErrorEvent, Message

from ents_bot.config import CONFIG
from ents_bot.utils import to_aiogram_entities
from html_tg import html_to_entities

LOGGER = logging.getLogger(__name__)

# Keep admin reports well below the 4096 characters message limit
MAX_TRACEBACK_LENGTH = 3000


def format_error_report(user_info: str, error: BaseException) -> str:
    """Build the HTML report sent to admins."""
    tb = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
    if len(tb) > MAX_TRACEBACK_LENGTH:
        tb = tb[:1500] + '\n...\n' + tb[-1000:]

    return (
        '🚨 <b>Bot Error</b>\n\n'
        f'<b>User:</b> {html.escape(user_info)}\n'
        f'<b>Type:</b> {html.escape(type(error).__name__)}\n'
        f'<b>Error:</b> {html.escape(str(error)[:300])}\n\n'
        f'<pre language="python">{html.escape(tb)}</pre>'
    )


async def global_error_handler(event: ErrorEvent, bot: Bot) -> bool:
    """Handle all unhandled exceptions.

    Logs error with full traceback and tries to notify the user.
    """
    error = event.exception
    update = event.update
    error_class = type(error).__name__

    LOGGER.exception('Unhandled %s: %s', error_class, error, exc_info=error)

    trigger_event = None
    if update:
        trigger_event = update.message or update.callback_query or update.edited_message

    if trigger_event:
        try:
            if isinstance(trigger_event, Message):
                msg = f'❌ An {error_class} occurred. Please try again later.'
                await trigger_event.answer(msg, parse_mode=None)
            elif isinstance(trigger_event, CallbackQuery):
                await trigger_event.answer(f'❌ {error_class} occurred', show_alert=True)
        except TelegramAPIError as e:
            LOGGER.warning('Failed to notify user about error: %s', e)

    if CONFIG.notify_admins_on_error and CONFIG.admin_ids:
        user_info = 'Unknown'
        from_user = getattr(trigger_event, 'from_user', None)
        if from_user:
            user_info = f'{from_user.id}'

        text, entities = html_to_entities(format_error_report(user_info, error))
        for admin_id in CONFIG.admin_ids:
            with contextlib.suppress(TelegramAPIError):
                await bot.send_message(
                    admin_id,
                    text,
                    entities=to_aiogram_entities(entities),
                    parse_mode=None,
                )

    return True


def setup_error_handler(dp: Dispatcher) -> None:
    """Register global error handler."""
    dp.errors.register(global_error_handler)
