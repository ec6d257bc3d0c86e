import argparse
import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application
from aiohttp import web

from ents_bot.commands import register_commands
from ents_bot.config import CONFIG
from ents_bot.errors import setup_error_handler
from ents_bot.handlers import ents_router

LOGGER = logging.getLogger(__name__)


def create_dispatcher() -> Dispatcher:
    """Create dispatcher with handlers shared by polling and webhook modes."""
    # strict_html is injected into handlers that declare it
    dp = Dispatcher(strict_html=CONFIG.strict_html)
    setup_error_handler(dp)
    dp.include_router(ents_router)
    LOGGER.info('Entity handlers initialized (strict_html=%s)', CONFIG.strict_html)
    dp.startup.register(register_commands)
    return dp


async def on_startup(bot: Bot) -> None:
    LOGGER.info('Registering webhook: %s', CONFIG.webhook_url)
    await bot.set_webhook(CONFIG.webhook_url)


def run_webhook(bot: Bot) -> None:
    dp = create_dispatcher()

    # Webhook-specific setup
    dp.startup.register(on_startup)
    dp.shutdown.register(bot.delete_webhook)
    app = web.Application()
    webhook_requests_handler = SimpleRequestHandler(dispatcher=dp, bot=bot)
    webhook_requests_handler.register(app, path=CONFIG.webhook_path or '/')
    setup_application(app, dp, bot=bot)
    web.run_app(app, host=CONFIG.backend_host, port=CONFIG.backend_port)


async def run_polling(bot: Bot) -> None:
    dp = create_dispatcher()

    # A webhook left from webhook mode blocks getUpdates
    await bot.delete_webhook(drop_pending_updates=False)
    await dp.start_polling(bot)


if __name__ == '__main__':
    logging.basicConfig(level=getattr(logging, CONFIG.logging_level), stream=sys.stdout)

    parser = argparse.ArgumentParser()
    parser.add_argument('-p', '--polling', action='store_true', help='Enable polling mode.')

    args: argparse.Namespace = parser.parse_args()

    if not args.polling and not CONFIG.webhook_host:
        parser.error('WEBHOOK_HOST must be set to run in webhook mode, or use --polling')

    # No default parse_mode: messages are sent with explicit entities
    bot = Bot(CONFIG.bot_token)

    if args.polling:
        asyncio.run(run_polling(bot))
    else:
        run_webhook(bot)
