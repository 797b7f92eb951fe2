"""
main.py
-------
Entry point for the DashBot Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Build the command/callback registries and routers.
    - Configure and start the Telegram application.
"""

import sys

from telegram import BotCommand
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from adapters.telegram_adapter import TelegramPlatformAdapter
from config import BOT_PLATFORM, TELEGRAM_BOT_TOKEN
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from dispatch.callback_manager import CallbackManager
from dispatch.callback_registry import CallbackRegistry
from dispatch.command_registry import CommandRegistry
from dispatch.command_router import CommandRouter
from handlers import CALLBACK_MODULES, COMMAND_MODULES
from handlers.race_handler import list_races_by_distance_command
from middleware.message_interceptor import MessageInterceptor
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_PLATFORMS = ("telegram",)

COMMAND_DESCRIPTIONS = {
    "start": "🚀 Iniciar o bot",
    "ajuda": "📖 Guia completo de comandos",
    "help": "📖 Guia completo de comandos",
    "corridas": "🏃 Corridas disponíveis",
    "proxima_corrida": "⏰ Próxima corrida",
    "buscar_corridas": "🔎 Buscar por faixa de distância",
    "favoritos": "⭐ Suas corridas favoritas",
    "config": "⚙️ Configurar preferências",
}


def build_router() -> tuple[CommandRouter, CallbackManager]:
    """Wire registries, dispatchers and the history interceptor."""
    callback_manager = CallbackManager()
    callback_registry = CallbackRegistry(callback_manager, CALLBACK_MODULES)
    callback_registry.auto_register_handlers()

    command_router = CommandRouter(
        CommandRegistry(COMMAND_MODULES),
        list_races_by_distance_command,
        interceptor=MessageInterceptor(),
    )
    return command_router, callback_manager


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error(f"Unhandled error while processing update {update}: {context.error}", exc_info=context.error)


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Validate configuration ─────────────────────────
    if not TELEGRAM_BOT_TOKEN:
        logger.error("TELEGRAM_BOT_TOKEN is not set. Add it to your .env file.")
        sys.exit(1)
    if BOT_PLATFORM not in SUPPORTED_PLATFORMS:
        logger.error(f"Unsupported BOT_PLATFORM '{BOT_PLATFORM}'. Supported: {', '.join(SUPPORTED_PLATFORMS)}")
        sys.exit(1)

    # ── 2. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 3. Dispatch core ──────────────────────────────────
    command_router, callback_manager = build_router()

    async def set_bot_commands(application: Application) -> None:
        """Publish the registered commands as the Telegram menu."""
        names = await command_router.get_available_commands()
        await application.bot.set_my_commands(
            [BotCommand(name, COMMAND_DESCRIPTIONS.get(name, name)) for name in names]
        )
        logger.info(f"Bot commands menu registered: {', '.join(names)}")

    # ── 4. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()
    adapter = TelegramPlatformAdapter(app.bot, command_router, callback_manager)

    app.add_handler(MessageHandler(
        filters.TEXT & filters.COMMAND,
        authorized_only(rate_limited(adapter.on_message)),
    ))
    app.add_handler(CallbackQueryHandler(authorized_only(rate_limited(adapter.on_callback_query))))
    app.add_error_handler(on_error)

    # ── 5. Start polling ──────────────────────────────────
    logger.info("🚀 DashBot is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message", "callback_query"])

    # ── 6. Cleanup on shutdown ────────────────────────────
    close_pool()
    logger.info("DashBot stopped.")


if __name__ == "__main__":
    main()
