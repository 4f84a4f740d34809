"""Telegram pairing channel using python-telegram-bot."""

from loguru import logger
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from stockerbot.channels.base import PairingChannel
from stockerbot.pairing.errors import ChannelShutdownError
from stockerbot.pairing.types import Sender, StartCommand, TextMessage

START_HINT = "👋 Pairing mode is on. Please send the 4-digit code shown in your terminal."


class TelegramPairingChannel(PairingChannel):
    """
    Telegram channel using long polling.

    Updates are processed one at a time (no concurrent updates), so pairing
    handlers never overlap. Messages sent while the bot was offline are
    dropped on startup.
    """

    name = "telegram"

    def __init__(self, token: str, application: Application | None = None):
        super().__init__()
        self._token = token
        self._app: Application | None = application

    async def start(self) -> None:
        """Start the Telegram bot with long polling."""
        if self._closed:
            raise RuntimeError("Channel already shut down")
        if not self._token:
            raise ValueError("Telegram bot token not configured")

        if self._app is None:
            self._app = (
                Application.builder()
                .token(self._token)
                .concurrent_updates(False)
                .build()
            )

        self._app.add_handler(CommandHandler("start", self._on_start))
        self._app.add_handler(
            MessageHandler(filters.TEXT & ~filters.COMMAND, self._on_text)
        )

        logger.info("Starting Telegram pairing listener (polling mode)...")

        await self._app.initialize()
        await self._app.start()
        self._running = True

        await self._app.updater.start_polling(
            allowed_updates=["message"],
            drop_pending_updates=True  # Ignore codes sent before this session
        )

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a plain text message."""
        if not self._app or self._closed:
            logger.warning("Telegram pairing channel not running")
            return

        try:
            await self._app.bot.send_message(chat_id=chat_id, text=text)
        except TelegramError as e:
            logger.error(f"Error sending Telegram message to {chat_id}: {e}")

    async def _teardown(self) -> None:
        app = self._app
        self._app = None
        if not app:
            return

        logger.info("Stopping Telegram pairing listener...")
        try:
            if app.updater and app.updater.running:
                await app.updater.stop()
            if app.running:
                await app.stop()
            await app.shutdown()
        except Exception as e:
            raise ChannelShutdownError(f"Telegram shutdown failed: {e}") from e

    @staticmethod
    def _sender(update: Update) -> Sender:
        user = update.effective_user
        return Sender(id=user.id, username=user.username, first_name=user.first_name)

    async def _on_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start, with or without a deep-link payload."""
        if not update.message or not update.effective_user:
            return

        payload = context.args[0] if context.args else None
        if payload is None:
            await update.message.reply_text(START_HINT)

        await self._dispatch(StartCommand(
            sender=self._sender(update),
            chat_id=update.message.chat_id,
            payload=payload,
        ))

    async def _on_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle plain text messages."""
        if not update.message or not update.effective_user or update.message.text is None:
            return

        await self._dispatch(TextMessage(
            sender=self._sender(update),
            chat_id=update.message.chat_id,
            text=update.message.text,
        ))
