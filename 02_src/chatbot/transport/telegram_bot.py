"""Telegram transport using python-telegram-bot."""

import asyncio

from telegram import BotCommand, InputMediaPhoto, Update
from telegram.constants import ChatAction as TelegramChatAction
from telegram.constants import ParseMode
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from ..logging_config import get_logger
from ..models import IncomingUpdate, command_descriptions
from ..router import ICommandRouter
from .base import ChatAction

logger = get_logger(__name__)

MEDIA_GROUP_LIMIT = 10

_ACTIONS = {
    ChatAction.TYPING: TelegramChatAction.TYPING,
    ChatAction.UPLOAD_PHOTO: TelegramChatAction.UPLOAD_PHOTO,
}


class TelegramTransport:
    """Polls Telegram and feeds every message to the router."""

    def __init__(self, router: ICommandRouter, token: str):
        self._router = router
        self.application = Application.builder().token(token).build()
        self._bot_name: str | None = None
        self._stop_event = asyncio.Event()
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.application.add_handler(
            MessageHandler(filters.UpdateType.MESSAGE, self.handle_message)
        )
        self.application.add_error_handler(self._handle_error)

    @property
    def bot_name(self) -> str | None:
        return self._bot_name

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        chat = update.effective_chat
        if not message or not chat:
            return

        user = message.from_user
        incoming = IncomingUpdate(
            chat_id=str(chat.id),
            text=message.text,
            sender_name=user.username if user else None,
            timestamp=message.date,
        )
        await self._router.route(incoming, self)

    async def _handle_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.error("Telegram update failed: %s", context.error, exc_info=context.error)

    async def send_action(self, chat_id: str, action: ChatAction) -> None:
        await self.application.bot.send_chat_action(chat_id=int(chat_id), action=_ACTIONS[action])

    async def send_text(self, chat_id: str, text: str) -> None:
        await self.application.bot.send_message(
            chat_id=int(chat_id),
            text=text,
            parse_mode=ParseMode.MARKDOWN_V2,
        )

    async def send_media_group(self, chat_id: str, urls: list[str]) -> None:
        for start in range(0, len(urls), MEDIA_GROUP_LIMIT):
            chunk = urls[start : start + MEDIA_GROUP_LIMIT]
            # Albums need at least two items
            if len(chunk) == 1:
                await self.application.bot.send_photo(chat_id=int(chat_id), photo=chunk[0])
                continue
            await self.application.bot.send_media_group(
                chat_id=int(chat_id),
                media=[InputMediaPhoto(media=url) for url in chunk],
            )

    async def start(self) -> None:
        await self.application.initialize()
        self._bot_name = self.application.bot.username
        await self.application.bot.set_my_commands(
            [BotCommand(name, description) for name, description in command_descriptions().items()]
        )
        await self.application.start()
        await self.application.updater.start_polling()
        logger.info("Telegram transport polling as @%s", self._bot_name)
        try:
            await self._stop_event.wait()
        finally:
            await self.application.updater.stop()
            await self.application.stop()
            await self.application.shutdown()

    async def stop(self) -> None:
        self._stop_event.set()
