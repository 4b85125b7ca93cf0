import asyncio
import logging

from aiogram import Bot
from aiogram.exceptions import (
    AiogramError,
    TelegramAPIError,
    TelegramNetworkError,
    TelegramRetryAfter,
)
from django.conf import settings

logger = logging.getLogger(__name__)

# Errors the Celery task retries; everything else from aiogram is logged and dropped.
RETRYABLE_ERRORS = (TelegramRetryAfter, TelegramNetworkError)


class TelegramNotificationService:
    """
    Posts staff alerts to a Telegram chat.

    One instance per process. A fresh bot session is opened for every
    message because each synchronous send runs in its own event loop.
    """

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if getattr(self, "token", None):
            return
        token = settings.TELEGRAM_BOT_TOKEN
        if not token:
            logger.error("TELEGRAM_BOT_TOKEN is not set!")
            raise ValueError("TELEGRAM_BOT_TOKEN is missing!")
        self.token = token

    async def send_message(self, chat_id: int, text: str) -> bool:
        bot = Bot(token=self.token)
        try:
            await bot.send_message(chat_id=chat_id, text=text)
        except RETRYABLE_ERRORS as e:
            logger.warning(f"Telegram delivery to chat_id {chat_id} will be retried: {e}")
            raise
        except (TelegramAPIError, AiogramError) as e:
            logger.error(f"Telegram rejected message for chat_id {chat_id}: {e}")
            return False
        finally:
            await bot.session.close()

        logger.info(f"Successfully sent message to chat_id {chat_id}")
        return True

    def send_sync(self, chat_id: int, text: str) -> bool:
        """Blocking wrapper for Celery workers."""
        return asyncio.run(self.send_message(chat_id, text))


def get_telegram_service() -> TelegramNotificationService:
    return TelegramNotificationService()
