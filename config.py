"""Конфигурация сервиса проверки initData."""

import os
from dotenv import load_dotenv

from miniapp_auth.utils.signature import TELEGRAM_PUBLIC_KEY_HEX

load_dotenv()

class Config:
    """
    Класс конфигурации приложения.

    Все значения читаются из окружения (.env подхватывается
    через python-dotenv).
    """
    BOT_ID = os.getenv("BOT_ID", "").strip()
    TG_SIGNATURE_PUBLIC_KEY_HEX = os.getenv("TG_SIGNATURE_PUBLIC_KEY_HEX", TELEGRAM_PUBLIC_KEY_HEX).strip()

    # Максимальный возраст auth_date в секундах, 0 - не проверять
    AUTH_TTL = int(os.getenv("AUTH_TTL", "0"))

    DEBUG_AUTH = os.getenv("DEBUG_AUTH", "").lower() in ("1", "true", "yes")

    @classmethod
    def validate(cls):
        if not cls.BOT_ID:
            raise RuntimeError("BOT_ID не задан в .env")
