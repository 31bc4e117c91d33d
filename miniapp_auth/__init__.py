"""Сервис проверки initData Telegram Mini App.

Содержит фабрику приложения Flask. Само ядро проверки лежит
в ``miniapp_auth.utils`` и от Flask не зависит.
"""

import logging
from flask import Flask
from miniapp_auth.utils.tg_auth import TgAuth

def create_app(test_config=None):
    """
    Фабрика приложения Flask.

    Создаёт один TgAuth из конфигурации (ошибка ключа или bot_id
    роняет запуск) и регистрирует маршруты.

    Args:
        test_config: Словарь, перекрывающий значения Config (для тестов)

    Returns:
        Flask: Настроенное приложение Flask
    """
    from config import Config

    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config is not None:
        app.config.update(test_config)
    elif not app.config.get("BOT_ID"):
        Config.validate()

    logging.basicConfig(level=logging.INFO)
    if app.config.get("DEBUG_AUTH"):
        logging.getLogger("miniapp_auth").setLevel(logging.DEBUG)

    app.extensions["tg_auth"] = TgAuth(
        bot_id=app.config.get("BOT_ID", ""),
        public_key_hex=app.config.get("TG_SIGNATURE_PUBLIC_KEY_HEX", ""),
        max_age=app.config.get("AUTH_TTL") or None,
    )

    @app.after_request
    def security_headers(resp):
        resp.headers["X-Frame-Options"] = "SAMEORIGIN"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return resp

    from .routes.auth import bp_auth
    app.register_blueprint(bp_auth, url_prefix="/auth")

    return app
