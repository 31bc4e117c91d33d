import json, logging, time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import TgAuthError, ConfigurationError, FailureReason
from .init_data import parse_init_data, build_check_string, EXCLUDED_FIELDS
from .signature import load_public_key, check_signature

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    fields: Dict[str, str] = field(default_factory=dict)
    reason: Optional[FailureReason] = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        """Поле ``user`` как dict, либо None если его нет или это не JSON-объект."""
        raw = self.fields.get("user")
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except ValueError:
            return None
        return user if isinstance(user, dict) else None

class TgAuth:
    """
    Проверка initData Telegram Mini App по Ed25519-подписи.

    bot_id и публичный ключ задаются один раз при создании и дальше не
    меняются, поэтому один экземпляр можно безопасно делить между потоками.

    Args:
        bot_id: ID бота (часть токена до двоеточия)
        public_key_hex: Ed25519-ключ Telegram в hex
        max_age: Максимальный возраст auth_date в секундах (None - не проверять)
    """

    def __init__(self, bot_id: str, public_key_hex: str, max_age: Optional[int] = None):
        if not isinstance(bot_id, str) or not bot_id.strip() or "\n" in bot_id:
            raise ConfigurationError("bot_id must be a non-empty single-line string")
        if max_age is not None and max_age < 0:
            raise ConfigurationError("max_age must be >= 0")
        try:
            self._verify_key = load_public_key(public_key_hex)
        except ValueError as e:
            raise ConfigurationError(f"invalid public key: {e}")
        self._bot_id = bot_id
        self._max_age = max_age
        logger.debug("TgAuth ready: BOT_ID(last4)=%s PUBKEY_HEX(prefix8)=%s",
                     bot_id[-4:], public_key_hex[:8].lower())

    @property
    def bot_id(self) -> str:
        return self._bot_id

    @property
    def max_age(self) -> Optional[int]:
        return self._max_age

    def check(self, init_data_raw, now: Optional[float] = None) -> ValidationResult:
        """Полная проверка: разбор, data-check-string, подпись, (опционально) срок."""
        pairs = parse_init_data(init_data_raw)
        items = dict(pairs)
        logger.debug("initData fields: %s | signature len: %d",
                     [k for k, _ in pairs], len(items.get("signature") or ""))

        dcs = build_check_string(self._bot_id, pairs)
        reason = check_signature(self._verify_key, dcs, items.get("signature"))
        if reason is None and self._max_age:
            reason = self._check_freshness(items.get("auth_date"), now)

        if reason is not None:
            logger.info("initData rejected: %s", reason.value)
            return ValidationResult(ok=False, reason=reason)

        data = {k: v for k, v in pairs if k not in EXCLUDED_FIELDS}
        return ValidationResult(ok=True, fields=data)

    def validate(self, init_data_raw) -> bool:
        return self.check(init_data_raw).ok

    def _check_freshness(self, auth_date_raw: Optional[str], now: Optional[float]) -> Optional[FailureReason]:
        # только ASCII-цифры
        if auth_date_raw and auth_date_raw.isascii() and auth_date_raw.isdigit():
            auth_date = int(auth_date_raw)
        else:
            auth_date = 0
        if now is None:
            now = time.time()
        if auth_date <= 0 or int(now) - auth_date > self._max_age:
            return FailureReason.EXPIRED
        return None

__all__ = ["TgAuth", "ValidationResult", "TgAuthError", "ConfigurationError", "FailureReason"]
