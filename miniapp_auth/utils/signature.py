"""Проверка Ed25519-подписи initData (libsodium через PyNaCl)."""

from __future__ import annotations
import base64, binascii, logging, re, threading
from typing import Optional, Union

import nacl.bindings
from nacl.signing import VerifyKey
from nacl.exceptions import BadSignatureError, CryptoError

from .errors import FailureReason

logger = logging.getLogger(__name__)

PUBLIC_KEY_BYTES = 32
SIGNATURE_BYTES = 64

# Публичные ключи Telegram для third-party проверки
TELEGRAM_PUBLIC_KEY_HEX = "e7bf03a2fa4602af4580703d88dda5bb59f32ed8b02a56c187fe7d34caed242d"
TELEGRAM_TEST_PUBLIC_KEY_HEX = "40055058a4ee38156a06562e52eece92a771bcd8346a8c4615cb7376eddf72ec"

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")

_init_lock = threading.Lock()
_initialized = False

def init_crypto() -> None:
    """Однократная инициализация libsodium. Повторные вызовы ничего не делают."""
    global _initialized
    if _initialized:
        return
    with _init_lock:
        if not _initialized:
            nacl.bindings.sodium_init()
            _initialized = True
            logger.debug("libsodium initialized")

def load_public_key(public_key_hex: str) -> VerifyKey:
    """
    Декодирует hex-ключ (любой регистр) в VerifyKey.

    Raises:
        ValueError: если строка не hex, нечётной длины или не 32 байта
    """
    if not isinstance(public_key_hex, str):
        raise ValueError("public key must be a hex string")
    try:
        raw = binascii.unhexlify(public_key_hex)
    except ValueError:
        raise ValueError("public key is not valid hex")
    if len(raw) != PUBLIC_KEY_BYTES:
        raise ValueError(f"public key must be {PUBLIC_KEY_BYTES} bytes, got {len(raw)}")
    init_crypto()
    return VerifyKey(raw)

def decode_signature(signature_b64: str) -> Optional[bytes]:
    # только base64url: '+' и '/' не принимаем, паддинг необязателен
    if not _B64URL_RE.fullmatch(signature_b64):
        return None
    s = signature_b64.rstrip("=")
    pad = "=" * ((4 - len(s) % 4) % 4)
    try:
        raw = base64.urlsafe_b64decode(s + pad)
    except (binascii.Error, ValueError):
        return None
    if len(raw) != SIGNATURE_BYTES:
        return None
    return raw

def check_signature(verify_key: VerifyKey, message: Union[bytes, str],
                    signature_b64: Optional[str]) -> Optional[FailureReason]:
    """
    Проверяет подпись над сообщением.

    Returns:
        None при успехе, иначе FailureReason. Исключений не бросает.
    """
    if not signature_b64:
        return FailureReason.MISSING_SIGNATURE
    if isinstance(message, str):
        message = message.encode("utf-8", errors="surrogatepass")

    signature = decode_signature(signature_b64)
    if signature is None:
        return FailureReason.MALFORMED_SIGNATURE

    try:
        verify_key.verify(message, signature)
    except (BadSignatureError, CryptoError):
        return FailureReason.BAD_SIGNATURE
    except (TypeError, ValueError):
        return FailureReason.MALFORMED_SIGNATURE
    return None

def verify_signature(public_key_hex: str, message: Union[bytes, str],
                     signature_b64: Optional[str]) -> bool:
    try:
        verify_key = load_public_key(public_key_hex)
    except ValueError as e:
        logger.warning("public key rejected: %s", e)
        return False
    reason = check_signature(verify_key, message, signature_b64)
    if reason is not None:
        logger.debug("signature check failed: %s", reason.value)
    return reason is None
