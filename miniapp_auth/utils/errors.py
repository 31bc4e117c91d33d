import enum

class TgAuthError(Exception): pass

class ConfigurationError(TgAuthError):
    """Неверный bot_id или публичный ключ при создании валидатора."""

class FailureReason(str, enum.Enum):
    """Внутренняя причина отказа. Наружу уходит только False."""
    MISSING_SIGNATURE = "signature missing"
    MALFORMED_SIGNATURE = "invalid signature encoding"
    BAD_SIGNATURE = "invalid signature"
    EXPIRED = "auth expired"
