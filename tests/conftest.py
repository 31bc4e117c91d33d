import base64
from urllib.parse import quote

import pytest
from nacl.signing import SigningKey

from miniapp_auth.utils.init_data import build_check_string

BOT_ID = "42"

@pytest.fixture
def signing_key():
    # детерминированный ключ из нулевого seed
    return SigningKey(bytes(32))

@pytest.fixture
def public_key_hex(signing_key):
    return signing_key.verify_key.encode().hex()

@pytest.fixture
def sign(signing_key):
    """Подписывает data-check-string, возвращает base64url без паддинга."""
    def _sign(fields: dict, bot_id: str = BOT_ID) -> str:
        dcs = build_check_string(bot_id, sorted(fields.items()))
        sig = signing_key.sign(dcs.encode("utf-8")).signature
        return base64.urlsafe_b64encode(sig).decode("ascii").rstrip("=")
    return _sign

@pytest.fixture
def make_init_data(sign):
    """Собирает сырую initData так же, как её кодирует Telegram (%20, не '+')."""
    def _make(fields: dict, signature=None, extra=None, bot_id: str = BOT_ID) -> str:
        pairs = list(fields.items())
        pairs.append(("signature", signature if signature is not None else sign(fields, bot_id)))
        pairs.extend((extra or {}).items())
        return "&".join(f"{quote(k, safe='')}={quote(v, safe='')}" for k, v in pairs)
    return _make
