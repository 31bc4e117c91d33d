"""Разбор initData и сборка data-check-string.

initData приходит из Telegram.WebApp как строка вида ``k1=v1&k2=v2``.
Порядок полей на проводе не гарантирован, поэтому на выходе парсера
пары всегда отсортированы по ключу.
"""

from __future__ import annotations
from typing import Iterable, List, Tuple
from urllib.parse import unquote_plus

# Поля, которые никогда не входят в подписываемое сообщение
EXCLUDED_FIELDS = frozenset({"hash", "signature"})

WEBAPP_DATA_SUFFIX = ":WebAppData\n"

Fields = List[Tuple[str, str]]

def parse_init_data(raw) -> Fields:
    """
    Разбирает сырую initData в отсортированный список пар (ключ, значение).

    Пары без ``=`` или с пустым ключом отбрасываются молча. При повторе
    ключа побеждает последнее вхождение. Никогда не бросает исключений.

    Args:
        raw: Строка initData как есть (может быть None)

    Returns:
        list: Пары (key, value), отсортированные по key
    """
    if not raw or not isinstance(raw, str):
        return []

    items = {}
    for pair in raw.split("&"):
        idx = pair.find("=")
        if idx <= 0:
            continue
        key = unquote_plus(pair[:idx], encoding="utf-8", errors="replace")
        items[key] = unquote_plus(pair[idx + 1:], encoding="utf-8", errors="replace")

    return sorted(items.items())

def build_check_string(identity: str, fields: Iterable[Tuple[str, str]]) -> str:
    """
    Собирает data-check-string для проверки Ed25519.

    Формат: ``<bot_id>:WebAppData\\n`` и далее все поля, кроме hash и
    signature, в виде ``key=value`` через ``\\n``. Значения берутся уже
    декодированными. Поля должны идти в порядке ключей (так их отдаёт
    ``parse_init_data``).
    """
    body = "\n".join(f"{k}={v}" for k, v in fields if k not in EXCLUDED_FIELDS)
    return f"{identity}{WEBAPP_DATA_SUFFIX}{body}"
