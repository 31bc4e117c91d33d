"""Тесты разбора initData и сборки data-check-string."""

from miniapp_auth.utils.init_data import parse_init_data, build_check_string


def test_empty_input_returns_empty_list() -> None:
    """Пустая строка и None дают пустой результат."""
    assert parse_init_data("") == []
    assert parse_init_data(None) == []


def test_non_string_input_returns_empty_list() -> None:
    """Не-строка считается мусором, а не ошибкой."""
    assert parse_init_data(12345) == []
    assert parse_init_data(b"a=1") == []


def test_pairs_sorted_by_key() -> None:
    """Пары на выходе отсортированы по ключу."""
    pairs = parse_init_data("user=u&auth_date=1&query_id=q")
    assert [k for k, _ in pairs] == ["auth_date", "query_id", "user"]


def test_order_on_wire_does_not_matter() -> None:
    """Перестановка полей в сырой строке не меняет результат."""
    assert parse_init_data("b=2&a=1&c=3") == parse_init_data("c=3&a=1&b=2")


def test_malformed_pairs_dropped() -> None:
    """Пары без '=' и с пустым ключом отбрасываются."""
    assert parse_init_data("novalue&=x&a=1&&") == [("a", "1")]
    assert parse_init_data("&&&=") == []


def test_duplicate_key_last_wins() -> None:
    """При повторе ключа остаётся последнее значение."""
    assert parse_init_data("a=1&a=2") == [("a", "2")]


def test_value_keeps_extra_equals_and_blank() -> None:
    """Делим только по первому '='; пустое значение допустимо."""
    assert parse_init_data("a=b=c&d=") == [("a", "b=c"), ("d", "")]


def test_percent_decoding() -> None:
    """Ключ и значение декодируются как UTF-8."""
    pairs = parse_init_data("user=%7B%22id%22%3A1%2C%22first_name%22%3A%22%D0%98%D0%B2%D0%B0%D0%BD%22%7D&k%65y=%20x")
    assert dict(pairs) == {"user": '{"id":1,"first_name":"Иван"}', "key": " x"}


def test_plus_decodes_to_space() -> None:
    """'+' декодируется как пробел (form-encoding)."""
    assert parse_init_data("a=1+2") == [("a", "1 2")]


def test_bad_percent_sequences_do_not_raise() -> None:
    """Битые %-последовательности не роняют парсер."""
    assert parse_init_data("a=%FF&b=%zz&c=%") == [("a", "\ufffd"), ("b", "%zz"), ("c", "%")]


def test_check_string_example() -> None:
    """Эталонная data-check-string."""
    pairs = parse_init_data("user=%7B%22id%22%3A1%7D&auth_date=1700000000&signature=abc&hash=deadbeef")
    assert build_check_string("42", pairs) == '42:WebAppData\nauth_date=1700000000\nuser={"id":1}'


def test_check_string_without_fields() -> None:
    """Без полей остаётся только префикс, с переводом строки и без хвоста."""
    assert build_check_string("42", []) == "42:WebAppData\n"
    assert build_check_string("42", [("hash", "x"), ("signature", "y")]) == "42:WebAppData\n"


def test_check_string_uses_decoded_values() -> None:
    """Значения идут в строку декодированными, без повторного кодирования."""
    pairs = parse_init_data("start_param=a%26b%3Dc%0Ad")
    assert build_check_string("7", pairs) == "7:WebAppData\nstart_param=a&b=c\nd"


def test_check_string_excludes_only_exact_names() -> None:
    """Исключаются только ключи ровно 'hash' и 'signature'."""
    pairs = parse_init_data("hash_x=1&Signature=2&hash=3")
    assert build_check_string("1", pairs) == "1:WebAppData\nSignature=2\nhash_x=1"
