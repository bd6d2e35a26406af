from datetime import datetime

import pytest

from laundry import rate_limiter
from laundry.security_utils import generate_numeric_code, hash_password, verify_password
from laundry.shared.validators import contains_pattern, is_valid_phone, parse_timestamp, validate_email


@pytest.mark.parametrize("phone", ["9876543210", "0000000000"])
def test_valid_phone(phone):
    assert is_valid_phone(phone)


@pytest.mark.parametrize("phone", ["", "987654321", "98765432100", "98765-43210", "+919876543", None, 9876543210])
def test_invalid_phone(phone):
    assert not is_valid_phone(phone)


def test_parse_timestamp_accepts_epoch_millis_and_iso():
    assert parse_timestamp(1700000000000) == datetime(2023, 11, 14, 22, 13, 20)
    assert parse_timestamp("1700000000000") == datetime(2023, 11, 14, 22, 13, 20)
    assert parse_timestamp("2024-01-05T15:30:00+05:30") == datetime(2024, 1, 5, 10, 0)
    assert parse_timestamp("2024-01-05") == datetime(2024, 1, 5)


@pytest.mark.parametrize("value", [None, True, "yesterday", [], {}, 1e300, "9" * 400, 10 ** 30, float("nan")])
def test_parse_timestamp_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_timestamp(value)


def test_validate_email_normalizes():
    assert validate_email("  Someone@Example.COM ") == "someone@example.com"
    assert validate_email(None) is None

    with pytest.raises(ValueError):
        validate_email("someone@")


def test_numeric_code_is_six_digits():
    codes = {generate_numeric_code() for _ in range(200)}

    assert all(len(code) == 6 and code.isdigit() and code[0] != "0" for code in codes)
    assert len(codes) > 1


def test_password_hashing():
    hashed = hash_password("secret")

    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("other", hashed)


def test_rate_limit_counts_in_memory_without_redis():
    rate_limiter.memory_cache.clear()
    key = "test_limit:127.0.0.1"

    results = [rate_limiter.check_rate_limit(key, 3, 60, None)[0] for _ in range(4)]

    assert results == [True, True, True, False]
    rate_limiter.memory_cache.clear()


def test_contains_pattern_escapes_wildcards():
    assert contains_pattern("abc") == "%abc%"
    assert contains_pattern("50%_off\\") == "%50\\%\\_off\\\\%"
