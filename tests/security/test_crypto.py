import base64
from datetime import datetime, timezone

import pytest

from src.attendance_dashboard.attendance_dashboard.core.exceptions import ConfigurationError
from src.attendance_dashboard.attendance_dashboard.security.crypto import (
    AUTH_TAG_LENGTH,
    IV_LENGTH,
    FieldCipher,
    build_field_codecs,
)


@pytest.fixture
def cipher():
    return FieldCipher("unit-test-key")


def test_text_round_trip(cipher):
    sealed = cipher.encrypt("PRESENT")

    assert sealed != "PRESENT"
    assert cipher.decrypt(sealed) == "PRESENT"


def test_stored_layout_is_iv_tag_then_data(cipher):
    raw = base64.b64decode(cipher.encrypt("Budi Santoso"))

    assert len(raw) == IV_LENGTH + AUTH_TAG_LENGTH + len("Budi Santoso".encode("utf-8"))


def test_same_value_encrypts_differently(cipher):
    assert cipher.encrypt("x") != cipher.encrypt("x")


@pytest.mark.parametrize("value", [None, ""])
def test_empty_values_pass_through_as_none(cipher, value):
    assert cipher.encrypt(value) is None
    assert cipher.decrypt(value) is None


def test_tampered_ciphertext_decrypts_to_none(cipher):
    raw = bytearray(base64.b64decode(cipher.encrypt("SICK")))
    raw[-1] ^= 0x01

    assert cipher.decrypt(base64.b64encode(bytes(raw)).decode("ascii")) is None


def test_short_or_garbage_input_decrypts_to_none(cipher):
    assert cipher.decrypt(base64.b64encode(b"too short").decode("ascii")) is None
    assert cipher.decrypt("not base64 at all!") is None


def test_other_key_cannot_read(cipher):
    sealed = cipher.encrypt("secret")

    assert FieldCipher("another-key").decrypt(sealed) is None


def test_date_round_trip(cipher):
    moment = datetime(2026, 1, 5, 8, 5)

    assert cipher.decrypt_date(cipher.encrypt_date(moment)) == moment
    assert cipher.encrypt_date(None) is None


def test_codecs_share_one_key():
    codecs = build_field_codecs("k")
    moment = datetime(2026, 2, 1, 17, 15)

    assert codecs.text.decode(codecs.text.encode("Ops")) == "Ops"
    assert codecs.moment.decode(codecs.moment.encode(moment)) == moment


@pytest.mark.parametrize("key", [None, ""])
def test_missing_key_is_a_configuration_error(key):
    with pytest.raises(ConfigurationError):
        FieldCipher(key)


def test_utc_timestamp_with_z_suffix_reads_as_local_time(cipher):
    sealed = cipher.encrypt("2026-01-05T01:05:00.000Z")
    expected = datetime(2026, 1, 5, 1, 5, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)

    assert cipher.decrypt_date(sealed) == expected
