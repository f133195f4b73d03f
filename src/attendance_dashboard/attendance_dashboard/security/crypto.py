"""Encryption boundary for sensitive columns.

Values are sealed with AES-256-GCM and stored as base64 of
``iv (16 bytes) + auth tag (16 bytes) + ciphertext``. The key is the SHA-256
digest of the ``AUTH_KEY`` setting, so existing rows stay readable as long as
that setting does not change.

Repositories receive :class:`FieldCodecs` and never see the key; services only
deal with plain values.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, TypeVar

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

IV_LENGTH = 16
AUTH_TAG_LENGTH = 16
MIN_ENCRYPTED_LENGTH = IV_LENGTH + AUTH_TAG_LENGTH + 1

T = TypeVar("T")


class FieldCipher:
    def __init__(self, auth_key: Optional[str]):
        if not auth_key:
            raise ConfigurationError("AUTH_KEY setting is not set")
        key = hashlib.sha256(auth_key.encode("utf-8")).digest()
        self._aead = AESGCM(key)

    def encrypt(self, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None

        iv = os.urandom(IV_LENGTH)
        sealed = self._aead.encrypt(iv, value.encode("utf-8"), None)
        # cryptography appends the tag; the stored layout puts it right after the IV.
        data, tag = sealed[:-AUTH_TAG_LENGTH], sealed[-AUTH_TAG_LENGTH:]
        return base64.b64encode(iv + tag + data).decode("ascii")

    def decrypt(self, value: Optional[str]) -> Optional[str]:
        """Return the plain text, or None for empty, short or tampered input."""

        if value is None or value == "":
            return None

        try:
            combined = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Encrypted value is not valid base64; returning None")
            return None

        if len(combined) < MIN_ENCRYPTED_LENGTH:
            logger.warning("Encrypted data too short; it may be unencrypted or corrupted")
            return None

        iv = combined[:IV_LENGTH]
        tag = combined[IV_LENGTH:IV_LENGTH + AUTH_TAG_LENGTH]
        data = combined[IV_LENGTH + AUTH_TAG_LENGTH:]

        try:
            plain = self._aead.decrypt(iv, data + tag, None)
        except InvalidTag:
            logger.warning("Decryption failed: key mismatch or corrupted data")
            return None
        return plain.decode("utf-8")

    def encrypt_date(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return self.encrypt(value.isoformat())

    def decrypt_date(self, value: Optional[str]) -> Optional[datetime]:
        text = self.decrypt(value)
        if not text:
            return None
        if text.endswith("Z"):
            # JavaScript toISOString() output; fromisoformat only takes "Z" from 3.11.
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("Decrypted value is not an ISO timestamp: %r", text)
            return None
        if parsed.tzinfo is not None:
            # Rows written with a UTC offset are shown in server-local time.
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed


class Codec(Protocol[T]):
    def encode(self, value: Optional[T]) -> Optional[str]:
        raise NotImplementedError

    def decode(self, stored: Optional[str]) -> Optional[T]:
        raise NotImplementedError


class TextCodec:
    def __init__(self, cipher: FieldCipher):
        self._cipher = cipher

    def encode(self, value: Optional[str]) -> Optional[str]:
        return self._cipher.encrypt(value)

    def decode(self, stored: Optional[str]) -> Optional[str]:
        return self._cipher.decrypt(stored)


class DateTimeCodec:
    def __init__(self, cipher: FieldCipher):
        self._cipher = cipher

    def encode(self, value: Optional[datetime]) -> Optional[str]:
        return self._cipher.encrypt_date(value)

    def decode(self, stored: Optional[str]) -> Optional[datetime]:
        return self._cipher.decrypt_date(stored)


@dataclass(frozen=True)
class FieldCodecs:
    """Codecs handed to repositories for every encrypted column."""

    text: Codec[str]
    moment: Codec[datetime]


def build_field_codecs(auth_key: Optional[str]) -> FieldCodecs:
    cipher = FieldCipher(auth_key)
    return FieldCodecs(text=TextCodec(cipher), moment=DateTimeCodec(cipher))
