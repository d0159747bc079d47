"""Authenticated, expiring tokens carrying a list of settings.

Tokens are JWE compact strings (``alg=dir``, ``enc=A256GCM``). The
plaintext is a JSON claims object:

    {"iat": ..., "nbf": ..., "exp": ..., "iss": ..., "sub": ..., "dt": "<settings json>"}

An optional footer travels in the protected header as ``kid``: it is
readable without the key but covered by the GCM authentication tag.
"""

import hashlib
import json
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwe
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError

from stratum.settings.exceptions import TokenInvalidError
from stratum.settings.models import SettingModel
from stratum.settings.serialization import deserialize_settings, serialize_settings

TOKEN_ALGORITHM = ALGORITHMS.DIR
TOKEN_ENCRYPTION = ALGORITHMS.A256GCM
PAYLOAD_CLAIM = "dt"


def derive_key(key_material: str) -> bytes:
    """Derive the 256-bit content key from the configured key material."""
    return hashlib.sha256(key_material.encode("utf-8")).digest()


def _timestamp(now: datetime | None) -> int:
    return int((now or datetime.now(UTC)).timestamp())


class SettingsTokenCodec:
    """Encodes setting lists into tokens and validates them back.

    Validation checks, in order: protocol (header alg/enc), footer,
    authentication tag, claims shape, issuer, subject, not-before and
    expiration.
    """

    def __init__(
        self,
        key_material: str,
        *,
        issuer: str = "settings_manager",
        subject: str = "cookie_provider",
        ttl: int = 86400,
        footer: str | None = None,
    ) -> None:
        if not key_material:
            raise ValueError("Token key material must not be empty")
        self._key = derive_key(key_material)
        self.issuer = issuer
        self.subject = subject
        self.ttl = ttl
        self.footer = footer

    def encode(self, settings: Sequence[SettingModel], now: datetime | None = None) -> str:
        """Build a fresh token valid from now for ``ttl`` seconds."""
        issued_at = now or datetime.now(UTC)
        claims = {
            "iat": _timestamp(issued_at),
            "nbf": _timestamp(issued_at),
            "exp": _timestamp(issued_at + timedelta(seconds=self.ttl)),
            "iss": self.issuer,
            "sub": self.subject,
            PAYLOAD_CLAIM: serialize_settings(settings),
        }
        token = jwe.encrypt(
            json.dumps(claims),
            self._key,
            algorithm=TOKEN_ALGORITHM,
            encryption=TOKEN_ENCRYPTION,
            kid=self.footer,
        )
        return token.decode("ascii")

    def decode(self, raw_token: str, now: datetime | None = None) -> list[SettingModel]:
        """Validate a token and return the settings it carries.

        Raises:
            TokenInvalidError: If the token fails any check
            PayloadDeserializationError: If the settings payload is unreadable
        """
        claims = self._decrypt(raw_token)
        self._validate_claims(claims, _timestamp(now))

        payload = claims.get(PAYLOAD_CLAIM)
        if not isinstance(payload, str):
            raise TokenInvalidError(f"Token is missing the '{PAYLOAD_CLAIM}' claim")
        return deserialize_settings(payload)

    def _decrypt(self, raw_token: str) -> dict[str, Any]:
        try:
            header = jwe.get_unverified_header(raw_token)
            if header.get("alg") != TOKEN_ALGORITHM or header.get("enc") != TOKEN_ENCRYPTION:
                raise TokenInvalidError(
                    f"Unsupported token protocol {header.get('alg')}/{header.get('enc')}"
                )
            if self.footer is not None and header.get("kid") != self.footer:
                raise TokenInvalidError("Token footer mismatch")

            plaintext = jwe.decrypt(raw_token, self._key)
            claims = json.loads(plaintext)
        except (JOSEError, ValueError) as e:
            raise TokenInvalidError(f"Token could not be decrypted: {e}") from e

        if not isinstance(claims, dict):
            raise TokenInvalidError("Token claims must be an object")
        return claims

    def _validate_claims(self, claims: dict[str, Any], now: int) -> None:
        if claims.get("iss") != self.issuer:
            raise TokenInvalidError("Token issuer mismatch")
        if claims.get("sub") != self.subject:
            raise TokenInvalidError("Token subject mismatch")

        expiration = claims.get("exp")
        not_before = claims.get("nbf")
        if not isinstance(expiration, int) or not isinstance(not_before, int):
            raise TokenInvalidError("Token time claims are missing")
        if now >= expiration:
            raise TokenInvalidError("Token has expired")
        if now < not_before:
            raise TokenInvalidError("Token is not valid yet")
