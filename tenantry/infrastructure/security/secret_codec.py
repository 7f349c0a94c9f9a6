"""API key codec.

Generates, hashes and verifies opaque bearer credentials.

Key Strategy:
    - 16+ random bytes from an injected RandomSource (>= 128 bits)
    - Lowercase base32 without padding (URL-safe, case-insensitive friendly)
    - Fixed prefix ("gm_") marking the credential class
    - First 8 characters kept as a display prefix for identification
    - SHA3-256 hex digest of the full key is the only stored secret material

The hash is deterministic (no salt) so a presented key can be looked up by
its hash. Comparisons use ``hmac.compare_digest``.
"""

import base64
import hashlib
import hmac

from tenantry.core.config import MIN_API_KEY_BYTES, Settings
from tenantry.core.enums import ErrorCode
from tenantry.core.errors import ValidationError
from tenantry.core.result import Failure, Result, Success
from tenantry.domain.protocols import RandomSource
from tenantry.domain.value_objects import Credential


class SecretCodec:
    """API key generation and verification.

    Usage:
        codec = SecretCodec(random_source=SystemRandomSource())

        credential = codec.generate()
        # persist credential.display_prefix and credential.secret_hash,
        # return credential.raw_secret to the caller once

        codec.verify(presented_key, stored_hash)
    """

    def __init__(
        self,
        *,
        random_source: RandomSource,
        prefix: str = "gm_",
        num_bytes: int = MIN_API_KEY_BYTES,
        display_prefix_length: int = 8,
    ) -> None:
        """Initialize the codec.

        Raises:
            ValueError: If fewer than 16 bytes are requested or the display
                prefix length is not positive.
        """
        if num_bytes < MIN_API_KEY_BYTES:
            raise ValueError(f"num_bytes must be at least {MIN_API_KEY_BYTES}")
        if display_prefix_length <= 0:
            raise ValueError("display_prefix_length must be positive")
        self._random_source = random_source
        self._prefix = prefix
        self._num_bytes = num_bytes
        self._display_prefix_length = display_prefix_length

    @classmethod
    def from_settings(
        cls, settings: Settings, random_source: RandomSource
    ) -> "SecretCodec":
        return cls(
            random_source=random_source,
            prefix=settings.api_key_prefix,
            num_bytes=settings.api_key_bytes,
            display_prefix_length=settings.api_key_display_prefix_length,
        )

    @property
    def prefix(self) -> str:
        return self._prefix

    def generate(self) -> Credential:
        """Generate a new credential.

        Returns:
            Credential with the raw secret, its display prefix and its hash.
        """
        entropy = self._random_source.token_bytes(self._num_bytes)
        encoded = base64.b32encode(entropy).decode("ascii").rstrip("=").lower()
        raw_secret = f"{self._prefix}{encoded}"
        return Credential(
            raw_secret=raw_secret,
            display_prefix=raw_secret[: self._display_prefix_length],
            secret_hash=self._digest(raw_secret),
        )

    def hash_secret(self, raw_secret: str) -> Result[str, ValidationError]:
        """Hash a presented secret for lookup.

        Returns:
            Success with the hex digest, or Failure when the secret does not
            carry this codec's prefix.
        """
        if not raw_secret or not raw_secret.startswith(self._prefix):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.SECRET_FORMAT_INVALID,
                    message="Malformed API key",
                    field="api_key",
                )
            )
        return Success(value=self._digest(raw_secret))

    def verify(self, raw_secret: str, stored_hash: str) -> bool:
        """Constant-time check of ``raw_secret`` against ``stored_hash``."""
        return hmac.compare_digest(
            self._digest(raw_secret).encode("ascii"), stored_hash.encode("ascii")
        )

    @staticmethod
    def _digest(raw_secret: str) -> str:
        return hashlib.sha3_256(raw_secret.encode("utf-8")).hexdigest()
