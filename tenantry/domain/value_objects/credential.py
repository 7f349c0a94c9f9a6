"""Credential value object (API keys)."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class Credential:
    """Freshly generated bearer credential.

    Only ``display_prefix`` and ``secret_hash`` are persisted. ``raw_secret``
    is returned once, in the creation response.

    Attributes:
        raw_secret: Full encoded secret.
        display_prefix: Leading characters of the secret, for identification.
        secret_hash: Hex digest of the full secret.
    """

    raw_secret: str = field(repr=False)
    display_prefix: str
    secret_hash: str
