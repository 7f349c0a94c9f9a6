"""Clock and entropy ports.

Both are injected so authorization, auditing and key generation stay
deterministic under test.
"""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Current timestamp (timezone-aware, UTC)."""
        ...


class RandomSource(Protocol):
    """Cryptographically secure entropy."""

    def token_bytes(self, num_bytes: int) -> bytes:
        """Return ``num_bytes`` random bytes."""
        ...
