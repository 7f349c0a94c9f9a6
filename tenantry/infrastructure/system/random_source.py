"""Operating-system entropy adapter."""

import secrets


class SystemRandomSource:
    """RandomSource backed by ``secrets.token_bytes``."""

    def token_bytes(self, num_bytes: int) -> bytes:
        return secrets.token_bytes(num_bytes)
