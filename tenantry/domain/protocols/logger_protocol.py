"""LoggerProtocol definition for structured logging.

Implementations MUST keep logs structured (message plus key-value context)
and safe: never log raw API keys, key hashes or embedder credentials.

Context Binding:
    Services bind ``actor_id`` and ``resource_type`` once per request with
    ``bind()`` and every subsequent call includes them.

Usage:
    from tenantry.core.container import get_logger

    logger = get_logger().bind(actor_id=str(actor.id))
    logger.info("space_created", space_id=str(space.id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message.

        Args:
            message: Event name.
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        This logger is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
