"""System adapters for Clock and RandomSource."""

from tenantry.infrastructure.system.clock import SystemClock
from tenantry.infrastructure.system.random_source import SystemRandomSource

__all__ = ["SystemClock", "SystemRandomSource"]
