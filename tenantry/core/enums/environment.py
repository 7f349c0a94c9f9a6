"""Runtime environments.

Settings use the environment to pick logging output (JSON for machines,
colored console for humans).
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
