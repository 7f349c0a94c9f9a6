"""Core enums package.

Usage:
    from tenantry.core.enums import ErrorCode, Environment
"""

from tenantry.core.enums.environment import Environment
from tenantry.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
