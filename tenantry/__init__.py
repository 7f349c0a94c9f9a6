"""tenantry: ownership-aware authorization, query and credential core."""

__version__ = "0.1.0"
