"""Read-side requests for resource services."""

from tenantry.application.queries.resource_queries import ListResources

__all__ = ["ListResources"]
