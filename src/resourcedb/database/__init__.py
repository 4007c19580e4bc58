"""Database layer: query definitions, the generic resource service, and session helpers."""

from .query import QueryDefinition, derive_count_query
from .repository import ResourceRepository
from .resource_service import ResourceService, ResourceType

__all__ = [
    "QueryDefinition",
    "ResourceRepository",
    "ResourceService",
    "ResourceType",
    "derive_count_query",
]
