"""Generic read access for versioned resources stored in SQL tables."""

from .errors import (
    DecodeError,
    NoResource,
    NoResourceWithId,
    ResourceError,
    StructureConflict,
)
from .models import Activity, ResourceModel
from .resource_set import ResourceSet
from .values import Identifier, Identifiers, Paginate

__all__ = [
    "Activity",
    "DecodeError",
    "Identifier",
    "Identifiers",
    "NoResource",
    "NoResourceWithId",
    "Paginate",
    "ResourceError",
    "ResourceModel",
    "ResourceSet",
    "StructureConflict",
]
