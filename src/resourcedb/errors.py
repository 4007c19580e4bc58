"""Error types raised by resource lookups and row hydration."""

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .values import Identifier


class ResourceError(Exception):
    """Base class for all resourcedb errors."""


class NoResource(ResourceError):
    """A requested resource does not exist."""


class NoResourceWithId(NoResource):
    """No resource matches the given identifier.

    Resource types subclass this to give callers a type-specific signal.
    """

    def __init__(self, id: "Identifier"):
        self.id = id
        super().__init__(f"No resource with id '{id}'")


class NoResourceFromStatement(NoResource):
    """A statement returned no row. Translated into NoResourceWithId by the service."""


class DecodeError(ResourceError, ValueError):
    """A column declared as JSON holds text that is not valid JSON."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid JSON in column '{field}': {message}")


class StructureConflict(ResourceError):
    """Two flat keys disagree about the nested shape of a row."""

    def __init__(self, key: str, path: Tuple[str, ...], reason: str):
        self.key = key
        self.path = path
        super().__init__(f"Structure conflict for key '{key}' at '{'.'.join(path)}': {reason}")
