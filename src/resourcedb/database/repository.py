"""Public read surface implemented once per resource type."""

from typing import Protocol, TypeVar, runtime_checkable

from ..models import ResourceModel
from ..resource_set import ResourceSet
from ..values import Identifier, Identifiers, Paginate

T = TypeVar("T", bound=ResourceModel, covariant=True)


@runtime_checkable
class ResourceRepository(Protocol[T]):
    """
    Read operations shared by every resource type.

    get_with_id and get_current_version raise NoResourceWithId (or a resource
    specific subclass) for unknown identifiers.
    """

    def exists(self, id: Identifier) -> bool:
        ...

    def get_with_id(self, id: Identifier) -> T:
        ...

    def get_with_ids(self, ids: Identifiers) -> ResourceSet[T]:
        ...

    def get_by_last_activity(self, paginate: Paginate) -> ResourceSet[T]:
        ...

    def get_current_version(self, id: Identifier) -> int:
        ...
