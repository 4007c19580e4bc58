"""Immutable page of resources paired with the total match count."""

from typing import Generic, Iterable, Iterator, Tuple, TypeVar, overload

from .models import ResourceModel

T = TypeVar("T", bound=ResourceModel)


class ResourceSet(Generic[T]):
    """
    Ordered resources plus the number of rows matching the query filter.

    The count is independent of the pagination window, so it is never smaller
    than the number of resources held.
    """

    __slots__ = ("_resources", "_count")

    def __init__(self, resources: Iterable[T], count: int):
        resources = tuple(resources)
        if count < 0:
            raise ValueError(f"Count must be non-negative, got {count}")
        if len(resources) > count:
            raise ValueError(
                f"Resource set holds {len(resources)} resources but count is {count}"
            )
        self._resources: Tuple[T, ...] = resources
        self._count = count

    @property
    def resources(self) -> Tuple[T, ...]:
        return self._resources

    @property
    def count(self) -> int:
        """Total matching rows, independent of the pagination window."""
        return self._count

    def __iter__(self) -> Iterator[T]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[T, ...]: ...

    def __getitem__(self, index):
        return self._resources[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceSet):
            return NotImplemented
        return self._resources == other._resources and self._count == other._count

    def __repr__(self) -> str:
        return f"ResourceSet(resources={len(self._resources)}, count={self._count})"
