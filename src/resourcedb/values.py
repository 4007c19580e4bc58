"""Value objects used as query operands: identifiers and pagination requests."""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

MAX_LIMIT = 100


class Identifier(BaseModel):
    """Opaque, validated resource identifier."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    value: str = Field(..., min_length=1, max_length=64)

    def __init__(self, value: str, **data):
        super().__init__(value=value, **data)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Identifiers:
    """Non-empty, de-duplicated, ordered collection of identifiers."""

    items: Tuple[Identifier, ...]

    def __post_init__(self):
        if isinstance(self.items, (str, Identifier)):
            raise TypeError("Identifiers expects a collection of identifiers, not a single value")

        unique: List[Identifier] = []
        seen = set()
        for item in self.items:
            if not isinstance(item, Identifier):
                item = Identifier(item)
            if item in seen:
                continue
            seen.add(item)
            unique.append(item)

        if not unique:
            raise ValueError("Identifiers must contain at least one identifier")

        object.__setattr__(self, "items", tuple(unique))

    @classmethod
    def of(cls, *values: Union[str, Identifier]) -> "Identifiers":
        return cls(tuple(values))

    @classmethod
    def from_iterable(cls, values: Iterable[Union[str, Identifier]]) -> "Identifiers":
        return cls(tuple(values))

    def values(self) -> List[str]:
        """Plain string values, suitable as bound parameters."""
        return [item.value for item in self.items]

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            item = Identifier(item)
        return item in self.items


class Paginate(BaseModel):
    """
    Pagination window.

    Offsets are zero-based. Use from_page() for page/per-page style requests.
    """

    model_config = ConfigDict(frozen=True)

    offset: int = Field(default=0, ge=0)
    limit: int = Field(..., ge=1, le=MAX_LIMIT)

    @classmethod
    def from_page(cls, page: int, per_page: int) -> "Paginate":
        """
        Build a window from a 1-based page number.

        Args:
            page: Page number, starting at 1
            per_page: Items per page

        Returns:
            Paginate with offset (page - 1) * per_page
        """
        if page < 1:
            raise ValueError(f"Page must be >= 1, got {page}")
        return cls(offset=(page - 1) * per_page, limit=per_page)
