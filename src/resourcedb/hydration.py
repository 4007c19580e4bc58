"""
Row hydration: turn flat result rows into typed resources.

Three steps, applied per row:

1. Selective JSON decode of declared columns.
2. Unflatten dotted column labels into nested mappings.
3. Hand the nested structure to a typed hydrator.
"""

import json
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Protocol,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from .errors import DecodeError, StructureConflict
from .models import ResourceModel

T = TypeVar("T", bound=ResourceModel)

Row = Mapping[str, Any]

PATH_SEPARATOR = "."
_MISSING = object()


class Hydrator(Protocol):
    """Builds a typed resource from a decoded, nested structure."""

    def hydrate(self, model: Type[T], data: Mapping[str, Any]) -> T:
        ...


class PydanticHydrator:
    """Hydrator backed by pydantic model validation.

    Validation errors are raised as pydantic.ValidationError, unchanged.
    """

    def hydrate(self, model: Type[T], data: Mapping[str, Any]) -> T:
        return model.model_validate(data)


def decode_json_fields(row: Row, fields: Iterable[str]) -> Dict[str, Any]:
    """
    Decode JSON text held by the declared columns.

    Columns that are missing, null, or already non-string are left as they are.
    Undeclared columns are never touched, even if they look like JSON.

    Args:
        row: Flat result row
        fields: Column labels that hold JSON text

    Returns:
        New dict with the declared columns decoded

    Raises:
        DecodeError: If a declared column holds malformed JSON
    """
    decoded = dict(row)
    for field in fields:
        value = decoded.get(field)
        if not isinstance(value, str):
            continue
        try:
            decoded[field] = json.loads(value, parse_constant=_reject_constant)
        except ValueError as e:
            raise DecodeError(field, str(e)) from e
    return decoded


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class _Branch(dict):
    """Mapping created while unflattening, as opposed to a mapping value from the row."""


def unflatten(row: Union[Row, Iterable[Tuple[str, Any]]]) -> Dict[str, Any]:
    """
    Rebuild nested mappings from dot-delimited keys.

    {"id": "a", "author.name": "x"} becomes {"id": "a", "author": {"name": "x"}}.

    Only mappings created here can be descended into. A row value that happens
    to be a mapping (a decoded JSON object, say) is a leaf, so the result is
    the same whatever order the keys arrive in.

    Args:
        row: Mapping, or iterable of (key, value) pairs

    Returns:
        Fresh nested dict. Leaf values are not copied.

    Raises:
        StructureConflict: If a path is assigned twice, or a leaf sits where
            another key needs a nested mapping
    """
    items = row.items() if isinstance(row, Mapping) else row
    output = _Branch()

    for key, value in items:
        parts = key.split(PATH_SEPARATOR)
        node = output

        for depth, part in enumerate(parts[:-1]):
            child = node.get(part, _MISSING)
            if child is _MISSING:
                child = node[part] = _Branch()
            elif not isinstance(child, _Branch):
                raise StructureConflict(
                    key,
                    tuple(parts[: depth + 1]),
                    "value already set where a nested mapping is required",
                )
            node = child

        last = parts[-1]
        if last in node:
            raise StructureConflict(key, tuple(parts), "path already assigned")
        node[last] = value

    return _to_plain(output)


def _to_plain(branch: _Branch) -> Dict[str, Any]:
    return {
        key: _to_plain(value) if isinstance(value, _Branch) else value
        for key, value in branch.items()
    }


def decode_row(row: Row, json_fields: Iterable[str] = ()) -> Dict[str, Any]:
    """JSON-decode declared columns, then unflatten."""
    return unflatten(decode_json_fields(row, json_fields))


def hydrate_row(
    row: Row,
    model: Type[T],
    hydrator: Hydrator,
    json_fields: Iterable[str] = (),
) -> T:
    """Hydrate a single flat row into a resource of type `model`."""
    return hydrator.hydrate(model, decode_row(row, json_fields))


def hydrate_rows(
    rows: Iterable[Row],
    model: Type[T],
    hydrator: Hydrator,
    json_fields: Iterable[str] = (),
) -> List[T]:
    """Hydrate rows independently, keeping their order."""
    json_fields = tuple(json_fields)
    return [hydrate_row(row, model, hydrator, json_fields) for row in rows]
