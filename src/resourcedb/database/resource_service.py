"""Generic read service shared by every resource type."""

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ..errors import NoResourceFromStatement, NoResourceWithId
from ..hydration import Hydrator, PydanticHydrator, hydrate_row, hydrate_rows
from ..models import ResourceModel
from ..resource_set import ResourceSet
from ..utils.logging import get_logger
from ..values import Identifier, Identifiers, Paginate
from .query import (
    QueryDefinition,
    apply_paginate,
    derive_count_query,
    order_by_last_activity,
    where_id,
    where_ids,
)

logger = get_logger(__name__)

T = TypeVar("T", bound=ResourceModel)


@dataclass(frozen=True)
class ResourceType(Generic[T]):
    """
    Everything the service needs to know about one kind of resource.

    Attributes:
        query_definition: Table, alias and base query shape
        model: Pydantic model rows are hydrated into
        json_fields: Column labels holding JSON text
        not_found: Builds the error raised when an identifier has no row
    """

    query_definition: QueryDefinition
    model: Type[T]
    json_fields: Tuple[str, ...] = ()
    not_found: Callable[[Identifier], NoResourceWithId] = NoResourceWithId


class ResourceService(Generic[T]):
    """
    Read access to one resource type.

    Each public operation builds its statement from the resource type's query
    definition, executes it on the session, and hydrates the rows. Nothing is
    cached between calls.
    """

    def __init__(
        self,
        session: Session,
        resource_type: ResourceType[T],
        hydrator: Optional[Hydrator] = None,
    ):
        self.session = session
        self.resource_type = resource_type
        self.hydrator = hydrator or PydanticHydrator()

    @property
    def query_definition(self) -> QueryDefinition:
        return self.resource_type.query_definition

    def exists(self, id: Identifier) -> bool:
        statement = self.create_base_statement().add_columns(func.count())
        statement = where_id(statement, self.query_definition.id_column, id)

        return self.session.execute(statement).scalar_one() > 0

    def get_with_id(self, id: Identifier) -> T:
        """
        Fetch one resource.

        Raises:
            NoResourceWithId: (or the resource type's subclass) if no row matches
        """
        statement = where_id(
            self.create_resource_statement(),
            self.query_definition.id_column,
            id,
        )

        try:
            return self.get_resource_from_statement(statement)
        except NoResourceFromStatement:
            logger.debug(f"No {self.query_definition.table_name} row with id {id}")
            raise self.resource_type.not_found(id) from None

    def get_with_ids(self, ids: Identifiers) -> ResourceSet[T]:
        """Fetch every existing resource among `ids`, in storage order."""
        statement = where_ids(
            self.create_resource_statement(),
            self.query_definition.id_column,
            ids,
        )
        return self.get_resource_set_from_statement(statement)

    def get_by_last_activity(self, paginate: Paginate) -> ResourceSet[T]:
        """Page of resources, most recent activity first, with the unpaginated total."""
        statement = apply_paginate(self.create_resource_statement(), paginate)
        statement = order_by_last_activity(statement, self.query_definition)

        return self.get_resource_set_from_statement(statement)

    def get_current_version(self, id: Identifier) -> int:
        """
        Read only the version column.

        Some drivers return the version as text, so the value goes through str
        before int.

        Raises:
            NoResourceWithId: (or the resource type's subclass) if no row matches
        """
        definition = self.query_definition
        statement = self.create_base_statement().add_columns(definition.version_column)
        statement = where_id(statement, definition.id_column, id)

        result = self.session.execute(statement).scalar()
        if result is None:
            logger.debug(f"No {definition.table_name} version for id {id}")
            raise self.resource_type.not_found(id)

        return int(str(result))

    def get_resource_from_statement(self, statement: Select) -> T:
        row = self.session.execute(statement).mappings().first()
        if row is None:
            raise NoResourceFromStatement()

        return self.hydrate_resource(row)

    def get_resources_from_statement(self, statement: Select) -> List[T]:
        rows = self.session.execute(statement).mappings().all()
        return hydrate_rows(
            rows,
            self.resource_type.model,
            self.hydrator,
            self.resource_type.json_fields,
        )

    def get_resource_set_from_statement(self, statement: Select) -> ResourceSet[T]:
        resources = self.get_resources_from_statement(statement)
        count = self.get_count_from_results_statement(statement)
        logger.debug(
            f"Loaded {len(resources)} of {count} {self.query_definition.table_name} rows"
        )
        return ResourceSet(resources, count)

    def get_count_from_results_statement(self, statement: Select) -> int:
        count_statement = derive_count_query(statement, self.query_definition.id_column)
        return int(self.session.execute(count_statement).scalar_one())

    def create_resource_statement(self) -> Select:
        return self.query_definition.apply(select())

    def create_base_statement(self) -> Select:
        return select().select_from(self.query_definition.table)

    def hydrate_resource(self, row: Mapping[str, Any]) -> T:
        return hydrate_row(
            row,
            self.resource_type.model,
            self.hydrator,
            self.resource_type.json_fields,
        )
