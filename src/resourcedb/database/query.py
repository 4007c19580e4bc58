"""
Query definitions and pure statement helpers for resource tables.

Every helper here returns a new statement. SQLAlchemy statements are
generative, so the statement passed in is never modified.
"""

from typing import List, Optional

from sqlalchemy import ColumnElement, Select, Table, distinct, func, select
from sqlalchemy.sql.expression import FromClause

from ..values import Identifier, Identifiers, Paginate


class QueryDefinition:
    """
    Table identity and base query shape for one resource type.

    Holds a single aliased FROM object so that every statement built from a
    definition refers to the same alias. Subclasses override apply() to add
    joins, grouping, or extra dotted labels.
    """

    id_column_name = "id"
    version_column_name = "version"
    activity_column_name = "activity_last"
    activity_label = "activity.last"

    def __init__(self, table: Table, alias: Optional[str] = None):
        self._source = table
        self.table_alias = alias or table.name
        self.table: FromClause = table.alias(self.table_alias)

    @property
    def table_name(self) -> str:
        return self._source.name

    @property
    def id_column(self) -> ColumnElement:
        return self.table.c[self.id_column_name]

    @property
    def version_column(self) -> ColumnElement:
        return self.table.c[self.version_column_name]

    @property
    def activity_column(self) -> ColumnElement:
        return self.table.c[self.activity_column_name]

    def columns(self) -> List[ColumnElement]:
        """Every column of the aliased table, with the activity column labelled for nesting."""
        columns: List[ColumnElement] = []
        for column in self.table.c:
            if column.name == self.activity_column_name:
                columns.append(column.label(self.activity_label))
            else:
                columns.append(column)
        return columns

    def apply(self, statement: Select) -> Select:
        """Apply the resource projection and joins to `statement`."""
        return statement.add_columns(*self.columns()).select_from(self.table)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self.table_name!r}, alias={self.table_alias!r})"


def where_id(statement: Select, column: ColumnElement, id: Identifier) -> Select:
    """Filter on identifier equality (bound parameter)."""
    return statement.where(column == id.value)


def where_ids(statement: Select, column: ColumnElement, ids: Identifiers) -> Select:
    """Filter on identifier membership (expanding bound parameter)."""
    return statement.where(column.in_(ids.values()))


def apply_paginate(statement: Select, paginate: Paginate) -> Select:
    return statement.offset(paginate.offset).limit(paginate.limit)


def order_by_last_activity(statement: Select, definition: QueryDefinition) -> Select:
    """
    Most recent activity first.

    Rows sharing an activity timestamp are ordered by identifier ascending so
    that pages are stable.
    """
    return statement.order_by(
        definition.activity_column.desc(),
        definition.id_column.asc(),
    )


def derive_count_query(statement: Select, id_column: ColumnElement) -> Select:
    """
    Build the total-count companion of a filtered statement.

    The result selects count(DISTINCT id_column) over the same FROM list
    (joins included) and the same WHERE clause. ORDER BY, DISTINCT, GROUP BY,
    HAVING, LIMIT and OFFSET are not carried over. Joins may repeat a resource
    across rows, hence the distinct count.

    Args:
        statement: Data statement, filtered and joined
        id_column: Identifier column of the resource table

    Returns:
        New count statement. `statement` is left untouched.
    """
    count = select(func.count(distinct(id_column)))

    froms = statement.get_final_froms()
    if froms:
        count = count.select_from(*froms)

    whereclause = statement.whereclause
    if whereclause is not None:
        count = count.where(whereclause)

    return count
