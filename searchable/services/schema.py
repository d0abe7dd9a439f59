"""Table metadata needed by the relevance compiler."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import MetaData, Table
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import NoSuchTableError

from searchable.core.exceptions import SearchConfigurationError
from searchable.schemas.search_spec import SearchSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchColumn:
    key: str
    identifier: str
    weight: float


@dataclass(frozen=True)
class TableSchema:
    table: Table
    primary_key: str | None
    column_names: tuple[str, ...]
    prefix: str = ""

    @property
    def name(self) -> str:
        return self.table.name

    def require_primary_key(self) -> str:
        if not self.primary_key:
            raise SearchConfigurationError(
                f"table {self.name!r} has no primary key; configure groupBy to deduplicate results"
            )
        return self.primary_key

    def qualify(self, identifier: str) -> str:
        """Apply the table prefix to a ``table.column`` identifier."""
        if self.prefix and "." in identifier:
            return f"{self.prefix}{identifier}"
        return identifier

    def qualify_table(self, table_name: str) -> str:
        return f"{self.prefix}{table_name}"

    def search_columns(self, spec: SearchSpec) -> list[SearchColumn]:
        if spec.columns:
            return [
                SearchColumn(key=key, identifier=self.qualify(key), weight=weight)
                for key, weight in spec.columns.items()
            ]
        return [
            SearchColumn(key=name, identifier=f"{self.name}.{name}", weight=1)
            for name in self.column_names
        ]

    @classmethod
    def from_table(
        cls,
        table: Table | str,
        *,
        prefix: str = "",
        bind: Engine | Connection | None = None,
    ) -> "TableSchema":
        if isinstance(table, str) or not len(table.columns):
            table = cls._reflect(table, bind)

        primary_key = next(iter(table.primary_key.columns), None)
        column_names = tuple(column.name for column in table.columns)
        if not column_names:
            raise SearchConfigurationError(f"no columns found for table {table.name!r}")

        return cls(
            table=table,
            primary_key=primary_key.name if primary_key is not None else None,
            column_names=column_names,
            prefix=prefix,
        )

    @staticmethod
    def _reflect(table: Table | str, bind: Engine | Connection | None) -> Table:
        name = table if isinstance(table, str) else table.name
        schema = None if isinstance(table, str) else table.schema
        if bind is None:
            raise SearchConfigurationError(
                f"columns of table {name!r} are unknown and no connection is available to reflect them"
            )
        try:
            logger.debug("reflecting table %s for search", name)
            return Table(name, MetaData(), schema=schema, autoload_with=bind)
        except NoSuchTableError as exc:
            raise SearchConfigurationError(f"table {name!r} does not exist") from exc
