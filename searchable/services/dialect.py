"""Per-engine behaviour of the relevance compiler.

Every engine-specific decision is read from one ``DialectPolicy`` resolved at
the start of a search; nothing else in the compiler looks at dialect names.

Unknown engine names get the MySQL-compatible answers for LIKE, quoting and
grouping, but the generic HAVING treatment (raw sum, duplicated bindings):
only MySQL is known to accept a select alias in HAVING.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session

_ALIASES = {
    "pgsql": "postgresql",
    "postgres": "postgresql",
    "sqlsrv": "mssql",
    "mariadb": "mysql",
}


@dataclass(frozen=True)
class DialectPolicy:
    name: str
    like_operator: str = "LIKE"
    # Opening/closing identifier quotes, empty for unquoted identifiers
    quote_open: str = "`"
    quote_close: str = "`"
    having_uses_alias: bool = False
    group_by_all_columns: bool = False
    # SQL Server rejects ORDER BY in a derived table without TOP/OFFSET
    order_in_subquery: bool = True

    @property
    def binding_copies(self) -> int:
        """How many times the relevance bindings appear in the statement."""
        return 1 if self.having_uses_alias else 2

    def quote_column(self, column: str) -> str:
        if not self.quote_open:
            return column
        parts = column.split(".")
        return ".".join(f"{self.quote_open}{part}{self.quote_close}" for part in parts)

    @classmethod
    def for_name(cls, name: str | None) -> "DialectPolicy":
        key = (name or "").strip().lower()
        key = _ALIASES.get(key, key)
        policy = _POLICIES.get(key)
        if policy is None:
            return cls(name=key or "default")
        return policy

    @classmethod
    def for_bind(cls, bind: Engine | Connection | Session) -> "DialectPolicy":
        if isinstance(bind, Session):
            bind = bind.get_bind()
        return cls.for_name(bind.dialect.name)


_POLICIES: dict[str, DialectPolicy] = {
    "mysql": DialectPolicy(name="mysql", having_uses_alias=True),
    "postgresql": DialectPolicy(name="postgresql", like_operator="ILIKE", quote_open="", quote_close=""),
    "mssql": DialectPolicy(
        name="mssql",
        quote_open="[",
        quote_close="]",
        group_by_all_columns=True,
        order_in_subquery=False,
    ),
    "sqlite": DialectPolicy(name="sqlite"),
}
