"""Declarative search configuration attached to a searchable table."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from searchable.services.word_filter import AdmissionRule, to_rules


class JoinSpec(BaseModel):
    """LEFT JOIN ``table`` ON ``first`` = ``second`` [AND ``filter_column`` = ``filter_value``]."""

    model_config = ConfigDict(frozen=True)

    table: str = Field(..., min_length=1)
    first: str = Field(..., min_length=1)
    second: str = Field(..., min_length=1)
    filter_column: str | None = None
    filter_value: Any = None

    @property
    def has_filter(self) -> bool:
        return self.filter_column is not None


class SearchSpec(BaseModel):
    """What to search and how to weigh it.

    ``columns`` maps a column (``name`` or ``table.name``) to its weight; its
    order only affects the order of the generated terms.  ``conditions`` maps
    a column to one or more admission rules (patterns or callables).  A
    condition on a column missing from ``columns`` is never consulted.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    columns: dict[str, float] = Field(default_factory=dict)
    conditions: dict[str, tuple[AdmissionRule, ...]] = Field(default_factory=dict)
    joins: list[JoinSpec] = Field(default_factory=list)
    group_by: list[str] | None = Field(default=None, alias="groupBy")
    table_columns: list[str] | None = None

    @field_validator("columns", mode="before")
    @classmethod
    def _coerce_columns(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, (list, tuple)):
            return {str(column): 1 for column in value}
        return value

    @field_validator("columns")
    @classmethod
    def _positive_weights(cls, value: dict[str, float]) -> dict[str, float]:
        for column, weight in value.items():
            if weight <= 0:
                raise ValueError(f"weight of column {column!r} must be positive")
        return value

    @field_validator("conditions", mode="before")
    @classmethod
    def _coerce_conditions(cls, value: object) -> object:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("conditions must be a mapping of column to rules")
        return {str(column): to_rules(rules) for column, rules in value.items()}

    @field_validator("joins", mode="before")
    @classmethod
    def _coerce_joins(cls, value: object) -> object:
        if value is None:
            return []
        if not isinstance(value, Mapping):
            return value

        joins = []
        for table, keys in value.items():
            keys = list(keys)
            if len(keys) < 2:
                raise ValueError(f"join on {table!r} needs two key columns")
            join: dict[str, Any] = {"table": table, "first": keys[0], "second": keys[1]}
            if len(keys) >= 4:
                join["filter_column"] = keys[2]
                join["filter_value"] = keys[3]
            joins.append(join)
        return joins

    @field_validator("group_by", mode="before")
    @classmethod
    def _coerce_group_by(cls, value: object) -> object:
        if value is None or value is False:
            return None
        if isinstance(value, str):
            return [value]
        return value

    @classmethod
    def coerce(cls, value: "SearchSpec | Mapping[str, Any] | None") -> "SearchSpec":
        if isinstance(value, cls):
            return value
        return cls.model_validate(value or {})
