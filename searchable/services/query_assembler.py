"""Turns a relevance score into a scored, deduplicated, ordered select.

The scored select is built privately and then merged into the caller's
select as a derived table named after the primary table, so that filters,
ordering and pagination already applied by the caller keep working against
``<table>.*`` and ``relevance``.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import Select, and_, bindparam, literal_column, select, table, text
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.util import ClauseAdapter

from searchable.core.search_config import search_tuning
from searchable.schemas.search_spec import SearchSpec
from searchable.services.dialect import DialectPolicy
from searchable.services.schema import TableSchema
from searchable.services.score_aggregator import HAVING, RelevanceScore

logger = logging.getLogger(__name__)

RELEVANCE = "relevance"


def format_threshold(threshold: float) -> str:
    """Two decimals, halves rounded up."""
    return str(Decimal(str(threshold)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class QueryAssembler:
    def __init__(self, schema: TableSchema, spec: SearchSpec, policy: DialectPolicy) -> None:
        self.schema = schema
        self.spec = spec
        self.policy = policy

    def _column(self, identifier: str) -> ColumnElement:
        return literal_column(self.policy.quote_column(self.schema.qualify(identifier)))

    # ------------------------------------------------------------------
    # projection / joins
    # ------------------------------------------------------------------

    def base_select(self) -> Select:
        from_clause = self.schema.table
        for index, join in enumerate(self.spec.joins):
            target = table(self.schema.qualify_table(join.table))
            onclause = self._column(join.first) == self._column(join.second)
            if join.has_filter:
                onclause = and_(
                    onclause,
                    self._column(join.filter_column) == bindparam(f"join_filter_{index}", join.filter_value),
                )
            from_clause = from_clause.outerjoin(target, onclause)
        return select(*self.schema.table.columns).select_from(from_clause)

    # ------------------------------------------------------------------
    # threshold / filter
    # ------------------------------------------------------------------

    @staticmethod
    def resolve_threshold(threshold: float | None, total_weight: float) -> float:
        if threshold is None:
            return total_weight / search_tuning.threshold_divisor
        return float(threshold)

    def filter_by_relevance(self, stmt: Select, score: RelevanceScore, threshold: float) -> Select:
        if self.policy.having_uses_alias:
            comparator = literal_column(RELEVANCE)
        else:
            comparator = score.sum_expression(self.policy, HAVING)

        stmt = stmt.having(comparator > literal_column(format_threshold(threshold)))
        if self.policy.order_in_subquery:
            stmt = stmt.order_by(literal_column(RELEVANCE).desc())
        return stmt

    # ------------------------------------------------------------------
    # deduplication
    # ------------------------------------------------------------------

    def group_by(self, stmt: Select) -> Select:
        if self.spec.group_by:
            return stmt.group_by(*[self._column(column) for column in self.spec.group_by])

        if self.policy.group_by_all_columns:
            if self.spec.table_columns:
                columns = [self._column(column) for column in self.spec.table_columns]
            else:
                columns = list(self.schema.table.columns)
        else:
            columns = [self.schema.table.c[self.schema.require_primary_key()]]

        # Columns of joined tables are matched by name containment.
        joined = [join.table for join in self.spec.joins]
        for column in self.schema.search_columns(self.spec):
            if any(name in column.identifier for name in joined):
                columns.append(literal_column(self.policy.quote_column(column.identifier)))

        return stmt.group_by(*columns)

    # ------------------------------------------------------------------
    # assembly / merge
    # ------------------------------------------------------------------

    def assemble(self, score: RelevanceScore, threshold: float) -> Select:
        stmt = self.base_select().add_columns(score.relevance_column(self.policy))
        stmt = self.filter_by_relevance(stmt, score, threshold)
        return self.group_by(stmt)

    def _selects_rows(self, base: Select) -> bool:
        """True unless ``base`` aggregates, e.g. a count for pagination."""
        if base._group_by_clauses:
            return False
        return any(self.schema.table.c.contains_column(column) for column in base.selected_columns)

    def merge(self, scored: Select, base: Select) -> Select:
        derived = scored.subquery(self.schema.name)
        merged = ClauseAdapter(derived).traverse(base)
        if not self._selects_rows(base):
            return merged

        # select(table) already expands to every derived column
        if RELEVANCE not in merged.selected_columns:
            merged = merged.add_columns(derived.c[RELEVANCE])
        return merged.order_by(derived.c[RELEVANCE].desc())

    @staticmethod
    def empty_result(base: Select) -> Select:
        # Keeps a relevance column for callers that order by it.
        return base.where(text("1=0")).add_columns(literal_column("0").label(RELEVANCE))
