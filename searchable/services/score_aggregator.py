"""Combines per-column match terms into one relevance score."""

from __future__ import annotations

import functools
import operator
from dataclasses import dataclass, field

from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement

from searchable.services.dialect import DialectPolicy
from searchable.services.term_scorer import ColumnScore, MatchTerm

SELECT = "select"
HAVING = "having"


@dataclass(frozen=True)
class BindingSequence:
    """Values bound to the relevance terms, per clause position."""

    select: tuple[str, ...] = ()
    having: tuple[str, ...] = ()

    def __iter__(self):
        yield from self.select
        yield from self.having

    def __len__(self) -> int:
        return len(self.select) + len(self.having)


@dataclass
class RelevanceScore:
    terms: list[MatchTerm] = field(default_factory=list)
    bindings: list[str] = field(default_factory=list)
    total_weight: float = 0.0
    columns: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.terms

    def sum_expression(self, policy: DialectPolicy, position: str = SELECT) -> ColumnElement:
        """``term1 + term2 + ...`` with bindings named after ``position``."""
        expressions = [
            term.to_expression(policy, f"relevance_{position}_{index}")
            for index, term in enumerate(self.terms)
        ]
        return functools.reduce(operator.add, expressions)

    def relevance_column(self, policy: DialectPolicy) -> ColumnElement:
        # max() keeps the projection valid under GROUP BY
        return func.max(self.sum_expression(policy, SELECT)).label("relevance")

    def binding_sequence(self, policy: DialectPolicy) -> BindingSequence:
        values = tuple(self.bindings)
        if policy.binding_copies > 1:
            return BindingSequence(select=values, having=values)
        return BindingSequence(select=values)


class ScoreAggregator:
    """Accumulates column scores in emission order.

    Columns that contributed no term are ignored, so their weight never
    reaches the default threshold.
    """

    def __init__(self) -> None:
        self._score = RelevanceScore()

    def add(self, column_score: ColumnScore) -> None:
        if not column_score.terms:
            return
        self._score.terms.extend(column_score.terms)
        self._score.bindings.extend(column_score.bindings)
        self._score.total_weight += column_score.weight
        self._score.columns.append(column_score.column)

    def result(self) -> RelevanceScore:
        return self._score
