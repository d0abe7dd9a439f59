"""Weighted match terms for a single column.

Every admitted word produces one term per match tier::

    (case when LOWER(column) LIKE ? then weight * multiplier else 0 end)

and the value bound to ``?`` is the word wrapped in the tier's wildcards.
Terms and bindings are produced in lockstep: the i-th binding belongs to the
i-th term.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import Float, bindparam, case, func, literal_column
from sqlalchemy.sql.elements import ColumnElement

from searchable.core.search_config import TOKEN_TIERS, WHOLE_TEXT_TIERS, MatchTier
from searchable.services.dialect import DialectPolicy


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class MatchTerm:
    column: str
    weight: float
    value: str
    tier: str

    def to_expression(self, policy: DialectPolicy, param_name: str) -> ColumnElement:
        column = func.lower(literal_column(policy.quote_column(self.column)))
        compare = column.op(policy.like_operator, is_comparison=True)(bindparam(param_name, self.value))
        return case(
            (compare, literal_column(format_number(self.weight), Float)),
            else_=literal_column("0", Float),
        )


@dataclass
class ColumnScore:
    column: str
    weight: float
    terms: list[MatchTerm] = field(default_factory=list)
    bindings: list[str] = field(default_factory=list)

    def extend(self, terms: Sequence[MatchTerm], bindings: Sequence[str]) -> None:
        self.terms.extend(terms)
        self.bindings.extend(bindings)


def score_tier(column: str, weight: float, words: Sequence[str], tier: MatchTier) -> tuple[list[MatchTerm], list[str]]:
    terms: list[MatchTerm] = []
    bindings: list[str] = []
    for word in words:
        value = tier.pattern(word)
        terms.append(MatchTerm(column=column, weight=weight * tier.multiplier, value=value, tier=tier.name))
        bindings.append(value)
    return terms, bindings


def score_column(
    column: str,
    weight: float,
    words: Sequence[str],
    *,
    search_text: str,
    entire_text: bool = False,
    entire_text_only: bool = False,
) -> ColumnScore:
    """Build all terms for one column from its admitted words.

    ``search_text`` is the whole normalized query; it is scored as a single
    word when whole-text matching applies (several admitted words, or
    ``entire_text_only``).
    """
    score = ColumnScore(column=column, weight=weight)

    if not entire_text_only:
        for tier in TOKEN_TIERS:
            score.extend(*score_tier(column, weight, words, tier))

    if (entire_text and len(words) > 1) or entire_text_only:
        for tier in WHOLE_TEXT_TIERS:
            score.extend(*score_tier(column, weight, [search_text], tier))

    return score
