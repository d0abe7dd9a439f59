from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import Select, Table, select
from sqlalchemy.engine import Connection, Engine

from searchable.core.config import settings
from searchable.core.search_config import search_tuning
from searchable.schemas.search_spec import SearchSpec
from searchable.services.dialect import DialectPolicy
from searchable.services.query_assembler import QueryAssembler
from searchable.services.schema import TableSchema
from searchable.services.score_aggregator import BindingSequence, ScoreAggregator
from searchable.services.search_normalization import normalize_query, tokenize
from searchable.services.term_scorer import score_column
from searchable.services.word_filter import filter_words

logger = logging.getLogger(__name__)

Restriction = Callable[[Select], Select]


@dataclass(frozen=True)
class CompiledSearch:
    statement: Select
    scored: Select | None
    bindings: BindingSequence
    threshold: float | None
    total_weight: float
    columns: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        """True when no column admitted any word: the statement matches nothing."""
        return self.scored is None


class SearchCompiler:
    """Compiles a free-text query into a relevance-ranked select over ``table``.

    The compiler holds only read-only configuration; every call starts from a
    fresh aggregator and a copy of the base select, so one instance can serve
    any number of searches.
    """

    def __init__(
        self,
        table: Table | str,
        spec: SearchSpec | Mapping[str, Any] | None = None,
        *,
        dialect: str | DialectPolicy | None = None,
        prefix: str | None = None,
        bind: Engine | Connection | None = None,
    ) -> None:
        self.spec = SearchSpec.coerce(spec)
        self.policy = self._resolve_policy(dialect, bind)
        self.schema = TableSchema.from_table(
            table,
            prefix=settings.table_prefix if prefix is None else prefix,
            bind=bind,
        )
        self.assembler = QueryAssembler(self.schema, self.spec, self.policy)

    @staticmethod
    def _resolve_policy(dialect: str | DialectPolicy | None, bind: Engine | Connection | None) -> DialectPolicy:
        if isinstance(dialect, DialectPolicy):
            return dialect
        if dialect:
            return DialectPolicy.for_name(dialect)
        if bind is not None:
            return DialectPolicy.for_bind(bind)
        return DialectPolicy.for_name(settings.dialect_name)

    @property
    def table(self) -> Table:
        return self.schema.table

    def base_query(self) -> Select:
        return select(self.schema.table)

    def compile(
        self,
        query: str | None,
        *,
        base: Optional[Select] = None,
        restriction: Optional[Restriction] = None,
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
    ) -> CompiledSearch | None:
        """Build the scored statement, or return None for a blank query."""
        if base is None:
            base = self.base_query()

        search_text = normalize_query(query)
        if not search_text:
            return None

        words = tokenize(search_text)
        aggregator = ScoreAggregator()
        for column in self.schema.search_columns(self.spec):
            admitted = filter_words(column.key, self.spec.conditions, words)
            if not admitted:
                continue
            aggregator.add(
                score_column(
                    column.identifier,
                    column.weight,
                    admitted,
                    search_text=search_text,
                    entire_text=entire_text,
                    entire_text_only=entire_text_only,
                )
            )
        score = aggregator.result()

        if score.is_empty:
            logger.debug("search %r: no column admits any word of %s", search_text, words)
            return CompiledSearch(
                statement=self.assembler.empty_result(base),
                scored=None,
                bindings=BindingSequence(),
                threshold=None,
                total_weight=0.0,
                columns=(),
            )

        resolved_threshold = self.assembler.resolve_threshold(threshold, score.total_weight)
        logger.debug(
            "search %r: words=%s columns=%s total_weight=%s threshold=%.2f dialect=%s",
            search_text,
            words,
            score.columns,
            score.total_weight,
            resolved_threshold,
            self.policy.name,
        )

        scored = self.assembler.assemble(score, resolved_threshold)
        if restriction is not None:
            scored = restriction(scored)
        statement = self.assembler.merge(scored, base)

        compiled = CompiledSearch(
            statement=statement,
            scored=scored,
            bindings=score.binding_sequence(self.policy),
            threshold=resolved_threshold,
            total_weight=score.total_weight,
            columns=tuple(score.columns),
        )
        if search_tuning.debug_sql:
            self._log_stmt_debug(compiled)
        return compiled

    def search(
        self,
        query: str | None,
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
        *,
        base: Optional[Select] = None,
    ) -> Select:
        return self.search_restricted(
            query,
            None,
            threshold,
            entire_text,
            entire_text_only,
            base=base,
        )

    def search_restricted(
        self,
        query: str | None,
        restriction: Optional[Restriction],
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
        *,
        base: Optional[Select] = None,
    ) -> Select:
        """Scored select for ``query``; ``base`` is returned untouched for a blank query.

        ``restriction`` receives the private scored select before it is merged
        into ``base`` and must return a select of the same shape.
        """
        if base is None:
            base = self.base_query()
        compiled = self.compile(
            query,
            base=base,
            restriction=restriction,
            threshold=threshold,
            entire_text=entire_text,
            entire_text_only=entire_text_only,
        )
        if compiled is None:
            return base
        return compiled.statement

    def _log_stmt_debug(self, compiled: CompiledSearch) -> None:
        try:
            logger.warning(
                "searchable.compile sql=%s bindings=%s",
                str(compiled.statement),
                list(compiled.bindings),
            )
        except Exception:
            logger.exception("searchable.compile failed to render debug SQL")
