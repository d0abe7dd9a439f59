"""Search entry points for declarative models.

A model opts in by mixing in ``SearchableMixin`` and describing its search
configuration::

    class User(SearchableMixin, Base):
        __tablename__ = "users"
        __searchable__ = {
            "columns": {"users.name": 10, "users.email": 5, "posts.title": 2},
            "conditions": {"users.name": r"[a-z]{3,}"},
            "joins": {"posts": ["users.id", "posts.user_id"]},
        }

    stmt = User.search("john doe")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Optional

from sqlalchemy import Select
from sqlalchemy.engine import Connection, Engine

from searchable.schemas.search_spec import SearchSpec
from searchable.services.search_service import CompiledSearch, Restriction, SearchCompiler


class SearchableMixin:
    __searchable__: ClassVar[SearchSpec | Mapping[str, Any] | None] = None

    @classmethod
    def search_compiler(
        cls,
        *,
        dialect: Optional[str] = None,
        bind: Engine | Connection | None = None,
    ) -> SearchCompiler:
        return SearchCompiler(cls.__table__, cls.__searchable__, dialect=dialect, bind=bind)

    @classmethod
    def search(
        cls,
        query: str | None,
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
        *,
        base: Optional[Select] = None,
        dialect: Optional[str] = None,
        bind: Engine | Connection | None = None,
    ) -> Select:
        return cls.search_compiler(dialect=dialect, bind=bind).search(
            query, threshold, entire_text, entire_text_only, base=base
        )

    @classmethod
    def search_restricted(
        cls,
        query: str | None,
        restriction: Optional[Restriction],
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
        *,
        base: Optional[Select] = None,
        dialect: Optional[str] = None,
        bind: Engine | Connection | None = None,
    ) -> Select:
        return cls.search_compiler(dialect=dialect, bind=bind).search_restricted(
            query, restriction, threshold, entire_text, entire_text_only, base=base
        )

    @classmethod
    def compile_search(
        cls,
        query: str | None,
        *,
        dialect: Optional[str] = None,
        bind: Engine | Connection | None = None,
        **options: Any,
    ) -> CompiledSearch | None:
        return cls.search_compiler(dialect=dialect, bind=bind).compile(query, **options)
