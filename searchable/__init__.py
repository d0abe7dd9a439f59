"""Relevance-ranked full-text search over SQLAlchemy selects."""

from searchable.core.exceptions import SearchConfigurationError, SearchError
from searchable.models.searchable import SearchableMixin
from searchable.schemas.search_spec import JoinSpec, SearchSpec
from searchable.services.search_service import CompiledSearch, SearchCompiler

__all__ = [
    "CompiledSearch",
    "JoinSpec",
    "SearchCompiler",
    "SearchConfigurationError",
    "SearchError",
    "SearchSpec",
    "SearchableMixin",
]
