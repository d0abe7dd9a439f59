from __future__ import annotations


class SearchError(Exception):
    """Base class for search compilation errors."""


class SearchConfigurationError(SearchError, ValueError):
    """The searchable configuration cannot produce a query.

    Raised for malformed admission patterns and for tables whose columns or
    key cannot be determined.
    """


class UnknownResourceError(SearchError, LookupError):
    pass
