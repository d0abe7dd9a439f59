from searchable.models.searchable import SearchableMixin

__all__ = ["SearchableMixin"]
