from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from searchable.models.searchable import SearchableMixin


class SearchRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _statement(
        self,
        model: type[SearchableMixin],
        query: str | None,
        *,
        threshold: float | None,
        entire_text: bool,
        entire_text_only: bool,
        limit: Optional[int],
        offset: Optional[int],
    ) -> Select:
        base = select(model.__table__)
        if limit is not None:
            base = base.limit(limit)
        if offset:
            base = base.offset(offset)

        return model.search(
            query,
            threshold,
            entire_text,
            entire_text_only,
            base=base,
            bind=self.db.get_bind(),
        )

    def search(
        self,
        model: type[SearchableMixin],
        query: str | None,
        *,
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        stmt = self._statement(
            model,
            query,
            threshold=threshold,
            entire_text=entire_text,
            entire_text_only=entire_text_only,
            limit=limit,
            offset=offset,
        )
        rows = self.db.execute(stmt).mappings().all()
        return [dict(r) for r in rows]
