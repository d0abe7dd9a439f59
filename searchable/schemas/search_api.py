from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SearchResponse(BaseModel):
    resource: str
    query: str
    count: int
    results: list[dict[str, Any]] = Field(default_factory=list)
