"""Searchable FastAPI application.

Serves relevance-ranked search over the models registered with
``searchable.routers.search.register_searchable``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from searchable.core.config import settings
from searchable.routers import search


def create_app() -> FastAPI:
    app = FastAPI(
        title="Searchable",
        version="0.1.0",
        description="Relevance-ranked full-text search over relational tables.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(search.router)

    return app


app = create_app()
