"""Application configuration for Searchable.

Configuration is loaded from environment variables (or a local ``.env`` file),
so the same package can be embedded in a larger service or run standalone.
"""

from sqlalchemy.engine import make_url
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite:///./searchable.db"

    # Overrides the dialect derived from database_url (e.g. "pgsql", "mysql").
    search_dialect: str | None = None
    table_prefix: str = ""

    cors_origins: list[str] = ["http://localhost:3000"]

    @property
    def dialect_name(self) -> str:
        if self.search_dialect:
            return self.search_dialect.strip().lower()
        return make_url(self.database_url).get_backend_name()


settings = Settings()
