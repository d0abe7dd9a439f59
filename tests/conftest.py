from __future__ import annotations

import pytest
from sqlalchemy import ForeignKey, Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column
from sqlalchemy.pool import StaticPool

from searchable.models.searchable import SearchableMixin


class Base(DeclarativeBase):
    pass


class User(SearchableMixin, Base):
    __tablename__ = "users"
    __searchable__ = {
        "columns": {"name": 10, "email": 5},
        "conditions": {"name": "[a-zA-Z]{3,}"},
    }

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False)


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    published: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class Author(SearchableMixin):
    """The users table, searched together with the titles of its posts."""

    __table__ = User.__table__
    __searchable__ = {
        "columns": {"users.name": 10, "posts.title": 5},
        "joins": {"posts": ["users.id", "posts.user_id"]},
    }


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        session.add_all(
            [
                User(id=1, name="Bob Smith", email="bob@example.com"),
                User(id=2, name="Alice", email="al1967@x.org"),
                User(id=3, name="Zed", email="zed@z.com"),
                Post(id=1, user_id=1, title="Python tips", published=1),
                Post(id=2, user_id=1, title="Rust", published=1),
                Post(id=3, user_id=2, title="Cooking", published=0),
            ]
        )
        session.commit()
        yield session
