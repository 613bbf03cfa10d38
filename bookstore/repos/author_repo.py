from __future__ import annotations
from collections.abc import Iterable, Mapping
from typing import Any
from sqlalchemy import select
from sqlalchemy.orm import Session

from bookstore.db.session import store_errors
from bookstore.models.author import Author
from bookstore.models.base import utcnow
from bookstore.schemas.author import AuthorCreate
from bookstore.utils.search import contains_ci, normalize


class AuthorRepository:
    """Data access for the authors collection."""

    def __init__(self, db: Session):
        self.db: Session = db

    # Create a new author
    def create(self, data: AuthorCreate) -> Author:
        now = utcnow()
        author = Author(
            **data.model_dump(),
            full_name_key=normalize(data.full_name),
            created_at=now,
            updated_at=now,
        )
        with store_errors(
            self.db,
            "create author",
            conflict=f'Author with name "{data.full_name}" already exists',
        ):
            self.db.add(author)
            self.db.commit()
            self.db.refresh(author)
        return author

    # List authors
    def list(self) -> list[Author]:
        with store_errors(self.db, "find all authors"):
            return list(self.db.scalars(select(Author)).all())

    # Get an author by ID
    def get(self, author_id: str) -> Author | None:
        with store_errors(self.db, "find author by id"):
            return self.db.get(Author, author_id)

    # Get authors by IDs, unknown IDs are skipped
    def get_many(self, author_ids: Iterable[str]) -> list[Author]:
        wanted = list(dict.fromkeys(author_ids))
        if not wanted:
            return []
        with store_errors(self.db, "find authors by ids"):
            found = {
                a.id: a for a in self.db.scalars(select(Author).where(Author.id.in_(wanted)))
            }
        return [found[i] for i in wanted if i in found]

    # Apply a partial update
    def update(self, author_id: str, changes: Mapping[str, Any]) -> Author | None:
        conflict = None
        if "full_name" in changes:
            conflict = f'Author with name "{changes["full_name"]}" already exists'
        with store_errors(self.db, "update author", conflict=conflict):
            author = self.db.get(Author, author_id)
            if author is None:
                return None
            for field, value in changes.items():
                setattr(author, field, value)
            author.full_name_key = normalize(author.full_name)
            author.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(author)
            return author

    # Delete an author
    def delete(self, author_id: str) -> bool:
        with store_errors(self.db, "delete author"):
            author = self.db.get(Author, author_id)
            if author is None:
                return False
            self.db.delete(author)
            self.db.commit()
            return True

    # Author with exactly this full name, ignoring case
    def get_by_full_name(self, full_name: str) -> Author | None:
        stmt = select(Author).where(Author.full_name_key == normalize(full_name))
        with store_errors(self.db, "find author by full name"):
            return self.db.scalars(stmt).first()

    # Authors whose first, last or full name contains `name`
    def find_by_name(self, name: str) -> list[Author]:
        return [
            a for a in self.list()
            if contains_ci(a.first_name, name)
            or contains_ci(a.last_name, name)
            or contains_ci(a.full_name, name)
        ]

    # Authors whose nationality contains `nationality`
    def find_by_nationality(self, nationality: str) -> list[Author]:
        return [a for a in self.list() if contains_ci(a.nationality, nationality)]

    # Authors matching `q` on any name field, biography or nationality
    def search(self, q: str) -> list[Author]:
        """
        Matching is done on case-folded text in Python so non-ASCII
        names compare the same way on every backend.
        """
        return [
            a for a in self.list()
            if any(
                contains_ci(value, q)
                for value in (
                    a.first_name,
                    a.last_name,
                    a.full_name,
                    a.biography,
                    a.nationality,
                )
            )
        ]
