from __future__ import annotations
from collections.abc import Mapping
from typing import Any, cast
from sqlalchemy import select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.orm import Session

from bookstore.db.session import store_errors
from bookstore.models.base import utcnow
from bookstore.models.book import MAX_STOCK, Book
from bookstore.schemas.book import BookCreate
from bookstore.utils.search import equals_ci


class BookRepository:
    """Data access for the books collection."""

    def __init__(self, db: Session):
        self.db: Session = db

    # Create a new book
    def create(self, data: BookCreate) -> Book:
        now = utcnow()
        book = Book(**data.model_dump(), created_at=now, updated_at=now)
        with store_errors(
            self.db,
            "create book",
            conflict=f"Book with ISBN {data.isbn} already exists",
        ):
            self.db.add(book)
            self.db.commit()
            self.db.refresh(book)
        return book

    # List books
    def list(self) -> list[Book]:
        with store_errors(self.db, "find all books"):
            return list(self.db.scalars(select(Book)).all())

    # Get a book by ID
    def get(self, book_id: str) -> Book | None:
        with store_errors(self.db, "find book by id"):
            return self.db.get(Book, book_id)

    # Get a book by exact ISBN
    def get_by_isbn(self, isbn: str) -> Book | None:
        stmt = select(Book).where(Book.isbn == isbn)
        with store_errors(self.db, "find book by isbn"):
            return self.db.scalars(stmt).first()

    # Books whose genre equals `genre`, ignoring case
    def list_by_genre(self, genre: str) -> list[Book]:
        return [b for b in self.list() if equals_ci(b.genre, genre)]

    # Apply a partial update
    def update(self, book_id: str, changes: Mapping[str, Any]) -> Book | None:
        conflict = None
        if "isbn" in changes:
            conflict = f"Book with ISBN {changes['isbn']} already exists"
        with store_errors(self.db, "update book", conflict=conflict):
            book = self.db.get(Book, book_id)
            if book is None:
                return None
            for field, value in changes.items():
                setattr(book, field, value)
            book.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(book)
            return book

    # Delete a book
    def delete(self, book_id: str) -> bool:
        with store_errors(self.db, "delete book"):
            book = self.db.get(Book, book_id)
            if book is None:
                return False
            self.db.delete(book)
            self.db.commit()
            return True

    # Add `delta` to the stock unless the result would leave 0..MAX_STOCK
    def try_adjust_stock(self, book_id: str, delta: int) -> bool:
        """Single conditional UPDATE; False when no row qualified."""
        stmt = (
            update(Book)
            .where(
                Book.id == book_id,
                Book.stock >= -delta,
                Book.stock <= MAX_STOCK - delta,
            )
            .values(
                stock=Book.stock + delta,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        with store_errors(self.db, "update stock"):
            result = cast(CursorResult[Any], self.db.execute(stmt))
            ok = result.rowcount == 1
            self.db.commit()
        return ok
