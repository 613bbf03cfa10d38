from __future__ import annotations
from bookstore.models.book import Book
from bookstore.schemas.author import AuthorRead
from bookstore.schemas.book import BookRead, BookWithAuthorsRead
from bookstore.services.author_service import AuthorService
from bookstore.services.book_service import BookService


class BookViewService:
    """Read-only views joining books with their resolved authors."""

    def __init__(self, books: BookService, authors: AuthorService):
        self.books: BookService = books
        self.authors: AuthorService = authors

    def list_books_with_authors(self) -> list[BookWithAuthorsRead]:
        return [self._with_authors(book) for book in self.books.list_books()]

    def get_book_with_authors(self, book_id: str) -> BookWithAuthorsRead:
        return self._with_authors(self.books.get_book(book_id))

    def _with_authors(self, book: Book) -> BookWithAuthorsRead:
        # Ids of deleted authors resolve to nothing and are left out
        authors = self.authors.get_authors_by_ids(book.author_ids)
        return BookWithAuthorsRead(
            **BookRead.model_validate(book).model_dump(),
            authors=[AuthorRead.model_validate(a) for a in authors],
        )
