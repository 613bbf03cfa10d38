from __future__ import annotations
from collections.abc import Iterable
from bookstore.core.errors import (
    BusinessRuleError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
)
from bookstore.core.logging import get_logger
from bookstore.models.book import MAX_STOCK, Book
from bookstore.repos.book_repo import BookRepository
from bookstore.schemas.book import BookCreate, BookUpdate
from bookstore.services.author_service import AuthorService
from bookstore.utils.search import contains_ci

logger = get_logger(__name__)


class BookService:
    """
    Book business rules on top of BookRepository.

    Author references are checked against AuthorService at write time
    only; deleting an author later leaves its id on existing books.
    """

    def __init__(self, repository: BookRepository, authors: AuthorService):
        self.repository: BookRepository = repository
        self.authors: AuthorService = authors

    # List books
    def list_books(self) -> list[Book]:
        return self.repository.list()

    # Get book by ID
    def get_book(self, book_id: str) -> Book:
        book = self.repository.get(book_id)
        if book is None:
            raise NotFoundError("Book not found")
        return book

    # Create book
    def create_book(self, data: BookCreate) -> Book:
        self._validate_author_ids(data.author_ids)

        if self.repository.get_by_isbn(data.isbn) is not None:
            logger.warning("Rejected duplicate ISBN %s", data.isbn)
            raise ConflictError(f"Book with ISBN {data.isbn} already exists")

        book = self.repository.create(data)
        logger.info("Created book %s (isbn=%s)", book.id, book.isbn)
        return book

    # Update book
    def update_book(self, book_id: str, data: BookUpdate) -> Book:
        changes = data.model_dump(exclude_unset=True)
        if "author_ids" in changes:
            self._validate_author_ids(changes["author_ids"])

        book = self.repository.update(book_id, changes)
        if book is None:
            raise NotFoundError("Book not found")
        logger.info("Updated book %s (%s)", book.id, ", ".join(sorted(changes)) or "no fields")
        return book

    # Delete book
    def delete_book(self, book_id: str) -> None:
        if not self.repository.delete(book_id):
            raise NotFoundError("Book not found")
        logger.info("Deleted book %s", book_id)

    def search_books(self, query: str) -> list[Book]:
        """
        Books whose title or genre contains `query`, or one of whose
        authors' names does. Authors are only resolved for books that
        did not already match on title/genre.
        """
        matches: list[Book] = []
        for book in self.repository.list():
            if contains_ci(book.title, query) or contains_ci(book.genre, query):
                matches.append(book)
                continue

            authors = self.authors.get_authors_by_ids(book.author_ids)
            if any(
                contains_ci(a.first_name, query)
                or contains_ci(a.last_name, query)
                or contains_ci(a.full_name, query)
                for a in authors
            ):
                matches.append(book)
        return matches

    # Exact genre, ignoring case
    def get_books_by_genre(self, genre: str) -> list[Book]:
        return self.repository.list_by_genre(genre)

    # Books by any author whose name contains `author_name`
    def get_books_by_author(self, author_name: str) -> list[Book]:
        author_ids = {a.id for a in self.authors.get_authors_by_name(author_name)}
        if not author_ids:
            return []
        return [
            book for book in self.repository.list()
            if author_ids.intersection(book.author_ids)
        ]

    def update_stock(self, book_id: str, quantity: int) -> Book:
        """Add `quantity` (may be negative) to the stock of a book."""
        self.get_book(book_id)

        if not self.repository.try_adjust_stock(book_id, quantity):
            book = self.repository.get(book_id)
            # Row vanished between the read and the update
            if book is None:
                raise NotFoundError("Book not found")
            if book.stock + quantity > MAX_STOCK:
                logger.warning("Stock limit exceeded for book %s", book_id)
                raise BusinessRuleError(f"Stock cannot exceed {MAX_STOCK}")
            logger.warning(
                "Insufficient stock for book %s: have %s, adjustment %s",
                book_id, book.stock, quantity,
            )
            raise BusinessRuleError("Insufficient stock")

        logger.info("Adjusted stock of book %s by %s", book_id, quantity)
        return self.get_book(book_id)

    def _validate_author_ids(self, author_ids: Iterable[str]) -> None:
        # Fail fast on the first unknown id, in request order
        for author_id in author_ids:
            if not self.authors.validate_author_exists(author_id):
                raise InvalidRequestError(f"Author with ID {author_id} does not exist")
