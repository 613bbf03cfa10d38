from __future__ import annotations
from collections.abc import Iterable
from bookstore.core.errors import ConflictError, NotFoundError
from bookstore.core.logging import get_logger
from bookstore.models.author import Author
from bookstore.repos.author_repo import AuthorRepository
from bookstore.schemas.author import AuthorCreate, AuthorUpdate

logger = get_logger(__name__)


class AuthorService:
    """
    Author business rules: full names are unique ignoring case,
    lookups by id raise NotFoundError.
    """

    def __init__(self, repository: AuthorRepository):
        self.repository: AuthorRepository = repository

    # List authors
    def list_authors(self) -> list[Author]:
        return self.repository.list()

    # Get author by ID
    def get_author(self, author_id: str) -> Author:
        author = self.repository.get(author_id)
        if author is None:
            raise NotFoundError("Author not found")
        return author

    # Get authors by IDs, unknown IDs are dropped
    def get_authors_by_ids(self, author_ids: Iterable[str]) -> list[Author]:
        return self.repository.get_many(author_ids)

    # Create author
    def create_author(self, data: AuthorCreate) -> Author:
        self._ensure_full_name_free(data.full_name)
        author = self.repository.create(data)
        logger.info("Created author %s (%s)", author.id, author.full_name)
        return author

    # Update author
    def update_author(self, author_id: str, data: AuthorUpdate) -> Author:
        changes = data.model_dump(exclude_unset=True)
        if changes.get("full_name"):
            self._ensure_full_name_free(changes["full_name"], exclude_id=author_id)

        author = self.repository.update(author_id, changes)
        if author is None:
            raise NotFoundError("Author not found")
        logger.info("Updated author %s (%s)", author.id, ", ".join(sorted(changes)) or "no fields")
        return author

    # Delete author; books referencing it are left untouched
    def delete_author(self, author_id: str) -> None:
        if not self.repository.delete(author_id):
            raise NotFoundError("Author not found")
        logger.info("Deleted author %s", author_id)

    def search_authors(self, query: str) -> list[Author]:
        return self.repository.search(query)

    def get_authors_by_nationality(self, nationality: str) -> list[Author]:
        return self.repository.find_by_nationality(nationality)

    def get_authors_by_name(self, name: str) -> list[Author]:
        return self.repository.find_by_name(name)

    # Existence probe used by the book service
    def validate_author_exists(self, author_id: str) -> bool:
        return self.repository.get(author_id) is not None

    def _ensure_full_name_free(self, full_name: str, exclude_id: str | None = None) -> None:
        existing = self.repository.get_by_full_name(full_name)
        if existing is not None and existing.id != exclude_id:
            logger.warning("Rejected duplicate author name %r", full_name)
            raise ConflictError(f'Author with name "{full_name}" already exists')
