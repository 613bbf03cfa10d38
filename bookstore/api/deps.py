from typing import Annotated
from fastapi import Depends
from sqlalchemy.orm import Session

from bookstore.db.session import get_db
from bookstore.repos import AuthorRepository, BookRepository
from bookstore.services.author_service import AuthorService
from bookstore.services.book_service import BookService
from bookstore.services.book_view_service import BookViewService

DbSession = Annotated[Session, Depends(get_db)]


def get_author_service(db: DbSession) -> AuthorService:
    return AuthorService(AuthorRepository(db))


def get_book_service(
    db: DbSession,
    authors: Annotated[AuthorService, Depends(get_author_service)],
) -> BookService:
    return BookService(BookRepository(db), authors)


def get_book_view_service(
    books: Annotated[BookService, Depends(get_book_service)],
    authors: Annotated[AuthorService, Depends(get_author_service)],
) -> BookViewService:
    return BookViewService(books, authors)


AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
BookViewServiceDep = Annotated[BookViewService, Depends(get_book_view_service)]
