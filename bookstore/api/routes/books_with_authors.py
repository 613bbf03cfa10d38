from fastapi import APIRouter
from bookstore.api.deps import BookViewServiceDep
from bookstore.core.errors import ErrorResponse
from bookstore.schemas.book import BookWithAuthorsRead
from starlette.status import HTTP_404_NOT_FOUND

router = APIRouter(prefix="/books-with-authors", tags=["books"])


@router.get("", response_model=list[BookWithAuthorsRead])
def list_books_with_authors(views: BookViewServiceDep):
    return views.list_books_with_authors()


@router.get(
    "/{book_id}",
    response_model=BookWithAuthorsRead,
    responses={HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def get_book_with_authors(book_id: str, views: BookViewServiceDep):
    return views.get_book_with_authors(book_id)
