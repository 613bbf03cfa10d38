from fastapi import APIRouter
from bookstore.api.deps import BookServiceDep
from bookstore.core.errors import ErrorResponse
from bookstore.schemas.book import BookCreate, BookRead, BookUpdate, StockAdjustment
from bookstore.schemas.common import MessageResponse
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)
router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=list[BookRead])
def list_books(books: BookServiceDep):
    return books.list_books()


@router.post(
    "",
    response_model=BookRead,
    status_code=HTTP_201_CREATED,
    responses={
        HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
def create_book(data: BookCreate, books: BookServiceDep):
    return books.create_book(data)


@router.get("/search/{query}", response_model=list[BookRead])
def search_books(query: str, books: BookServiceDep):
    return books.search_books(query)


@router.get("/genre/{genre}", response_model=list[BookRead])
def get_books_by_genre(genre: str, books: BookServiceDep):
    return books.get_books_by_genre(genre)


@router.get("/author/{author}", response_model=list[BookRead])
def get_books_by_author(author: str, books: BookServiceDep):
    return books.get_books_by_author(author)


@router.get(
    "/{book_id}",
    response_model=BookRead,
    responses={HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def get_book(book_id: str, books: BookServiceDep):
    return books.get_book(book_id)


@router.put(
    "/{book_id}",
    response_model=BookRead,
    responses={
        HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
def update_book(book_id: str, data: BookUpdate, books: BookServiceDep):
    return books.update_book(book_id, data)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    responses={HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def delete_book(book_id: str, books: BookServiceDep):
    books.delete_book(book_id)
    return MessageResponse(message="Book deleted successfully")


# Stock adjustment; 400 when the result would be negative
@router.patch(
    "/{book_id}/stock",
    response_model=BookRead,
    responses={
        HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
def update_stock(book_id: str, data: StockAdjustment, books: BookServiceDep):
    return books.update_stock(book_id, data.quantity)
