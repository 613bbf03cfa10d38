from fastapi import APIRouter
from bookstore.api.deps import AuthorServiceDep
from bookstore.core.errors import ErrorResponse
from bookstore.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from bookstore.schemas.common import MessageResponse
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)
router = APIRouter(prefix="/authors", tags=["authors"])


@router.get("", response_model=list[AuthorRead])
def list_authors(authors: AuthorServiceDep):
    return authors.list_authors()


@router.post(
    "",
    response_model=AuthorRead,
    status_code=HTTP_201_CREATED,
    responses={
        HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
def create_author(data: AuthorCreate, authors: AuthorServiceDep):
    return authors.create_author(data)


@router.get("/search/{query}", response_model=list[AuthorRead])
def search_authors(query: str, authors: AuthorServiceDep):
    return authors.search_authors(query)


@router.get("/nationality/{nationality}", response_model=list[AuthorRead])
def get_authors_by_nationality(nationality: str, authors: AuthorServiceDep):
    return authors.get_authors_by_nationality(nationality)


@router.get("/name/{name}", response_model=list[AuthorRead])
def get_authors_by_name(name: str, authors: AuthorServiceDep):
    return authors.get_authors_by_name(name)


@router.get(
    "/{author_id}",
    response_model=AuthorRead,
    responses={HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def get_author(author_id: str, authors: AuthorServiceDep):
    return authors.get_author(author_id)


@router.put(
    "/{author_id}",
    response_model=AuthorRead,
    responses={
        HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
def update_author(author_id: str, data: AuthorUpdate, authors: AuthorServiceDep):
    return authors.update_author(author_id, data)


@router.delete(
    "/{author_id}",
    response_model=MessageResponse,
    responses={HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def delete_author(author_id: str, authors: AuthorServiceDep):
    authors.delete_author(author_id)
    return MessageResponse(message="Author deleted successfully")
