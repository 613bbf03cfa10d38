import os

# Point the application at SQLite before anything imports the settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATABASE_NAME", "")

import pytest
import uuid
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from bookstore.main import app
from bookstore.db.session import get_db, init_db
from bookstore.models.base import Base
from bookstore.repos import AuthorRepository, BookRepository
from bookstore.services.author_service import AuthorService
from bookstore.services.book_service import BookService


@pytest.fixture
def test_engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(test_engine):
    """Create a fresh database session for each test."""
    TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False, future=True)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def test_client(db_session):
    """Create a test client for FastAPI app bound to the test session."""
    def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def author_service(db_session):
    return AuthorService(AuthorRepository(db_session))


@pytest.fixture
def book_service(db_session, author_service):
    return BookService(BookRepository(db_session), author_service)


@pytest.fixture
def sample_author(test_client):
    """Create a sample author through the API."""
    author_data = {
        "firstName": "George",
        "lastName": "Orwell",
        "fullName": "George Orwell",
        "biography": "English novelist and essayist.",
        "birthDate": "1903-06-25",
        "nationality": "British",
        "socialLinks": {"twitter": "@orwell"},
    }

    response = test_client.post("/api/authors", json=author_data)

    assert response.status_code == 201, f"Failed to create sample author: {response.text}"
    return response.json()


@pytest.fixture
def second_author(test_client):
    """A second, unrelated author."""
    author_data = {
        "firstName": "Aldous",
        "lastName": "Huxley",
        "fullName": "Aldous Huxley",
        "nationality": "British",
    }

    response = test_client.post("/api/authors", json=author_data)

    assert response.status_code == 201, f"Failed to create second author: {response.text}"
    return response.json()


@pytest.fixture
def sample_book(test_client, sample_author):
    """Create a sample book through the API."""
    book_data = {
        "title": "1984",
        "authorIds": [sample_author["id"]],
        "isbn": "978-0452284234",
        "price": 15.99,
        "stock": 50,
        "genre": "Dystopian Fiction",
        "publishedDate": "1949-06-08",
    }

    response = test_client.post("/api/books", json=book_data)

    assert response.status_code == 201, f"Failed to create sample book: {response.text}"
    return response.json()


@pytest.fixture
def headers_with_correlation():
    """HTTP headers with correlation ID."""
    return {"X-Request-ID": str(uuid.uuid4())}
