from contextlib import contextmanager
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from collections.abc import Generator, Iterator
from bookstore.core.config import settings
from bookstore.core.errors import ConflictError, PersistenceError
from bookstore.models.base import Base

engine = create_engine(settings.sqlalchemy_url, pool_pre_ping=True, future=True)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def get_db() -> Generator[Session, None, None]:
    """
    One session per request, closed when the request finishes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    # Register the mapped tables before creating them
    import bookstore.models.author  # noqa: F401
    import bookstore.models.book  # noqa: F401

    Base.metadata.create_all(bind=bind)


def ping(db: Session) -> None:
    with store_errors(db, "reach the database"):
        _ = db.execute(text("SELECT 1"))


@contextmanager
def store_errors(
    db: Session, action: str, conflict: str | None = None
) -> Iterator[None]:
    """
    Roll back and re-raise store failures as PersistenceError.
    Unique index violations become ConflictError when `conflict` is given.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        if conflict is not None:
            raise ConflictError(conflict) from e
        raise PersistenceError(f"Failed to {action}") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"Failed to {action}") from e
