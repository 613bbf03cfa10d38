from __future__ import annotations

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from unittest.mock import Mock, patch

from bookstore.core.config import Settings
from bookstore.core.errors import ConflictError, PersistenceError
from bookstore.db.session import SessionLocal, engine, get_db, init_db, ping, store_errors


class TestDatabaseSession:
    """Test database session functionality."""

    def test_session_local_configuration(self):
        """Test that SessionLocal is properly configured."""
        assert hasattr(SessionLocal, '__call__')
        assert SessionLocal.kw.get('autocommit') is False
        assert SessionLocal.kw.get('autoflush') is False

    def test_engine_configuration(self):
        """Test that engine is properly configured."""
        assert engine is not None
        assert engine.url is not None

    @patch('bookstore.db.session.SessionLocal')
    def test_get_db_closes_session(self, mock_session_local):
        """Session is yielded once and closed when the generator finishes."""
        mock_db = Mock(spec=Session)
        mock_session_local.return_value = mock_db

        generator = get_db()
        session = next(generator)

        mock_session_local.assert_called_once()
        assert session == mock_db
        mock_db.close.assert_not_called()

        with pytest.raises(StopIteration):
            next(generator)

        mock_db.close.assert_called_once()

    @patch('bookstore.db.session.SessionLocal')
    def test_get_db_closes_session_on_error(self, mock_session_local):
        """Session is closed even when the request handler fails."""
        mock_db = Mock(spec=Session)
        mock_session_local.return_value = mock_db

        generator = get_db()
        next(generator)

        with pytest.raises(RuntimeError):
            generator.throw(RuntimeError("handler failed"))

        mock_db.close.assert_called_once()

    def test_init_db_creates_tables(self, test_engine):
        tables = set(inspect(test_engine).get_table_names())

        assert {"authors", "books"} <= tables

    def test_init_db_is_idempotent(self, test_engine):
        init_db(test_engine)

        assert "books" in inspect(test_engine).get_table_names()

    def test_ping(self, db_session):
        ping(db_session)

        assert db_session.execute(text("SELECT 1")).scalar() == 1


class TestStoreErrors:
    """Test translation of store failures."""

    def test_passes_through_without_error(self):
        db = Mock(spec=Session)

        with store_errors(db, "load things"):
            pass

        db.rollback.assert_not_called()

    def test_operational_error_becomes_persistence_error(self):
        db = Mock(spec=Session)

        with pytest.raises(PersistenceError, match="Failed to load things") as exc_info:
            with store_errors(db, "load things"):
                raise OperationalError("SELECT", {}, Exception("down"))

        assert exc_info.value.status_code == 500
        db.rollback.assert_called_once()

    def test_integrity_error_with_conflict_message(self):
        db = Mock(spec=Session)

        with pytest.raises(ConflictError, match="already exists"):
            with store_errors(db, "create thing", conflict="Thing already exists"):
                raise IntegrityError("INSERT", {}, Exception("unique"))

        db.rollback.assert_called_once()

    def test_integrity_error_without_conflict_message(self):
        db = Mock(spec=Session)

        with pytest.raises(PersistenceError, match="Failed to create thing"):
            with store_errors(db, "create thing"):
                raise IntegrityError("INSERT", {}, Exception("check"))

    def test_other_exceptions_propagate(self):
        db = Mock(spec=Session)

        with pytest.raises(ValueError):
            with store_errors(db, "load things"):
                raise ValueError("not a store error")

        db.rollback.assert_not_called()


class TestSettings:
    """Test connection settings."""

    def test_url_joins_database_name(self):
        settings = Settings(
            DATABASE_URL="postgresql+psycopg://u:p@db:5432/",
            DATABASE_NAME="bookstore",
        )

        assert settings.sqlalchemy_url == "postgresql+psycopg://u:p@db:5432/bookstore"

    def test_url_without_database_name(self):
        settings = Settings(DATABASE_URL="sqlite://", DATABASE_NAME="")

        assert settings.sqlalchemy_url == "sqlite://"

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "HOST", "API_PREFIX", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.PORT == 3000
        assert settings.HOST == "localhost"
        assert settings.API_PREFIX == "/api"
        assert settings.LOG_LEVEL == "INFO"
