"""
Unit tests for error translation and the error envelope.
"""

from unittest.mock import MagicMock

from app.core.errors import (
    DatabaseError,
    DuplicateEntryError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
    database_error_from,
    error_body,
    map_db_error,
)


def _driver_error(sqlstate: str) -> MagicMock:
    """A SQLAlchemy-style wrapper whose ``orig`` carries a SQLSTATE."""
    exc = MagicMock(spec=["orig"])
    exc.orig = MagicMock(spec=["sqlstate"])
    exc.orig.sqlstate = sqlstate
    return exc


class TestDomainErrors:
    """Tests for the service exception hierarchy."""

    def test_validation_error_is_400(self):
        error = ValidationError("bad input", details={"field": "title"})
        assert error.status_code == 400
        assert error.error_code == "VALIDATION_ERROR"
        assert error.details == {"field": "title"}

    def test_not_found_defaults_to_db_code(self):
        error = NotFoundError("Module not found")
        assert error.status_code == 404
        assert error.error_code == "DB_NOT_FOUND"

    def test_not_found_accepts_custom_code(self):
        error = NotFoundError("Student not found", error_code="NOT_FOUND")
        assert error.error_code == "NOT_FOUND"

    def test_duplicate_entry_is_400(self):
        error = DuplicateEntryError("exists")
        assert error.status_code == 400
        assert error.error_code == "DB_DUPLICATE_ENTRY"

    def test_forbidden_is_403(self):
        error = ForbiddenError()
        assert error.status_code == 403
        assert error.error_code == "AUTH_FORBIDDEN"


class TestMapDbError:
    """Tests for driver failure translation."""

    def test_unique_violation(self):
        assert map_db_error(_driver_error("23505")) == ("DB_DUPLICATE_ENTRY", 400)

    def test_foreign_key_violation(self):
        assert map_db_error(_driver_error("23503")) == ("DB_FOREIGN_KEY_VIOLATION", 400)

    def test_deadlock_is_unavailable(self):
        assert map_db_error(_driver_error("40P01")) == ("DB_DEADLOCK", 503)

    def test_unknown_sqlstate_falls_back(self):
        assert map_db_error(_driver_error("99999")) == ("DB_QUERY_ERROR", 500)

    def test_connection_refused(self):
        assert map_db_error(ConnectionRefusedError()) == ("DB_CONNECTION_ERROR", 503)

    def test_timeout(self):
        assert map_db_error(TimeoutError()) == ("DB_CONNECTION_TIMEOUT", 503)

    def test_error_without_sqlstate(self):
        assert map_db_error(RuntimeError("boom")) == ("DB_QUERY_ERROR", 500)

    def test_database_error_from_uses_message_table(self):
        error = database_error_from(_driver_error("22001"))
        assert isinstance(error, DatabaseError)
        assert error.error_code == "DB_DATA_TOO_LONG"
        assert error.message == "A field value is too long"
        assert error.status_code == 400


class TestErrorBody:
    """Tests for the error envelope."""

    def test_body_without_details(self):
        body = error_body("NOT_FOUND", "Missing")
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["error"]["message"] == "Missing"
        assert "timestamp" in body["error"]
        assert "details" not in body["error"]

    def test_body_with_details(self):
        body = error_body("VALIDATION_ERROR", "Bad", details=[{"loc": ["title"]}])
        assert body["error"]["details"] == [{"loc": ["title"]}]
