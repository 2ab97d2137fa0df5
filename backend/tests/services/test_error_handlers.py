"""Error handler and DB failure mapping tests."""

import json

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from starlette.requests import Request

from songquiz.api.error_handlers import handle_quiz_error, handle_unexpected_error
from songquiz.core.errors import ErrorCode, ErrorContext, QuizNotOpenError
from songquiz.infrastructure.database import to_database_error


def _request(path: str = "/api/v1/quizzes/1") -> Request:
    return Request({
        "type": "http", "method": "POST", "path": path,
        "headers": [], "query_string": b"",
    })


async def test_quiz_error_uses_its_status_and_envelope():
    exc = QuizNotOpenError("closed", ErrorContext(quiz_id=1, user_id="bob"))
    resp = await handle_quiz_error(_request(), exc)
    body = json.loads(resp.body)
    assert resp.status_code == 409
    assert body["error"]["code"] == "QUIZ_NOT_OPEN"
    assert body["error"]["context"]["quiz_id"] == 1


async def test_unexpected_error_hides_details():
    resp = await handle_unexpected_error(_request(), RuntimeError("secret dsn"))
    body = json.loads(resp.body)
    assert resp.status_code == 500
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in resp.body.decode()


def test_database_failures_map_by_kind():
    integrity = to_database_error(IntegrityError("INSERT", {}, Exception("dup")))
    operational = to_database_error(OperationalError("SELECT", {}, Exception("down")))
    generic = to_database_error(SQLAlchemyError("weird"))
    assert integrity.operation == "commit"
    assert operational.operation == "execute"
    assert generic.operation == "unknown"
    assert {integrity.code, operational.code, generic.code} == {ErrorCode.DATABASE_ERROR}
    assert "dup" not in integrity.message
