"""Boundary Error Translators — malformed bodies and path ids never reach the store.

Invariants:
    - Invalid JSON on any JSON route → 400 {"message": str}
    - Non-numeric or out-of-range path id → 400 {"message": str}
    - The worker pool receives no message for either failure
    - Each failure is reported to the observability sink at error severity,
      after the response is built
"""

import pytest
from fastapi import FastAPI
from starlette.requests import Request

from dziennik.api.error_handlers import (
    describe_errors, json_error_handler, path_error_handler,
)
from dziennik.core.errors import ErrorSeverity

BROKEN_JSON = b'{"first_name": "Ala", "last_name": '
VALID_STUDENT = {"first_name": "Ala", "last_name": "Kot"}


@pytest.mark.parametrize("method,url", [
    ("POST", "/api/students"),
    ("PUT", "/api/students/1"),
    ("POST", "/api/login"),
])
async def test_invalid_json_body_returns_400_without_store_call(
    client, worker_pool, method, url,
):
    res = await client.request(
        method, url, content=BROKEN_JSON,
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    body = res.json()
    assert set(body) == {"message"}
    assert body["message"].startswith("Json deserialize error:")
    assert worker_pool.sent == []


async def test_missing_required_field_is_a_body_error(client, worker_pool):
    res = await client.post("/api/students", json={"first_name": "Ala"})
    assert res.status_code == 400
    assert "last_name" in res.json()["message"]
    assert worker_pool.sent == []


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
async def test_non_numeric_path_id_returns_400_without_store_call(
    client, worker_pool, method,
):
    kwargs = {"json": VALID_STUDENT} if method == "PUT" else {}
    res = await client.request(method, "/api/students/abc", **kwargs)
    assert res.status_code == 400
    body = res.json()
    assert set(body) == {"message"}
    assert body["message"].startswith("Invalid path parameter:")
    assert "student_id" in body["message"]
    assert worker_pool.sent == []


@pytest.mark.parametrize("student_id", ["99999999999", "-99999999999", "2147483648", "-2147483649"])
async def test_out_of_range_path_id_returns_400(client, worker_pool, student_id):
    res = await client.delete(f"/api/students/{student_id}")
    assert res.status_code == 400
    assert res.json()["message"].startswith("Invalid path parameter:")
    assert worker_pool.sent == []


async def test_boundary_path_ids_reach_the_store(client, worker_pool):
    for student_id in ("2147483647", "-2147483648"):
        res = await client.delete(f"/api/students/{student_id}")
        assert res.json()["message"].startswith("No student with id")
    assert len(worker_pool.sent) == 2


async def test_bad_path_wins_over_bad_body(client):
    res = await client.request(
        "PUT", "/api/students/abc", json={"first_name": "Ala"},
    )
    assert res.status_code == 400
    assert res.json()["message"].startswith("Invalid path parameter:")


async def test_decode_errors_are_reported_to_sink(client, reporter):
    await client.delete("/api/students/abc")
    await client.post(
        "/api/students", content=BROKEN_JSON,
        headers={"Content-Type": "application/json"},
    )

    assert len(reporter.events) == 2
    (path_msg, path_sev, path_url), (body_msg, body_sev, body_url) = reporter.events
    assert path_sev == ErrorSeverity.ERROR
    assert body_sev == ErrorSeverity.ERROR
    assert path_url == "/api/students/abc"
    assert body_url == "/api/students"
    assert path_msg.startswith("Invalid path parameter:")
    assert body_msg.startswith("Json deserialize error:")


async def test_business_outcomes_are_not_reported(client, reporter):
    await client.delete("/api/students/7")
    assert reporter.events == []


# -- describe_errors -----------------------------------------------------------

def test_describe_errors_joins_field_and_message():
    errors = [
        {"type": "missing", "loc": ("body", "last_name"), "msg": "Field required"},
        {"type": "string_too_long", "loc": ("body", "class_name"), "msg": "String should have at most 20 characters"},
    ]
    assert describe_errors(errors) == (
        "last_name: Field required; class_name: String should have at most 20 characters"
    )


def test_describe_errors_json_invalid_includes_position_and_reason():
    errors = [{
        "type": "json_invalid", "loc": ("body", 36), "msg": "JSON decode error",
        "ctx": {"error": "Expecting value"},
    }]
    assert describe_errors(errors) == "JSON decode error (Expecting value) at position 36"


def test_describe_errors_whole_body_error_has_no_field():
    errors = [{"type": "missing", "loc": ("body",), "msg": "Field required"}]
    assert describe_errors(errors) == "Field required"


def test_describe_errors_empty():
    assert describe_errors([]) == "invalid request"


# -- Sink delivery -------------------------------------------------------------

async def test_translator_response_does_not_wait_for_sink(reporter):
    app = FastAPI()
    app.state.error_reporter = reporter
    request = Request({
        "type": "http", "method": "POST", "path": "/api/students",
        "headers": [], "query_string": b"", "app": app,
    })
    errors = [{"type": "missing", "loc": ("body", "last_name"), "msg": "Field required"}]

    res = await json_error_handler(request, errors)

    assert res.status_code == 400
    assert reporter.events == []
    await res.background()
    assert reporter.events == [(
        "Json deserialize error: last_name: Field required",
        ErrorSeverity.ERROR, "/api/students",
    )]


async def test_translator_without_reporter_has_no_background():
    request = Request({
        "type": "http", "method": "DELETE", "path": "/api/students/abc",
        "headers": [], "query_string": b"", "app": FastAPI(),
    })
    res = await path_error_handler(request, [])
    assert res.status_code == 400
    assert res.background is None
