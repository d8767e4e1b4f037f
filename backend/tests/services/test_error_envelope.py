"""Error envelope — domain errors rendered by the registered handlers.

Tests cover:
    - ClauseValidationError → 400 with its own message
    - ContractViolationError → 500 with a generic message, internals kept out of the body
    - The internal message still reaches the log
"""

import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from ruliad.api.error_handlers import GENERIC_MESSAGE, register_error_handlers
from ruliad.core.errors import ClauseValidationError, ContractViolationError


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/bad-input")
    async def bad_input():
        raise ClauseValidationError("clause exceeds 5 characters (9)", "clause")

    @app.get("/broken-contract")
    async def broken_contract():
        raise ContractViolationError("expected str, got int", "normalize_clause")

    return app


@pytest.fixture
async def error_client():
    async with AsyncClient(
        transport=ASGITransport(app=_build_app()), base_url="http://test",
    ) as c:
        yield c


async def test_validation_error_keeps_its_message(error_client):
    res = await error_client.get("/bad-input")
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "clause exceeds 5 characters (9)"


async def test_contract_violation_hides_internal_message(error_client, caplog):
    with caplog.at_level(logging.ERROR, logger="ruliad.api.error_handlers"):
        res = await error_client.get("/broken-contract")

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "CONTRACT_VIOLATION"
    assert error["severity"] == "critical"
    assert error["message"] == GENERIC_MESSAGE
    assert "normalize_clause" not in res.text
    assert "expected str, got int" in caplog.text
