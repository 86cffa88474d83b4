from __future__ import annotations

import asyncio
import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from throwif import argument
from throwif.errors import (
    ArgumentNullError,
    ArgumentOutOfRangeError,
    CaptureShapeError,
)
from throwif.handlers import guard_exception_handler, install_handlers


def _make_request(path: str) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": path,
        "headers": [],
    }
    return Request(scope)


def test_argument_error_renders_422() -> None:
    req = _make_request("/api/v1/orders")
    exc = ArgumentOutOfRangeError(
        "quantity is lower than zero.", param_name="quantity", actual_value=-2
    )
    resp = asyncio.run(guard_exception_handler(req, exc))
    assert resp.status_code == 422
    body = json.loads(bytes(resp.body))
    assert body["error"] == "quantity is lower than zero."
    assert body["code"] == "ARGUMENT_OUT_OF_RANGE"
    assert body["details"] == {"param_name": "quantity", "actual_value": "-2"}


def test_null_error_has_no_actual_value() -> None:
    req = _make_request("/api/v1/orders")
    exc = ArgumentNullError("customer is None.", param_name="customer")
    resp = asyncio.run(guard_exception_handler(req, exc))
    body = json.loads(bytes(resp.body))
    assert body["code"] == "ARGUMENT_NULL"
    assert body["details"] == {"param_name": "customer"}


def test_misuse_renders_500_without_leaking_message() -> None:
    req = _make_request("/api/v1/orders")
    exc = CaptureShapeError("Reference <lambda> must return a single variable")
    resp = asyncio.run(guard_exception_handler(req, exc))
    assert resp.status_code == 500
    body = json.loads(bytes(resp.body))
    assert body["code"] == "CAPTURE_SHAPE"
    assert body["error"] == "Internal server error"
    assert body["details"] is None


def test_non_guard_errors_are_reraised() -> None:
    req = _make_request("/api/v1/orders")
    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(guard_exception_handler(req, RuntimeError("boom")))


def test_installed_handler_end_to_end() -> None:
    app = FastAPI()
    install_handlers(app)

    @app.get("/api/v1/items")
    async def list_items(limit: int = 10) -> dict[str, int]:
        argument.is_greater_than(lambda: limit, 100)
        return {"limit": limit}

    client = TestClient(app)
    ok = client.get("/api/v1/items", params={"limit": 5})
    assert ok.status_code == 200
    assert ok.json() == {"limit": 5}

    rejected = client.get("/api/v1/items", params={"limit": 500})
    assert rejected.status_code == 422
    payload = rejected.json()
    assert payload["code"] == "ARGUMENT_OUT_OF_RANGE"
    assert payload["error"] == "limit is greater than 100."
    assert payload["details"]["param_name"] == "limit"
