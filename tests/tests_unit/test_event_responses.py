"""Unit tests for response shaping: CORS headers and Decimal-aware JSON."""

import json
from decimal import Decimal

import pytest

from backend.Events.responses import DecimalEncoder, cors_headers, json_response, preflight_response


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("DEFAULT_ORIGIN", raising=False)


def test_decimal_encoder():
    encoded = json.dumps({"a": Decimal("12"), "b": Decimal("4.5"), "c": [Decimal("0")]}, cls=DecimalEncoder)

    assert json.loads(encoded) == {"a": 12, "b": 4.5, "c": [0]}
    assert '"a": 12,' in encoded


def test_decimal_encoder_rejects_unknown_types():
    with pytest.raises(TypeError):
        json.dumps({"a": object()}, cls=DecimalEncoder)


@pytest.mark.parametrize("headers", [{"origin": "https://a.example"}, {"Origin": "https://a.example"}])
def test_cors_origin_lookup_is_case_insensitive(headers):
    assert cors_headers({"headers": headers})["Access-Control-Allow-Origin"] == "https://a.example"


def test_cors_default_origin(monkeypatch):
    assert cors_headers({"headers": None})["Access-Control-Allow-Origin"] == "http://localhost:3000"

    monkeypatch.setenv("DEFAULT_ORIGIN", "https://prod.example")
    assert cors_headers({})["Access-Control-Allow-Origin"] == "https://prod.example"


def test_cors_header_set():
    headers = cors_headers({})

    assert headers["Access-Control-Allow-Methods"] == "OPTIONS,GET,PUT,POST,DELETE"
    assert headers["Access-Control-Allow-Credentials"] == "true"
    assert headers["Access-Control-Max-Age"] == "86400"
    assert "Authorization" in headers["Access-Control-Allow-Headers"]


def test_json_response():
    resp = json_response(201, {"n": Decimal("3")}, {"headers": {"origin": "https://a.example"}})

    assert resp["statusCode"] == 201
    assert resp["headers"]["Content-Type"] == "application/json"
    assert json.loads(resp["body"]) == {"n": 3}


def test_preflight_response_has_no_body():
    resp = preflight_response({})

    assert resp == {"statusCode": 200, "headers": cors_headers({}), "body": ""}

