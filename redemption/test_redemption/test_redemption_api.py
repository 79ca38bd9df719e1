# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Tests the http interface of the redemption verifier
"""

import typing

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import common.config as common_conf
import common.db.postgres as db
from redemption.config import RedemptionConfig
import redemption.models as models
import redemption.test_redemption.hard_coded as hc

API_KEY = "test_api_key"
VERIFY_URL = "/redemption/verify"


def _config() -> RedemptionConfig:
    config = RedemptionConfig()
    config.api_key = API_KEY
    config.enable_debug_mode = True
    return config


@pytest.fixture
def client(seeded_session_local: sessionmaker) -> typing.Generator[TestClient, None, None]:
    from redemption.redemption import app

    def t_session() -> typing.Generator[db.Session, None, None]:
        session = seeded_session_local()
        try:
            yield session
        finally:
            session.close()

    config = _config()
    app.dependency_overrides[db.env_session] = t_session
    app.dependency_overrides[RedemptionConfig] = lambda: config
    # Injected config & injected specialized config are not the same override
    app.dependency_overrides[common_conf.Config] = lambda: config
    client = TestClient(app, headers={"x-api-key": API_KEY})
    yield client
    client.close()
    app.dependency_overrides.clear()


@pytest.fixture
def unavailable_db_client() -> typing.Generator[TestClient, None, None]:
    """No database connection could be established"""
    from redemption.redemption import app

    def t_session() -> typing.Generator[None, None, None]:
        yield None

    config = _config()
    app.dependency_overrides[db.env_session] = t_session
    app.dependency_overrides[RedemptionConfig] = lambda: config
    app.dependency_overrides[common_conf.Config] = lambda: config
    client = TestClient(app, headers={"x-api-key": API_KEY})
    yield client
    client.close()
    app.dependency_overrides.clear()


def _verify(client: TestClient, raw_scan: str) -> models.VerificationResult:
    response = client.post(VERIFY_URL, json={"raw_scan": raw_scan})
    assert response.status_code == status.HTTP_200_OK, response.text
    return models.VerificationResult.model_validate_json(response.content)


def test_verify(client: TestClient, seeded_session_local: sessionmaker):
    result = _verify(client, hc.create_scan(expiry_timestamp=hc.NOW_MS * 2))
    assert result.valid, result.error
    assert result.certificate.id == "C1"
    assert result.certificate.status == "ACTIVE"
    assert hc.read_state(seeded_session_local, "C1", "N1") == ("REDEEMED", True)

    # Replay
    result = _verify(client, hc.create_scan(expiry_timestamp=hc.NOW_MS * 2))
    assert not result.valid
    assert result.error == "invalid or used QR code"
    assert result.display_message() == "Verification failed: invalid or used QR code"


@pytest.mark.parametrize(
    "raw_scan,expected_error",
    [
        ("gugus", "invalid format"),
        (hc.create_scan(expiry_timestamp=hc.PAST_MS), "QR code expired"),
        (hc.create_scan(nonce="N2", expiry_timestamp=hc.NOW_MS * 2), "invalid or used QR code"),
        (hc.create_scan(certificate_id="C3", expiry_timestamp=hc.NOW_MS * 2), "certificate not found or already redeemed"),
    ],
)
def test_verify_failed(client: TestClient, seeded_session_local: sessionmaker, raw_scan: str, expected_error: str):
    result = _verify(client, raw_scan)
    assert not result.valid
    assert result.error == expected_error
    assert result.certificate is None
    assert hc.read_state(seeded_session_local, "C1", "N1") == ("ACTIVE", False)


def test_verify_response_format(client: TestClient):
    response = client.post(VERIFY_URL, json={"raw_scan": "gugus"})
    assert response.json() == {"valid": False, "error": "invalid format", "error_code": "invalid_format", "certificate": None}


def test_verify_without_database(unavailable_db_client: TestClient):
    result = _verify(unavailable_db_client, hc.create_scan(expiry_timestamp=hc.NOW_MS * 2))
    assert not result.valid
    assert result.error == "certificate store unavailable"


@pytest.mark.parametrize("headers", [{}, {"x-api-key": "wrong"}], ids=["missing", "wrong"])
def test_api_key_required(client: TestClient, seeded_session_local: sessionmaker, headers: dict):
    # Replaces the default header of the client
    client.headers.pop("x-api-key")
    response = client.post(VERIFY_URL, json={"raw_scan": hc.create_scan(expiry_timestamp=hc.NOW_MS * 2)}, headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED, response.text
    assert hc.read_state(seeded_session_local, "C1", "N1") == ("ACTIVE", False)


def test_invalid_request_body(client: TestClient):
    response = client.post(VERIFY_URL, json={"scan": "gugus"})
    assert response.status_code == 422, response.text


def test_health(client: TestClient):
    for probe in ["liveness", "readiness", "debug"]:
        response = client.get(f"/health/{probe}")
        assert response.status_code == status.HTTP_200_OK, response.text
    assert client.get("/health/readiness").json()["db_connectivity"] == "HEALTHY"
    assert client.get("/health/debug").json()["configuration_redemption_has_minimum_config"] == "HEALTHY"


def test_health_without_database(unavailable_db_client: TestClient):
    response = unavailable_db_client.get("/health/readiness")
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE, response.text
    assert response.json()["db_connectivity"] == "UNHEALTHY"
    assert unavailable_db_client.get("/health/liveness").status_code == status.HTTP_200_OK
