# mypy: ignore-errors
"""Tests for error responses and the database CLI."""

import logging

from fastapi import status
from sqlalchemy.exc import OperationalError

from akorfa.scripts import init_db


def test_store_failure_is_reported_as_500(client, make_profile, mocker, caplog) -> None:
    member = make_profile()
    mocker.patch(
        "akorfa.api.v1.endpoints.gifts.gift_stats",
        side_effect=OperationalError("SELECT 1", {}, Exception("database is locked")),
    )

    with caplog.at_level(logging.ERROR, logger="akorfa.main"):
        response = client.get(f"/api/v1/gifts/{member.id}")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Ledger store unavailable"}
    assert "Ledger store failure" in caplog.text


def test_rejections_are_logged(client, make_profile, caplog) -> None:
    member = make_profile()

    with caplog.at_level(logging.WARNING, logger="akorfa.main"):
        client.post("/api/v1/payouts", json={"userId": str(member.id), "pointsToConvert": 1000})

    assert "NotEligibleError" in caplog.text


def test_init_db_create_and_drop(mocker) -> None:
    create = mocker.patch.object(init_db, "create_tables")
    drop = mocker.patch.object(init_db, "drop_tables")

    assert init_db.main(["create"]) == 0
    assert init_db.main(["drop"]) == 0
    create.assert_called_once_with()
    drop.assert_called_once_with()


def test_init_db_ensure_rejects_non_postgres_url() -> None:
    assert init_db.main(["ensure", "--url", "sqlite:///./akorfa.db"]) == 1


def test_normalize_to_psycopg() -> None:
    assert (
        init_db.normalize_to_psycopg("'postgresql+psycopg://app:pw@db:5432/akorfa'")
        == "postgresql://app:pw@db:5432/akorfa"
    )


def test_error_body_is_documented(client) -> None:
    schema = client.get("/openapi.json").json()
    responses = schema["paths"]["/api/v1/gifts"]["post"]["responses"]

    for code in ("400", "404", "500"):
        ref = responses[code]["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ErrorResponse")
    assert schema["components"]["schemas"]["ErrorResponse"]["required"] == ["error"]
