# mypy: ignore-errors
"""Tests for profile, wallet and payout endpoints."""

import uuid

from fastapi import status


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_register_and_read_profile(client) -> None:
    response = client.post("/api/v1/profiles", json={"username": "ama", "fullName": "Ama Mensah"})
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["username"] == "ama"
    assert data["fullName"] == "Ama Mensah"
    assert data["totalXp"] == 0

    fetched = client.get(f"/api/v1/profiles/{data['id']}")
    assert fetched.status_code == status.HTTP_200_OK
    assert fetched.json()["id"] == data["id"]


def test_duplicate_username_is_rejected(client, make_profile) -> None:
    make_profile("kofi")
    response = client.post("/api/v1/profiles", json={"username": "kofi"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Username already taken"}


def test_unknown_profile_is_404(client) -> None:
    response = client.get(f"/api/v1/profiles/{uuid.uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Profile not found"}


def test_malformed_uuid_is_422(client) -> None:
    response = client.get("/api/v1/wallet/not-a-uuid")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_wallet_summary(client, make_profile) -> None:
    member = make_profile(points=2500, followers=700)

    response = client.get(f"/api/v1/wallet/{member.id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["wallet"]["pointsBalance"] == 2500
    assert data["wallet"]["canMonetize"] is True
    assert data["cashValue"] == "2.50"
    assert data["canWithdraw"] is True
    assert data["pointsConfig"]["post"] == 5
    assert data["conversionRate"] == "1000 AP = $1"


def test_award_points(client, make_profile) -> None:
    member = make_profile()

    response = client.post(
        "/api/v1/wallet/points",
        json={"userId": str(member.id), "action": "challenge_complete"},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["pointsAwarded"] == 10
    assert data["wallet"]["pointsBalance"] == 10
    assert data["entry"]["action"] == "challenge_complete"


def test_award_rejects_unknown_action(client, make_profile) -> None:
    member = make_profile()
    response = client.post(
        "/api/v1/wallet/points",
        json={"userId": str(member.id), "action": "free_money"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_payout_boundary(client, make_profile) -> None:
    member = make_profile(points=1999, followers=500)

    below = client.post("/api/v1/payouts", json={"userId": str(member.id), "pointsToConvert": 999})
    assert below.status_code == status.HTTP_400_BAD_REQUEST
    assert below.json()["error"].startswith("Minimum payout is 1000 points")

    exact = client.post("/api/v1/payouts", json={"userId": str(member.id), "pointsToConvert": 1000})
    assert exact.status_code == status.HTTP_201_CREATED
    data = exact.json()
    assert data["payout"]["amount"] == "1.00"
    assert data["payout"]["status"] == "pending"
    assert data["wallet"]["pointsBalance"] == 999

    summary = client.get(f"/api/v1/payouts/{member.id}").json()
    assert len(summary["payouts"]) == 1
    assert summary["stats"]["availablePoints"] == 999
    assert summary["stats"]["canWithdraw"] is False
    assert summary["stats"]["totalWithdrawn"] == "1.00"
