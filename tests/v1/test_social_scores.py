# mypy: ignore-errors
"""Tests for follow, streak, leaderboard and score endpoints."""

import uuid

import pytest
from fastapi import status

from akorfa.models import Assessment


def test_follow_and_unfollow(client, make_profile) -> None:
    fan = make_profile()
    creator = make_profile(followers=499)
    body = {"followerId": str(fan.id), "followingId": str(creator.id)}

    followed = client.post("/api/v1/follows", json=body).json()
    assert followed == {
        "following": True,
        "followerCount": 500,
        "creatorLevel": 2,
        "canMonetize": True,
        "message": "Now following",
    }
    assert client.post("/api/v1/follows", json=body).json()["message"] == "Already following"

    info = client.get(f"/api/v1/follows/{creator.id}").json()
    assert info["levelInfo"]["name"] == "Verified Contributor"
    assert info["nextLevel"]["minFollowers"] == 1500
    assert len(info["allLevels"]) == 4

    unfollowed = client.request("DELETE", "/api/v1/follows", json=body).json()
    assert unfollowed["followerCount"] == 499
    assert unfollowed["canMonetize"] is False


def test_self_follow_is_rejected(client, make_profile) -> None:
    member = make_profile()
    response = client.post(
        "/api/v1/follows", json={"followerId": str(member.id), "followingId": str(member.id)}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_streak_endpoints(client, make_profile) -> None:
    member = make_profile()

    first = client.post("/api/v1/streaks", json={"userId": str(member.id)}).json()
    assert first["currentStreak"] == 1
    assert first["alreadyRecorded"] is False

    second = client.post("/api/v1/streaks", json={"userId": str(member.id)}).json()
    assert second["alreadyRecorded"] is True
    assert second["message"] == "Already recorded today"

    info = client.get(f"/api/v1/streaks/{member.id}").json()
    assert info["longestStreak"] == 1
    assert len(info["activityDates"]) == 1


def test_leaderboard(client, make_profile) -> None:
    make_profile("low", akorfa_score=5)
    make_profile("high", akorfa_score=80)

    response = client.get("/api/v1/leaderboard", params={"type": "score", "limit": 500})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["type"] == "score"
    assert [(e["rank"], e["username"]) for e in data["entries"]] == [(1, "high"), (2, "low")]
    assert client.get("/api/v1/leaderboard", params={"type": "likes"}).status_code == 422


def test_stability_endpoint(client) -> None:
    finite = client.post(
        "/api/v1/stability", json={"R": 100, "L": 6, "G": 7, "C": 2, "A": 0.5, "n": 2}
    ).json()
    assert finite["stability"] == 650.0
    assert finite["unbounded"] is False

    unbounded = client.post(
        "/api/v1/stability", json={"R": 1, "L": 3, "G": 3, "C": 0.5, "A": 1}
    ).json()
    assert unbounded["stability"] is None
    assert unbounded["unbounded"] is True


def test_stability_fills_missing_inputs(client, db_session) -> None:
    response = client.post("/api/v1/stability", json={"C": 2})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["stability"] == 0.0

    zeroed = client.post(
        "/api/v1/stability", json={"R": 10, "L": 3, "G": 1, "C": 0, "n": 0}
    ).json()
    assert zeroed["stability"] == pytest.approx(40 / 2.1)
    assessment = db_session.get(Assessment, uuid.UUID(zeroed["assessmentId"]))
    assert assessment.layer_scores == {"R": 10, "L": 3, "G": 1, "C": 0.1, "A": 0, "n": 1}


def test_akorfa_score_endpoint(client, make_profile) -> None:
    member = make_profile()
    payload = {
        "postsCreated": 2,
        "commentsMade": 4,
        "reactionsReceived": 10,
        "helpfulMarked": 1,
        "assessmentCompletions": 1,
        "scoreImprovement": 2,
        "consistencyStreak": 3,
        "challengesJoined": 1,
        "challengesCompleted": 0,
        "usersHelped": 2,
        "contentShared": 1,
        "invitationsSent": 0,
        "userId": str(member.id),
    }

    response = client.post("/api/v1/scores/akorfa", json=payload)

    assert response.json() == {"score": 39.4, "saved": True}
    profile = client.get(f"/api/v1/profiles/{member.id}").json()
    assert profile["akorfaScore"] == 39.4
