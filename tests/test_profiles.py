from datetime import datetime, timedelta, timezone

from octane_nexus.modules.profiles.service import (
    ProfileService, check_handle_availability, normalize_linked_accounts, parse_timestamp
)
from tests.conftest import USER_ID

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_profile_requires_session(client):
    response = client.get("/api/profiles/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized. Please sign in."}


def test_get_my_profile(client, auth_headers, user):
    user["linked_accounts"] = {"Instagram": "@maker", "twitter": "@maker_x"}
    response = client.get("/api/profiles/me", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == USER_ID
    assert body["streak_count"] == 0
    assert body["linked_accounts"] == {"instagram": "@maker", "tiktok": None, "x": "@maker_x", "youtube": None}


def test_missing_profile_is_404(client, auth_headers, fake_db):
    fake_db.rows("profiles").clear()
    response = client.get("/api/profiles/me", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Profile not found"}


def test_update_profile_normalizes_fields(client, auth_headers, user):
    response = client.patch(
        "/api/profiles/me",
        json={"niche": "  home cooking ", "onboarding_step": 2, "linked_accounts": {"TikTok": " @chef "}},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert user["niche"] == "home cooking"
    assert user["onboarding_step"] == 2
    assert user["linked_accounts"]["tiktok"] == "@chef"


def test_access_flags(client, auth_headers, user):
    user.update({"has_purchased_package": True, "purchased_package_type": "vault", "founder_license": True})
    response = client.get("/api/profiles/me/access", headers=auth_headers)
    assert response.json() == {
        "has_purchased_package": True,
        "purchased_package_type": "vault",
        "founder_license": True,
    }


def test_mock_users_use_session_flags(fake_db):
    access = ProfileService(fake_db).get_access({"id": "mock", "is_mock": True, "purchased_package_type": "vault"})
    assert access.has_vault
    assert fake_db.tables == {}


def test_streak_guard_resets_after_48_hours(fake_db, user):
    user.update({"streak_count": 7, "last_post_date": (NOW - timedelta(hours=49)).isoformat()})

    streak = ProfileService(fake_db).get_streak(USER_ID, now=NOW)

    assert streak.streak_count == 0
    assert streak.was_reset is True
    assert user["streak_count"] == 0


def test_streak_kept_within_48_hours(fake_db, user):
    user.update({"streak_count": "4", "last_post_date": (NOW - timedelta(hours=47)).isoformat()})

    streak = ProfileService(fake_db).get_streak(USER_ID, now=NOW)

    assert streak.streak_count == 4
    assert streak.was_reset is False
    assert user["streak_count"] == "4"


def test_record_post_bumps_streak(fake_db, user):
    user.update({"streak_count": 2, "last_post_date": (NOW - timedelta(hours=20)).isoformat()})

    streak = ProfileService(fake_db).record_post(USER_ID, now=NOW)

    assert streak.streak_count == 3
    assert user["streak_count"] == 3
    assert parse_timestamp(user["last_post_date"]) == NOW


def test_record_post_after_gap_starts_over(fake_db, user):
    user.update({"streak_count": 9, "last_post_date": "2025-03-01T08:00:00Z"})
    assert ProfileService(fake_db).record_post(USER_ID, now=NOW).streak_count == 1


def test_streak_endpoints(client, auth_headers, user):
    assert client.get("/api/profiles/me/streak", headers=auth_headers).json()["streak_count"] == 0
    response = client.post("/api/profiles/me/streak", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["streak_count"] == 1


def test_parse_timestamp_handles_naive_and_garbage():
    assert parse_timestamp("2025-03-10T12:00:00") == NOW
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(None) is None


def test_linked_accounts_first_non_empty_spelling_wins():
    accounts = normalize_linked_accounts({"instagram": "", "Instagram": "@a", "YouTube": "chan", "myspace": "x"})
    assert accounts.instagram == "@a"
    assert accounts.youtube == "chan"
    assert normalize_linked_accounts(None).x is None


def test_handle_check_is_deterministic():
    results = check_handle_availability("A-b c", year=2025)

    assert [r.platform for r in results] == ["Instagram", "TikTok", "X", "YouTube"]
    assert all(r.handle == "@abc" for r in results)
    assert [r.available for r in results] == [True, False, True, False]
    assert results[0].suggestions is None
    assert results[1].suggestions == ["abc_hq", "realabc", "abc25"]


def test_handle_check_primary_platform_uses_stricter_rule():
    results = check_handle_availability("abc", primary_platform="Instagram", year=2025)
    assert results[0].available is False
    assert results[1].available is False


def test_handle_check_endpoint_is_public(client):
    response = client.post("/api/profiles/handles/check", json={"handle": "abcd", "primary_platform": "X"})
    assert response.status_code == 200
    assert len(response.json()) == 4
