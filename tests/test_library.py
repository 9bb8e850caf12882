from octane_nexus.modules.library.models import FREE_LIMIT_DETAIL
from octane_nexus.modules.library.service import anonymize_idea
from tests.conftest import USER_ID


def _save(fake_db, idea, user_id=USER_ID, created_at="2025-01-01T00:00:00+00:00", blueprint=None):
    row = {
        "id": next(fake_db.ids),
        "user_id": user_id,
        "idea": idea,
        "blueprint": blueprint or {"hook": "Hook"},
        "created_at": created_at,
    }
    fake_db.rows("saved_blueprints").append(row)
    return row


def test_library_requires_session(client):
    assert client.get("/api/library/blueprints").status_code == 401


def test_create_blueprint_saves_platform_map(client, auth_headers, fake_db):
    response = client.post("/api/library/blueprints", json={"idea": " one pan dinners "}, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["idea"] == "one pan dinners"
    assert set(body["blueprint"].keys()) == {"tiktok", "instagram", "x"}
    assert fake_db.rows("saved_blueprints")[0]["user_id"] == USER_ID


def test_create_blueprint_requires_idea(client, auth_headers):
    response = client.post("/api/library/blueprints", json={"idea": "  "}, headers=auth_headers)
    assert response.status_code == 400


def test_free_tier_stops_at_three(client, auth_headers, fake_db):
    for index in range(3):
        _save(fake_db, f"idea {index}")

    response = client.post("/api/library/blueprints", json={"idea": "fourth"}, headers=auth_headers)

    assert response.status_code == 403
    assert response.json() == {"error": FREE_LIMIT_DETAIL}
    assert len(fake_db.rows("saved_blueprints")) == 3


def test_sniper_package_keeps_free_cap(client, auth_headers, fake_db, user):
    user.update({"has_purchased_package": True, "purchased_package_type": "sniper"})
    for index in range(3):
        _save(fake_db, f"idea {index}")
    response = client.post("/api/library/blueprints", json={"idea": "fourth"}, headers=auth_headers)
    assert response.status_code == 403


def test_vault_has_no_cap(client, auth_headers, fake_db, user):
    user.update({"has_purchased_package": True, "purchased_package_type": "vault"})
    for index in range(5):
        _save(fake_db, f"idea {index}")
    response = client.post("/api/library/blueprints", json={"idea": "sixth"}, headers=auth_headers)
    assert response.status_code == 201


def test_other_users_blueprints_do_not_count(client, auth_headers, fake_db):
    for index in range(3):
        _save(fake_db, f"idea {index}", user_id="someone-else")
    response = client.post("/api/library/blueprints", json={"idea": "mine"}, headers=auth_headers)
    assert response.status_code == 201


def test_list_blueprints_newest_first(client, auth_headers, fake_db):
    _save(fake_db, "older", created_at="2025-01-01T00:00:00+00:00")
    _save(fake_db, "newer", created_at="2025-02-01T00:00:00+00:00")
    _save(fake_db, "not mine", user_id="someone-else")

    response = client.get("/api/library/blueprints", headers=auth_headers)

    assert [bp["idea"] for bp in response.json()] == ["newer", "older"]


def test_list_blueprints_skips_rows_with_null_fields(client, auth_headers, fake_db):
    _save(fake_db, "kept")
    _save(fake_db, "no blueprint")["blueprint"] = None
    _save(fake_db, None)

    response = client.get("/api/library/blueprints", headers=auth_headers)

    assert response.status_code == 200
    assert [bp["idea"] for bp in response.json()] == ["kept"]


def test_mark_performance_upserts_one_mark(client, auth_headers, fake_db):
    blueprint = _save(fake_db, "one pan dinners")
    path = f"/api/library/blueprints/{blueprint['id']}/performance"

    first = client.post(path, json={"status": "success"}, headers=auth_headers)
    second = client.post(path, json={"status": "viral"}, headers=auth_headers)

    assert first.status_code == 200
    assert second.json()["status"] == "viral"
    marks = fake_db.rows("blueprint_performance")
    assert len(marks) == 1
    assert marks[0]["status"] == "viral"
    assert marks[0]["user_id"] == USER_ID


def test_mark_performance_on_foreign_blueprint_is_404(client, auth_headers, fake_db):
    blueprint = _save(fake_db, "theirs", user_id="someone-else")
    response = client.post(
        f"/api/library/blueprints/{blueprint['id']}/performance", json={"status": "viral"}, headers=auth_headers
    )
    assert response.status_code == 404
    assert fake_db.rows("blueprint_performance") == []


def test_mark_performance_rejects_unknown_status(client, auth_headers, fake_db):
    blueprint = _save(fake_db, "one pan dinners")
    response = client.post(
        f"/api/library/blueprints/{blueprint['id']}/performance", json={"status": "flop"}, headers=auth_headers
    )
    assert response.status_code == 400


def test_content_history_round_trip(client, auth_headers, fake_db):
    assert client.get("/api/library/content-history", headers=auth_headers).json() == {
        "content_text": None, "updated_at": None
    }

    response = client.put("/api/library/content-history", json={"content_text": " My viral post "}, headers=auth_headers)
    assert response.status_code == 200
    assert fake_db.rows("user_content_history")[0]["content_text"] == "My viral post"

    client.put("/api/library/content-history", json={"content_text": "Another post"}, headers=auth_headers)
    assert len(fake_db.rows("user_content_history")) == 1
    assert client.get("/api/library/content-history", headers=auth_headers).json()["content_text"] == "Another post"


def test_content_history_rejects_empty_text(client, auth_headers):
    response = client.put("/api/library/content-history", json={"content_text": "   "}, headers=auth_headers)
    assert response.status_code == 400


def test_content_history_save_failure(client, auth_headers, fake_db):
    fake_db.failing_tables.add("user_content_history")
    response = client.put("/api/library/content-history", json={"content_text": "post"}, headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["error"].startswith("Could not save your brand voice")


def test_anonymize_idea():
    assert anonymize_idea("How I cooked dinner for twelve people") == "How I cooked dinner"
    assert anonymize_idea("Supercalifragilistic expialidocious morning routines here") == (
        "Supercalifragilistic expial..."
    )
    assert anonymize_idea(None) == ""


def test_community_wins_are_anonymised(client, auth_headers, fake_db):
    fake_db.rows("profiles").append({"id": "other", "niche": "Fitness"})
    viral = _save(fake_db, "My secret morning workout routine for busy parents", user_id="other")
    nicheless = _save(fake_db, "Budget travel", user_id="ghost")
    success = _save(fake_db, "Only a success", user_id="other")
    fake_db.rows("blueprint_performance").extend([
        {"blueprint_id": viral["id"], "user_id": "other", "status": "viral", "marked_at": "2025-02-02T00:00:00Z"},
        {"blueprint_id": nicheless["id"], "user_id": "ghost", "status": "viral", "marked_at": "2025-02-01T00:00:00Z"},
        {"blueprint_id": success["id"], "user_id": "other", "status": "success", "marked_at": "2025-02-03T00:00:00Z"},
    ])

    response = client.get("/api/library/community/wins", headers=auth_headers)

    assert response.json() == [
        {"idea": "My secret morning workout", "niche": "Fitness"},
        {"idea": "Budget travel", "niche": "Creator"},
    ]


def test_community_wins_degrade_to_empty(client, auth_headers, fake_db):
    fake_db.failing_tables.add("blueprint_performance")
    response = client.get("/api/library/community/wins", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == []


def test_community_insights(client, auth_headers, fake_db):
    viral = _save(fake_db, "Secret pantry staples", blueprint={"tiktok": {"hook": "The hidden pantry trick"}})
    success = _save(fake_db, "Meal prep")
    fake_db.rows("blueprint_performance").extend([
        {"blueprint_id": viral["id"], "status": "viral"},
        {"blueprint_id": success["id"], "status": "success"},
        {"blueprint_id": success["id"], "status": "success"},
    ])

    response = client.get("/api/library/community/insights", headers=auth_headers)

    assert response.json() == {
        "dominant_vibe": "mysterious",
        "viral_potential": 33,
        "viral_count": 1,
        "success_count": 2,
    }


def test_community_insights_when_nothing_marked(client, auth_headers):
    response = client.get("/api/library/community/insights", headers=auth_headers)
    assert response.json() == {"dominant_vibe": None, "viral_potential": None, "viral_count": 0, "success_count": 0}


def test_library_insight_needs_saved_ideas(client, auth_headers):
    response = client.post("/api/library/insight", json={}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "No saved ideas to analyze."}


def test_library_insight(client, auth_headers, fake_db):
    _save(fake_db, "One pan dinners")
    response = client.post("/api/library/insight", json={"user_name": "Sam"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["insight"].startswith("Sam, your library")
