from liftlog.profiles.service import PROFILE_DEFAULTS


def test_profile_created_lazily_with_defaults_exactly_once(client, db, auth_header, user):
    assert db.data["profiles"] == []

    first = client.get("/profile", headers=auth_header)
    second = client.get("/profile", headers=auth_header)

    assert first.status_code == 200
    assert second.status_code == 200
    assert len(db.data["profiles"]) == 1

    profile = first.get_json()["profile"]
    assert profile["id"] == str(user["id"])
    assert profile["email"] == "lifter@example.com"
    assert profile["unit"] == "kg"
    assert profile["goal"] == "hypertrophy"
    assert profile["default_duration"] == 30
    assert profile["rpe_input_mode"] == "all_sets"
    assert profile["rpe_quick_chips"] == [3, 5, 7, 8, 9]
    assert second.get_json()["profile"]["id"] == profile["id"]


def test_defaults_are_not_shared_between_profiles(client, auth_header, other_auth_header):
    client.put("/profile", json={"rpe_quick_chips": [6, 8]}, headers=auth_header)
    other = client.get("/profile", headers=other_auth_header).get_json()["profile"]

    assert other["rpe_quick_chips"] == [3, 5, 7, 8, 9]
    assert PROFILE_DEFAULTS["rpe_quick_chips"] == [3, 5, 7, 8, 9]


def test_update_profile(client, auth_header):
    resp = client.put(
        "/profile",
        json={"unit": "lb", "goal": "strength", "default_duration": 60, "rpe_quick_chips": [9, 5, 5, 7]},
        headers=auth_header,
    )
    assert resp.status_code == 200, resp.get_json()

    profile = client.get("/profile", headers=auth_header).get_json()["profile"]
    assert profile["unit"] == "lb"
    assert profile["goal"] == "strength"
    assert profile["default_duration"] == 60
    assert profile["rpe_quick_chips"] == [5, 7, 9]
    assert profile["rpe_input_mode"] == "all_sets"


def test_update_profile_rejects_bad_values(client, auth_header):
    for body in (
        {"unit": "stone"},
        {"goal": "bulking"},
        {"rpe_quick_chips": [0, 5]},
        {"rpe_quick_chips": [11]},
        {"default_duration": 0},
        {"rpe_input_mode": "never"},
    ):
        resp = client.put("/profile", json=body, headers=auth_header)
        assert resp.status_code == 400, body
        assert resp.get_json()["error"] == "Invalid request."


def test_rpe_scale(client, auth_header):
    scale = client.get("/profile/rpe-scale", headers=auth_header).get_json()["scale"]
    assert [s["value"] for s in scale] == list(range(1, 11))
    assert scale[-1]["rir"] == "0 reps left"


def test_profile_requires_token(client):
    resp = client.get("/profile")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Unauthorized"


def test_token_for_deleted_user_is_rejected(client, db, auth_header):
    db.data["users"] = []
    resp = client.get("/profile", headers=auth_header)
    assert resp.status_code == 401
