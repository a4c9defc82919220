from datetime import date


def _stats(client):
    return client.get("/api/stats").get_json()


def test_habit_crud(client, habit):
    assert habit["habitType"] == "water"
    assert habit["targetValue"] == 8
    assert habit["isActive"] is True

    resp = client.patch(f"/api/habits/{habit['id']}", json={"title": "Hydrate"})
    assert resp.get_json()["title"] == "Hydrate"

    assert client.get(f"/api/habits/{habit['id']}").status_code == 200
    assert client.delete(f"/api/habits/{habit['id']}").status_code == 204
    assert client.get(f"/api/habits/{habit['id']}").status_code == 404


def test_list_habits_only_active(client, habit):
    client.post("/api/habits", json={"title": "Old", "habitType": "custom", "isActive": False})
    titles = [h["title"] for h in client.get("/api/habits").get_json()]
    assert titles == ["Drink water"]


def test_habit_requires_known_type(client):
    resp = client.post("/api/habits", json={"title": "Juggle", "habitType": "circus"})
    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "habitType"


def test_completed_entry_awards_points_and_starts_streak(client, habit, set_today):
    set_today(date(2024, 3, 11))

    resp = client.post(
        "/api/habits/entries",
        json={"habitId": habit["id"], "date": "2024-03-11", "value": 8, "completed": True},
    )
    assert resp.status_code == 201
    assert resp.get_json()["completed"] is True

    stats = _stats(client)
    assert stats["totalPoints"] == 5
    assert stats["currentStreak"] == 1
    assert stats["longestStreak"] == 1
    assert stats["lastActivityDate"] == "2024-03-11"
    assert stats["habitsCompleted"] == 1


def test_completed_defaults_from_value(client, habit, set_today):
    set_today(date(2024, 3, 11))

    zero = client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-03-10", "value": 0})
    assert zero.get_json()["completed"] is False
    assert _stats(client)["totalPoints"] == 0

    some = client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-03-11", "value": 3})
    assert some.get_json()["completed"] is True
    assert _stats(client)["totalPoints"] == 5


def test_incomplete_entry_has_no_stats_effect(client, habit, set_today):
    set_today(date(2024, 3, 11))
    client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-03-11", "value": 0, "completed": False})

    stats = _stats(client)
    assert stats["totalPoints"] == 0
    assert stats["currentStreak"] == 0
    assert stats["lastActivityDate"] is None


def test_same_day_entry_is_updated_not_duplicated(client, habit, set_today):
    set_today(date(2024, 3, 11))
    url = "/api/habits/entries"
    first = client.post(url, json={"habitId": habit["id"], "date": "2024-03-11", "value": 2}).get_json()
    second = client.post(url, json={"habitId": habit["id"], "date": "2024-03-11", "value": 5}).get_json()

    assert first["id"] == second["id"]
    entries = client.get(f"/api/habits/{habit['id']}/entries?date=2024-03-11").get_json()
    assert len(entries) == 1
    assert entries[0]["value"] == 5

    # points on both writes, streak only once
    stats = _stats(client)
    assert stats["totalPoints"] == 10
    assert stats["currentStreak"] == 1


def test_end_to_end_next_day_completion(client, habit, set_today):
    client.patch(
        "/api/stats",
        json={"totalPoints": 95, "currentStreak": 2, "longestStreak": 5, "lastActivityDate": "2024-03-10"},
    )
    set_today(date(2024, 3, 11))

    client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-03-11", "value": 1, "completed": True})

    stats = _stats(client)
    assert stats["totalPoints"] == 100
    assert stats["level"] == 2
    assert stats["currentStreak"] == 3
    assert stats["longestStreak"] == 5
    assert stats["lastActivityDate"] == "2024-03-11"


def test_end_to_end_duplicate_same_day(client, habit, set_today):
    client.patch(
        "/api/stats",
        json={"totalPoints": 95, "currentStreak": 2, "longestStreak": 5, "lastActivityDate": "2024-03-10"},
    )
    set_today(date(2024, 3, 10))

    client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-03-10", "value": 1, "completed": True})

    stats = _stats(client)
    assert stats["totalPoints"] == 100
    assert stats["level"] == 2
    assert stats["currentStreak"] == 2
    assert stats["lastActivityDate"] == "2024-03-10"


def test_gap_resets_streak(client, habit, set_today):
    client.patch("/api/stats", json={"currentStreak": 4, "longestStreak": 4, "lastActivityDate": "2024-01-01"})
    set_today(date(2024, 1, 5))

    client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-01-05", "value": 1})

    stats = _stats(client)
    assert stats["currentStreak"] == 1
    assert stats["longestStreak"] == 4


def test_patch_entry_completion_triggers_stats(client, habit, set_today):
    set_today(date(2024, 3, 11))
    entry = client.post(
        "/api/habits/entries",
        json={"habitId": habit["id"], "date": "2024-03-11", "value": 0, "completed": False},
    ).get_json()

    resp = client.patch(f"/api/habits/entries/{entry['id']}", json={"value": 1, "completed": True})
    assert resp.status_code == 200
    assert resp.get_json()["completed"] is True
    assert _stats(client)["totalPoints"] == 5

    # un-completing leaves stats untouched
    client.patch(f"/api/habits/entries/{entry['id']}", json={"value": 0, "completed": False})
    stats = _stats(client)
    assert stats["totalPoints"] == 5
    assert stats["currentStreak"] == 1


def test_patch_value_only_does_not_award(client, habit, set_today):
    set_today(date(2024, 3, 11))
    entry = client.post(
        "/api/habits/entries",
        json={"habitId": habit["id"], "date": "2024-03-11", "value": 1, "completed": True},
    ).get_json()

    client.patch(f"/api/habits/entries/{entry['id']}", json={"value": 4})
    assert _stats(client)["totalPoints"] == 5


def test_entry_errors(client, habit):
    resp = client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "11/03/2024"})
    assert resp.status_code == 400

    resp = client.post("/api/habits/entries", json={"habitId": 999, "date": "2024-03-11"})
    assert resp.status_code == 404

    resp = client.patch("/api/habits/entries/999", json={"value": 1})
    assert resp.status_code == 404

    resp = client.get(f"/api/habits/{habit['id']}/entries?date=yesterday")
    assert resp.status_code == 400


def test_entries_listed_newest_first(client, habit):
    for day in ("2024-03-09", "2024-03-11", "2024-03-10"):
        client.post("/api/habits/entries", json={"habitId": habit["id"], "date": day, "value": 0})

    dates = [e["date"] for e in client.get(f"/api/habits/{habit['id']}/entries").get_json()]
    assert dates == ["2024-03-11", "2024-03-10", "2024-03-09"]


def test_patch_cannot_move_entry_onto_taken_day(client, habit):
    client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-03-10", "value": 1})
    later = client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-03-11", "value": 2}).get_json()

    resp = client.patch(f"/api/habits/entries/{later['id']}", json={"date": "2024-03-10"})
    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "date"

    assert len(client.get(f"/api/habits/{habit['id']}/entries?date=2024-03-10").get_json()) == 1
    assert len(client.get(f"/api/habits/{habit['id']}/entries?date=2024-03-11").get_json()) == 1


def test_patch_can_move_entry_to_free_day(client, habit):
    entry = client.post("/api/habits/entries", json={"habitId": habit["id"], "date": "2024-03-11", "value": 2}).get_json()

    resp = client.patch(f"/api/habits/entries/{entry['id']}", json={"date": "2024-03-12"})
    assert resp.status_code == 200
    assert resp.get_json()["date"] == "2024-03-12"

    # re-sending its own day is not a clash
    assert client.patch(f"/api/habits/entries/{entry['id']}", json={"date": "2024-03-12"}).status_code == 200
