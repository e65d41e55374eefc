"""Workout CRUD: entries, partial updates, ownership scoping."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from app.db.session import async_session_maker
from app.models.workout import WorkoutExercise


def _entry(exercise_id, sets=3, reps=10, weight_kg=50.0, duration_sec=0, notes=""):
    return {
        "exercise_id": exercise_id,
        "sets": sets,
        "reps": reps,
        "weight_kg": weight_kg,
        "duration_sec": duration_sec,
        "notes": notes,
    }


def _create(client, headers, **payload):
    payload.setdefault("title", "Push Day")
    resp = client.post("/workouts", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def bench(exercises):
    return next(e for e in exercises if e["name"] == "Bench Press")


@pytest.fixture
def squat(exercises):
    return next(e for e in exercises if e["name"] == "Squat")


def test_create_defaults(client, user):
    workout = _create(client, user["headers"], title="Morning")
    assert workout["title"] == "Morning"
    assert workout["status"] == "pending"
    assert workout["user_id"] == user["user"]["id"]
    assert workout["description"] == ""
    assert workout["comment"] == ""
    assert workout["completed_at"] is None
    assert workout["scheduled_at"] is None
    assert workout["exercises"] == []


def test_create_with_entries_round_trips(client, user, bench, squat):
    submitted = [
        _entry(bench["id"], sets=4, reps=8, weight_kg=80.5, notes="paused"),
        _entry(squat["id"], sets=5, reps=5, weight_kg=120.0),
        _entry(bench["id"], sets=1, reps=0, weight_kg=0, duration_sec=90, notes="hold"),
    ]
    created = _create(client, user["headers"], title="Strength", exercises=submitted)

    resp = client.get(f"/workouts/{created['id']}", headers=user["headers"])
    assert resp.status_code == 200
    entries = resp.json()["exercises"]
    assert len(entries) == len(submitted)
    for entry, sent in zip(entries, submitted):
        for field in ("exercise_id", "sets", "reps", "weight_kg", "duration_sec", "notes"):
            assert entry[field] == sent[field]
        assert entry["workout_id"] == created["id"]
        assert entry["exercise"]["id"] == sent["exercise_id"]
    assert entries[0]["exercise"]["name"] == "Bench Press"
    assert entries[0]["exercise"]["category"] == "strength"
    assert entries[0]["exercise"]["muscle_group"] == "chest"
    assert entries[1]["exercise"]["name"] == "Squat"


def test_create_with_unknown_exercise_persists_nothing(client, user, bench):
    resp = client.post(
        "/workouts",
        json={"title": "Broken", "exercises": [_entry(bench["id"]), _entry(999999)]},
        headers=user["headers"],
    )
    assert resp.status_code == 400
    assert "999999" in resp.json()["error"]
    assert client.get("/workouts", headers=user["headers"]).json() == []


def test_create_requires_title(client, user):
    assert client.post("/workouts", json={}, headers=user["headers"]).status_code == 400
    assert client.post("/workouts", json={"title": ""}, headers=user["headers"]).status_code == 400


def test_create_rejects_negative_sets(client, user, bench):
    resp = client.post(
        "/workouts", json={"title": "Bad", "exercises": [_entry(bench["id"], sets=-1)]}, headers=user["headers"]
    )
    assert resp.status_code == 400


def test_list_orders_by_schedule_then_creation(client, user):
    now = datetime.now(timezone.utc)
    later = _create(client, user["headers"], title="later", scheduled_at=(now + timedelta(days=10)).isoformat())
    earlier = _create(client, user["headers"], title="earlier", scheduled_at=(now - timedelta(days=10)).isoformat())
    unscheduled = _create(client, user["headers"], title="unscheduled")

    resp = client.get("/workouts", headers=user["headers"])
    assert resp.status_code == 200
    assert [w["id"] for w in resp.json()] == [earlier["id"], unscheduled["id"], later["id"]]


def test_list_filters_by_status_and_owner(client, user, other_user):
    pending = _create(client, user["headers"], title="p")
    done = _create(client, user["headers"], title="c")
    client.put(f"/workouts/{done['id']}", json={"status": "completed"}, headers=user["headers"])
    _create(client, other_user["headers"], title="not mine")

    all_mine = client.get("/workouts", headers=user["headers"]).json()
    assert {w["id"] for w in all_mine} == {pending["id"], done["id"]}

    completed = client.get("/workouts", params={"status": "completed"}, headers=user["headers"]).json()
    assert [w["id"] for w in completed] == [done["id"]]

    assert client.get("/workouts", params={"status": "active"}, headers=user["headers"]).json() == []
    assert client.get("/workouts", params={"status": "bogus"}, headers=user["headers"]).status_code == 400


def test_get_missing_and_malformed_ids(client, user):
    missing = client.get("/workouts/999999", headers=user["headers"])
    assert missing.status_code == 404
    assert missing.json() == {"error": "workout not found"}
    assert client.get("/workouts/abc", headers=user["headers"]).status_code == 400


def test_partial_update_changes_only_supplied_fields(client, user, bench):
    created = _create(
        client, user["headers"], title="Old Name", description="keep me", exercises=[_entry(bench["id"])]
    )
    resp = client.put(
        f"/workouts/{created['id']}", json={"title": "New Name", "status": "active"}, headers=user["headers"]
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["title"] == "New Name"
    assert updated["status"] == "active"
    assert updated["description"] == "keep me"
    assert updated["completed_at"] is None
    assert len(updated["exercises"]) == 1


def test_null_fields_mean_leave_as_is(client, user):
    created = _create(client, user["headers"], title="Stay", description="d")
    resp = client.put(
        f"/workouts/{created['id']}",
        json={"title": None, "description": None, "comment": "felt strong"},
        headers=user["headers"],
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["title"] == "Stay"
    assert updated["description"] == "d"
    assert updated["comment"] == "felt strong"


def test_completing_stamps_completed_at_and_other_edits_keep_it(client, user):
    created = _create(client, user["headers"])
    completed = client.put(
        f"/workouts/{created['id']}", json={"status": "completed"}, headers=user["headers"]
    ).json()
    assert completed["status"] == "completed"
    assert completed["completed_at"] is not None

    renamed = client.put(
        f"/workouts/{created['id']}", json={"title": "Renamed", "comment": "ok"}, headers=user["headers"]
    ).json()
    assert renamed["completed_at"] == completed["completed_at"]
    assert renamed["status"] == "completed"


def test_leaving_completed_clears_completed_at(client, user):
    created = _create(client, user["headers"])
    client.put(f"/workouts/{created['id']}", json={"status": "completed"}, headers=user["headers"])
    reopened = client.put(
        f"/workouts/{created['id']}", json={"status": "active"}, headers=user["headers"]
    ).json()
    assert reopened["completed_at"] is None


def test_update_rejects_unknown_status(client, user):
    created = _create(client, user["headers"])
    resp = client.put(f"/workouts/{created['id']}", json={"status": "done"}, headers=user["headers"])
    assert resp.status_code == 400


def test_exercise_list_replaces_entries_wholesale(client, user, bench, squat):
    created = _create(
        client, user["headers"], exercises=[_entry(bench["id"]), _entry(bench["id"], sets=2)]
    )
    replaced = client.put(
        f"/workouts/{created['id']}",
        json={"exercises": [_entry(squat["id"], sets=5, reps=5, weight_kg=100.0)]},
        headers=user["headers"],
    ).json()
    assert len(replaced["exercises"]) == 1
    assert replaced["exercises"][0]["exercise_id"] == squat["id"]
    assert replaced["exercises"][0]["weight_kg"] == 100.0

    fetched = client.get(f"/workouts/{created['id']}", headers=user["headers"]).json()
    assert [e["exercise_id"] for e in fetched["exercises"]] == [squat["id"]]

    cleared = client.put(f"/workouts/{created['id']}", json={"exercises": []}, headers=user["headers"]).json()
    assert cleared["exercises"] == []


def test_update_without_exercise_list_keeps_entries(client, user, bench):
    created = _create(client, user["headers"], exercises=[_entry(bench["id"])])
    updated = client.put(f"/workouts/{created['id']}", json={"title": "t"}, headers=user["headers"]).json()
    assert len(updated["exercises"]) == 1


def test_failed_update_leaves_workout_untouched(client, user, bench):
    created = _create(client, user["headers"], title="Original", exercises=[_entry(bench["id"])])
    resp = client.put(
        f"/workouts/{created['id']}",
        json={"title": "Changed", "status": "completed", "exercises": [_entry(999999)]},
        headers=user["headers"],
    )
    assert resp.status_code == 400

    fetched = client.get(f"/workouts/{created['id']}", headers=user["headers"]).json()
    assert fetched["title"] == "Original"
    assert fetched["status"] == "pending"
    assert [e["exercise_id"] for e in fetched["exercises"]] == [bench["id"]]


def test_other_users_workout_is_invisible(client, user, other_user):
    mine = _create(client, user["headers"], title="Private")
    url = f"/workouts/{mine['id']}"

    assert client.get(url, headers=other_user["headers"]).status_code == 404
    assert client.put(url, json={"title": "hijacked"}, headers=other_user["headers"]).status_code == 404
    assert client.delete(url, headers=other_user["headers"]).status_code == 404

    still_mine = client.get(url, headers=user["headers"])
    assert still_mine.status_code == 200
    assert still_mine.json()["title"] == "Private"


def test_not_yours_and_missing_are_indistinguishable(client, user, other_user):
    mine = _create(client, user["headers"])
    not_yours = client.get(f"/workouts/{mine['id']}", headers=other_user["headers"])
    missing = client.get("/workouts/999999", headers=other_user["headers"])
    assert not_yours.status_code == missing.status_code == 404
    assert not_yours.json() == missing.json()


def test_delete_then_get_is_404(client, user, bench):
    created = _create(client, user["headers"], exercises=[_entry(bench["id"])])
    url = f"/workouts/{created['id']}"

    resp = client.delete(url, headers=user["headers"])
    assert resp.status_code == 204
    assert resp.content == b""

    assert client.get(url, headers=user["headers"]).status_code == 404
    assert client.delete(url, headers=user["headers"]).status_code == 404
    assert client.put(url, json={"title": "x"}, headers=user["headers"]).status_code == 404


def test_delete_removes_entry_rows(client, user, bench, squat):
    created = _create(client, user["headers"], exercises=[_entry(bench["id"]), _entry(squat["id"])])
    workout_id = created["id"]

    async def _count_entries():
        async with async_session_maker() as session:
            result = await session.execute(
                select(func.count(WorkoutExercise.id)).where(WorkoutExercise.workout_id == workout_id)
            )
            return result.scalar_one()

    assert client.portal.call(_count_entries) == 2
    assert client.delete(f"/workouts/{workout_id}", headers=user["headers"]).status_code == 204
    assert client.portal.call(_count_entries) == 0


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_timestamps_come_back_in_utc(client, user):
    created = _create(client, user["headers"], scheduled_at="2026-05-01T10:00:00+02:00")
    client.put(f"/workouts/{created['id']}", json={"status": "completed"}, headers=user["headers"])

    workout = client.get(f"/workouts/{created['id']}", headers=user["headers"]).json()
    scheduled = _parse(workout["scheduled_at"])
    assert scheduled == datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc)
    assert scheduled.utcoffset() == timedelta(0)
    for field in ("completed_at", "created_at", "updated_at"):
        assert _parse(workout[field]).utcoffset() == timedelta(0), field

    me = client.get("/auth/me", headers=user["headers"]).json()
    assert _parse(me["created_at"]).utcoffset() == timedelta(0)


def test_naive_scheduled_at_is_taken_as_utc(client, user):
    created = _create(client, user["headers"], scheduled_at="2026-05-01T10:00:00")
    assert _parse(created["scheduled_at"]) == datetime(2026, 5, 1, 10, 0, tzinfo=timezone.utc)
