"""Per-user report aggregation."""

from datetime import datetime, timedelta, timezone

import pytest

from app.services.report import average_per_week


def _entry(exercise_id, sets, reps, weight_kg):
    return {"exercise_id": exercise_id, "sets": sets, "reps": reps, "weight_kg": weight_kg}


def _workout(client, headers, title, entries, status=None):
    resp = client.post("/workouts", json={"title": title, "exercises": entries}, headers=headers)
    assert resp.status_code == 201, resp.text
    workout = resp.json()
    if status:
        resp = client.put(f"/workouts/{workout['id']}", json={"status": status}, headers=headers)
        assert resp.status_code == 200
        workout = resp.json()
    return workout


def test_empty_report(client, user):
    resp = client.get("/workouts/report", headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json() == {
        "total_workouts": 0,
        "completed_workouts": 0,
        "total_volume_kg": 0.0,
        "avg_workouts_per_week": 0.0,
        "most_used_exercise": "",
        "workouts": [],
    }


def test_report_requires_token(client):
    assert client.get("/workouts/report").status_code == 401


def test_volume_counts_completed_workouts_only(client, user, exercises):
    bench, squat, deadlift = (
        next(e for e in exercises if e["name"] == name) for name in ("Bench Press", "Squat", "Deadlift")
    )
    headers = user["headers"]
    done = _workout(
        client,
        headers,
        "done",
        [_entry(bench["id"], 3, 10, 50.0), _entry(squat["id"], 2, 5, 100.0)],
        status="completed",
    )
    _workout(client, headers, "pending", [_entry(deadlift["id"], 5, 5, 200.0)])
    _workout(client, headers, "active", [_entry(deadlift["id"], 1, 1, 300.0)], status="active")

    report = client.get("/workouts/report", headers=headers).json()
    assert report["total_workouts"] == 3
    assert report["completed_workouts"] == 1
    assert report["total_volume_kg"] == pytest.approx(3 * 10 * 50.0 + 2 * 5 * 100.0)
    assert [w["id"] for w in report["workouts"]] == [done["id"]]
    assert len(report["workouts"][0]["exercises"]) == 2
    # All workouts were created just now, so the one-week floor applies
    assert report["avg_workouts_per_week"] == pytest.approx(3.0)


def test_most_used_exercise_counts_entries_across_all_workouts(client, user, exercises):
    bench, squat = (next(e for e in exercises if e["name"] == name) for name in ("Bench Press", "Squat"))
    headers = user["headers"]
    _workout(client, headers, "a", [_entry(squat["id"], 1, 1, 1.0), _entry(bench["id"], 1, 1, 1.0)])
    _workout(client, headers, "b", [_entry(squat["id"], 1, 1, 1.0)], status="completed")

    report = client.get("/workouts/report", headers=headers).json()
    assert report["most_used_exercise"] == "Squat"


def test_most_used_exercise_tie_picks_one_of_the_leaders(client, user, exercises):
    bench, squat = (next(e for e in exercises if e["name"] == name) for name in ("Bench Press", "Squat"))
    headers = user["headers"]
    _workout(client, headers, "tie", [_entry(squat["id"], 1, 1, 1.0), _entry(bench["id"], 1, 1, 1.0)])

    report = client.get("/workouts/report", headers=headers).json()
    assert report["most_used_exercise"] in {"Squat", "Bench Press"}


def test_report_ignores_other_users(client, user, other_user, exercises):
    bench = next(e for e in exercises if e["name"] == "Bench Press")
    _workout(client, other_user["headers"], "theirs", [_entry(bench["id"], 5, 5, 100.0)], status="completed")

    report = client.get("/workouts/report", headers=user["headers"]).json()
    assert report["total_workouts"] == 0
    assert report["total_volume_kg"] == 0.0
    assert report["most_used_exercise"] == ""


class TestAveragePerWeek:
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def test_no_workouts(self):
        assert average_per_week(0, None, self.now) == 0.0

    def test_floor_at_one_week(self):
        assert average_per_week(4, self.now - timedelta(days=2), self.now) == pytest.approx(4.0)

    def test_spread_over_weeks(self):
        assert average_per_week(6, self.now - timedelta(weeks=3), self.now) == pytest.approx(2.0)

    def test_naive_timestamps_are_utc(self):
        first = (self.now - timedelta(weeks=4)).replace(tzinfo=None)
        assert average_per_week(2, first, self.now) == pytest.approx(0.5)
