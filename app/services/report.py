"""Per-user workout report: counts, completed volume, weekly frequency, favourite exercise."""

from datetime import datetime, timezone

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import MIN_REPORT_WEEKS, SECONDS_PER_WEEK
from app.core.enums import WorkoutStatus
from app.db.types import as_utc
from app.models.exercise import Exercise
from app.models.workout import Workout, WorkoutExercise
from app.schemas.workout import WorkoutRead, WorkoutReport
from app.services.workouts import list_workouts


def average_per_week(total: int, first_created_at: datetime | None, now: datetime) -> float:
    """Workouts per week since the first one; spans shorter than a week count as one week."""
    if total == 0 or first_created_at is None:
        return 0.0
    weeks = (now - as_utc(first_created_at)).total_seconds() / SECONDS_PER_WEEK
    return total / max(weeks, MIN_REPORT_WEEKS)


async def build_report(db: AsyncSession, user_id: int, now: datetime | None = None) -> WorkoutReport:
    """
    Aggregate a user's workouts.

    Volume is sets * reps * weight_kg summed over entries of completed workouts only.
    The most used exercise counts entries across all of the user's workouts; when
    several exercises tie, which one wins is up to the database.
    """
    now = now or datetime.now(timezone.utc)

    counts = (
        await db.execute(
            select(
                func.count(Workout.id).label("total"),
                func.count(case((Workout.status == WorkoutStatus.COMPLETED, 1))).label("completed"),
                func.min(Workout.created_at).label("first_created_at"),
            ).where(Workout.user_id == user_id)
        )
    ).one()
    total = int(counts.total or 0)
    completed = int(counts.completed or 0)

    volume = (
        await db.execute(
            select(
                func.coalesce(
                    func.sum(WorkoutExercise.sets * WorkoutExercise.reps * WorkoutExercise.weight_kg), 0.0
                )
            )
            .select_from(WorkoutExercise)
            .join(Workout, Workout.id == WorkoutExercise.workout_id)
            .where(Workout.user_id == user_id, Workout.status == WorkoutStatus.COMPLETED)
        )
    ).scalar_one()

    most_used = (
        await db.execute(
            select(Exercise.name)
            .select_from(WorkoutExercise)
            .join(Exercise, Exercise.id == WorkoutExercise.exercise_id)
            .join(Workout, Workout.id == WorkoutExercise.workout_id)
            .where(Workout.user_id == user_id)
            .group_by(WorkoutExercise.exercise_id, Exercise.name)
            .order_by(func.count(WorkoutExercise.id).desc())
            .limit(1)
        )
    ).scalar_one_or_none()

    completed_workouts = await list_workouts(db, user_id, WorkoutStatus.COMPLETED)

    return WorkoutReport(
        total_workouts=total,
        completed_workouts=completed,
        total_volume_kg=float(volume or 0.0),
        avg_workouts_per_week=average_per_week(total, counts.first_created_at, now),
        most_used_exercise=most_used or "",
        workouts=[WorkoutRead.model_validate(w) for w in completed_workouts],
    )
