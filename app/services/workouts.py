"""Workout store: CRUD over workouts and their exercise entries, always scoped by owner."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.enums import WorkoutStatus
from app.models.workout import Workout, WorkoutExercise
from app.schemas.workout import WorkoutCreate, WorkoutExerciseCreate, WorkoutUpdate
from app.services.catalog import missing_exercise_ids

logger = logging.getLogger(__name__)


class UnknownExerciseError(ValueError):
    """An entry references an exercise id that is not in the catalog."""

    def __init__(self, exercise_ids: Iterable[int]):
        self.exercise_ids = sorted(exercise_ids)
        super().__init__(f"unknown exercise id(s): {', '.join(map(str, self.exercise_ids))}")


def _owned_workouts(user_id: int) -> Select:
    """Base query for a user's workouts with entries and their catalog exercise."""
    return (
        select(Workout)
        .where(Workout.user_id == user_id)
        .options(selectinload(Workout.exercises).selectinload(WorkoutExercise.exercise))
        .execution_options(populate_existing=True)
    )


async def _check_exercises(db: AsyncSession, entries: list[WorkoutExerciseCreate]) -> None:
    missing = await missing_exercise_ids(db, {e.exercise_id for e in entries})
    if missing:
        raise UnknownExerciseError(missing)


def _build_entries(entries: list[WorkoutExerciseCreate]) -> list[WorkoutExercise]:
    return [WorkoutExercise(**e.model_dump()) for e in entries]


async def get_workout(db: AsyncSession, user_id: int, workout_id: int) -> Workout | None:
    """Workout by id if it belongs to user_id; None otherwise (not yours == doesn't exist)."""
    result = await db.execute(_owned_workouts(user_id).where(Workout.id == workout_id))
    return result.scalar_one_or_none()


async def list_workouts(
    db: AsyncSession,
    user_id: int,
    status: WorkoutStatus | None = None,
) -> list[Workout]:
    """User's workouts, soonest first: scheduled time, or creation time when unscheduled."""
    stmt = _owned_workouts(user_id)
    if status is not None:
        stmt = stmt.where(Workout.status == status)
    stmt = stmt.order_by(func.coalesce(Workout.scheduled_at, Workout.created_at).asc(), Workout.id.asc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_workout(db: AsyncSession, user_id: int, payload: WorkoutCreate) -> Workout:
    """Insert the workout and all of its entries in the caller's transaction."""
    await _check_exercises(db, payload.exercises)
    workout = Workout(
        user_id=user_id,
        title=payload.title,
        description=payload.description,
        status=WorkoutStatus.PENDING,
        scheduled_at=payload.scheduled_at,
        exercises=_build_entries(payload.exercises),
    )
    db.add(workout)
    await db.flush()
    logger.info("User %s created workout %s with %d entries", user_id, workout.id, len(payload.exercises))
    result = await db.execute(_owned_workouts(user_id).where(Workout.id == workout.id))
    return result.scalar_one()


async def update_workout(
    db: AsyncSession,
    user_id: int,
    workout_id: int,
    payload: WorkoutUpdate,
) -> Workout | None:
    """
    Apply only the supplied fields. Setting status stamps completed_at when it is
    'completed' and clears it otherwise; a supplied exercises list replaces every
    existing entry. Returns None when the workout is not the user's.
    """
    workout = await get_workout(db, user_id, workout_id)
    if workout is None:
        return None

    if payload.exercises is not None:
        await _check_exercises(db, payload.exercises)

    now = datetime.now(timezone.utc)
    data = payload.model_dump(exclude_unset=True, exclude_none=True, exclude={"exercises"})
    if "status" in data:
        data["completed_at"] = now if data["status"] == WorkoutStatus.COMPLETED else None
    for k, v in data.items():
        setattr(workout, k, v)

    if payload.exercises is not None:
        # delete-orphan cascade removes every previous entry on flush
        workout.exercises = _build_entries(payload.exercises)

    workout.updated_at = now
    await db.flush()
    return await get_workout(db, user_id, workout_id)


async def delete_workout(db: AsyncSession, user_id: int, workout_id: int) -> bool:
    """Ownership-scoped hard delete; entries go with it via ON DELETE CASCADE."""
    result = await db.execute(
        delete(Workout)
        .where(Workout.id == workout_id, Workout.user_id == user_id)
        .execution_options(synchronize_session=False)
    )
    deleted = result.rowcount > 0
    if deleted:
        logger.info("User %s deleted workout %s", user_id, workout_id)
    return deleted
