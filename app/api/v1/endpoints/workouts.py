"""Workout CRUD endpoints and the per-user report. Every query is scoped to the caller."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentUser, get_current_user
from app.core.enums import WorkoutStatus
from app.db.session import get_db
from app.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutReport, WorkoutUpdate
from app.services import workouts as workout_service
from app.services.report import build_report
from app.services.workouts import UnknownExerciseError

router = APIRouter()

WORKOUT_NOT_FOUND = "workout not found"


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """Create a pending workout together with its exercise entries (all or nothing)."""
    try:
        return await workout_service.create_workout(db, current_user.id, payload)
    except UnknownExerciseError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    status: WorkoutStatus | None = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """The caller's workouts ordered by scheduled time (creation time if unscheduled)."""
    return await workout_service.list_workouts(db, current_user.id, status)


@router.get("/report", response_model=WorkoutReport)
async def get_report(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """Totals, completed volume, weekly frequency and most used exercise."""
    return await build_report(db, current_user.id)


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    workout = await workout_service.get_workout(db, current_user.id, workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail=WORKOUT_NOT_FOUND)
    return workout


@router.put("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: int,
    payload: WorkoutUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """Partial update; a supplied exercises list replaces all entries."""
    try:
        workout = await workout_service.update_workout(db, current_user.id, workout_id, payload)
    except UnknownExerciseError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if not workout:
        raise HTTPException(status_code=404, detail=WORKOUT_NOT_FOUND)
    return workout


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """Delete a workout and its entries."""
    if not await workout_service.delete_workout(db, current_user.id, workout_id):
        raise HTTPException(status_code=404, detail=WORKOUT_NOT_FOUND)
    return Response(status_code=204)
