"""Workout and WorkoutExercise schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import WorkoutStatus
from app.schemas.exercise import ExerciseRead


class WorkoutExerciseBase(BaseModel):
    exercise_id: int
    sets: int = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    weight_kg: float = Field(default=0.0, ge=0)
    duration_sec: int = Field(default=0, ge=0)
    notes: str = ""


class WorkoutExerciseCreate(WorkoutExerciseBase):
    pass


class WorkoutExerciseRead(WorkoutExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    workout_id: int
    exercise: ExerciseRead | None = None


class WorkoutCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    scheduled_at: datetime | None = None
    exercises: list[WorkoutExerciseCreate] = []


class WorkoutUpdate(BaseModel):
    """Partial update: fields left out (or null) keep their stored value.
    A supplied exercises list, even an empty one, replaces every entry."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    comment: str | None = None
    status: WorkoutStatus | None = None
    scheduled_at: datetime | None = None
    exercises: list[WorkoutExerciseCreate] | None = None


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    title: str
    description: str = ""
    comment: str = ""
    status: WorkoutStatus
    scheduled_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    exercises: list[WorkoutExerciseRead] = []


class WorkoutReport(BaseModel):
    """Per-user aggregate statistics computed on demand."""

    total_workouts: int = 0
    completed_workouts: int = 0
    total_volume_kg: float = 0.0
    avg_workouts_per_week: float = 0.0
    most_used_exercise: str = ""
    workouts: list[WorkoutRead] = []
