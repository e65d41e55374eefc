"""Shared enums for models and API."""

from enum import Enum


class WorkoutStatus(str, Enum):
    """Lifecycle of a workout."""

    PENDING = "pending"  # Scheduled, not started
    ACTIVE = "active"
    COMPLETED = "completed"  # completed_at is stamped on transition


class ExerciseCategory(str, Enum):
    """Catalog grouping used for ordering and filtering."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
