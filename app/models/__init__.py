"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.exercise import Exercise
from app.models.user import User
from app.models.workout import Workout, WorkoutExercise

__all__ = [
    "Exercise",
    "User",
    "Workout",
    "WorkoutExercise",
]
