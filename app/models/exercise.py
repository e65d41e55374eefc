"""Exercise model - read-only catalog of named movements."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Exercise(Base):
    """Catalog entry (e.g. Bench Press / strength / chest). Seeded once at startup."""

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    muscle_group: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    workout_entries: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise", back_populates="exercise"
    )
