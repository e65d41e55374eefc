"""Exercise catalog: fixed reference list, one-time seeding and listing."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ExerciseCategory
from app.models.exercise import Exercise

logger = logging.getLogger(__name__)

# (name, description, category, muscle_group)
REFERENCE_EXERCISES: list[tuple[str, str, ExerciseCategory, str]] = [
    # Strength - chest
    ("Bench Press", "Classic compound chest exercise with barbell", ExerciseCategory.STRENGTH, "chest"),
    ("Push-Up", "Bodyweight chest and tricep exercise", ExerciseCategory.STRENGTH, "chest"),
    ("Incline Dumbbell Press", "Upper chest focused press", ExerciseCategory.STRENGTH, "chest"),
    ("Cable Fly", "Isolation chest exercise using cables", ExerciseCategory.STRENGTH, "chest"),
    # Strength - back
    ("Pull-Up", "Compound back and bicep bodyweight exercise", ExerciseCategory.STRENGTH, "back"),
    ("Deadlift", "Full body compound lift targeting posterior chain", ExerciseCategory.STRENGTH, "back"),
    ("Bent Over Row", "Barbell row for mid and upper back", ExerciseCategory.STRENGTH, "back"),
    ("Lat Pulldown", "Machine exercise targeting lats", ExerciseCategory.STRENGTH, "back"),
    # Strength - legs
    ("Squat", "King of lower body exercises", ExerciseCategory.STRENGTH, "legs"),
    ("Leg Press", "Machine compound leg exercise", ExerciseCategory.STRENGTH, "legs"),
    ("Romanian Deadlift", "Hamstring focused hip hinge", ExerciseCategory.STRENGTH, "legs"),
    ("Lunges", "Unilateral leg exercise for quads and glutes", ExerciseCategory.STRENGTH, "legs"),
    ("Calf Raise", "Isolation exercise for calves", ExerciseCategory.STRENGTH, "legs"),
    # Strength - shoulders
    ("Overhead Press", "Compound shoulder pressing movement", ExerciseCategory.STRENGTH, "shoulders"),
    ("Lateral Raise", "Isolation for medial deltoid", ExerciseCategory.STRENGTH, "shoulders"),
    ("Front Raise", "Isolation for anterior deltoid", ExerciseCategory.STRENGTH, "shoulders"),
    ("Face Pull", "Rear delt and rotator cuff exercise", ExerciseCategory.STRENGTH, "shoulders"),
    # Strength - arms
    ("Bicep Curl", "Isolation exercise for biceps", ExerciseCategory.STRENGTH, "arms"),
    ("Tricep Dips", "Compound tricep exercise", ExerciseCategory.STRENGTH, "arms"),
    ("Hammer Curl", "Brachialis and bicep curl variation", ExerciseCategory.STRENGTH, "arms"),
    ("Skull Crusher", "Tricep isolation with EZ bar", ExerciseCategory.STRENGTH, "arms"),
    # Cardio
    ("Running", "Steady state or interval outdoor run", ExerciseCategory.CARDIO, "full body"),
    ("Cycling", "Stationary or outdoor bike cardio", ExerciseCategory.CARDIO, "legs"),
    ("Jump Rope", "High intensity cardio with rope", ExerciseCategory.CARDIO, "full body"),
    ("Rowing Machine", "Full body cardio on rowing machine", ExerciseCategory.CARDIO, "full body"),
    ("Elliptical", "Low impact full body cardio", ExerciseCategory.CARDIO, "full body"),
    ("Burpees", "High intensity full body cardio", ExerciseCategory.CARDIO, "full body"),
    ("Box Jump", "Explosive plyometric exercise", ExerciseCategory.CARDIO, "legs"),
    # Flexibility
    ("Yoga Flow", "Dynamic stretching and flexibility routine", ExerciseCategory.FLEXIBILITY, "full body"),
    ("Hip Flexor Stretch", "Static stretch for hip flexors", ExerciseCategory.FLEXIBILITY, "hips"),
    ("Hamstring Stretch", "Static stretch for hamstrings", ExerciseCategory.FLEXIBILITY, "legs"),
    ("Shoulder Mobility", "Shoulder rotation and mobility drills", ExerciseCategory.FLEXIBILITY, "shoulders"),
    ("Pigeon Pose", "Deep hip opener yoga pose", ExerciseCategory.FLEXIBILITY, "hips"),
    ("Foam Rolling", "Self-myofascial release technique", ExerciseCategory.FLEXIBILITY, "full body"),
]


async def seed_exercises(db: AsyncSession) -> int:
    """
    Insert the reference list if the catalog is empty.
    Returns the number of rows inserted (0 when the catalog already has rows).
    """
    count = (await db.execute(select(func.count()).select_from(Exercise))).scalar_one()
    if count > 0:
        logger.debug("Exercise catalog already has %d rows, skipping seed", count)
        return 0
    db.add_all(
        Exercise(name=name, description=description, category=category.value, muscle_group=muscle_group)
        for name, description, category, muscle_group in REFERENCE_EXERCISES
    )
    await db.flush()
    logger.info("Seeded %d exercises", len(REFERENCE_EXERCISES))
    return len(REFERENCE_EXERCISES)


async def list_exercises(db: AsyncSession, category: str | None = None) -> list[Exercise]:
    """Full catalog ordered by category then name, optionally narrowed to one category."""
    stmt = select(Exercise)
    if category:
        stmt = stmt.where(Exercise.category == category)
    stmt = stmt.order_by(Exercise.category, Exercise.name)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def missing_exercise_ids(db: AsyncSession, exercise_ids: set[int]) -> set[int]:
    """Ids from ``exercise_ids`` that are not in the catalog."""
    if not exercise_ids:
        return set()
    result = await db.execute(select(Exercise.id).where(Exercise.id.in_(exercise_ids)))
    return exercise_ids - set(result.scalars().all())
