"""Exercise catalog endpoint (read-only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentUser, get_current_user
from app.db.session import get_db
from app.schemas.exercise import ExerciseRead
from app.services.catalog import list_exercises

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def get_exercises(
    category: str | None = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """Whole catalog ordered by category then name; ?category= narrows it."""
    return await list_exercises(db, category)
