"""Client configuration endpoint (authenticated users only)."""

from fastapi import APIRouter, Depends

from app.api.deps import CurrentUser, get_current_user
from app.core.config import get_settings

router = APIRouter()


@router.get("/config")
async def client_config(current_user: CurrentUser = Depends(get_current_user)):
    """Hands the optional Groq API key to the signed-in frontend."""
    groq_key = get_settings().groq_api_key
    return {"groq_key_set": bool(groq_key), "groq_key": groq_key}
