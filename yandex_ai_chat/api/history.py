"""Prompt history endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends

from .deps import get_history
from ..core.history import PromptHistory
from ..models.schemas import PromptEntry

router = APIRouter()


@router.get("", response_model=List[PromptEntry])
async def search_history(
    q: Optional[str] = None,
    history: PromptHistory = Depends(get_history),
):
    """List history entries, most recent first, optionally filtered by keyword."""
    return history.search(q or "")


@router.delete("")
async def clear_history(history: PromptHistory = Depends(get_history)):
    history.clear()
    return {"cleared": True}
