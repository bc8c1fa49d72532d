import asyncio
from typing import Optional

from fastapi import APIRouter

from ..schemas.subject import SubjectRequest, SubjectSuggestions
from ..services.subjects import suggest_subjects

router = APIRouter()


@router.post("/ai/subject", response_model=SubjectSuggestions)
async def suggest_subject(payload: Optional[SubjectRequest] = None):
    """Subject-line ideas for an email campaign in the requested tone."""
    tone = payload.tone if payload else None
    suggestions = await asyncio.to_thread(suggest_subjects, tone)
    return SubjectSuggestions(suggestions=suggestions)
