from fastapi import APIRouter, HTTPException

from chronicle.core.logging import logger
from chronicle.models.lesson import GenerateLessonRequest, GenerateLessonResponse
from chronicle.services.lesson_service import InvalidStandardError, generate_lessons

router = APIRouter(prefix="/lesson", tags=["lesson"])


@router.post("/generate", response_model=GenerateLessonResponse)
async def generate(request: GenerateLessonRequest):
    """Generate lesson ideas based on a history teaching standard"""
    try:
        return await generate_lessons(request.standard)
    except InvalidStandardError as e:
        logger.info(f"Rejected standard: {e}")
        raise HTTPException(status_code=400, detail=str(e))
