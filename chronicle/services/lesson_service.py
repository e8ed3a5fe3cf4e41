"""
Lesson generation pipeline.

Validates the standard, runs the text pipeline, asks the AI service for
lesson ideas when a key is configured and falls back to templated lessons
whenever that is not possible.
"""

import json
import re
from typing import Any, Dict, List, Optional

from chronicle.core.config import settings
from chronicle.core.logging import logger
from chronicle.models.lesson import (
    CleanedStandard,
    GenerateLessonResponse,
    GradeClassification,
    LessonIdea,
    MultimediaResource,
    PrimarySource,
    Resource,
    SuggestedActivity,
)
from chronicle.services.activities import allowed_activity_types, generate_suggested_activities
from chronicle.services.fallback import create_fallback_lessons, topic_label
from chronicle.services.grade_level import detect_grade_level
from chronicle.services.llm_service import UpstreamError, llm_service
from chronicle.services.research_links import build_research_links
from chronicle.services.text_processing import clean_standard


class InvalidStandardError(ValueError):
    """The submitted standard cannot be processed."""


DISALLOWED_CONTENT = re.compile(
    r"<script|javascript:|<iframe|data:text/html",
    re.IGNORECASE,
)

RESOURCE_TYPES = ("article", "video", "interactive", "document")
MULTIMEDIA_TYPES = ("image", "video", "audio", "map")

DEFAULT_TITLE = "Untitled Lesson"
DEFAULT_DESCRIPTION = "No description provided"
DEFAULT_TIME_ESTIMATE = "1-2 class periods"

SYSTEM_PROMPT = """You are an expert history teacher and curriculum designer. Generate comprehensive lesson ideas based on history teaching standards. For each lesson, provide:

1. Clear learning objectives aligned with the standard
2. Engaging activities and teaching strategies
3. Assessment ideas
4. Realistic time estimates
5. The grade level you are given
6. Relevant resources with actual URLs when possible
7. Primary source excerpts with proper attribution
8. Multimedia resources

Focus on diverse, engaging lessons that help students understand historical concepts, develop critical thinking skills, and connect past events to present-day issues.

Return ONLY valid JSON (no markdown): an object with a "lessons" array containing 3-5 lesson ideas. Each lesson follows this structure:
{
  "title": "Lesson title",
  "description": "Brief description of the lesson",
  "objectives": ["Learning objective 1", "Learning objective 2"],
  "activities": ["Activity 1", "Activity 2"],
  "assessmentIdeas": ["Assessment idea 1", "Assessment idea 2"],
  "timeEstimate": "Duration estimate",
  "gradeLevel": "Grade level code",
  "resources": [
    {"title": "Resource title", "url": "https://example.com", "type": "article|video|interactive|document", "description": "Brief description"}
  ],
  "primarySources": [
    {"title": "Document title", "author": "Author name", "date": "Date or time period", "excerpt": "Relevant excerpt", "context": "Historical context"}
  ],
  "multimedia": [
    {"title": "Media title", "url": "https://example.com", "type": "image|video|audio|map", "description": "Description of the media"}
  ]
}"""


# ============================================
# VALIDATION
# ============================================

def validate_standard(standard: Any) -> str:
    """Return the trimmed standard or raise InvalidStandardError."""
    if not isinstance(standard, str) or not standard.strip():
        raise InvalidStandardError("Standard is required and must be a non-empty string")

    trimmed = standard.strip()
    if len(trimmed) < settings.min_standard_length:
        raise InvalidStandardError(
            f"Standard is too short. Please provide at least "
            f"{settings.min_standard_length} characters."
        )
    if len(trimmed) > settings.max_standard_length:
        raise InvalidStandardError(
            f"Standard is too long. Please limit it to "
            f"{settings.max_standard_length} characters."
        )
    if DISALLOWED_CONTENT.search(trimmed):
        raise InvalidStandardError(
            "Standard contains invalid content. Remove any script, iframe "
            "or embedded HTML and try again."
        )
    return trimmed


# ============================================
# PROMPT & RESPONSE PARSING
# ============================================

def build_prompt(cleaned: CleanedStandard, grade: GradeClassification) -> str:
    topics = ", ".join(cleaned.topics) if cleaned.topics else "none detected"
    return f"""Generate lesson ideas for this history teaching standard:

Standard: {cleaned.cleaned}
Key topics: {topics}
Grade level: {grade.grade_range} (use "{grade.grade_level}" as gradeLevel)

Keep activities and sources appropriate for {grade.grade_range} students."""


def parse_lessons_payload(content: str) -> List[Any]:
    """Pull the raw "lessons" list out of the model's text response."""
    cleaned = re.sub(r'```(?:json)?\s*|\s*```', '', (content or "").strip())
    if not cleaned:
        raise UpstreamError("AI service returned an empty response")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        json_match = re.search(r'\{.*\}', cleaned, re.DOTALL)
        if not json_match:
            raise UpstreamError("Failed to parse AI response")
        try:
            data = json.loads(json_match.group())
        except json.JSONDecodeError as e:
            raise UpstreamError("Failed to parse AI response") from e

    if not isinstance(data, dict) or not isinstance(data.get("lessons"), list):
        raise UpstreamError("AI response is missing a lessons array")
    return data["lessons"]


# ============================================
# SANITIZATION
# ============================================

def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _choice(value: Any, allowed, default: str) -> str:
    if isinstance(value, str) and value.strip().lower() in allowed:
        return value.strip().lower()
    return default


def _dicts(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _resources(value: Any) -> List[Resource]:
    return [
        Resource(
            title=_text(item.get("title"), "Untitled Resource"),
            url=_text(item.get("url"), ""),
            type=_choice(item.get("type"), RESOURCE_TYPES, "article"),
            description=_text(item.get("description"), ""),
        )
        for item in _dicts(value)
    ]


def _primary_sources(value: Any) -> List[PrimarySource]:
    return [
        PrimarySource(
            title=_text(item.get("title"), "Untitled Source"),
            author=_text(item.get("author"), "Unknown"),
            date=_text(item.get("date"), "Unknown date"),
            excerpt=_text(item.get("excerpt"), ""),
            context=_text(item.get("context"), ""),
        )
        for item in _dicts(value)
    ]


def _multimedia(value: Any) -> List[MultimediaResource]:
    return [
        MultimediaResource(
            title=_text(item.get("title"), "Untitled Media"),
            url=_text(item.get("url"), ""),
            type=_choice(item.get("type"), MULTIMEDIA_TYPES, "image"),
            description=_text(item.get("description"), ""),
        )
        for item in _dicts(value)
    ]


def _suggested_activities(value: Any, topic: str, grade: GradeClassification) -> List[SuggestedActivity]:
    allowed = allowed_activity_types(grade.grade_level)
    activities = []
    for item in _dicts(value):
        if item.get("type") not in allowed or item.get("ageAppropriate") is False:
            continue
        name = _text(item.get("name"), "")
        benefit = _text(item.get("pedagogicalBenefit"), "")
        if not name or not benefit:
            continue
        activities.append(SuggestedActivity(
            name=name,
            type=item["type"],
            description=_text(item.get("description"), name),
            pedagogical_benefit=benefit,
            age_appropriate=True,
        ))
    return activities or generate_suggested_activities(topic, grade.grade_level)


def sanitize_lesson(raw: Any, topic: str, grade: GradeClassification) -> Optional[LessonIdea]:
    """Fill every missing or mistyped lesson field with its default.

    Returns None for entries that are not objects at all.
    """
    if not isinstance(raw, dict):
        return None

    return LessonIdea(
        title=_text(raw.get("title"), DEFAULT_TITLE),
        description=_text(raw.get("description"), DEFAULT_DESCRIPTION),
        objectives=_text_list(raw.get("objectives")),
        activities=_text_list(raw.get("activities")),
        suggested_activities=_suggested_activities(raw.get("suggestedActivities"), topic, grade),
        assessment_ideas=_text_list(raw.get("assessmentIdeas")),
        time_estimate=_text(raw.get("timeEstimate"), DEFAULT_TIME_ESTIMATE),
        grade_level=_text(raw.get("gradeLevel"), grade.grade_level),
        detected_grade_range=_text(raw.get("detectedGradeRange"), grade.grade_range),
        resources=_resources(raw.get("resources")),
        primary_sources=_primary_sources(raw.get("primarySources")),
        multimedia=_multimedia(raw.get("multimedia")),
    )


# ============================================
# ORCHESTRATION
# ============================================

def _build_response(
    lessons: List[LessonIdea],
    cleaned: CleanedStandard,
    grade: GradeClassification
) -> GenerateLessonResponse:
    return GenerateLessonResponse(
        lessons=lessons,
        cleaned_standard=cleaned.cleaned,
        extracted_topics=cleaned.topics,
        detected_grade_level=grade.grade_range,
        research_links=build_research_links(cleaned.search_context, cleaned.cleaned),
    )


def _fallback_response(cleaned: CleanedStandard, grade: GradeClassification) -> GenerateLessonResponse:
    lessons = create_fallback_lessons(
        cleaned.cleaned,
        cleaned.search_context,
        grade.grade_level,
        grade.grade_range,
    )
    return _build_response(lessons, cleaned, grade)


async def generate_lessons(standard: Any) -> GenerateLessonResponse:
    """Generate lesson ideas for a history teaching standard.

    Only invalid input raises (InvalidStandardError). Any problem with the
    AI service, including a missing API key, yields templated lessons.
    """
    trimmed = validate_standard(standard)
    cleaned = clean_standard(trimmed)
    grade = detect_grade_level(trimmed)

    logger.info(
        f"Lesson request - grade={grade.grade_range}, "
        f"topics={len(cleaned.topics)}, chars={len(trimmed)}"
    )

    if not llm_service.is_configured:
        logger.warning("AI service not configured - using templated lessons")
        return _fallback_response(cleaned, grade)

    try:
        content = await llm_service.complete(SYSTEM_PROMPT, build_prompt(cleaned, grade))
        raw_lessons = parse_lessons_payload(content)
    except UpstreamError as e:
        logger.warning(f"AI generation failed ({e}) - using templated lessons")
        return _fallback_response(cleaned, grade)

    topic = topic_label(cleaned.cleaned, cleaned.search_context)
    lessons = [
        lesson for lesson in (sanitize_lesson(raw, topic, grade) for raw in raw_lessons)
        if lesson is not None
    ]
    if not lessons:
        logger.warning("AI response contained no usable lessons - using templated lessons")
        return _fallback_response(cleaned, grade)

    logger.info(f"✅ Generated {len(lessons)} lessons with {llm_service.llm_type or 'AI'}")
    return _build_response(lessons, cleaned, grade)
