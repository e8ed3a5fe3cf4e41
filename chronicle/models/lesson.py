from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class CamelModel(BaseModel):
    """Base model exchanged with the frontend as camelCase JSON"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================
# REQUEST / RESPONSE
# ============================================

class GenerateLessonRequest(CamelModel):
    # Validated by the lesson service so the caller gets a readable reason
    standard: Optional[str] = None


class Resource(CamelModel):
    title: str
    url: str
    type: str = "article"  # article, video, interactive, document
    description: str = ""


class PrimarySource(CamelModel):
    title: str
    author: str
    date: str
    excerpt: str = ""
    context: str = ""


class MultimediaResource(CamelModel):
    title: str
    url: str
    type: str = "image"  # image, video, audio, map
    description: str = ""


class SuggestedActivity(CamelModel):
    name: str
    type: str
    description: str
    pedagogical_benefit: str
    age_appropriate: bool = True


class LessonIdea(CamelModel):
    title: str
    description: str
    objectives: List[str] = []
    activities: List[str] = []
    suggested_activities: List[SuggestedActivity] = []
    assessment_ideas: List[str] = []
    time_estimate: str = "1-2 class periods"
    grade_level: str
    detected_grade_range: str
    resources: List[Resource] = []
    primary_sources: List[PrimarySource] = []
    multimedia: List[MultimediaResource] = []


class ResearchLink(CamelModel):
    title: str
    url: str
    description: str


class GenerateLessonResponse(CamelModel):
    lessons: List[LessonIdea]
    cleaned_standard: str
    extracted_topics: List[str]
    detected_grade_level: str
    research_links: List[ResearchLink] = []


# ============================================
# PIPELINE VALUES
# ============================================

class CleanedStandard(BaseModel):
    cleaned: str
    search_context: str
    topics: List[str] = Field(default_factory=list)


class GradeClassification(BaseModel):
    grade_level: str
    grade_range: str
