"""Templated lessons used whenever AI generation is unavailable."""

from typing import List, Optional

from chronicle.models.lesson import (
    LessonIdea,
    MultimediaResource,
    PrimarySource,
    Resource,
)
from chronicle.services.activities import (
    create_contextual_activities,
    generate_suggested_activities,
)


TOPIC_WORD_LIMIT = 6

GRADE_LABELS = {
    "K-5": "Elementary (K-5)",
    "6-8": "Middle School (6-8)",
    "9-12": "High School (9-12)",
    "College": "College/University",
}

ASSESSMENTS_BY_BAND = {
    "K-5": [
        "Labeled drawing showing one thing learned about {topic}",
        "Show and tell sharing a favorite fact about {topic}",
        "Exit ticket with three picture-supported questions",
    ],
    "6-8": [
        "Short constructed response explaining a cause or effect of {topic}",
        "Annotated timeline checked for accuracy and detail",
        "Exit ticket summarizing the lesson's main idea",
    ],
    "9-12": [
        "Document-based question (DBQ) paragraph on {topic}",
        "Short-answer response using historical evidence",
        "Participation rubric for discussion and debate",
    ],
    "College": [
        "Historiographical essay evaluating interpretations of {topic}",
        "Annotated bibliography of primary and secondary sources",
        "Seminar participation and discussion leadership",
    ],
}

STATIC_RESOURCES = [
    Resource(
        title="Library of Congress Teaching Materials",
        url="https://www.loc.gov/programs/teachers/",
        type="document",
        description="Primary sources and teaching materials from the Library of Congress",
    ),
    Resource(
        title="National Archives Education Resources",
        url="https://www.archives.gov/education",
        type="document",
        description="Primary documents and lesson plans from the National Archives",
    ),
    Resource(
        title="Smarthistory",
        url="https://smarthistory.org/",
        type="article",
        description="Essays and videos on art and cultural history",
    ),
    Resource(
        title="Khan Academy World History",
        url="https://www.khanacademy.org/humanities/world-history",
        type="video",
        description="Free video lessons and practice on world history topics",
    ),
]

STATIC_PRIMARY_SOURCES = [
    PrimarySource(
        title="Selected Historical Document",
        author="Various",
        date="Period relevant to the standard",
        excerpt="Choose an excerpt from an archive collection that speaks directly to the standard.",
        context="Introduce the author, audience and purpose before students read the excerpt.",
    ),
]

STATIC_MULTIMEDIA = [
    MultimediaResource(
        title="Educational Video Resource",
        url="https://www.youtube.com/education",
        type="video",
        description="Educational videos related to the historical topic",
    ),
    MultimediaResource(
        title="David Rumsey Historical Map Collection",
        url="https://www.davidrumsey.com/",
        type="map",
        description="Searchable collection of high-resolution historical maps",
    ),
]


def topic_label(cleaned_standard: str, search_context: str) -> str:
    """Short topic name for titles; words repeated across search terms appear once."""
    words, seen = [], set()
    for word in (search_context or cleaned_standard or "").rstrip(".").split():
        if word.lower() not in seen:
            seen.add(word.lower())
            words.append(word)
    return " ".join(words[:TOPIC_WORD_LIMIT]) or "the Standard"


def create_fallback_lessons(
    cleaned_standard: str,
    search_context: str,
    grade_level: str,
    grade_range: Optional[str] = None
) -> List[LessonIdea]:
    """Build complete lesson ideas from templates, without any AI call."""
    topic = topic_label(cleaned_standard, search_context)
    grade_range = grade_range or GRADE_LABELS.get(grade_level, "High School (9-12)")
    contextual = create_contextual_activities(topic)
    suggested = generate_suggested_activities(topic, grade_level)
    assessments = [
        idea.format(topic=topic)
        for idea in ASSESSMENTS_BY_BAND.get(grade_level, ASSESSMENTS_BY_BAND["9-12"])
    ]

    shared = dict(
        suggested_activities=suggested,
        grade_level=grade_level,
        detected_grade_range=grade_range,
        resources=[resource.model_copy() for resource in STATIC_RESOURCES],
        primary_sources=[source.model_copy() for source in STATIC_PRIMARY_SOURCES],
        multimedia=[media.model_copy() for media in STATIC_MULTIMEDIA],
    )

    return [
        LessonIdea(
            title=f"Exploring {topic}: Key Concepts and Context",
            description=(
                f"An introductory lesson on {topic} for {grade_range} students, "
                f"building background knowledge before deeper analysis."
            ),
            objectives=[
                f"Students will identify the key people, places and events of {topic}",
                f"Students will explain the historical context of {topic}",
                "Students will connect the standard to broader historical developments",
            ],
            activities=contextual[:1] + contextual[2:4] + ["Vocabulary preview and KWL chart"],
            assessment_ideas=assessments,
            time_estimate="1-2 class periods",
            **shared,
        ),
        LessonIdea(
            title=f"{topic} Through Primary Sources",
            description=(
                f"Students examine primary sources about {topic}, practicing sourcing "
                f"and close reading at the {grade_range} level."
            ),
            objectives=[
                f"Students will analyze primary sources related to {topic}",
                "Students will evaluate the perspective and purpose of each source",
                "Students will use evidence from sources to support a claim",
            ],
            activities=contextual[:2] + contextual[4:] + ["Source analysis graphic organizer"],
            assessment_ideas=assessments,
            time_estimate="2-3 class periods",
            **shared,
        ),
        LessonIdea(
            title=f"Connecting {topic} to Today",
            description=(
                f"A synthesis lesson in which {grade_range} students trace the legacy of "
                f"{topic} and connect it to present-day issues."
            ),
            objectives=[
                f"Students will describe the long-term effects of {topic}",
                "Students will compare historical and contemporary developments",
                "Students will communicate conclusions in a creative product",
            ],
            activities=contextual[1:4] + ["Creative presentation project"],
            assessment_ideas=assessments,
            time_estimate="2-3 class periods",
            **shared,
        ),
    ]
