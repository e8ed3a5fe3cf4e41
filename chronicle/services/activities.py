"""
Suggested classroom activities.

The catalog is static data; selection is a filter on grade band followed
by a per-band allow-list of activity types, keeping catalog order.
"""

from typing import List, Optional

from chronicle.core.config import settings
from chronicle.models.lesson import SuggestedActivity


ACTIVITY_TYPES = (
    "timeline", "crossword", "memory", "wordsearch", "matching",
    "storytelling", "drawing", "roleplay", "mindmap", "webquest",
    "map", "quiz", "gallery", "cartoon", "research", "discussion",
    "debate", "dbq", "simulation", "podcast",
)

ALL_BANDS = frozenset({"K-5", "6-8", "9-12", "College"})

ACTIVITY_CATALOG = (
    {
        "name": "Interactive Timeline",
        "type": "timeline",
        "description": "Build an illustrated timeline that places the key events of {topic} in order.",
        "pedagogical_benefit": "Strengthens chronological reasoning and shows how events connect over time.",
        "bands": ALL_BANDS,
    },
    {
        "name": "History Crossword",
        "type": "crossword",
        "description": "Solve a crossword whose clues cover the people, places and vocabulary of {topic}.",
        "pedagogical_benefit": "Reinforces key vocabulary through retrieval practice in a low-stakes format.",
        "bands": frozenset({"K-5", "6-8"}),
    },
    {
        "name": "Memory Match",
        "type": "memory",
        "description": "Play a card-matching game pairing pictures and names from {topic}.",
        "pedagogical_benefit": "Builds recall of names and images while keeping young learners engaged.",
        "bands": frozenset({"K-5"}),
    },
    {
        "name": "Picture Story",
        "type": "storytelling",
        "description": "Retell a day in the life of someone living through {topic} using drawings and short captions.",
        "pedagogical_benefit": "Develops historical empathy and narrative skills through creative expression.",
        "bands": frozenset({"K-5", "6-8"}),
    },
    {
        "name": "Word Search",
        "type": "wordsearch",
        "description": "Find important words about {topic} hidden in a letter grid, then use three in a sentence.",
        "pedagogical_benefit": "Familiarizes early readers with topic vocabulary and spelling.",
        "bands": frozenset({"K-5"}),
    },
    {
        "name": "Concept Mind Map",
        "type": "mindmap",
        "description": "Create a mind map linking the causes, key figures and effects of {topic}.",
        "pedagogical_benefit": "Helps students organize ideas visually and see relationships between concepts.",
        "bands": frozenset({"6-8", "9-12", "College"}),
    },
    {
        "name": "Guided WebQuest",
        "type": "webquest",
        "description": "Complete a guided online investigation of {topic} using curated museum and archive sites.",
        "pedagogical_benefit": "Builds digital research skills and evaluation of online sources.",
        "bands": frozenset({"6-8", "9-12"}),
    },
    {
        "name": "Map Exploration",
        "type": "map",
        "description": "Label and annotate a historical map showing where {topic} took place.",
        "pedagogical_benefit": "Connects historical events to geography and spatial thinking.",
        "bands": ALL_BANDS,
    },
    {
        "name": "Historical Role-Play",
        "type": "roleplay",
        "description": "Act out a scene from {topic} in character, explaining each figure's point of view.",
        "pedagogical_benefit": "Encourages perspective-taking and deeper understanding of motivations.",
        "bands": frozenset({"K-5", "6-8", "9-12"}),
    },
    {
        "name": "Political Cartoon Analysis",
        "type": "cartoon",
        "description": "Analyze a political cartoon about {topic}, identifying its symbols, audience and message.",
        "pedagogical_benefit": "Develops visual literacy and the ability to detect bias and point of view.",
        "bands": frozenset({"6-8", "9-12", "College"}),
    },
    {
        "name": "Research Project",
        "type": "research",
        "description": "Investigate an open question about {topic} and present findings supported by cited evidence.",
        "pedagogical_benefit": "Builds independent inquiry, source evaluation and evidence-based writing.",
        "bands": frozenset({"9-12", "College"}),
    },
    {
        "name": "Socratic Seminar",
        "type": "discussion",
        "description": "Lead a text-based discussion on the central questions raised by {topic}.",
        "pedagogical_benefit": "Promotes critical thinking, active listening and evidence-based argument.",
        "bands": frozenset({"9-12", "College"}),
    },
    {
        "name": "Structured Debate",
        "type": "debate",
        "description": "Debate a contested claim about {topic}, with teams citing historical evidence.",
        "pedagogical_benefit": "Sharpens argumentation and the ability to weigh competing interpretations.",
        "bands": frozenset({"6-8", "9-12", "College"}),
    },
    {
        "name": "Document-Based Question",
        "type": "dbq",
        "description": "Write a document-based essay on {topic} using a packet of primary sources.",
        "pedagogical_benefit": "Practices sourcing, contextualization and thesis-driven historical writing.",
        "bands": frozenset({"9-12", "College"}),
    },
    {
        "name": "Historical Simulation",
        "type": "simulation",
        "description": "Take part in a classroom simulation of the decisions and trade-offs faced during {topic}.",
        "pedagogical_benefit": "Makes abstract causes and consequences concrete through experience.",
        "bands": frozenset({"6-8", "9-12"}),
    },
    {
        "name": "History Podcast",
        "type": "podcast",
        "description": "Script and record a short podcast episode explaining the significance of {topic}.",
        "pedagogical_benefit": "Builds synthesis and communication skills for a public audience.",
        "bands": frozenset({"9-12", "College"}),
    },
    {
        "name": "Museum Gallery Walk",
        "type": "gallery",
        "description": "Rotate through stations of images and artifacts from {topic}, recording observations.",
        "pedagogical_benefit": "Encourages close observation and collaborative interpretation of evidence.",
        "bands": frozenset({"6-8", "9-12"}),
    },
    {
        "name": "Review Quiz Game",
        "type": "quiz",
        "description": "Compete in a team quiz game reviewing the main facts of {topic}.",
        "pedagogical_benefit": "Reinforces learning through friendly competition and immediate feedback.",
        "bands": frozenset({"K-5", "6-8", "9-12"}),
    },
)

BAND_ACTIVITY_TYPES = {
    "K-5": ("timeline", "crossword", "memory", "storytelling", "wordsearch",
            "map", "roleplay", "quiz"),
    "6-8": ("timeline", "crossword", "mindmap", "webquest", "map", "roleplay",
            "debate", "simulation", "gallery", "quiz"),
    "9-12": ("mindmap", "webquest", "cartoon", "research", "discussion",
             "debate", "dbq", "simulation", "podcast", "gallery"),
}

CONTEXTUAL_ACTIVITY_TEMPLATES = (
    "Guided primary source analysis of documents on {topic}, practicing historical thinking skills such as sourcing",
    "Small-group comparative analysis of {topic} and a parallel development in another region or era",
    "Collaborative timeline of {topic} highlighting turning points and continuity over time",
    "Structured debate on the most significant causes and consequences of {topic}",
    "Mapping exercise using contextualization to place {topic} within broader regional and global developments",
)


def _band_for(grade_level: str) -> str:
    """Catalog band for a grade code; unknown codes read as high school."""
    return grade_level if grade_level in ALL_BANDS else "9-12"


def _allowed_types(band: str):
    # College shares the high school allow-list
    return BAND_ACTIVITY_TYPES.get(band, BAND_ACTIVITY_TYPES["9-12"])


def allowed_activity_types(grade_level: str):
    """Activity types that suit a grade code."""
    return _allowed_types(_band_for(grade_level))


def generate_suggested_activities(
    topic: str,
    grade_level: str,
    limit: Optional[int] = None
) -> List[SuggestedActivity]:
    """Pick age-appropriate activities for a topic and grade band."""
    if limit is None:
        limit = settings.max_suggested_activities
    band = _band_for(grade_level)
    allowed = _allowed_types(band)

    activities = []
    for template in ACTIVITY_CATALOG:
        if band not in template["bands"] or template["type"] not in allowed:
            continue
        activities.append(SuggestedActivity(
            name=template["name"],
            type=template["type"],
            description=template["description"].format(topic=topic),
            pedagogical_benefit=template["pedagogical_benefit"],
            age_appropriate=True,
        ))
        if len(activities) >= limit:
            break
    return activities


def create_contextual_activities(topic: str) -> List[str]:
    return [template.format(topic=topic) for template in CONTEXTUAL_ACTIVITY_TEMPLATES]
