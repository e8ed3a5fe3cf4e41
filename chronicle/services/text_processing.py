"""
Standard cleaning and search-term extraction.

Everything here is deterministic string processing: the same standard
always produces the same cleaned text and the same ordered term list.
"""

import re
from typing import Iterable, List, Optional

from chronicle.core.config import settings
from chronicle.models.lesson import CleanedStandard


# ============================================
# VOCABULARY
# ============================================

# Instructional words that open most standards ("Students will analyze ...")
DIRECTIVE_WORDS = frozenset({
    "students", "student", "learners", "learner", "will", "should", "must",
    "can", "be", "able", "to", "the", "a", "an", "and", "or",
    "analyze", "analyse", "evaluate", "compare", "contrast", "examine",
    "explain", "describe", "identify", "understand", "demonstrate",
    "create", "develop", "design", "apply", "assess", "investigate",
    "explore", "discuss", "summarize", "interpret", "trace", "study",
    "learn", "know", "recognize", "construct", "use",
})

DIRECTIVE_WINDOW = 5

# Capitalized words that start sentences or name school things, not topics
COMMON_CAPITALIZED = frozenset({
    "The", "A", "An", "This", "That", "These", "Those", "They", "Their",
    "It", "Its", "In", "On", "At", "By", "For", "From", "To", "Of", "With",
    "During", "Including", "Through", "After", "Before", "Between",
    "And", "Or", "But", "As", "How", "What", "Why", "When", "Where",
    "Which", "Who", "Focus", "Students", "Student", "Teachers", "Learners",
    "Grade", "Grades", "Unit", "Standard", "Standards", "Topic", "Lesson",
    "Course", "Theme", "Key", "Concept",
}) | frozenset(word.capitalize() for word in DIRECTIVE_WORDS)

YEAR_PATTERN = re.compile(
    r"\b\d{1,4}\s?(?:BCE|BC|CE|AD|B\.C\.E\.|B\.C\.|C\.E\.|A\.D\.)(?![A-Za-z])"
    r"|\b\d{1,2}(?:st|nd|rd|th)[\s-]+centur(?:y|ies)\b"
    r"|\b(?:1\d{3}|20\d{2})s?\b",
    re.IGNORECASE,
)

PERIOD_PATTERN = re.compile(
    r"\b(?:prehistoric|post-classical|classical|ancient|medieval|"
    r"early modern|modern|colonial|antebellum|contemporary|"
    r"bronze age|iron age|cold war era)\b",
    re.IGNORECASE,
)

PROPER_NOUN_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:[\s-]+[A-Z][a-z]+)*\b")

# Canonical label -> lower-case fragments that signal it
THEME_TERMS = {
    # College Board themes and key concepts
    "state-building": ("state-building", "state building"),
    "expansion": ("expansion",),
    "conflict": ("conflict",),
    "trade": ("trade",),
    "cultural exchange": ("cultural exchange",),
    "social structures": ("social structure",),
    "gender roles": ("gender role",),
    "family structures": ("family structure",),
    "economic systems": ("economic system",),
    "belief systems": ("belief system",),
    "religion": ("religion", "religious"),
    "empire": ("empire",),
    "humans and the environment": ("environment",),
    "technology and innovation": ("technolog", "innovation"),
    "migration": ("migration",),
    # Course units
    "feudalism": ("feudal",),
    "caliphates": ("caliphate",),
    "imperialism": ("imperialism",),
    "colonialism": ("colonialism", "colonization"),
    "industrialization": ("industrializ",),
    "revolutions": ("revolution",),
    "nationalism": ("nationalism",),
    "globalization": ("globalization",),
    "democracy": ("democra",),
    "slavery": ("slavery", "enslave"),
    "civil rights": ("civil rights",),
    # Historical thinking skills
    "causation": ("causation", "cause and effect"),
    "continuity and change": ("continuity and change", "continuity"),
    "comparison": ("comparison",),
    "contextualization": ("contextualiz",),
    "periodization": ("periodization",),
    "argumentation": ("argumentation", "historical argument"),
    "sourcing": ("sourcing",),
}

_CAPITAL = r"[A-Z][a-z]+"

PHRASE_PATTERNS = (
    # Period or cultural adjective + proper noun: "Ancient Rome", "Early Modern"
    re.compile(
        r"\b(?:Ancient|Classical|Medieval|Early|Late|Modern|Contemporary|"
        r"Imperial|Western|Eastern|Northern|Southern|Islamic|Christian|"
        r"Byzantine|Ottoman|Mongol|Roman|Greek|Persian)\s+" + _CAPITAL
    ),
    # Proper noun + polity or era: "Mughal Empire", "Classical Period"
    re.compile(
        _CAPITAL + r"\s+(?:Empire|Empires|Kingdom|Dynasty|Republic|Caliphate|"
        r"Sultanate|Shogunate|Civilization|Revolution|War|Period|Era|Age)\b"
    ),
    # Proper noun + cultural domain: "Baroque Science", "Renaissance Art"
    re.compile(
        _CAPITAL + r"\s+(?:Art|Architecture|Literature|Science|Philosophy|"
        r"Religion|Culture|Thought|Music|Law)\b"
    ),
)

FALLBACK_WORD_LIMIT = 5


# ============================================
# NORMALIZER
# ============================================

LIST_MARKER = re.compile(r"^(?:(?:[•·▪◦*\-–]|\d+[.)])\s+)+")
NUMBER_ONLY = re.compile(r"^\d+\)?$")


def _strip_marker(text: str) -> str:
    return LIST_MARKER.sub("", text.strip()).strip()


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def normalize_text(text: str) -> str:
    """Drop repeated lines and sentences, collapse whitespace."""
    if not text:
        return ""

    lines = _unique(_strip_marker(line) for line in text.splitlines())
    joined = " ".join(lines)

    # "1." numbering left behind by the sentence split is dropped
    sentences = _unique(
        sentence for sentence in (
            _strip_marker(re.sub(r"\s+", " ", part))
            for part in re.split(r"[.;]", joined)
        )
        if not NUMBER_ONLY.match(sentence)
    )
    if not sentences:
        return ""
    return ". ".join(sentences) + "."


def clean_standard(text: str) -> CleanedStandard:
    """Normalize a standard and derive its search context."""
    cleaned = normalize_text(text)
    topics = extract_search_terms(cleaned) if cleaned else []
    return CleanedStandard(
        cleaned=cleaned,
        search_context=" ".join(topics),
        topics=topics,
    )


# ============================================
# TERM EXTRACTION
# ============================================

def _bare(token: str) -> str:
    return token.strip(".,;:!?()[]\"'").lower()


def filter_directive_verbs(text: str, window: int = DIRECTIVE_WINDOW) -> str:
    """Remove directive verbs and filler from the opening tokens only.

    Later occurrences are kept, so "used strategies to analyze threats"
    survives intact.
    """
    tokens = text.split()
    kept = [
        token for index, token in enumerate(tokens)
        if index >= window or _bare(token) not in DIRECTIVE_WORDS
    ]
    return " ".join(kept)


def _trim_stopwords(words: List[str]) -> List[str]:
    while words and words[0] in COMMON_CAPITALIZED:
        words = words[1:]
    while words and words[-1] in COMMON_CAPITALIZED:
        words = words[:-1]
    return words


def _time_expressions(text: str) -> List[str]:
    found = [re.sub(r"\s+", " ", m.group().strip()) for m in YEAR_PATTERN.finditer(text)]
    found.extend(m.group() for m in PERIOD_PATTERN.finditer(text))
    return found


def _proper_nouns(text: str) -> List[str]:
    found = []
    for match in PROPER_NOUN_PATTERN.finditer(text):
        words = _trim_stopwords(re.split(r"\s+", match.group()))
        if words:
            found.append(" ".join(words))
    return found


def _themes(text: str) -> List[str]:
    lowered = text.lower()
    return [
        label for label, fragments in THEME_TERMS.items()
        if any(fragment in lowered for fragment in fragments)
    ]


def extract_important_terms(text: str) -> List[str]:
    """Split multi-word historical phrases into their capitalized words."""
    terms = []
    for pattern in PHRASE_PATTERNS:
        for match in pattern.finditer(text):
            for word in match.group().split():
                if word not in COMMON_CAPITALIZED:
                    terms.append(word)
    return _unique(terms)


def _generic_words(text: str) -> List[str]:
    words = []
    for token in text.split():
        word = _bare(token)
        if len(word) > 4 and word.isalpha() and word not in DIRECTIVE_WORDS:
            words.append(word)
    return _unique(words)[:FALLBACK_WORD_LIMIT]


def extract_search_terms(text: str, limit: Optional[int] = None) -> List[str]:
    """Ordered, deduplicated key terms for steering generation and search.

    Theme labels always keep their place; the cap only trims the other passes.
    """
    if limit is None:
        limit = settings.max_search_terms
    filtered = filter_directive_verbs(text or "")

    themes = _themes(filtered)[:limit]
    terms = _unique(
        _time_expressions(filtered)
        + _proper_nouns(filtered)
        + themes
        + extract_important_terms(filtered)
    )
    if not terms:
        return _generic_words(filtered)[:limit]
    if len(terms) <= limit:
        return terms

    room = limit - len(themes)
    others = [term for term in terms if term not in themes][:room]
    kept = set(others) | set(themes)
    return [term for term in terms if term in kept]
