from typing import List
from urllib.parse import quote_plus

from chronicle.models.lesson import ResearchLink


QUERY_CHAR_LIMIT = 100

SEARCH_SITES = (
    {
        "title": "JSTOR",
        "url": "https://www.jstor.org/action/doBasicSearch?Query={query}",
        "description": "Scholarly articles and primary source collections",
    },
    {
        "title": "Internet Archive",
        "url": "https://archive.org/search.php?query={query}",
        "description": "Digitized books, documents and historical media",
    },
    {
        "title": "Heimler's History",
        "url": "https://www.youtube.com/results?search_query=Heimler+history+{query}",
        "description": "AP-aligned history review videos",
    },
    {
        "title": "Smarthistory",
        "url": "https://www.google.com/search?q=site:smarthistory.org+{query}",
        "description": "Art and cultural history essays and videos",
    },
    {
        "title": "BBC History",
        "url": "https://www.youtube.com/results?search_query=BBC+history+{query}",
        "description": "Documentary clips from BBC history programming",
    },
)


def build_research_links(search_context: str, fallback_text: str = "") -> List[ResearchLink]:
    """Search-engine links seeded with the standard's key terms."""
    text = (search_context or fallback_text or "").strip()[:QUERY_CHAR_LIMIT]
    if not text:
        return []
    query = quote_plus(text)
    return [
        ResearchLink(
            title=site["title"],
            url=site["url"].format(query=query),
            description=site["description"],
        )
        for site in SEARCH_SITES
    ]
