"""Keyword-based analysis of free-text vibe descriptions.

Turns a query such as "funny comedy that will make me laugh out loud" into
genre and emotion tags, an intensity score, an optional original-language
code and a "wants recent content" flag. No external calls are made and the
analysis never fails: unmatched text yields empty tags and the default
intensity.
"""

from vibematch.constants import INTENSITY_DEFAULT, INTENSITY_HIGH, INTENSITY_LOW
from vibematch.models.recommendation import AnalyzedSignals

GENRE_KEYWORDS: dict[str, list[str]] = {
    "action": ["action", "fight", "explosion", "adventure", "exciting", "battle"],
    "thriller": ["thriller", "suspense", "tension", "mystery", "nail-biting"],
    "drama": ["drama", "emotional", "life", "relationship", "touching", "powerful"],
    "sci-fi": ["sci-fi", "science fiction", "future", "space", "technology", "dystopia"],
    "horror": ["horror", "scary", "frightening", "terrifying", "spooky", "creepy"],
    "comedy": ["comedy", "funny", "hilarious", "laugh", "humorous", "witty"],
    "romance": ["romance", "love", "romantic", "relationship", "dating", "heart"],
    "fantasy": ["fantasy", "magical", "mythical", "supernatural", "enchanted", "wizard"],
    "animation": ["animation", "animated", "cartoon", "pixar", "disney", "anime"],
    "documentary": ["documentary", "real", "true story", "historical", "educational"],
    "crime": ["crime", "detective", "murder", "investigation", "police", "heist"],
    "family": ["family", "kids", "children", "wholesome", "all ages"],
}

EMOTION_KEYWORDS: dict[str, list[str]] = {
    "suspense": ["suspense", "tension", "nail-biting", "thrilling", "edge"],
    "hope": ["hope", "uplifting", "inspiring", "positive", "optimistic"],
    "fear": ["scary", "frightening", "horror", "terrifying", "creepy"],
    "joy": ["happy", "joyful", "fun", "upbeat", "cheerful", "laugh"],
    "sadness": ["sad", "emotional", "touching", "moving", "tearjerker", "cry"],
    "anger": ["angry", "revenge", "vengeance", "fury", "rage"],
    "wonder": ["amazing", "wonderful", "magical", "spectacular", "mindblowing"],
}

# Checked in order, first match wins
LANGUAGE_KEYWORDS: dict[str, str] = {
    "hindi": "hi",
    "bengali": "bn",
    "bangla": "bn",
    "telugu": "te",
    "tollywood": "te",
    "tamil": "ta",
    "kollywood": "ta",
    "malayalam": "ml",
    "kannada": "kn",
    "marathi": "mr",
    "punjabi": "pa",
    "korean": "ko",
    "japanese": "ja",
    "bollywood": "hi",
    "indian": "hi",
}

RECENCY_WORDS = ["new", "latest", "recent", "2024", "2025", "current", "this year", "now playing"]

HIGH_INTENSITY_WORDS = ["intense", "brutal", "extreme", "violent", "action-packed", "gory", "dark"]
LOW_INTENSITY_WORDS = ["mild", "gentle", "calm", "peaceful", "slow-paced", "cozy", "light"]


def find_keyword_matches(text: str, dictionary: dict[str, list[str]]) -> frozenset[str]:
    """Return the tags having at least one keyword inside at least one word.

    Multi-word keywords ("true story") can never be inside a single word, so
    they never match. This mirrors the token-level matching users rely on.
    """
    words = text.lower().split()
    return frozenset(
        tag
        for tag, keywords in dictionary.items()
        if any(keyword.lower() in word for keyword in keywords for word in words)
    )


def detect_language(text: str) -> str | None:
    lower_text = text.lower()
    for keyword, code in LANGUAGE_KEYWORDS.items():
        if keyword in lower_text:
            return code
    return None


def detect_recency(text: str) -> bool:
    lower_text = text.lower()
    return any(word in lower_text for word in RECENCY_WORDS)


def detect_intensity(text: str) -> int:
    """Score intensity from 1 (calm) to 10 (violent).

    The low-intensity check runs last and wins when both lists match.
    """
    lower_text = text.lower()
    intensity = INTENSITY_DEFAULT
    if any(word in lower_text for word in HIGH_INTENSITY_WORDS):
        intensity = INTENSITY_HIGH
    if any(word in lower_text for word in LOW_INTENSITY_WORDS):
        intensity = INTENSITY_LOW
    return intensity


def analyze(text: str) -> AnalyzedSignals:
    """Extract structured signals from a free-text query."""
    text = text or ""
    return AnalyzedSignals(
        genres=find_keyword_matches(text, GENRE_KEYWORDS),
        emotions=find_keyword_matches(text, EMOTION_KEYWORDS),
        intensity=detect_intensity(text),
        language=detect_language(text),
        wants_recent=detect_recency(text),
    )
