"""Application constants - centralized configuration values."""

# =============================================================================
# Query validation
# =============================================================================
MIN_QUERY_WORDS = 3

# =============================================================================
# Result limits
# =============================================================================
MAX_RESULTS = 7
MAX_AI_CANDIDATES = 5
MAX_HEURISTIC_CANDIDATES = 10
MAX_RECENT_RELEASES = 15
MAX_REVIEWS_FETCHED = 3
MAX_REVIEWS_DISPLAYED = 2

# =============================================================================
# Scoring
# =============================================================================
MIN_AI_RESULTS = 3  # Below this, the heuristic fallback runs
MIN_MATCH_PERCENTAGE = 30  # Records at or below this are dropped
AI_BASE_MATCH = 85
HEURISTIC_BASE_MATCH = 70
HEURISTIC_SCORE_BASE = 60
HEURISTIC_RATING_BONUS_MAX = 20
HEURISTIC_POPULARITY_BONUS_MAX = 20
HEURISTIC_POPULARITY_DIVISOR = 100
MATCH_PERCENTAGE_MAX = 100

# =============================================================================
# Intensity
# =============================================================================
INTENSITY_DEFAULT = 5
INTENSITY_HIGH = 8
INTENSITY_LOW = 3

# =============================================================================
# Catalog search
# =============================================================================
VOTE_COUNT_MIN_HIDDEN_GEMS = 50
VOTE_COUNT_MIN_DEFAULT = 100
SORT_BY_RATING = "vote_average.desc"
SORT_BY_POPULARITY = "popularity.desc"
ANIMATION_GENRE_ID = 16
ANIME_ORIGINAL_LANGUAGE = "ja"
PROVIDER_FALLBACK_REGION = "US"
CATALOG_LANGUAGE = "en-US"

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
API_TIMEOUT_GENERATIVE = 30.0
HTTPX_TIMEOUT = 10.0

# =============================================================================
# Media Types
# =============================================================================
TMDB_MEDIA_TYPE_MOVIE = "movie"
TMDB_MEDIA_TYPE_TV = "tv"

# =============================================================================
# External API URLs
# =============================================================================
TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
TMDB_POSTER_SIZE = "w500"
TMDB_BACKDROP_SIZE = "w1280"
TMDB_LOGO_SIZE = "original"

# =============================================================================
# Presets
# =============================================================================
MOOD_CHIPS = [
    {"id": "laugh", "label": "Need a Laugh", "prompt": "funny comedy that will make me laugh out loud", "icon": "😂"},
    {"id": "cry", "label": "Good Cry", "prompt": "emotional drama that will make me cry happy or sad tears", "icon": "😢"},
    {"id": "thrill", "label": "Adrenaline Rush", "prompt": "intense action thriller with exciting sequences", "icon": "⚡"},
    {"id": "think", "label": "Mind Bender", "prompt": "thought-provoking movie with plot twists and deep themes", "icon": "🧠"},
    {"id": "cozy", "label": "Cozy Night", "prompt": "feel-good heartwarming movie perfect for relaxing", "icon": "🛋️"},
    {"id": "scare", "label": "Scare Me", "prompt": "scary horror movie that will terrify me", "icon": "👻"},
    {"id": "romance", "label": "Date Night", "prompt": "romantic movie perfect for couples", "icon": "❤️"},
    {"id": "epic", "label": "Epic Adventure", "prompt": "grand epic adventure with amazing visuals and world-building", "icon": "🏔️"},
]

SUPPORTED_REGIONS = [
    {"code": "IN", "name": "India", "language": "hi"},
    {"code": "US", "name": "United States", "language": "en"},
    {"code": "GB", "name": "United Kingdom", "language": "en"},
    {"code": "JP", "name": "Japan", "language": "ja"},
    {"code": "KR", "name": "South Korea", "language": "ko"},
]
