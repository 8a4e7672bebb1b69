"""Tests for the keyword query analyzer."""

from vibematch.services.analyzer import (
    GENRE_KEYWORDS,
    analyze,
    detect_intensity,
    detect_language,
    detect_recency,
    find_keyword_matches,
)


class TestAnalyze:
    """Tests for analyze()."""

    def test_comedy_query(self):
        """Test the signals of a plain comedy request."""
        signals = analyze("funny comedy that will make me laugh out loud")

        assert signals.genres == {"comedy"}
        assert signals.emotions == {"joy"}
        assert signals.intensity == 5
        assert signals.language is None
        assert signals.wants_recent is False

    def test_empty_text(self):
        """Test that empty input yields the neutral signals."""
        signals = analyze("")

        assert signals.genres == frozenset()
        assert signals.emotions == frozenset()
        assert signals.intensity == 5
        assert signals.language is None
        assert signals.wants_recent is False

    def test_case_insensitive(self):
        """Test that keyword matching ignores case."""
        assert analyze("A SCARY Horror Night").genres == {"horror"}

    def test_keyword_inside_word(self):
        """Test that a keyword matches inside a longer word."""
        signals = analyze("keep me laughing all evening")

        assert "comedy" in signals.genres
        assert "joy" in signals.emotions

    def test_multi_word_keyword_never_matches(self):
        """Test that phrase keywords are not matched across words."""
        assert "documentary" not in analyze("based on a true story").genres

    def test_multiple_genres(self):
        """Test a query hitting several genres."""
        signals = analyze("romantic space adventure with a wizard")

        assert {"romance", "sci-fi", "action", "fantasy"} <= signals.genres


class TestIntensity:
    """Tests for intensity detection."""

    def test_default(self):
        assert detect_intensity("a movie for tonight") == 5

    def test_high(self):
        assert detect_intensity("intense brutal war film") == 8

    def test_low(self):
        assert detect_intensity("something calm for sunday") == 3

    def test_low_overrides_high(self):
        """Test that low intensity wins when both lists match."""
        assert detect_intensity("a dark but cozy mystery") == 3


class TestLanguage:
    """Tests for original-language detection."""

    def test_no_language(self):
        assert detect_language("funny comedy for tonight") is None

    def test_bollywood(self):
        assert detect_language("a bollywood romance with songs") == "hi"

    def test_korean(self):
        assert detect_language("korean thriller with twists") == "ko"

    def test_first_dictionary_match_wins(self):
        """Test that the earliest language in the table wins, not the earliest in the text."""
        assert detect_language("tamil and telugu movies") == "te"


class TestRecency:
    """Tests for recency detection."""

    def test_recent_words(self):
        assert detect_recency("latest sci-fi releases please") is True
        assert detect_recency("what is now playing in theaters") is True

    def test_not_recent(self):
        assert detect_recency("classic noir detective story") is False


class TestKeywordMatches:
    """Tests for find_keyword_matches()."""

    def test_returns_frozenset(self):
        matches = find_keyword_matches("creepy detective", GENRE_KEYWORDS)

        assert isinstance(matches, frozenset)
        assert matches == {"horror", "crime"}
