"""Tests for keyword extraction."""

from rehearsal.ai.agents.lexical import STOP_WORDS, keywords, tokenize


class TestTokenize:
    """Test tokenize()."""

    def test_lowercases_and_strips_punctuation(self):
        """Punctuation becomes a separator, not part of a token."""
        assert tokenize("Hello, World! It's 2024.") == {"hello", "world", "2024"}

    def test_drops_stop_words_and_short_tokens(self):
        """Stop words and tokens under three characters are dropped."""
        assert tokenize("I am at the big party with you") == {"big", "party"}

    def test_mixed_case_sentence(self):
        """Case and trailing punctuation do not leak into tokens."""
        assert tokenize("The Quick, Brown Fox!!") == {"quick", "brown", "fox"}

    def test_empty_and_none(self):
        """Empty input yields an empty set."""
        assert tokenize("") == set()
        assert tokenize(None) == set()

    def test_non_ascii_letters_split_words(self):
        """Characters outside a-z0-9 act as separators."""
        assert tokenize("café résumé") == {"caf", "sum"}

    def test_stop_word_list_is_lowercase(self):
        """The stop list is matched after lower-casing."""
        assert all(word == word.lower() for word in STOP_WORDS)
        assert tokenize("THE AND BUT") == set()


class TestKeywords:
    """Test keywords()."""

    def test_keeps_first_appearance_order(self):
        """Keywords come back in the order they first appear."""
        assert keywords("budget review, then budget approval and review") == [
            "budget",
            "review",
            "approval",
        ]

    def test_matches_tokenize_set(self):
        """keywords() and tokenize() agree on membership."""
        text = "Leadership: hiring, coaching & growing teams!"
        assert set(keywords(text)) == tokenize(text)
