"""
Unit tests for completion scoring and capitalization.
"""
from polski_ls.schemas.dictionary import FuzzyMatch
from polski_ls.services.ranking import (
    common_prefix_length,
    max_edit_distance_for,
    rank_candidates,
    score_completion,
    transfer_capitalization,
)


class TestScoreCompletion:
    """Tests for score_completion."""

    def test_exact_match(self):
        # 100 (base) + 50 (first letter) + 32 (4 chars prefix match * 8)
        assert score_completion("test", "test", 0, False) == 182.0

    def test_common_word_bonus(self):
        score_common = score_completion("test", "test", 0, True)
        score_normal = score_completion("test", "test", 0, False)
        assert score_common - score_normal == 35.0

    def test_edit_distance_penalty(self):
        scores = [score_completion("test", "tест", d, False) for d in (0, 1, 2, 3)]
        assert scores[0] > scores[1] > scores[2] > scores[3]
        assert scores[0] - scores[1] == 20.0
        assert scores[0] - scores[2] == 50.0
        assert scores[0] - scores[3] == 100.0

    def test_large_distance_uses_fallback_penalty(self):
        assert score_completion("ab", "xy", 7, False) == score_completion("ab", "xy", 3, False)

    def test_first_letter_mismatch(self):
        # 100 - 20 (distance) - 30 (first letter), no prefix bonus
        assert score_completion("abc", "xbc", 1, False) == 50.0

    def test_prefix_bonus_stops_at_first_mismatch(self):
        # 100 - 20 + 50 + 1 * 8
        assert score_completion("tast", "test", 1, False) == 138.0

    def test_case_insensitive_polish(self):
        assert score_completion("Żół", "żółw", 1, False) == 100 - 20 + 50 + 3 * 8

    def test_empty_query_skips_first_letter_term(self):
        assert score_completion("", "abc", 3, False) == 0.0
        assert score_completion("abc", "", 3, True) == 35.0


class TestCommonPrefixLength:
    def test_lengths(self):
        assert common_prefix_length("dzie", "dzień") == 4
        assert common_prefix_length("DZIE", "dzień") == 4
        assert common_prefix_length("kot", "pies") == 0
        assert common_prefix_length("", "pies") == 0


class TestTransferCapitalization:
    """Tests for transfer_capitalization."""

    def test_lowercase(self):
        assert transfer_capitalization("słodko", "słodki") == "słodki"

    def test_uppercase(self):
        assert transfer_capitalization("Słodko", "słodki") == "Słodki"

    def test_polish_uppercase(self):
        assert transfer_capitalization("Żółty", "żółw") == "Żółw"

    def test_empty_original(self):
        assert transfer_capitalization("", "test") == "test"

    def test_empty_suggestion(self):
        assert transfer_capitalization("Test", "") == ""

    def test_rest_unchanged(self):
        assert transfer_capitalization("KOT", "kotEK") == "KotEK"

    def test_multi_char_uppercase_keeps_first(self):
        assert transfer_capitalization("Strasse", "ßtraße") == "Straße"


class TestRanking:
    """Tests for max_edit_distance_for and rank_candidates."""

    def test_edit_distance_budget(self):
        assert max_edit_distance_for("ko") == 1
        assert max_edit_distance_for("kot") == 1
        assert max_edit_distance_for("kota") == 2
        assert max_edit_distance_for("dzień") == 2

    def test_best_score_first(self):
        matches = [
            FuzzyMatch(word="dziecko", edit_distance=2, is_common=False),
            FuzzyMatch(word="dzień", edit_distance=1, is_common=True),
        ]
        ranked = rank_candidates("dzie", matches)
        assert [c.text for c in ranked] == ["dzień", "dziecko"]
        assert ranked[0].score > ranked[1].score

    def test_ties_keep_input_order(self):
        matches = [
            FuzzyMatch(word="kut", edit_distance=1),
            FuzzyMatch(word="kat", edit_distance=1),
            FuzzyMatch(word="kit", edit_distance=1),
        ]
        ranked = rank_candidates("kot", matches)
        assert [c.text for c in ranked] == ["kut", "kat", "kit"]

    def test_capitalization_applied(self):
        ranked = rank_candidates("Dzie", [FuzzyMatch(word="dzień", edit_distance=1)])
        assert ranked[0].text == "Dzień"

    def test_empty(self):
        assert rank_candidates("kot", []) == []
