"""Tests for candidate arbitration and document-level confidence."""

from types import SimpleNamespace

import pytest

from note_parser_backend.core.parser_engine import (
    Confidence,
    overall_confidence,
    select_winner,
    should_replace,
)

HIGH, MEDIUM, LOW = Confidence.HIGH, Confidence.MEDIUM, Confidence.LOW


def candidates(*levels):
    return [SimpleNamespace(confidence=level, pattern=f"p{i}") for i, level in enumerate(levels)]


class TestConfidenceOrdering:
    """Test the ordered confidence levels."""

    def test_total_order(self):
        assert LOW < MEDIUM < HIGH
        assert HIGH >= HIGH
        assert max([LOW, HIGH, MEDIUM]) is HIGH


class TestShouldReplace:
    """Test the pairwise replacement rule."""

    @pytest.mark.parametrize("incumbent,challenger,expected", [
        (None, LOW, True),
        (LOW, MEDIUM, True),
        (LOW, HIGH, True),
        (MEDIUM, HIGH, True),
        (MEDIUM, LOW, False),
        (HIGH, MEDIUM, False),
        (HIGH, HIGH, False),
        (MEDIUM, MEDIUM, False),
        (LOW, LOW, False),
    ])
    def test_rule(self, incumbent, challenger, expected):
        assert should_replace(incumbent, challenger) is expected


class TestSelectWinner:
    """Test greedy winner selection."""

    def test_no_candidates(self):
        assert select_winner([]) is None

    def test_low_high_medium_selects_high(self):
        winner = select_winner(candidates(LOW, HIGH, MEDIUM))
        assert winner.confidence is HIGH
        assert winner.pattern == "p1"

    def test_first_seen_wins_ties(self):
        winner = select_winner(candidates(MEDIUM, MEDIUM, LOW))
        assert winner.pattern == "p0"

    def test_later_higher_candidate_displaces(self):
        winner = select_winner(candidates(LOW, LOW, MEDIUM))
        assert winner.pattern == "p2"


class TestOverallConfidence:
    """Test document-level confidence."""

    def test_empty_is_low(self):
        assert overall_confidence([]) is LOW

    def test_majority_high(self):
        assert overall_confidence([HIGH, HIGH, HIGH, LOW]) is HIGH

    def test_exact_half_is_not_majority(self):
        assert overall_confidence([HIGH, LOW]) is LOW
        assert overall_confidence([HIGH, HIGH, MEDIUM, MEDIUM]) is LOW

    def test_majority_medium(self):
        assert overall_confidence([MEDIUM, MEDIUM, HIGH]) is MEDIUM

    def test_single_result(self):
        assert overall_confidence([MEDIUM]) is MEDIUM
