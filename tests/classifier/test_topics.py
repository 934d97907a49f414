"""
Tests for Topic Shift Detection
===============================
"""

import pytest

from change_classifier.models import Edit, TopicOutcome
from change_classifier.topics import jensen_shannon, apply_edit, TopicShiftDetector
from config_logging import MalformedEditError


class TestJensenShannon:
    """Tests for jensen_shannon."""

    def test_identical_distributions(self):
        p = {'cat': 0.5, 'dog': 0.5}
        assert jensen_shannon(p, dict(p)) == pytest.approx(0.0)

    def test_disjoint_distributions(self):
        assert jensen_shannon({'cat': 1.0}, {'dog': 1.0}) == pytest.approx(1.0)

    def test_symmetric(self):
        p = {'a': 0.7, 'b': 0.2, 'c': 0.1}
        q = {'a': 0.1, 'b': 0.3, 'c': 0.6}
        assert jensen_shannon(p, q) == pytest.approx(jensen_shannon(q, p))

    def test_bounded(self):
        p = {'a': 0.9, 'b': 0.1}
        q = {'a': 0.2, 'b': 0.8}
        assert 0.0 < jensen_shannon(p, q) < 1.0

    def test_renormalizes(self):
        assert jensen_shannon({'a': 2.0, 'b': 2.0}, {'a': 0.5, 'b': 0.5}) == pytest.approx(0.0)

    def test_zero_mass(self):
        with pytest.raises(ValueError):
            jensen_shannon({'a': 0.0}, {'a': 1.0})


class TestApplyEdit:
    """Tests for apply_edit."""

    def test_replacement(self):
        assert apply_edit(Edit("cat", "dog", 4, 4), "The cat sat.") == "The dog sat."

    def test_insertion(self):
        assert apply_edit(Edit("", "big ", 4, 4), "The cat sat.") == "The big cat sat."

    def test_deletion(self):
        assert apply_edit(Edit(" sat", "", 7, 7), "The cat sat.") == "The cat."

    def test_insertion_at_end(self):
        assert apply_edit(Edit("", "!", 3, 3), "abc") == "abc!"

    def test_mismatch(self):
        with pytest.raises(MalformedEditError) as exc_info:
            apply_edit(Edit("dog", "cat", 4, 4), "The cat sat.")
        assert exc_info.value.code == "MALFORMED_EDIT"

    def test_out_of_range(self):
        with pytest.raises(MalformedEditError):
            apply_edit(Edit("", "x", 10, 0), "abc")


class TestTopicShiftDetector:
    """Tests for TopicShiftDetector over the real feature model."""

    @pytest.fixture
    def detector(self, services):
        return TopicShiftDetector(services.topics)

    def test_preserved(self, detector):
        text = "Cats purr. Cats sleep. Cats hunt mice. Cats groom fur."
        pos = text.index("hunt")
        edit = Edit("hunt", "chase", pos, pos)
        assert detector.divergence(edit, text) == pytest.approx(0.1)
        assert detector.outcome(edit, text) is TopicOutcome.PRESERVED

    def test_diverged(self, detector):
        edit = Edit("Cats purr.", "Stocks fell sharply.", 0, 0)
        assert detector.outcome(edit, "Cats purr.") is TopicOutcome.DIVERGED

    def test_no_features(self, detector):
        edit = Edit("is", "was", 3, 3)
        assert detector.divergence(edit, "It is.") is None
        assert detector.outcome(edit, "It is.") is TopicOutcome.INDETERMINATE

    def test_document_emptied(self, detector):
        edit = Edit("Cats purr.", "", 0, 0)
        assert detector.outcome(edit, "Cats purr.") is TopicOutcome.INDETERMINATE

    def test_threshold(self, services):
        strict = TopicShiftDetector(services.topics, max_divergence=0.05)
        text = "Cats purr. Cats sleep. Cats hunt mice. Cats groom fur."
        pos = text.index("hunt")
        assert strict.outcome(Edit("hunt", "chase", pos, pos), text) is TopicOutcome.DIVERGED
