"""
Tests for Semantics NLP Module
==============================
Tests for WordNet synonyms and relatedness.
"""

import numpy as np
import pytest

from nlp_services.semantics.wordnet import split_key, HSO_MAX


@pytest.fixture
def relatedness():
    """Get the shared WordNet relatedness service."""
    try:
        from nlp_services.semantics import get_relatedness
        service = get_relatedness()
    except ImportError:
        pytest.skip("Semantics module not available")
    if not service.is_available:
        pytest.skip("WordNet not available")
    return service


class TestSplitKey:

    def test_with_sense(self):
        assert split_key("cat#n") == ("cat", "n")

    def test_empty_sense(self):
        assert split_key("quickly#") == ("quickly", None)

    def test_no_sense(self):
        assert split_key("cat") == ("cat", None)


class TestSynonyms:
    """Tests for synonym lookups."""

    def test_adjective_synonyms(self, relatedness):
        assert "large" in relatedness.synonyms("big", "a")

    def test_noun_synonyms(self, relatedness):
        assert "automobile" in relatedness.synonyms("car", "n")

    def test_word_itself_excluded(self, relatedness):
        assert "car" not in relatedness.synonyms("car", "n")

    def test_no_sense(self, relatedness):
        assert relatedness.synonyms("car", None) == set()

    def test_most_frequent_sense_is_subset(self, relatedness):
        all_senses = relatedness.synonyms("run", "v")
        first_sense = relatedness.synonyms("run", "v", use_mfs=True)
        assert first_sense <= all_senses


class TestRelatedness:
    """Tests for Hirst-St-Onge relatedness."""

    def test_same_concept(self, relatedness):
        assert relatedness.relatedness("car#n", "automobile#n") == HSO_MAX

    def test_bounded(self, relatedness):
        score = relatedness.relatedness("car#n", "banana#n")
        assert 0.0 <= score <= HSO_MAX

    def test_related_above_unrelated(self, relatedness):
        related = relatedness.relatedness("car#n", "vehicle#n")
        unrelated = relatedness.relatedness("car#n", "philosophy#n")
        assert related > unrelated

    def test_missing_sense(self, relatedness):
        assert relatedness.relatedness("car#", "automobile#n") == 0.0

    def test_unknown_word(self, relatedness):
        assert relatedness.relatedness("qzxv#n", "car#n") == 0.0


class TestRelatednessMatrix:
    """Tests for the normalized Jiang-Conrath matrix."""

    def test_shape_and_diagonal(self, relatedness):
        keys = ["automobile#n", "banana#n", "car#n"]
        W = relatedness.relatedness_matrix(keys)
        assert W.shape == (3, 3)
        assert np.allclose(np.diag(W), 1.0)

    def test_symmetric_and_bounded(self, relatedness):
        W = relatedness.relatedness_matrix(["car#n", "truck#n", "banana#n", "run#v"])
        assert np.allclose(W, W.T)
        assert W.min() >= 0.0
        assert W.max() <= 1.0

    def test_shared_synset_is_one(self, relatedness):
        W = relatedness.relatedness_matrix(["automobile#n", "car#n"])
        assert W[0, 1] == pytest.approx(1.0)

    def test_different_senses_unrelated(self, relatedness):
        W = relatedness.relatedness_matrix(["run#v", "car#n"])
        assert W[0, 1] == 0.0

    def test_empty(self, relatedness):
        assert relatedness.relatedness_matrix([]).shape == (0, 0)


class TestModuleFunctions:

    def test_get_status(self):
        try:
            from nlp_services.semantics import get_status
            status = get_status()
            assert 'available' in status
        except ImportError:
            pytest.skip("Semantics module not available")
