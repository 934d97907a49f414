"""
Shared fixtures
===============
In-memory stand-ins for the linguistic services, so the classifier can
be tested without spaCy models, WordNet data or a LanguageTool server.

The diff engine and the topic feature model are the real ones.
"""

import re
import time

import numpy as np
import pytest

from nlp_services.base import NLPServiceError
from nlp_services.lexical import TOKEN_PATTERN, TextFeatureModel, penn_to_wordnet


STOPWORDS = {
    'a', 'an', 'the', 'on', 'in', 'of', 'and', 'to', 'is', 'are', 'was',
    'it', 'he', 'she', 'they', 'we', 'i', 'by', 'at',
}

MISSPELLED = {'teh', 'hte', 'recieve', 'speling', 'wrold'}

TAGS = {
    'big': 'JJ', 'large': 'JJ', 'red': 'JJ', 'small': 'JJ',
    'sat': 'VBD', 'rested': 'VBD', 'lay': 'VBD',
    'go': 'VB', 'goes': 'VBZ', 'is': 'VBZ', 'are': 'VBP', 'can': 'MD',
    'quickly': 'RB', 'the': 'DT', 'a': 'DT', 'three': 'CD', '3': 'CD',
}


class FakeLexicon:
    """Regex tokenizer; every alphabetic word except MISSPELLED is known."""

    def __init__(self, misspelled=MISSPELLED, stopwords=STOPWORDS):
        self.misspelled = set(misspelled)
        self.stopwords = set(stopwords)
        self._pattern = re.compile(TOKEN_PATTERN)

    def tokenize(self, text, remove_stopwords=False, stem=False):
        tokens = self._pattern.findall(text or '')
        if remove_stopwords:
            tokens = [t for t in tokens if t.lower() not in self.stopwords]
        if stem:
            tokens = [t.lower()[:-1] if len(t) > 3 and t.lower().endswith('s') else t.lower()
                      for t in tokens]
        return tokens

    def in_dictionary(self, word):
        return word.isalpha() and word.lower() not in self.misspelled

    def stem(self, word, tag):
        return word.lower(), penn_to_wordnet(tag)


class FakeTagger:
    """Looks words up in TAGS; anything else is a noun."""

    def __init__(self, tags=TAGS):
        self.tags = dict(tags)

    def tag(self, tokens):
        return [self.tags.get(t.lower(), 'NN') for t in tokens]


class FakeSegmenter:
    """Sentences end at '.', '!' or '?'."""

    _SENTENCE = re.compile(r'[^.!?]+[.!?]*')

    def sentence_spans(self, text):
        spans = []
        for m in self._SENTENCE.finditer(text or ''):
            chunk = m.group()
            if not chunk.strip():
                continue
            start = m.start() + (len(chunk) - len(chunk.lstrip()))
            spans.append((start, m.end()))
        return spans

    def count_sentences(self, text):
        return len(self.sentence_spans(text))


class FakeRelatedness:
    """
    Relatedness from fixed tables.

    Args:
        synonyms: {word: set of synonyms}
        scores: {(word1, word2): bounded relatedness score}
        matrix_scores: {(word1, word2): normalized matrix entry}
    """

    def __init__(self, synonyms=None, scores=None, matrix_scores=None):
        self._synonyms = synonyms or {}
        self._scores = {frozenset(k): v for k, v in (scores or {}).items()}
        self._matrix = {frozenset(k): v for k, v in (matrix_scores or {}).items()}
        self.use_mfs_calls = []

    def synonyms(self, word, sense, use_mfs=False):
        self.use_mfs_calls.append(use_mfs)
        return set(self._synonyms.get(word, set()))

    def relatedness(self, key1, key2, use_mfs=False):
        self.use_mfs_calls.append(use_mfs)
        w1, w2 = key1.split('#')[0], key2.split('#')[0]
        if w1 == w2:
            return 16.0
        return self._scores.get(frozenset((w1, w2)), 0.0)

    def relatedness_matrix(self, keys, use_mfs=False):
        self.use_mfs_calls.append(use_mfs)
        words = [k.split('#')[0] for k in keys]
        n = len(words)
        W = np.eye(n)
        for i in range(n):
            for j in range(i + 1, n):
                W[i, j] = W[j, i] = self._matrix.get(frozenset((words[i], words[j])), 0.0)
        return W


class FakeGrammar:
    """Reports one issue per listed phrase found in the text (case-insensitive)."""

    def __init__(self, bad_phrases=('it are', 'he go'), delay=0.0):
        self.bad_phrases = [p.lower() for p in bad_phrases]
        self.delay = delay

    def check(self, text):
        if self.delay:
            time.sleep(self.delay)
        lowered = text.lower()
        return [p for p in self.bad_phrases if p in lowered]


class FailingGrammar:
    """Grammar service whose backend is down."""

    def check(self, text):
        raise NLPServiceError("LanguageTool unavailable: server not running", service="LanguageTool")


class CrashingGrammar:
    """Grammar service whose connection drops mid-call."""

    def check(self, text):
        raise OSError("grammar backend I/O error")


class FailingRelatedness:
    """Relatedness service whose WordNet data is missing."""

    def _fail(self, *args, **kwargs):
        raise NLPServiceError("WordNet unavailable: corpus not found", service="WordNet")

    synonyms = relatedness = relatedness_matrix = _fail


def make_services(**overrides):
    """Build a LinguisticServices bundle from fakes, replacing any member."""
    from change_classifier.differ import DiffEngine
    from change_classifier.services import LinguisticServices

    lexicon = overrides.pop('lexicon', None) or FakeLexicon()
    members = {
        'differ': DiffEngine(),
        'lexicon': lexicon,
        'tagger': FakeTagger(),
        'segmenter': FakeSegmenter(),
        'relatedness': FakeRelatedness(
            scores={('big', 'large'): 6.0, ('big', 'small'): 4.0},
            matrix_scores={('cat', 'feline'): 0.9, ('mat', 'rug'): 0.8, ('sat', 'rested'): 0.7},
        ),
        'grammar': FakeGrammar(),
        'topics': TextFeatureModel(lexicon),
    }
    members.update(overrides)
    return LinguisticServices(**members)


@pytest.fixture
def services():
    """Fake services with the default tables."""
    return make_services()


@pytest.fixture
def settings():
    """Default thresholds, classification inline."""
    from change_classifier.classifiers import ClassifierSettings
    return ClassifierSettings(max_workers=1)


@pytest.fixture
def classifiers(services, settings):
    from change_classifier.classifiers import EditClassifiers
    return EditClassifiers(services, settings)


@pytest.fixture
def pipeline(services, settings):
    from change_classifier.pipeline import ClassificationPipeline
    return ClassificationPipeline(services=services, settings=settings)
