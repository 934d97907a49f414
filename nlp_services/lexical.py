"""
Lexical Primitives for the Change Classifier
============================================
Tokenization, stopword filtering, stemming and simple string predicates.

Features:
- Word tokenization (letters, apostrophes, numbers) via NLTK
- English stopword removal (NLTK stopwords corpus)
- Porter stemming and POS-aware WordNet lemmatization
- Quote / formatting / number / symbol predicates
- Text features and probability distributions for topic comparison

Requires: pip install nltk
Data: python -c "import nltk; nltk.download('stopwords'); nltk.download('wordnet')"
"""

import re
import threading
from collections import Counter
from typing import Dict, Iterable, List, Optional, Set, Tuple, Any

from .base import NLPIntegrationBase, NLPServiceError, ensure_nltk_resource


# Opening quote -> accepted closing quotes
QUOTE_PAIRS = {
    '"': {'"', '”', '“'},
    '“': {'”', '"'},
    '„': {'“', '”'},
    '«': {'»'},
    '»': {'«'},
    "'": {"'", '’'},
    '‘': {'’', "'"},
    '‚': {'‘', '’'},
}

_NUMBER_RE = re.compile(r'^[+-]?(?:\d+(?:[.,]\d+)*|[.,]\d+)%?$')

# Words, contractions and numbers; punctuation is dropped
TOKEN_PATTERN = r"[A-Za-z]+(?:['’][A-Za-z]+)*|\d+(?:[.,]\d+)*"

# Penn Treebank tag prefix -> WordNet POS
_PENN_TO_WORDNET = (
    ('NN', 'n'),
    ('CD', 'n'),
    ('VB', 'v'),
    ('MD', 'v'),
    ('JJ', 'a'),
    ('RB', 'r'),
)


def is_quote(text: str) -> bool:
    """True if text (whitespace stripped) is enclosed in matching quotes."""
    s = text.strip()
    if len(s) < 2:
        return False
    closers = QUOTE_PAIRS.get(s[0])
    return closers is not None and s[-1] in closers


def is_formatting_symbol(text: str) -> bool:
    """True if text is non-empty and holds no letters or digits."""
    return bool(text) and not any(ch.isalnum() for ch in text)


def is_number(text: str) -> bool:
    """True if text is a plain numeric literal (1, 3.5, 1,000, 20%)."""
    return bool(_NUMBER_RE.match(text.strip()))


def is_symbol(text: str) -> bool:
    """True if text is non-blank and made only of punctuation/symbol characters."""
    s = text.strip()
    return bool(s) and all(not ch.isalnum() and not ch.isspace() for ch in s)


def penn_to_wordnet(tag: str) -> Optional[str]:
    """Map a Penn Treebank tag to a WordNet POS letter, or None."""
    for prefix, pos in _PENN_TO_WORDNET:
        if tag.startswith(prefix):
            return pos
    return None


class NltkLexicon(NLPIntegrationBase):
    """
    NLTK-based tokenizer/stemmer with dictionary lookups delegated
    to a SymSpell dictionary.
    """

    INTEGRATION_NAME = "NLTK Lexicon"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(self, dictionary=None):
        """
        Initialize the lexicon.

        Args:
            dictionary: Object with in_dictionary(word); defaults to the
                        shared SymSpell dictionary
        """
        super().__init__()
        self._dictionary = dictionary
        self._stopwords: Set[str] = set()
        self._tokenizer = None
        self._porter = None
        self._wn = None
        self._initialize()

    def _initialize(self):
        """Load tokenizer, stopwords and WordNet."""
        try:
            from nltk.tokenize import RegexpTokenizer
            from nltk.stem import PorterStemmer

            ensure_nltk_resource('corpora/stopwords', 'stopwords')
            ensure_nltk_resource('corpora/wordnet', 'wordnet')

            from nltk.corpus import stopwords
            from nltk.corpus import wordnet as wn

            self._tokenizer = RegexpTokenizer(TOKEN_PATTERN)
            self._porter = PorterStemmer()
            self._stopwords = set(stopwords.words('english'))
            self._wn = wn
            self._available = True

        except ImportError as e:
            self._error = f"nltk not installed: {e}"
            self._available = False
        except NLPServiceError as e:
            self._error = e.message
            self._available = False

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the lexicon."""
        return {
            'available': self.is_available,
            'error': self._error,
            'stopwords': len(self._stopwords),
        }

    def tokenize(self, text: str, remove_stopwords: bool = False, stem: bool = False) -> List[str]:
        """
        Split text into word tokens.

        Args:
            text: Text to tokenize
            remove_stopwords: Drop English stopwords
            stem: Porter-stem every remaining token

        Returns:
            Ordered list of tokens
        """
        self.require_available()

        tokens = self._tokenizer.tokenize(text or '')
        if remove_stopwords:
            tokens = [t for t in tokens if t.lower() not in self._stopwords]
        if stem:
            tokens = [self._porter.stem(t) for t in tokens]
        return tokens

    def in_dictionary(self, word: str) -> bool:
        """Check whether word is a known English word."""
        if self._dictionary is None:
            from .spelling import get_dictionary
            self._dictionary = get_dictionary()
        return self._dictionary.in_dictionary(word)

    def stem(self, word: str, tag: str) -> Tuple[str, Optional[str]]:
        """
        Reduce a word to its base form for the sense implied by its tag.

        Args:
            word: Surface word
            tag: Penn Treebank tag of the word

        Returns:
            (stem, sense) where sense is a WordNet POS letter, or None
            when the tag has no WordNet class
        """
        self.require_available()

        lowered = word.lower()
        sense = penn_to_wordnet(tag)
        if sense is None:
            return lowered, None

        base = self._wn.morphy(lowered, sense)
        return (base or lowered), sense


class TextFeatureModel:
    """
    Feature vocabulary and probability distributions over document text.

    Features are stemmed, stopword-filtered alphabetic tokens of at
    least MIN_FEATURE_LENGTH characters.
    """

    MIN_FEATURE_LENGTH = 3

    def __init__(self, lexicon):
        self._lexicon = lexicon

    def _features_of(self, text: str) -> List[str]:
        return [
            token.lower()
            for token in self._lexicon.tokenize(text, remove_stopwords=True, stem=True)
            if token.isalpha() and len(token) >= self.MIN_FEATURE_LENGTH
        ]

    def extract_features(self, text_a: str, text_b: str) -> List[str]:
        """Sorted shared feature vocabulary of two texts."""
        return sorted(set(self._features_of(text_a)) | set(self._features_of(text_b)))

    def distribution(self, features: Iterable[str], text: str) -> Dict[str, float]:
        """
        Relative frequency of each feature in text.

        Returns an all-zero mapping when none of the features occur.
        """
        features = list(features)
        wanted = set(features)
        counts = Counter(f for f in self._features_of(text) if f in wanted)
        total = sum(counts.values())
        if total == 0:
            return {f: 0.0 for f in features}
        return {f: counts.get(f, 0) / total for f in features}


# Shared instance
_lexicon = None
_lock = threading.Lock()


def get_lexicon() -> NltkLexicon:
    """Get the shared NltkLexicon instance (lazy loaded, once)."""
    global _lexicon
    if _lexicon is None:
        with _lock:
            if _lexicon is None:
                _lexicon = NltkLexicon()
    return _lexicon


def get_status() -> dict:
    """Get lexicon integration status."""
    try:
        return get_lexicon().get_status()
    except ImportError as e:
        return {'available': False, 'error': f"nltk not installed: {e}"}
