"""
WordNet Relatedness for the Change Classifier
=============================================
Lexical-semantic lookups over WordNet.

Features:
- Synonym sets per word and sense
- Hirst-St-Onge relatedness (0-16) between sense-tagged words
- Normalized Jiang-Conrath relatedness matrix over a vocabulary

Words are addressed as "word#sense" keys where sense is a WordNet POS
letter (n, v, a, r).

Requires: pip install nltk numpy
Data: python -c "import nltk; nltk.download('wordnet'); nltk.download('wordnet_ic')"
"""

from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Set, Tuple, Any

import numpy as np

from ..base import NLPIntegrationBase, NLPServiceError, ensure_nltk_resource


# Hirst-St-Onge constants
HSO_C = 8
HSO_K = 1
HSO_MAX = 2 * HSO_C  # Strong relation
HSO_MAX_PATH = 5

# Scores at or above this mean "same concept" in NLTK's jcn_similarity
JCN_IDENTICAL = 1e299


def split_key(key: str) -> Tuple[str, Optional[str]]:
    """Split a "word#sense" key; sense is None when absent or empty."""
    word, _, sense = key.partition('#')
    return word, (sense or None)


def _upward(synset) -> list:
    return (synset.hypernyms() + synset.instance_hypernyms()
            + synset.member_holonyms() + synset.part_holonyms()
            + synset.substance_holonyms())


def _horizontal(synset) -> list:
    linked = synset.also_sees() + synset.similar_tos() + synset.attributes()
    for lemma in synset.lemmas():
        linked.extend(antonym.synset() for antonym in lemma.antonyms())
    return linked


@lru_cache(maxsize=20000)
def _closure(synset, direction: str, max_depth: int) -> Dict[Any, int]:
    """Minimum link count from synset to every node reachable in max_depth links."""
    step = _upward if direction == 'U' else _horizontal
    depths = {synset: 0}
    frontier = [synset]
    for depth in range(1, max_depth + 1):
        next_frontier = []
        for node in frontier:
            for neighbour in step(node):
                if neighbour not in depths:
                    depths[neighbour] = depth
                    next_frontier.append(neighbour)
        if not next_frontier:
            break
        frontier = next_frontier
    return depths


def hso_synsets(s1, s2) -> float:
    """
    Hirst-St-Onge relatedness of two synsets.

    Strong relations (same synset, direct horizontal link) score 16.
    Medium-strong relations score C - path_length - k * turns over the
    allowed link patterns (upward*, horizontal*, downward*; or
    downward+ horizontal+), with at most HSO_MAX_PATH links.
    """
    if s1 == s2:
        return float(HSO_MAX)
    if s2 in _horizontal(s1) or s1 in _horizontal(s2):
        return float(HSO_MAX)

    best = 0
    up1 = _closure(s1, 'U', HSO_MAX_PATH)
    up2 = _closure(s2, 'U', HSO_MAX_PATH)

    # up from s1 then down to s2 (s2 reaches the same ancestor going up)
    for node, i in up1.items():
        j = up2.get(node)
        if j is None:
            continue
        length = i + j
        if 0 < length <= HSO_MAX_PATH:
            turns = 1 if i and j else 0
            best = max(best, HSO_C - length - HSO_K * turns)

    # up, across, then down
    for node, i in up1.items():
        if i >= HSO_MAX_PATH:
            continue
        for other, h in _closure(node, 'H', HSO_MAX_PATH - i).items():
            if h == 0:
                continue
            j = up2.get(other)
            if j is None or i + h + j > HSO_MAX_PATH:
                continue
            turns = (1 if i else 0) + (1 if j else 0)
            best = max(best, HSO_C - (i + h + j) - HSO_K * turns)

    # down from s1, then across to s2
    for other, h in _closure(s2, 'H', HSO_MAX_PATH - 1).items():
        if h == 0:
            continue
        i = _closure(other, 'U', HSO_MAX_PATH - h).get(s1)
        if i:
            best = max(best, HSO_C - (i + h) - HSO_K)

    return float(max(best, 0))


class WordNetRelatedness(NLPIntegrationBase):
    """
    WordNet-backed semantic relatedness service.

    Every lookup takes use_mfs explicitly: True restricts a word to its
    most frequent sense, False considers all senses and keeps the best.
    """

    INTEGRATION_NAME = "WordNet"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(self, ic_corpus: str = "ic-brown.dat"):
        """
        Initialize WordNet and the information-content corpus.

        Args:
            ic_corpus: wordnet_ic file used by Jiang-Conrath
        """
        super().__init__()
        self._wn = None
        self._ic = None
        self.ic_corpus = ic_corpus
        self._initialize()

    def _initialize(self):
        """Initialize WordNet."""
        try:
            ensure_nltk_resource('corpora/wordnet', 'wordnet')
            ensure_nltk_resource('corpora/wordnet_ic', 'wordnet_ic')

            from nltk.corpus import wordnet as wn
            from nltk.corpus import wordnet_ic

            self._wn = wn
            self._ic = wordnet_ic.ic(self.ic_corpus)
            self._available = True

        except ImportError as e:
            self._error = f"nltk not installed: {e}"
            self._available = False
        except NLPServiceError as e:
            self._error = e.message
            self._available = False
        except (LookupError, OSError) as e:
            self._error = f"Failed to initialize WordNet: {e}"
            self._available = False

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the WordNet integration."""
        return {
            'available': self.is_available,
            'error': self._error,
            'ic_corpus': self.ic_corpus,
            'features': ['synonyms', 'relatedness', 'relatedness_matrix']
            if self.is_available else []
        }

    def _synsets(self, word: str, sense: Optional[str], use_mfs: bool) -> list:
        if sense is None:
            return []
        synsets = self._wn.synsets(word.replace(' ', '_'), pos=sense)
        if sense == 'a':
            # Satellite adjectives live under their own POS letter
            synsets = synsets or self._wn.synsets(word.replace(' ', '_'), pos='s')
        return synsets[:1] if use_mfs else synsets

    def synonyms(self, word: str, sense: Optional[str], use_mfs: bool = False) -> Set[str]:
        """
        Get all synonyms for a word in the given sense.

        Args:
            word: Base form of the word
            sense: WordNet POS letter
            use_mfs: Only the most frequent sense

        Returns:
            Set of lowercased synonym strings (the word itself excluded)
        """
        self.require_available()

        synonyms = set()
        for syn in self._synsets(word, sense, use_mfs):
            for lemma in syn.lemmas():
                synonym = lemma.name().replace('_', ' ').lower()
                if synonym != word.lower():
                    synonyms.add(synonym)
        return synonyms

    def relatedness(self, key1: str, key2: str, use_mfs: bool = False) -> float:
        """
        Hirst-St-Onge relatedness of two "word#sense" keys.

        Returns:
            Score from 0 (unrelated) to 16 (same concept)
        """
        self.require_available()

        word1, sense1 = split_key(key1)
        word2, sense2 = split_key(key2)
        synsets1 = self._synsets(word1, sense1, use_mfs)
        synsets2 = self._synsets(word2, sense2, use_mfs)

        best = 0.0
        for s1 in synsets1:
            for s2 in synsets2:
                best = max(best, hso_synsets(s1, s2))
                if best >= HSO_MAX:
                    return best
        return best

    def _jcn(self, key1: str, key2: str, use_mfs: bool) -> float:
        """Best raw Jiang-Conrath score; inf for a shared synset."""
        from nltk.corpus.reader.wordnet import WordNetError

        word1, sense1 = split_key(key1)
        word2, sense2 = split_key(key2)
        if sense1 is None or sense1 != sense2:
            return 0.0

        synsets1 = self._synsets(word1, sense1, use_mfs)
        synsets2 = self._synsets(word2, sense2, use_mfs)
        if set(synsets1) & set(synsets2):
            return float('inf')
        if sense1 not in ('n', 'v'):
            # No information content for adjectives/adverbs
            return 0.0

        best = 0.0
        for s1 in synsets1:
            for s2 in synsets2:
                try:
                    score = s1.jcn_similarity(s2, self._ic)
                except WordNetError:
                    continue
                if score >= JCN_IDENTICAL:
                    return float('inf')
                best = max(best, score)
        return best

    def relatedness_matrix(self, keys: Sequence[str], use_mfs: bool = False) -> np.ndarray:
        """
        Normalized pairwise relatedness of a vocabulary.

        Args:
            keys: "word#sense" keys, in the order rows/columns should follow
            use_mfs: Only the most frequent sense of each word

        Returns:
            Symmetric (n, n) array with entries in [0, 1] and a unit diagonal
        """
        self.require_available()

        keys = list(keys)
        n = len(keys)
        raw = np.zeros((n, n))
        for i in range(n):
            for j in range(i + 1, n):
                raw[i, j] = raw[j, i] = self._jcn(keys[i], keys[j], use_mfs)

        identical = np.isinf(raw)
        finite = raw[~identical]
        scale = max(1.0, float(finite.max())) if finite.size else 1.0

        matrix = np.where(identical, 1.0, raw / scale)
        matrix = np.clip(matrix, 0.0, 1.0)
        np.fill_diagonal(matrix, 1.0)
        return matrix

