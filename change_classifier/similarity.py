"""
Sentence Similarity
===================
Bag-of-semantics similarity between two sentences (Fernando & Stevenson).

Each sentence becomes a binary presence vector over the sorted union of
both sentences' "word#sense" keys. Exact word overlap is softened by a
pairwise relatedness matrix W:

    sim = aᵀWb / sqrt((aᵀWa)(bᵀWb))
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from config_logging import get_logger

logger = get_logger('change_classifier.similarity')


def fernando_similarity(a: Sequence[float], b: Sequence[float], W) -> float:
    """
    Relatedness-weighted cosine similarity of two vectors.

    Args:
        a: Presence vector of the first sentence
        b: Presence vector of the second sentence
        W: Square relatedness matrix over the same vocabulary

    Returns:
        Similarity score; 0.0 when either vector has no self-similarity
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    W = np.asarray(W, dtype=float)

    if W.shape != (a.size, a.size) or b.size != a.size:
        raise ValueError(f"Shape mismatch: a={a.size}, b={b.size}, W={W.shape}")

    self_a = float(a @ W @ a)
    self_b = float(b @ W @ b)
    if self_a <= 0.0 or self_b <= 0.0:
        return 0.0
    return float(a @ W @ b) / math.sqrt(self_a * self_b)


def presence_vectors(keys1: Sequence[str], keys2: Sequence[str]) -> Tuple[List[str], np.ndarray, np.ndarray]:
    """
    Sorted vocabulary of two key lists and their binary presence vectors.

    Returns:
        (vocabulary, a, b)
    """
    set1, set2 = set(keys1), set(keys2)
    vocabulary = sorted(set1 | set2)
    a = np.array([1.0 if key in set1 else 0.0 for key in vocabulary])
    b = np.array([1.0 if key in set2 else 0.0 for key in vocabulary])
    return vocabulary, a, b


class SentenceSimilarity:
    """Scores two sentences with the lexicon, tagger and relatedness services."""

    def __init__(self, lexicon, tagger, relatedness, use_mfs: bool = False):
        self.lexicon = lexicon
        self.tagger = tagger
        self.relatedness = relatedness
        self.use_mfs = use_mfs

    def sense_keys(self, sentence: str) -> List[str]:
        """Content words of a sentence as "word#sense" keys, in order."""
        tokens = self.lexicon.tokenize(sentence, remove_stopwords=True, stem=False)
        if not tokens:
            return []
        tags = self.tagger.tag(tokens)
        keys = []
        for token, tag in zip(tokens, tags):
            stem, sense = self.lexicon.stem(token, tag)
            keys.append(f"{stem}#{sense or ''}")
        return keys

    def score(self, sentence1: str, sentence2: str) -> Optional[float]:
        """
        Similarity of two sentences.

        Returns:
            The score, or None if either sentence has no content words
        """
        keys1 = self.sense_keys(sentence1)
        keys2 = self.sense_keys(sentence2)
        if not keys1 or not keys2:
            return None

        vocabulary, a, b = presence_vectors(keys1, keys2)
        W = self.relatedness.relatedness_matrix(vocabulary, use_mfs=self.use_mfs)
        sim = fernando_similarity(a, b, W)

        logger.debug(f"Sentence similarity {sim:.3f}", vocabulary_size=len(vocabulary))
        return sim


def sentence_similarity(sentence1: str, sentence2: str, services=None,
                        use_mfs: bool = False) -> Optional[float]:
    """
    Similarity of two sentences, or None if either has no content words.

    Uses the default linguistic services unless a bundle is given.
    """
    if services is None:
        from .services import LinguisticServices
        services = LinguisticServices.default()
    scorer = SentenceSimilarity(services.lexicon, services.tagger, services.relatedness, use_mfs)
    return scorer.score(sentence1, sentence2)
