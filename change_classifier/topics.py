"""
Topic Shift
===========
Measures how far an edit moves a document's topic.

The document is rebuilt with the single edit applied, both versions are
turned into probability distributions over a shared feature vocabulary,
and the two distributions are compared with the Jensen-Shannon
divergence (base 2, so the score lies in [0, 1]).
"""

from typing import Mapping, Optional

import numpy as np

from config_logging import get_logger, MalformedEditError
from .models import Edit, TopicOutcome

logger = get_logger('change_classifier.topics')


def jensen_shannon(p: Mapping[str, float], q: Mapping[str, float]) -> float:
    """
    Jensen-Shannon divergence of two distributions over named features.

    Missing features count as zero mass. Each distribution is
    renormalized before comparison.

    Raises:
        ValueError: If either distribution has no mass
    """
    features = sorted(set(p) | set(q))
    P = np.array([p.get(f, 0.0) for f in features], dtype=float)
    Q = np.array([q.get(f, 0.0) for f in features], dtype=float)

    if P.sum() <= 0 or Q.sum() <= 0:
        raise ValueError("Distributions must have positive mass")

    P = P / P.sum()
    Q = Q / Q.sum()
    M = (P + Q) / 2

    def kl(X):
        mask = X > 0
        return float(np.sum(X[mask] * np.log2(X[mask] / M[mask])))

    return min(1.0, max(0.0, 0.5 * kl(P) + 0.5 * kl(Q)))


def apply_edit(edit: Edit, text: str) -> str:
    """
    Rebuild a document with one edit applied.

    Insertions, deletions and replacements all splice `after` in place
    of `before` at pos1.

    Raises:
        MalformedEditError: If `before` is not found at pos1
    """
    if not (0 <= edit.pos1 <= len(text)) or text[edit.pos1:edit.end1] != edit.before:
        raise MalformedEditError(
            f"Edit text not found at offset {edit.pos1}",
            pos1=edit.pos1
        )
    return text[:edit.pos1] + edit.after + text[edit.end1:]


class TopicShiftDetector:
    """Decides whether an edit diverged a document's topic."""

    def __init__(self, topics, max_divergence: float = 0.5):
        """
        Args:
            topics: Service with extract_features(a, b) and distribution(features, text)
            max_divergence: Divergence above which the topic has shifted
        """
        self.topics = topics
        self.max_divergence = max_divergence

    def divergence(self, edit: Edit, text: str) -> Optional[float]:
        """
        Divergence between the document before and after the edit.

        Returns:
            The score, or None when no features or no mass is available
        """
        before = text
        after = apply_edit(edit, text)

        features = self.topics.extract_features(before, after)
        if not features:
            return None

        dist1 = self.topics.distribution(features, before)
        dist2 = self.topics.distribution(features, after)
        if not any(dist1.values()) or not any(dist2.values()):
            return None

        return jensen_shannon(dist1, dist2)

    def outcome(self, edit: Edit, text: str) -> TopicOutcome:
        """Classify the edit's effect on the topic."""
        score = self.divergence(edit, text)
        if score is None:
            return TopicOutcome.INDETERMINATE

        logger.debug(f"Topic divergence {score:.3f}", pos1=edit.pos1)
        return TopicOutcome.DIVERGED if score > self.max_divergence else TopicOutcome.PRESERVED
