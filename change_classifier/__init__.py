"""
Change Classifier v1.0.0
========================
Explains the edits between two versions of a document.

Every edit found by a character-level diff is assigned exactly one
category: Citation, Formatting, Spelling, Substitution, Rephrasing,
Grammar, TopicShift, or Undefined when no rule applies.

Usage:
    from change_classifier import ClassificationPipeline

    pipeline = ClassificationPipeline()
    records = pipeline.analyze(original_text, modified_text)
"""

from .models import (
    Edit,
    EditContext,
    Category,
    SpellingOutcome,
    SubstitutionOutcome,
    TopicOutcome,
    ClassificationRecord
)
from .differ import DiffEngine, build_context
from .services import LinguisticServices
from .classifiers import ClassifierSettings, EditClassifiers, is_citation, is_formatting
from .similarity import fernando_similarity, SentenceSimilarity, sentence_similarity
from .topics import jensen_shannon, apply_edit, TopicShiftDetector
from .pipeline import ClassificationPipeline, validate_edits, category_counts

__version__ = "1.0.0"
__all__ = [
    'Edit',
    'EditContext',
    'Category',
    'SpellingOutcome',
    'SubstitutionOutcome',
    'TopicOutcome',
    'ClassificationRecord',
    'DiffEngine',
    'build_context',
    'LinguisticServices',
    'ClassifierSettings',
    'EditClassifiers',
    'is_citation',
    'is_formatting',
    'fernando_similarity',
    'SentenceSimilarity',
    'sentence_similarity',
    'jensen_shannon',
    'apply_edit',
    'TopicShiftDetector',
    'ClassificationPipeline',
    'validate_edits',
    'category_counts',
]
