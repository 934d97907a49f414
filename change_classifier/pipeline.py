"""
Classification Pipeline v1.0.0
==============================
Assigns exactly one category to each edit between two document versions.

Each edit is expanded to word and sentence context, then the rules run
in a fixed order and the first match wins:

    citation -> formatting -> spelling -> substitution
             -> rephrasing -> grammar -> topic shift

An edit no rule claims is Undefined. Edits are independent and are
classified on a thread pool; results keep the input order.
"""

import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from enum import IntEnum
from typing import Dict, List, Optional, Sequence

from config_logging import (
    get_logger,
    StructuredLogger,
    MalformedEditError,
    ClassificationTimeoutError,
)
from .classifiers import ClassifierSettings, EditClassifiers, is_citation, is_formatting
from .differ import build_context
from .models import Category, ClassificationRecord, Edit, EditContext

logger = get_logger('change_classifier.pipeline')


def _outcome_label(result) -> str:
    if isinstance(result, IntEnum):
        return result.name.lower()
    return 'match' if result else 'no_match'


def _is_match(result) -> bool:
    if isinstance(result, IntEnum):
        return result.is_match
    return bool(result)


def validate_edits(edits: Sequence[Edit], original: str, modified: str):
    """
    Check every edit against both documents.

    Raises:
        MalformedEditError: For the first edit whose text is not found
            at its recorded positions
    """
    for i, edit in enumerate(edits):
        if not isinstance(edit, Edit):
            raise MalformedEditError(f"Item {i} is not an Edit", edit_index=i)
        if not edit.matches(original, modified):
            raise MalformedEditError(
                f"Edit {i} does not match the documents at pos1={edit.pos1}, pos2={edit.pos2}",
                edit_index=i, pos1=edit.pos1, pos2=edit.pos2
            )


def category_counts(records: Sequence[ClassificationRecord]) -> Dict[str, int]:
    """Number of records per category, every category listed."""
    counts = {category.value: 0 for category in Category}
    for record in records:
        counts[record.category.value] += 1
    return counts


class ClassificationPipeline:
    """
    Runs the ordered rules over a batch of edits.

    Usage:
        pipeline = ClassificationPipeline()
        for record in pipeline.analyze(old_text, new_text):
            print(record.category, record.edit.before, record.edit.after)
    """

    def __init__(self, services=None, settings: Optional[ClassifierSettings] = None):
        """
        Args:
            services: LinguisticServices bundle (default services if None)
            settings: Rule thresholds (current configuration if None)
        """
        if services is None:
            from .services import LinguisticServices
            services = LinguisticServices.default()
        self.services = services
        self.settings = settings or ClassifierSettings.from_config()
        self.classifiers = EditClassifiers(services, self.settings)

    def _rules(self, context: EditContext, original: str, modified: str):
        c = self.classifiers
        char_edit, word_edit, sentence_edit = context.char_edit, context.word_edit, context.sentence_edit
        return (
            ('citation', Category.CITATION,
             lambda: is_citation(char_edit) or is_citation(word_edit)),
            ('formatting', Category.FORMATTING,
             lambda: is_formatting(char_edit, original, modified)),
            ('spelling', Category.SPELLING,
             lambda: c.spelling_outcome(word_edit)),
            ('substitution', Category.SUBSTITUTION,
             lambda: c.substitution_outcome(word_edit)),
            ('rephrasing', Category.REPHRASING,
             lambda: c.is_rephrasing(char_edit, word_edit, sentence_edit)),
            ('grammar', Category.GRAMMAR,
             lambda: c.is_grammar(sentence_edit)),
            ('topic_shift', Category.TOPIC_SHIFT,
             lambda: c.topic_outcome(sentence_edit, original)),
        )

    def classify_edit(self, index: int, context: EditContext,
                      original: str, modified: str) -> ClassificationRecord:
        """Run the rules over one edit until one matches."""
        record = ClassificationRecord(index=index, edit=context.char_edit)

        for name, category, rule in self._rules(context, original, modified):
            try:
                result = rule()
            except MalformedEditError:
                raise
            except Exception as e:
                logger.warning(f"Rule '{name}' failed on edit {index}: {e}",
                               rule=name, edit_index=index, error_type=type(e).__name__)
                record.rule_outcomes[name] = 'error'
                continue

            record.rule_outcomes[name] = _outcome_label(result)
            if _is_match(result):
                record.category = category
                break

        logger.debug(f"Edit {index} classified as {record.category}",
                     edit_index=index, category=record.category.value)
        return record

    def classify(self, edits: Sequence[Edit], original: str, modified: str,
                 timeout: Optional[float] = None) -> List[ClassificationRecord]:
        """
        Classify a batch of edits between two documents.

        Args:
            edits: Edits from original to modified
            original: Original document
            modified: Modified document
            timeout: Seconds allowed for the whole batch (None = no limit)

        Returns:
            One record per edit, in input order

        Raises:
            MalformedEditError: If any edit does not match the documents
            ClassificationTimeoutError: If the batch misses its deadline
        """
        edits = list(edits)
        validate_edits(edits, original, modified)
        if not edits:
            return []

        StructuredLogger.new_correlation_id()
        with logger.log_operation("Classifying edits", edit_count=len(edits)):
            segmenter = self.services.segmenter
            spans1 = segmenter.sentence_spans(original)
            spans2 = segmenter.sentence_spans(modified)
            contexts = [build_context(e, original, modified, spans1, spans2) for e in edits]

            deadline = time.monotonic() + timeout if timeout is not None else None
            if self.settings.max_workers <= 1:
                records = self._classify_inline(contexts, original, modified, deadline, timeout)
            else:
                records = self._classify_pooled(contexts, original, modified, deadline, timeout)

        return records

    def _classify_inline(self, contexts, original, modified, deadline, timeout):
        records = []
        for i, context in enumerate(contexts):
            if deadline is not None and time.monotonic() > deadline:
                raise ClassificationTimeoutError(timeout, edit_index=i)
            records.append(self.classify_edit(i, context, original, modified))
        return records

    def _classify_pooled(self, contexts, original, modified, deadline, timeout):
        records: List[Optional[ClassificationRecord]] = [None] * len(contexts)
        executor = ThreadPoolExecutor(max_workers=self.settings.max_workers)
        try:
            futures = [
                executor.submit(self.classify_edit, i, context, original, modified)
                for i, context in enumerate(contexts)
            ]
            for i, future in enumerate(futures):
                remaining = None
                if deadline is not None:
                    remaining = max(0.0, deadline - time.monotonic())
                try:
                    records[i] = future.result(timeout=remaining)
                except FutureTimeoutError:
                    for pending in futures:
                        pending.cancel()
                    raise ClassificationTimeoutError(timeout, edit_index=i)
        finally:
            executor.shutdown(wait=deadline is None)
        return records

    def analyze(self, original: str, modified: str,
                timeout: Optional[float] = None) -> List[ClassificationRecord]:
        """Diff two documents and classify every edit found."""
        edits = self.services.differ.diff(original, modified)
        logger.info(f"Found {len(edits)} edits", edit_count=len(edits))
        return self.classify(edits, original, modified, timeout=timeout)
