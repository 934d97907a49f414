"""
Edit Classifiers
================
One rule per hypothesis about why an edit was made.

Citation and formatting are pure string rules. The remaining rules
consult the linguistic services bundled in LinguisticServices.
"""

from dataclasses import dataclass
from typing import Optional

from config_logging import get_logger
from nlp_services.lexical import (
    is_quote,
    is_formatting_symbol,
    is_number,
    is_symbol,
)
from .differ import expand_to_words
from .models import Edit, SpellingOutcome, SubstitutionOutcome, TopicOutcome
from .similarity import SentenceSimilarity
from .topics import TopicShiftDetector

logger = get_logger('change_classifier.classifiers')


@dataclass(frozen=True)
class ClassifierSettings:
    """Thresholds and options threaded explicitly into every rule."""
    spelling_max_distance: int = 2
    substitution_min_relatedness: float = 5.0
    rephrasing_min_similarity: float = 0.3
    topic_max_divergence: float = 0.5
    use_mfs: bool = False
    max_workers: int = 4

    @classmethod
    def from_config(cls, config=None) -> 'ClassifierSettings':
        """Snapshot the current nlp_services configuration."""
        if config is None:
            from nlp_services.config import get_config
            config = get_config()
        c = config.classifier
        return cls(
            spelling_max_distance=c.spelling_max_distance,
            substitution_min_relatedness=c.substitution_min_relatedness,
            rephrasing_min_similarity=c.rephrasing_min_similarity,
            topic_max_divergence=c.topic_max_divergence,
            use_mfs=config.semantics.use_mfs,
            max_workers=c.max_workers,
        )


def is_citation(edit: Edit) -> bool:
    """Both sides are quoted spans and the quoted text changed."""
    return is_quote(edit.before) and is_quote(edit.after) and edit.before != edit.after


def _has_non_alpha_neighbour(text: str, pos: int) -> bool:
    """True if text[pos - 1] or text[pos] is not a letter; out of range counts as not a letter."""
    for index in (pos - 1, pos):
        if not (0 <= index < len(text)) or not text[index].isalpha():
            return True
    return False


def is_formatting(edit: Edit, text1: str, text2: str) -> bool:
    """
    The edit only touches punctuation, whitespace or other symbols.

    A lone inserted or deleted symbol must sit next to a non-letter, so
    that a hyphen splitting or joining a word is not formatting.

    Args:
        edit: The edit
        text1: Document holding edit.before at pos1
        text2: Document holding edit.after at pos2
    """
    if is_formatting_symbol(edit.before) and is_formatting_symbol(edit.after):
        return True
    if edit.before == "" and is_formatting_symbol(edit.after):
        return _has_non_alpha_neighbour(text1, edit.pos1)
    if edit.after == "" and is_formatting_symbol(edit.before):
        return _has_non_alpha_neighbour(text2, edit.pos2)
    return False


def compatible_tags(tag1: str, tag2: str) -> bool:
    """Same coarse tag, or a modal/verb or cardinal/noun pair."""
    if tag1[:2] == tag2[:2]:
        return True
    if (tag1 == 'MD' and tag2.startswith('VB')) or (tag1.startswith('VB') and tag2 == 'MD'):
        return True
    if (tag1 == 'CD' and tag2.startswith('NN')) or (tag1.startswith('NN') and tag2 == 'CD'):
        return True
    return False


class EditClassifiers:
    """
    The service-backed rules.

    Instances hold no mutable state; one instance may be shared by any
    number of threads.
    """

    def __init__(self, services, settings: Optional[ClassifierSettings] = None):
        self.services = services
        self.settings = settings or ClassifierSettings()
        self.similarity = SentenceSimilarity(
            services.lexicon, services.tagger, services.relatedness,
            use_mfs=self.settings.use_mfs
        )
        self.topic_detector = TopicShiftDetector(
            services.topics, max_divergence=self.settings.topic_max_divergence
        )

    def _single_words(self, edit: Edit):
        """(before, after) if each side is exactly one word, else None."""
        w1 = self.services.lexicon.tokenize(edit.before, remove_stopwords=False, stem=False)
        w2 = self.services.lexicon.tokenize(edit.after, remove_stopwords=False, stem=False)
        if len(w1) == 1 and len(w2) == 1:
            return w1[0], w2[0]
        return None

    def spelling_outcome(self, edit: Edit) -> SpellingOutcome:
        """
        Decide whether a one-word edit fixed a misspelling.

        Unknown -> known within the edit distance limit, or a change of
        letter case only, is a spelling fix. Two unknown words cannot be
        judged.
        """
        words = self._single_words(edit)
        if words is None:
            return SpellingOutcome.NO_MATCH
        before, after = words

        lexicon = self.services.lexicon
        misspelled = not lexicon.in_dictionary(before)
        correct = lexicon.in_dictionary(after)

        if misspelled and not correct:
            return SpellingOutcome.INDETERMINATE
        if misspelled and correct:
            distance = self.services.differ.edit_distance(before, after)
            if distance <= self.settings.spelling_max_distance:
                return SpellingOutcome.MATCH
            return SpellingOutcome.NO_MATCH
        if correct and before.lower() == after.lower():
            return SpellingOutcome.MATCH
        return SpellingOutcome.NO_MATCH

    def substitution_outcome(self, edit: Edit) -> SubstitutionOutcome:
        """
        Decide whether a one-word edit swapped a word for a related one.

        Both words must be known and carry compatible tags. A synonym in
        the same sense is the strongest match; otherwise the relatedness
        score decides.
        """
        words = self._single_words(edit)
        if words is None:
            return SubstitutionOutcome.NOT_APPLICABLE
        before, after = words

        lexicon = self.services.lexicon
        if not lexicon.in_dictionary(before) or not lexicon.in_dictionary(after):
            return SubstitutionOutcome.INDETERMINATE

        tag1 = self.services.tagger.tag([before])[0]
        tag2 = self.services.tagger.tag([after])[0]
        if not compatible_tags(tag1, tag2):
            return SubstitutionOutcome.NOT_APPLICABLE

        stem1, sense1 = lexicon.stem(before, tag1)
        stem2, sense2 = lexicon.stem(after, tag2)
        if sense1 is None or sense2 is None:
            return SubstitutionOutcome.INDETERMINATE

        relatedness = self.services.relatedness
        use_mfs = self.settings.use_mfs
        if stem2 in relatedness.synonyms(stem1, sense1, use_mfs=use_mfs):
            return SubstitutionOutcome.SYNONYM

        score = relatedness.relatedness(f"{stem1}#{sense1}", f"{stem2}#{sense2}", use_mfs=use_mfs)
        if score >= self.settings.substitution_min_relatedness:
            return SubstitutionOutcome.RELATED
        return SubstitutionOutcome.UNRELATED

    def _rules_out_rephrasing(self, sub_edit: Edit, sentence1: str, sentence2: str) -> bool:
        """A local change another rule explains, or a number/symbol swap."""
        if is_citation(sub_edit) or is_formatting(sub_edit, sentence1, sentence2):
            return True
        whole_words = expand_to_words(sub_edit, sentence1, sentence2)
        if self.spelling_outcome(whole_words) is not SpellingOutcome.NO_MATCH:
            return True
        before_numeric = is_number(sub_edit.before) or is_symbol(sub_edit.before)
        after_numeric = is_number(sub_edit.after) or is_symbol(sub_edit.after)
        return before_numeric and after_numeric

    def is_rephrasing(self, char_edit: Edit, word_edit: Edit, sentence_edit: Edit) -> bool:
        """
        Decide whether the enclosing sentence was reworded with its meaning kept.

        The decision is made on the sentence pair: every local change
        between the two sentences must be unexplained by the cheaper
        rules, each side must hold one or two sentences, and their
        semantic similarity must reach the threshold.
        """
        sentence1, sentence2 = sentence_edit.before, sentence_edit.after

        local_edits = self.services.differ.diff(sentence1, sentence2)
        if not local_edits:
            return False
        if any(self._rules_out_rephrasing(e, sentence1, sentence2) for e in local_edits):
            return False

        count1 = self.services.segmenter.count_sentences(sentence1)
        count2 = self.services.segmenter.count_sentences(sentence2)
        if count1 not in (1, 2) or count2 not in (1, 2):
            return False

        sim = self.similarity.score(sentence1, sentence2)
        logger.debug("Rephrasing check", char_pos=char_edit.pos1, word=word_edit.before,
                     similarity=sim)
        return sim is not None and sim >= self.settings.rephrasing_min_similarity

    def is_grammar(self, edit: Edit) -> bool:
        """
        Decide whether the edit fixed a grammar problem.

        True only if the old text breaks at least one rule and the new
        text breaks none. A failing grammar service counts as no match.
        """
        try:
            issues_before = self.services.grammar.check(edit.before)
            if not issues_before:
                return False
            return len(self.services.grammar.check(edit.after)) == 0
        except Exception as e:
            logger.warning(f"Grammar check failed, treating as no match: {e}",
                           error_type=type(e).__name__)
            return False

    def topic_outcome(self, edit: Edit, text: str) -> TopicOutcome:
        """Effect of the edit on the topic of the original document text."""
        return self.topic_detector.outcome(edit, text)
