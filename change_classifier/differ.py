"""
Edit Differ v1.0.0
==================
Character-level edit detection between two document versions, and
expansion of each edit to its enclosing words and sentences.

Uses diff-match-patch with semantic cleanup so that edits follow word
and phrase boundaries where possible.
"""

from typing import List, Sequence, Tuple

import diff_match_patch as dmp_module

from config_logging import get_logger
from .models import Edit, EditContext

logger = get_logger('change_classifier.differ')

Span = Tuple[int, int]

# Characters that belong to a word for context expansion
_WORD_JOINERS = "'’"


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in _WORD_JOINERS


class DiffEngine:
    """
    Locates edits between two texts.

    Consecutive deletions and insertions between two unchanged runs
    become a single replacement edit.
    """

    def __init__(self, timeout: float = 2.0, edit_cost: int = 4, semantic_cleanup: bool = True):
        """
        Initialize the differ.

        Args:
            timeout: Max seconds diff-match-patch may spend per diff (0 = no limit)
            edit_cost: Cost of an empty edit for efficiency cleanup
            semantic_cleanup: Align edits to human-readable boundaries
        """
        self.semantic_cleanup = semantic_cleanup
        self.dmp = dmp_module.diff_match_patch()
        self.dmp.Diff_Timeout = timeout
        self.dmp.Diff_EditCost = edit_cost

    def diff(self, text1: str, text2: str) -> List[Edit]:
        """
        Compute the ordered list of edits turning text1 into text2.

        Args:
            text1: Original text
            text2: Modified text

        Returns:
            Edits in document order
        """
        diffs = self.dmp.diff_main(text1 or "", text2 or "")
        if self.semantic_cleanup:
            self.dmp.diff_cleanupSemantic(diffs)

        edits = []
        pos1 = pos2 = 0
        i = 0
        while i < len(diffs):
            op, text = diffs[i]
            if op == self.dmp.DIFF_EQUAL:
                pos1 += len(text)
                pos2 += len(text)
                i += 1
                continue

            start1, start2 = pos1, pos2
            before, after = [], []
            while i < len(diffs) and diffs[i][0] != self.dmp.DIFF_EQUAL:
                op, text = diffs[i]
                if op == self.dmp.DIFF_DELETE:
                    before.append(text)
                    pos1 += len(text)
                else:
                    after.append(text)
                    pos2 += len(text)
                i += 1
            edits.append(Edit("".join(before), "".join(after), start1, start2))

        logger.debug(f"Diff found {len(edits)} edits", text1_length=len(text1 or ""),
                     text2_length=len(text2 or ""))
        return edits

    def edit_distance(self, s1: str, s2: str) -> int:
        """Levenshtein distance between two strings."""
        return self.dmp.diff_levenshtein(self.dmp.diff_main(s1, s2, False))


def word_bounds(text: str, start: int, end: int) -> Span:
    """Widen [start, end) to whole words of text."""
    while start > 0 and _is_word_char(text[start - 1]):
        start -= 1
    while end < len(text) and _is_word_char(text[end]):
        end += 1
    return start, end


def sentence_bounds(spans: Sequence[Span], start: int, end: int) -> Span:
    """
    Widen [start, end) to the sentences it overlaps.

    An empty range (insertion point) takes the sentence it touches.
    A range outside every sentence, such as whitespace between two
    sentences that touches neither, is returned unchanged.
    """
    covering = [(s, e) for s, e in spans if s < end and e > start]
    if not covering:
        covering = [(s, e) for s, e in spans if s <= start <= e]
    if not covering:
        return start, end
    return min(start, covering[0][0]), max(end, covering[-1][1])


def expand_to_words(edit: Edit, original: str, modified: str) -> Edit:
    """Smallest edit covering the whole words touched by edit."""
    s1, e1 = word_bounds(original, edit.pos1, edit.end1)
    s2, e2 = word_bounds(modified, edit.pos2, edit.end2)
    return Edit(original[s1:e1], modified[s2:e2], s1, s2)


def expand_to_sentences(
    edit: Edit,
    original: str,
    modified: str,
    spans1: Sequence[Span],
    spans2: Sequence[Span]
) -> Edit:
    """
    Smallest edit covering the whole sentences touched by edit.

    Args:
        edit: Character-level edit
        original: Original document
        modified: Modified document
        spans1: Sentence spans of the original, in order
        spans2: Sentence spans of the modified document, in order
    """
    s1, e1 = sentence_bounds(spans1, edit.pos1, edit.end1)
    s2, e2 = sentence_bounds(spans2, edit.pos2, edit.end2)
    return Edit(original[s1:e1], modified[s2:e2], s1, s2)


def build_context(
    edit: Edit,
    original: str,
    modified: str,
    spans1: Sequence[Span],
    spans2: Sequence[Span]
) -> EditContext:
    """Bundle an edit with its word- and sentence-level expansions."""
    return EditContext(
        char_edit=edit,
        word_edit=expand_to_words(edit, original, modified),
        sentence_edit=expand_to_sentences(edit, original, modified, spans1, spans2),
    )
