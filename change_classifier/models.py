"""
Change Classification Models v1.0.0
===================================
Data classes for edits, edit context and classification results.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Any


@dataclass(frozen=True)
class Edit:
    """
    An atomic change between two versions of a document.

    Attributes:
        before: Text removed from the original (empty for insertions)
        after: Text inserted into the modified version (empty for deletions)
        pos1: Offset of `before` in the original document
        pos2: Offset of `after` in the modified document

    Invariant: original[pos1:pos1 + len(before)] == before and
    modified[pos2:pos2 + len(after)] == after.
    """
    before: str
    after: str
    pos1: int
    pos2: int

    @property
    def is_insertion(self) -> bool:
        return self.before == "" and self.after != ""

    @property
    def is_deletion(self) -> bool:
        return self.after == "" and self.before != ""

    @property
    def end1(self) -> int:
        """End offset of `before` in the original document."""
        return self.pos1 + len(self.before)

    @property
    def end2(self) -> int:
        """End offset of `after` in the modified document."""
        return self.pos2 + len(self.after)

    def matches(self, original: str, modified: str) -> bool:
        """Check the edit against the two documents it came from."""
        return (
            0 <= self.pos1 <= len(original)
            and 0 <= self.pos2 <= len(modified)
            and original[self.pos1:self.end1] == self.before
            and modified[self.pos2:self.end2] == self.after
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'before': self.before,
            'after': self.after,
            'pos1': self.pos1,
            'pos2': self.pos2,
        }


@dataclass(frozen=True)
class EditContext:
    """
    An edit at three granularities.

    Attributes:
        char_edit: The edit as located by the diff engine
        word_edit: Smallest edit covering whole words on both sides
        sentence_edit: Smallest edit covering whole sentences on both sides
    """
    char_edit: Edit
    word_edit: Edit
    sentence_edit: Edit


class Category(Enum):
    """Semantic category assigned to an edit."""
    CITATION = "Citation"
    FORMATTING = "Formatting"
    SPELLING = "Spelling"
    SUBSTITUTION = "Substitution"
    REPHRASING = "Rephrasing"
    GRAMMAR = "Grammar"
    TOPIC_SHIFT = "TopicShift"
    UNDEFINED = "Undefined"

    def __str__(self) -> str:
        return self.value


class SpellingOutcome(IntEnum):
    """Result of the spelling rule."""
    INDETERMINATE = -1  # Neither word is in the dictionary
    NO_MATCH = 0
    MATCH = 1

    @property
    def is_match(self) -> bool:
        # Any non-zero result classifies the edit as spelling
        return self is not SpellingOutcome.NO_MATCH


class SubstitutionOutcome(IntEnum):
    """Result of the substitution rule."""
    NOT_APPLICABLE = -2  # Not a single-word swap of compatible parts of speech
    INDETERMINATE = -1   # Missing dictionary or sense data
    UNRELATED = 0
    RELATED = 1
    SYNONYM = 2

    @property
    def is_match(self) -> bool:
        return self in (SubstitutionOutcome.RELATED, SubstitutionOutcome.SYNONYM)


class TopicOutcome(IntEnum):
    """Result of the topic-shift rule."""
    INDETERMINATE = -1
    DIVERGED = 0
    PRESERVED = 1

    @property
    def is_match(self) -> bool:
        return self is TopicOutcome.DIVERGED


@dataclass
class ClassificationRecord:
    """
    The category assigned to one edit.

    Attributes:
        index: Position of the edit in the classified sequence
        edit: The classified (character-level) edit
        category: Assigned category, UNDEFINED if no rule matched
        rule_outcomes: Outcome label of every rule evaluated, in order
    """
    index: int
    edit: Edit
    category: Category = Category.UNDEFINED
    rule_outcomes: Dict[str, str] = field(default_factory=dict)

    @property
    def is_classified(self) -> bool:
        return self.category is not Category.UNDEFINED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'index': self.index,
            'edit': self.edit.to_dict(),
            'category': self.category.value,
            'rule_outcomes': dict(self.rule_outcomes),
        }
