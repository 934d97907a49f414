"""
SymSpell Dictionary for the Change Classifier
=============================================
Dictionary membership backed by the SymSpell English frequency list.

Features:
- 82K-word frequency dictionary bundled with symspellpy
- Custom word list support (one word per line, '#' comments)
- Case-insensitive membership

Requires: pip install symspellpy
"""

from importlib import resources
from pathlib import Path
from typing import Dict, Optional, Any, Set

from ..base import NLPIntegrationBase


class SymSpellDictionary(NLPIntegrationBase):
    """
    SymSpell-backed English dictionary.

    Answers the one question the spelling and substitution rules ask:
    is this word a known English word?
    """

    INTEGRATION_NAME = "SymSpell"
    INTEGRATION_VERSION = "1.0.0"

    # Default dictionary filename (bundled with symspellpy)
    FREQUENCY_DICT = "frequency_dictionary_en_82_765.txt"

    def __init__(
        self,
        max_edit_distance: int = 2,
        prefix_length: int = 7,
        custom_dictionary: Optional[Path] = None
    ):
        """
        Initialize the dictionary.

        Args:
            max_edit_distance: Maximum edit distance SymSpell precomputes (1-3)
            prefix_length: Length of prefix to use for lookup
            custom_dictionary: Path to custom words file
        """
        super().__init__()
        self.max_edit_distance = max_edit_distance
        self.prefix_length = prefix_length
        self.custom_dictionary = custom_dictionary

        self._sym_spell = None
        self._custom_words: Set[str] = set()
        self._load_dictionaries()

    def _load_dictionaries(self):
        """Load the frequency dictionary."""
        try:
            from symspellpy import SymSpell

            self._sym_spell = SymSpell(
                max_dictionary_edit_distance=self.max_edit_distance,
                prefix_length=self.prefix_length
            )

            dict_path = resources.files("symspellpy") / self.FREQUENCY_DICT
            with resources.as_file(dict_path) as path:
                loaded = self._sym_spell.load_dictionary(
                    str(path),
                    term_index=0,
                    count_index=1
                )
            if not loaded:
                self._error = f"Dictionary file not found: {self.FREQUENCY_DICT}"
                self._available = False
                return

            if self.custom_dictionary and Path(self.custom_dictionary).exists():
                self._load_custom_dictionary()

            self._available = True

        except ImportError as e:
            self._error = f"symspellpy not installed: {e}"
            self._available = False

        except Exception as e:
            self._error = f"Failed to load dictionaries: {e}"
            self._available = False

    def _load_custom_dictionary(self):
        """Load custom terms; each becomes a known word."""
        with open(self.custom_dictionary, 'r', encoding='utf-8') as f:
            for line in f:
                word = line.strip().lower()
                if word and not word.startswith('#'):
                    self.add_word(word)

    def add_word(self, word: str, frequency: int = 1000000):
        """
        Add a word to the dictionary.

        Args:
            word: Word to add
            frequency: Word frequency (higher = more likely suggestion)
        """
        if self._sym_spell:
            self._custom_words.add(word.lower())
            self._sym_spell.create_dictionary_entry(word.lower(), frequency)

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the SymSpell integration."""
        status = {
            'available': self.is_available,
            'error': self._error,
            'max_edit_distance': self.max_edit_distance,
            'custom_words_count': len(self._custom_words),
        }

        if self.is_available and self._sym_spell:
            status['dictionary_size'] = len(self._sym_spell.words)

        return status

    def in_dictionary(self, word: str) -> bool:
        """
        Check if a word is in the dictionary.

        Args:
            word: Word to check (case-insensitive)

        Returns:
            True if word is known

        Raises:
            NLPServiceError: If the dictionary failed to load
        """
        self.require_available()

        if not word:
            return False

        lowered = word.lower()
        return lowered in self._custom_words or lowered in self._sym_spell.words
