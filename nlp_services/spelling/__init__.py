"""
Dictionary Lookups for the Change Classifier
============================================
Provides English dictionary membership via SymSpell.

Requires: pip install symspellpy
"""

import threading

__version__ = "1.0.0"

# Lazy imports
_dictionary = None
_lock = threading.Lock()


def get_dictionary():
    """Get the shared SymSpellDictionary instance (lazy loaded, once)."""
    global _dictionary
    if _dictionary is None:
        with _lock:
            if _dictionary is None:
                from .symspell import SymSpellDictionary
                from ..config import get_config
                cfg = get_config().spelling
                _dictionary = SymSpellDictionary(
                    max_edit_distance=cfg.max_edit_distance,
                    prefix_length=cfg.prefix_length,
                    custom_dictionary=cfg.custom_dictionary
                )
    return _dictionary


def is_available() -> bool:
    """Check if the dictionary is available."""
    try:
        return get_dictionary().is_available
    except ImportError:
        return False


def get_status() -> dict:
    """Get dictionary integration status."""
    try:
        return get_dictionary().get_status()
    except ImportError as e:
        return {
            'available': False,
            'error': f"symspellpy not installed: {e}",
        }


def in_dictionary(word: str) -> bool:
    """
    Check whether a word is a known English word.

    Args:
        word: Word to look up

    Returns:
        True if the dictionary knows the word
    """
    return get_dictionary().in_dictionary(word)
