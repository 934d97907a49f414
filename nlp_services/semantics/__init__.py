"""
Semantic Relatedness for the Change Classifier
==============================================
Provides WordNet lookups used by the substitution and rephrasing rules.

Features:
- Synonym sets per word and sense
- Hirst-St-Onge word relatedness (0-16)
- Normalized Jiang-Conrath relatedness matrix

Requires: pip install nltk numpy
Data: python -c "import nltk; nltk.download('wordnet'); nltk.download('wordnet_ic')"
"""

import threading

__version__ = "1.0.0"

# Lazy imports
_relatedness = None
_lock = threading.Lock()


def get_relatedness():
    """Get the shared WordNetRelatedness instance (lazy loaded, once)."""
    global _relatedness
    if _relatedness is None:
        with _lock:
            if _relatedness is None:
                from .wordnet import WordNetRelatedness
                from ..config import get_config
                _relatedness = WordNetRelatedness(get_config().semantics.ic_corpus)
    return _relatedness


def is_available() -> bool:
    """Check if semantic lookups are available."""
    try:
        return get_relatedness().is_available
    except ImportError:
        return False


def get_status() -> dict:
    """Get semantic integration status."""
    try:
        return get_relatedness().get_status()
    except ImportError as e:
        return {
            'available': False,
            'error': f"nltk not installed: {e}",
        }
