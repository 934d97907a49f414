"""
spaCy Integration for the Change Classifier
===========================================
Provides linguistic analysis capabilities:
- Part-of-speech tagging (Penn Treebank tags)
- Sentence boundary detection

Requires: pip install spacy && python -m spacy download en_core_web_md
"""

import threading

__version__ = "1.0.0"

# Lazy imports - only load when accessed
_analyzer = None
_lock = threading.Lock()


def get_analyzer():
    """Get the shared SpacyAnalyzer instance (lazy loaded, once)."""
    global _analyzer
    if _analyzer is None:
        with _lock:
            if _analyzer is None:
                from .analyzer import SpacyAnalyzer
                from ..config import get_config
                cfg = get_config().spacy
                _analyzer = SpacyAnalyzer(cfg.model, cfg.fallback_models)
    return _analyzer


def is_available() -> bool:
    """Check if spaCy is available and model is loaded."""
    try:
        return get_analyzer().is_available
    except ImportError:
        return False


def get_status() -> dict:
    """Get spaCy integration status."""
    try:
        return get_analyzer().get_status()
    except ImportError as e:
        return {
            'available': False,
            'error': str(e),
            'model': None,
            'version': None
        }
