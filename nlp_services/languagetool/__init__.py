"""
LanguageTool Integration for the Change Classifier
==================================================
Provides grammar checking for the grammar-correction rule.

Features:
- Grammar and style rule violations
- Spelling matches filtered out
- Local server mode (air-gap compatible)

Requires: pip install language-tool-python
Note: First run downloads LanguageTool JAR (~200MB)
"""

import threading

__version__ = "1.0.0"

# Lazy imports - only load when accessed
_client = None
_lock = threading.Lock()


def get_client():
    """Get the shared LanguageToolClient instance (lazy loaded, once)."""
    global _client
    if _client is None:
        with _lock:
            if _client is None:
                from .client import LanguageToolClient
                from ..config import get_config
                cfg = get_config().languagetool
                _client = LanguageToolClient(cfg.language, cfg.disabled_rules)
    return _client


def is_available() -> bool:
    """Check if LanguageTool is available and server is running."""
    try:
        return get_client().is_available
    except ImportError:
        return False


def get_status() -> dict:
    """Get LanguageTool integration status."""
    try:
        return get_client().get_status()
    except ImportError as e:
        return {
            'available': False,
            'error': f"language-tool-python not installed: {e}",
            'language': None,
        }
