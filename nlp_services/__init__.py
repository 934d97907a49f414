"""
Linguistic Services Package
===========================
Version: 1.0.0

Default implementations of the linguistic collaborators the change
classifier consults:
- lexical: Tokenization, stopwords, POS-aware stemming, text features (NLTK)
- spelling: Dictionary membership (SymSpell)
- spacy: Part-of-speech tagging and sentence boundaries
- semantics: Synonyms and word relatedness (WordNet)
- languagetool: Grammar checking

Uses lazy loading - modules only import when accessed.
"""

__version__ = "1.0.0"

_MODULES = {
    'lexical': 'nlp_services.lexical',
    'spelling': 'nlp_services.spelling',
    'spacy': 'nlp_services.spacy',
    'semantics': 'nlp_services.semantics',
    'languagetool': 'nlp_services.languagetool',
}

# Integrations that report a get_status()
_STATUS_MODULES = ('lexical', 'spelling', 'spacy', 'semantics', 'languagetool')

_loaded_modules = {}


def __getattr__(name):
    """Lazy load submodules on first access."""
    if name in _MODULES:
        if name not in _loaded_modules:
            import importlib
            try:
                _loaded_modules[name] = importlib.import_module(_MODULES[name])
            except ImportError as e:
                raise ImportError(
                    f"NLP module '{name}' not available. "
                    f"Install dependencies with: pip install -e ."
                ) from e
        return _loaded_modules[name]
    raise AttributeError(f"module 'nlp_services' has no attribute '{name}'")


def __dir__():
    """List available submodules."""
    return list(_MODULES.keys()) + ['config', 'base', 'get_status']


def get_status():
    """
    Get status of all linguistic integrations.

    Returns dict with availability and error info for each module.
    """
    status = {
        'version': __version__,
        'modules': {}
    }

    for name in _STATUS_MODULES:
        try:
            mod = __getattr__(name)
            status['modules'][name] = mod.get_status()
        except ImportError as e:
            status['modules'][name] = {'available': False, 'error': str(e)}

    return status
