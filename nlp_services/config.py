"""
NLP Configuration Module
========================
Centralized configuration for the linguistic services and the
classification thresholds.

Configuration can be set via:
1. Environment variables (NLP_SPACY_MODEL=en_core_web_sm)
2. Config file (nlp_config.json)
3. Direct API calls (config.set('classifier.max_workers', 8))

Every setting has a default, so the classifier runs without any
configuration file.
"""

import os
import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

from config_logging import get_logger

__version__ = "1.0.0"

logger = get_logger('nlp_services.config')

# Default configuration path
CONFIG_FILE = Path(__file__).parent.parent / "nlp_config.json"


@dataclass
class SpacyConfig:
    """spaCy configuration (POS tagging, sentence boundaries)."""
    model: str = "en_core_web_md"  # sm, md, or lg
    fallback_models: list = field(default_factory=lambda: [
        "en_core_web_sm", "en_core_web_lg"
    ])


@dataclass
class LanguageToolConfig:
    """LanguageTool configuration."""
    language: str = "en-US"
    disabled_rules: list = field(default_factory=lambda: [
        "WHITESPACE_RULE",    # Whitespace edits are formatting, not grammar
        "UPPERCASE_SENTENCE_START",  # Sentence fragments start anywhere
    ])


@dataclass
class SpellingConfig:
    """Dictionary (SymSpell) configuration."""
    max_edit_distance: int = 2
    prefix_length: int = 7
    custom_dictionary: Optional[str] = None


@dataclass
class SemanticsConfig:
    """WordNet relatedness configuration."""
    ic_corpus: str = "ic-brown.dat"
    use_mfs: bool = False  # Restrict lookups to the most frequent sense


@dataclass
class ClassifierConfig:
    """Decision thresholds and execution settings of the pipeline."""
    spelling_max_distance: int = 2
    substitution_min_relatedness: float = 5.0  # Hirst-St-Onge scale, 0-16
    rephrasing_min_similarity: float = 0.3
    topic_max_divergence: float = 0.5
    max_workers: int = 4


@dataclass
class NLPConfig:
    """Master configuration."""
    spacy: SpacyConfig = field(default_factory=SpacyConfig)
    languagetool: LanguageToolConfig = field(default_factory=LanguageToolConfig)
    spelling: SpellingConfig = field(default_factory=SpellingConfig)
    semantics: SemanticsConfig = field(default_factory=SemanticsConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)


# Global configuration instance
_config: Optional[NLPConfig] = None
_config_lock = threading.Lock()


def get_config() -> NLPConfig:
    """Get the global configuration, loading it on first use."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = _load_config()
    return _config


def _load_config(path: Optional[Path] = None) -> NLPConfig:
    """Load configuration from file and environment."""
    config = NLPConfig()
    path = path or Path(os.environ.get('NLP_CONFIG_FILE', str(CONFIG_FILE)))

    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not load config file {path}: {e}")

    _apply_env_to_config(config)

    return config


def _apply_dict_to_config(config: NLPConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    for section_name, section_data in data.items():
        if hasattr(config, section_name) and isinstance(section_data, dict):
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)


def _apply_env_to_config(config: NLPConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'NLP_SPACY_MODEL': ('spacy', 'model', str),
        'NLP_LANGUAGETOOL_LANGUAGE': ('languagetool', 'language', str),
        'NLP_SPELLING_MAX_EDIT_DISTANCE': ('spelling', 'max_edit_distance', int),
        'NLP_SPELLING_CUSTOM_DICTIONARY': ('spelling', 'custom_dictionary', str),
        'NLP_SEMANTICS_IC_CORPUS': ('semantics', 'ic_corpus', str),
        'NLP_SEMANTICS_USE_MFS': ('semantics', 'use_mfs', _parse_bool),
        'CLASSIFIER_SPELLING_MAX_DISTANCE': ('classifier', 'spelling_max_distance', int),
        'CLASSIFIER_SUBSTITUTION_MIN_RELATEDNESS': ('classifier', 'substitution_min_relatedness', float),
        'CLASSIFIER_REPHRASING_MIN_SIMILARITY': ('classifier', 'rephrasing_min_similarity', float),
        'CLASSIFIER_TOPIC_MAX_DIVERGENCE': ('classifier', 'topic_max_divergence', float),
        'CLASSIFIER_MAX_WORKERS': ('classifier', 'max_workers', int),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                section_obj = getattr(config, section)
                setattr(section_obj, key, converter(value))
            except (ValueError, AttributeError) as e:
                logger.warning(f"Invalid env var {env_var}={value}: {e}")


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def get(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Example: get('spacy.model') -> 'en_core_web_md'
    """
    config = get_config()
    parts = key.split('.')

    obj = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            return default

    return obj


def set(key: str, value: Any):
    """
    Set a configuration value by dot-notation key.

    Example: set('classifier.max_workers', 1)
    """
    config = get_config()
    parts = key.split('.')

    if len(parts) < 2:
        raise ValueError(f"Key must be in format 'section.key': {key}")

    section_name = parts[0]
    attr_name = parts[1]

    if hasattr(config, section_name):
        section = getattr(config, section_name)
        if hasattr(section, attr_name):
            setattr(section, attr_name, value)
        else:
            raise ValueError(f"Unknown config key: {attr_name}")
    else:
        raise ValueError(f"Unknown config section: {section_name}")


def save_config(path: Optional[Path] = None):
    """Save current configuration to file."""
    config = get_config()
    path = path or CONFIG_FILE

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(config), f, indent=2)


def reset_config():
    """Reset configuration to defaults."""
    global _config
    _config = NLPConfig()
