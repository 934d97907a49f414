"""
NLP Base Classes
================
Base classes and utilities for NLP integrations.

Provides the common interface all linguistic service wrappers implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from config_logging import ServiceError

__version__ = "1.0.0"


class NLPServiceError(ServiceError):
    """Raised when an NLP integration is unavailable or fails mid-call."""


class NLPIntegrationBase(ABC):
    """
    Abstract base class for NLP tool integrations.

    Wraps external NLP libraries (spaCy, LanguageTool, WordNet, SymSpell).
    """

    INTEGRATION_NAME: str = "NLP Integration"
    INTEGRATION_VERSION: str = "1.0.0"

    def __init__(self):
        self._available = False
        self._error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Check if the integration is available and working."""
        return self._available

    @property
    def error(self) -> Optional[str]:
        """Get initialization error if any."""
        return self._error

    def require_available(self):
        """Raise NLPServiceError unless the integration loaded."""
        if not self.is_available:
            raise NLPServiceError(
                f"{self.INTEGRATION_NAME} unavailable: {self._error or 'not initialized'}",
                service=self.INTEGRATION_NAME
            )

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the integration."""
        pass


def ensure_nltk_resource(resource_path: str, package: str):
    """
    Make sure an NLTK data package is present, downloading it once if not.

    Args:
        resource_path: Path passed to nltk.data.find (e.g. 'corpora/wordnet')
        package: Downloader package id (e.g. 'wordnet')

    Raises:
        NLPServiceError: If the data cannot be found or downloaded
    """
    import nltk

    try:
        nltk.data.find(resource_path)
        return
    except LookupError:
        pass

    if not nltk.download(package, quiet=True):
        raise NLPServiceError(
            f"NLTK data package '{package}' could not be downloaded",
            service="NLTK"
        )
