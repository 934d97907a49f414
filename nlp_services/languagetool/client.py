"""
LanguageTool Client for the Change Classifier
=============================================
Wraps language_tool_python library for grammar checking.

Features:
- Singleton pattern (one server per process)
- Spelling matches removed; the spelling rule owns those
- Rule filtering via configuration

Requires: pip install language-tool-python
Note: First run downloads LanguageTool (~200MB, Java required)
"""

from typing import List, Dict, Any, Optional, Iterable
from dataclasses import dataclass
import threading

from ..base import NLPIntegrationBase, NLPServiceError


@dataclass
class GrammarMatch:
    """Represents a grammar issue found by LanguageTool."""
    message: str
    offset: int
    length: int
    rule_id: str
    category: str
    issue_type: str = ""
    replacements: Optional[List[str]] = None


class LanguageToolClient(NLPIntegrationBase):
    """
    LanguageTool integration for grammar checking.

    Runs local Java server - no internet required after installation.
    Uses singleton pattern to avoid multiple server instances.
    """

    INTEGRATION_NAME = "LanguageTool"
    INTEGRATION_VERSION = "1.0.0"

    # Matches that are about spelling rather than grammar
    SPELLING_CATEGORIES = {'TYPOS'}
    SPELLING_ISSUE_TYPES = {'misspelling'}
    SPELLING_RULE_PREFIXES = ('MORFOLOGIK_RULE', 'HUNSPELL_RULE', 'SPELLING_RULE')

    # Singleton implementation
    _instance = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        """Singleton pattern - only one LanguageTool server."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, language: str = 'en-US', disabled_rules: Iterable[str] = ()):
        """
        Initialize LanguageTool client.

        Args:
            language: Language code (default: 'en-US')
            disabled_rules: Rule ids never reported
        """
        if self._initialized:
            return

        with self._lock:
            if self._initialized:
                return
            super().__init__()
            self.language = language
            self.skip_rules = set(disabled_rules)
            self._tool = None
            self._check_lock = threading.Lock()
            self._init_tool()
            self._initialized = True

    def _init_tool(self):
        """Initialize LanguageTool (starts local Java server)."""
        try:
            import language_tool_python

            self._tool = language_tool_python.LanguageTool(
                self.language,
                config={'cacheSize': 1000, 'pipelineCaching': True}
            )
            self._available = True

        except ImportError as e:
            self._error = f"language-tool-python not installed: {e}"
            self._available = False

        except Exception as e:
            self._error = f"LanguageTool initialization failed: {e}"
            self._available = False

    @property
    def is_available(self) -> bool:
        """Check if LanguageTool is available."""
        return self._available and self._tool is not None

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the LanguageTool integration."""
        return {
            'available': self.is_available,
            'language': self.language if self.is_available else None,
            'error': self._error,
            'skipped_rules': sorted(self.skip_rules),
        }

    @classmethod
    def is_spelling_match(cls, match) -> bool:
        """True if a raw LanguageTool match reports a misspelling."""
        rule_id = getattr(match, 'ruleId', '') or ''
        return (
            getattr(match, 'category', '') in cls.SPELLING_CATEGORIES
            or getattr(match, 'ruleIssueType', '') in cls.SPELLING_ISSUE_TYPES
            or rule_id.startswith(cls.SPELLING_RULE_PREFIXES)
        )

    def check(self, text: str) -> List[GrammarMatch]:
        """
        Check text for grammar issues, spelling excluded.

        Args:
            text: Sentence or fragment to check

        Returns:
            List of GrammarMatch objects

        Raises:
            NLPServiceError: If LanguageTool is unavailable or the check fails
        """
        self.require_available()

        if not text or not text.strip():
            return []

        try:
            # The Java server handles one request at a time per client
            with self._check_lock:
                matches = self._tool.check(text)
        except Exception as e:
            raise NLPServiceError(f"Check failed: {e}", service=self.INTEGRATION_NAME) from e

        issues = []
        for match in matches:
            if match.ruleId in self.skip_rules or self.is_spelling_match(match):
                continue

            issues.append(GrammarMatch(
                message=match.message,
                offset=match.offset,
                length=match.errorLength,
                rule_id=match.ruleId,
                category=getattr(match, 'category', 'MISC'),
                issue_type=getattr(match, 'ruleIssueType', ''),
                replacements=list(match.replacements or [])[:5],
            ))

        return issues

    def close(self):
        """Shut down the LanguageTool server."""
        if self._tool:
            try:
                self._tool.close()
            finally:
                self._tool = None
                self._available = False
