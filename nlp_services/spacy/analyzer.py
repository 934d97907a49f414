"""
spaCy Analyzer for the Change Classifier
========================================
Part-of-speech tagging and sentence boundary detection using spaCy.

Features:
- Lazy model loading with fallback models
- Penn Treebank tags for pre-tokenized word lists
- Sentence spans as character offsets

Requires: pip install spacy && python -m spacy download en_core_web_md
"""

from typing import List, Dict, Tuple, Optional, Any, Sequence

from ..base import NLPIntegrationBase, NLPServiceError


class SpacyAnalyzer(NLPIntegrationBase):
    """
    spaCy-based POS tagger and sentence segmenter.

    Tags are fine-grained Penn Treebank tags (token.tag_), which is what
    the substitution and rephrasing rules compare.
    """

    INTEGRATION_NAME = "spaCy"
    INTEGRATION_VERSION = "1.0.0"

    # Model preference order (try medium first for balance of speed/accuracy)
    DEFAULT_MODEL = "en_core_web_md"
    FALLBACK_MODELS = ["en_core_web_sm", "en_core_web_lg"]

    def __init__(self, model_name: Optional[str] = None,
                 fallback_models: Optional[List[str]] = None):
        """
        Initialize SpacyAnalyzer with specified or default model.

        Args:
            model_name: spaCy model to load (e.g., 'en_core_web_md')
            fallback_models: Models tried when the first one is missing
        """
        super().__init__()
        self.model_name = model_name or self.DEFAULT_MODEL
        self.fallback_models = fallback_models if fallback_models is not None else self.FALLBACK_MODELS
        self._nlp = None
        self._spacy = None
        self._load_model()

    def _load_model(self):
        """Load spaCy model with fallback support."""
        try:
            import spacy
            self._spacy = spacy
        except ImportError:
            self._error = "spaCy not installed. Run: pip install spacy"
            return

        models_to_try = [self.model_name] + [
            m for m in self.fallback_models if m != self.model_name
        ]

        for model in models_to_try:
            try:
                # Parser and NER are not needed; the senter gives boundaries
                self._nlp = self._spacy.load(model, exclude=["ner"])
                if "parser" in self._nlp.pipe_names and "senter" in self._nlp.disabled:
                    self._nlp.disable_pipe("parser")
                    self._nlp.enable_pipe("senter")
                self.model_name = model
                self._available = True
                return
            except OSError:
                continue

        self._error = (
            "No spaCy model found. Install with: "
            "python -m spacy download en_core_web_md"
        )

    @property
    def is_available(self) -> bool:
        """Check if spaCy is available and model is loaded."""
        return self._available and self._nlp is not None

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the spaCy integration."""
        status = {
            'available': self.is_available,
            'model': self.model_name if self.is_available else None,
            'version': self._spacy.__version__ if self._spacy else None,
            'error': self._error,
        }

        if self.is_available:
            status['pipeline'] = list(self._nlp.pipe_names)

        return status

    def tag(self, tokens: Sequence[str]) -> List[str]:
        """
        Assign a Penn Treebank tag to each token.

        Args:
            tokens: Pre-tokenized words

        Returns:
            Tags, same length and order as tokens
        """
        self.require_available()

        if not tokens:
            return []

        from spacy.tokens import Doc

        try:
            doc = self._nlp(Doc(self._nlp.vocab, words=list(tokens)))
        except Exception as e:
            raise NLPServiceError(f"Tagging failed: {e}", service=self.INTEGRATION_NAME) from e

        return [token.tag_ for token in doc]

    def sentence_spans(self, text: str) -> List[Tuple[int, int]]:
        """
        Find sentence boundaries.

        Args:
            text: Text to segment

        Returns:
            (start, end) character offsets of each sentence, in order
        """
        self.require_available()

        if not text or not text.strip():
            return []

        try:
            doc = self._nlp(text)
        except Exception as e:
            raise NLPServiceError(f"Segmentation failed: {e}", service=self.INTEGRATION_NAME) from e

        return [(sent.start_char, sent.end_char) for sent in doc.sents if sent.text.strip()]

    def count_sentences(self, text: str) -> int:
        """Number of sentences in text."""
        return len(self.sentence_spans(text))
