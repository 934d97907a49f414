"""
Linguistic Services
===================
The capability objects the classifiers consult, bundled for injection.

Each member is duck-typed:
- differ: diff(text1, text2), edit_distance(s1, s2)
- lexicon: tokenize(text, remove_stopwords, stem), in_dictionary(word), stem(word, tag)
- tagger: tag(tokens)
- segmenter: sentence_spans(text), count_sentences(text)
- relatedness: synonyms(word, sense, use_mfs), relatedness(key1, key2, use_mfs),
  relatedness_matrix(keys, use_mfs)
- grammar: check(text)
- topics: extract_features(text_a, text_b), distribution(features, text)
"""

from dataclasses import dataclass
from typing import Any

from config_logging import get_logger
from .differ import DiffEngine

logger = get_logger('change_classifier.services')


@dataclass(frozen=True)
class LinguisticServices:
    """Read-only bundle of the services shared by every classification."""
    differ: Any
    lexicon: Any
    tagger: Any
    segmenter: Any
    relatedness: Any
    grammar: Any
    topics: Any

    @classmethod
    def default(cls) -> 'LinguisticServices':
        """
        Build the default services, loading every resource up front.

        Loading happens once per process; the nlp_services getters are
        lock-guarded singletons.
        """
        from nlp_services.lexical import get_lexicon, TextFeatureModel
        from nlp_services.spacy import get_analyzer
        from nlp_services.semantics import get_relatedness
        from nlp_services.languagetool import get_client
        from nlp_services.spelling import get_dictionary

        with logger.log_operation("Loading linguistic services"):
            dictionary = get_dictionary()
            lexicon = get_lexicon()
            analyzer = get_analyzer()
            services = cls(
                differ=DiffEngine(),
                lexicon=lexicon,
                tagger=analyzer,
                segmenter=analyzer,
                relatedness=get_relatedness(),
                grammar=get_client(),
                topics=TextFeatureModel(lexicon),
            )

        checked = {
            'dictionary': dictionary,
            'lexicon': lexicon,
            'tagger': analyzer,
            'relatedness': services.relatedness,
            'grammar': services.grammar,
        }
        for name, service in checked.items():
            if not service.is_available:
                logger.warning(f"Service '{name}' unavailable: {service.error}", service=name)

        return services
