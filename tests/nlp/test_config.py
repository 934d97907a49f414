"""
Tests for NLP Configuration
===========================
"""

import json

import pytest

from nlp_services import config
from change_classifier.classifiers import ClassifierSettings


@pytest.fixture(autouse=True)
def fresh_config():
    config.reset_config()
    yield
    config.reset_config()


class TestDefaults:

    def test_classifier_defaults(self):
        assert config.get('classifier.spelling_max_distance') == 2
        assert config.get('classifier.substitution_min_relatedness') == 5.0
        assert config.get('classifier.rephrasing_min_similarity') == 0.3
        assert config.get('classifier.topic_max_divergence') == 0.5
        assert config.get('classifier.max_workers') == 4

    def test_service_defaults(self):
        assert config.get('spacy.model') == 'en_core_web_md'
        assert config.get('semantics.ic_corpus') == 'ic-brown.dat'
        assert config.get('semantics.use_mfs') is False
        assert 'WHITESPACE_RULE' in config.get('languagetool.disabled_rules')

    def test_unknown_key(self):
        assert config.get('classifier.nope', 'fallback') == 'fallback'


class TestSet:

    def test_set_value(self):
        config.set('classifier.max_workers', 1)
        assert config.get('classifier.max_workers') == 1

    def test_set_unknown_section(self):
        with pytest.raises(ValueError):
            config.set('nope.max_workers', 1)

    def test_set_unknown_key(self):
        with pytest.raises(ValueError):
            config.set('classifier.nope', 1)

    def test_set_bad_format(self):
        with pytest.raises(ValueError):
            config.set('classifier', 1)


class TestLoading:

    def test_file_values(self, tmp_path, monkeypatch):
        for var in ('CLASSIFIER_MAX_WORKERS', 'NLP_SPACY_MODEL'):
            monkeypatch.delenv(var, raising=False)
        path = tmp_path / "nlp_config.json"
        path.write_text(json.dumps({
            'classifier': {'max_workers': 8, 'unknown': 1},
            'spacy': {'model': 'en_core_web_sm'},
        }), encoding='utf-8')

        loaded = config._load_config(path)
        assert loaded.classifier.max_workers == 8
        assert loaded.spacy.model == 'en_core_web_sm'

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "nlp_config.json"
        path.write_text(json.dumps({'classifier': {'max_workers': 8}}), encoding='utf-8')
        monkeypatch.setenv('CLASSIFIER_MAX_WORKERS', '2')
        monkeypatch.setenv('NLP_SEMANTICS_USE_MFS', 'true')

        loaded = config._load_config(path)
        assert loaded.classifier.max_workers == 2
        assert loaded.semantics.use_mfs is True

    def test_invalid_env_keeps_default(self, tmp_path, monkeypatch):
        monkeypatch.setenv('CLASSIFIER_TOPIC_MAX_DIVERGENCE', 'lots')
        loaded = config._load_config(tmp_path / "missing.json")
        assert loaded.classifier.topic_max_divergence == 0.5

    def test_broken_file_ignored(self, tmp_path, monkeypatch):
        monkeypatch.delenv('CLASSIFIER_MAX_WORKERS', raising=False)
        path = tmp_path / "nlp_config.json"
        path.write_text("{not json", encoding='utf-8')
        assert config._load_config(path).classifier.max_workers == 4

    def test_save_round_trip(self, tmp_path):
        config.set('classifier.rephrasing_min_similarity', 0.6)
        path = tmp_path / "saved.json"
        config.save_config(path)

        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['classifier']['rephrasing_min_similarity'] == 0.6


class TestClassifierSettings:

    def test_from_config(self):
        config.set('classifier.max_workers', 3)
        config.set('semantics.use_mfs', True)
        settings = ClassifierSettings.from_config()
        assert settings.max_workers == 3
        assert settings.use_mfs is True
        assert settings.topic_max_divergence == 0.5

    def test_explicit_config(self):
        cfg = config.NLPConfig()
        cfg.classifier.spelling_max_distance = 1
        assert ClassifierSettings.from_config(cfg).spelling_max_distance == 1
