"""
Tests for LanguageTool NLP Module
=================================
Tests for LanguageTool grammar checking integration.
"""

from types import SimpleNamespace

import pytest


def _match(rule_id='SOME_RULE', category='GRAMMAR', issue_type='grammar'):
    return SimpleNamespace(ruleId=rule_id, category=category, ruleIssueType=issue_type)


class TestSpellingFilter:
    """Misspelling matches belong to the spelling rule, not grammar."""

    @pytest.fixture
    def client_cls(self):
        try:
            from nlp_services.languagetool.client import LanguageToolClient
            return LanguageToolClient
        except ImportError:
            pytest.skip("LanguageTool client not available")

    def test_typos_category(self, client_cls):
        assert client_cls.is_spelling_match(_match(category='TYPOS'))

    def test_misspelling_issue_type(self, client_cls):
        assert client_cls.is_spelling_match(_match(issue_type='misspelling'))

    def test_spelling_rule_ids(self, client_cls):
        assert client_cls.is_spelling_match(_match(rule_id='MORFOLOGIK_RULE_EN_US'))
        assert client_cls.is_spelling_match(_match(rule_id='HUNSPELL_RULE'))

    def test_grammar_match_kept(self, client_cls):
        assert not client_cls.is_spelling_match(_match(rule_id='HE_VERB_AGR'))


@pytest.fixture
def client():
    """Get the shared LanguageTool client."""
    try:
        from nlp_services.languagetool import get_client
        return get_client()
    except ImportError:
        pytest.skip("LanguageTool module not available")


class TestLanguageToolClient:
    """Tests for LanguageToolClient class."""

    def test_singleton(self, client):
        from nlp_services.languagetool.client import LanguageToolClient
        assert LanguageToolClient() is client

    def test_get_status(self, client):
        status = client.get_status()
        assert 'available' in status
        assert 'skipped_rules' in status

    def test_check_returns_matches(self, client):
        if not client.is_available:
            pytest.skip("LanguageTool not available")

        matches = client.check("He go to school every day.")
        assert isinstance(matches, list)
        for match in matches:
            assert match.rule_id
            assert match.length >= 0

    def test_check_blank(self, client):
        if not client.is_available:
            pytest.skip("LanguageTool not available")

        assert client.check("") == []
        assert client.check("   ") == []

    def test_spelling_not_reported(self, client):
        if not client.is_available:
            pytest.skip("LanguageTool not available")

        matches = client.check("I recieve the mail.")
        assert all(m.category != 'TYPOS' for m in matches)

    def test_unavailable_check_raises(self, client):
        if client.is_available:
            pytest.skip("LanguageTool is running")
        from nlp_services.base import NLPServiceError

        with pytest.raises(NLPServiceError):
            client.check("He go home.")


class TestModuleFunctions:

    def test_is_available(self):
        try:
            from nlp_services.languagetool import is_available
            assert isinstance(is_available(), bool)
        except ImportError:
            pytest.skip("LanguageTool module not available")

    def test_get_status(self):
        try:
            from nlp_services.languagetool import get_status
            assert 'available' in get_status()
        except ImportError:
            pytest.skip("LanguageTool module not available")


class TestSharedClient:
    """The LanguageTool server is started once, however many threads ask."""

    def test_concurrent_first_calls_start_one_server(self, monkeypatch):
        import threading
        import time

        from nlp_services import languagetool
        from nlp_services.languagetool.client import LanguageToolClient

        starts = []

        def slow_init(self):
            starts.append(threading.get_ident())
            time.sleep(0.05)
            self._available = False
            self._error = "not started in tests"

        monkeypatch.setattr(LanguageToolClient, '_init_tool', slow_init)
        monkeypatch.setattr(LanguageToolClient, '_instance', None)
        monkeypatch.setattr(languagetool, '_client', None)

        clients = []
        threads = [threading.Thread(target=lambda: clients.append(languagetool.get_client()))
                   for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(starts) == 1
        assert len(clients) == 8
        assert all(c is clients[0] for c in clients)

    def test_direct_construction_starts_one_server(self, monkeypatch):
        import threading
        import time

        from nlp_services.languagetool.client import LanguageToolClient

        starts = []

        def slow_init(self):
            starts.append(1)
            time.sleep(0.05)

        monkeypatch.setattr(LanguageToolClient, '_init_tool', slow_init)
        monkeypatch.setattr(LanguageToolClient, '_instance', None)

        threads = [threading.Thread(target=LanguageToolClient) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(starts) == 1
