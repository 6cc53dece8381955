"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from design_translator.config import load_openai_api_key, load_slack_credentials, parse_keywords


class TestParseKeywords:
    def test_splits_and_trims(self):
        assert parse_keywords(" 긴급, URGENT ,,") == ("긴급", "URGENT")

    def test_empty(self):
        assert parse_keywords("") == ()


class TestLoadSlackCredentials:
    def test_loads_both(self, monkeypatch):
        monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-1")
        monkeypatch.setenv("SLACK_SIGNING_SECRET", "s3cret")
        assert load_slack_credentials() == ("xoxb-1", "s3cret")

    def test_names_every_missing_variable(self, monkeypatch):
        monkeypatch.delenv("SLACK_BOT_TOKEN", raising=False)
        monkeypatch.setenv("SLACK_SIGNING_SECRET", "  ")
        with pytest.raises(ValueError) as exc_info:
            load_slack_credentials()
        assert "SLACK_BOT_TOKEN" in str(exc_info.value)
        assert "SLACK_SIGNING_SECRET" in str(exc_info.value)


class TestLoadOpenaiApiKey:
    def test_loads_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", " sk-test ")
        assert load_openai_api_key() == "sk-test"

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            load_openai_api_key()
