"""Unit tests for configuration."""

import pytest
from pydantic import ValidationError

from convo_highlights.config import Settings, get_settings
from convo_highlights.llm import OllamaOracle, create_llm_client, create_oracle
from convo_highlights.models import Role


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, settings):
        assert settings.oracle_enabled is False
        assert settings.llm_model_name == "llama3.1:8b"
        assert settings.llm_temperature == 0.3
        assert settings.llm_num_predict == 2000
        assert settings.oracle_timeout_seconds == 60.0
        assert settings.title_max_length == 100
        assert settings.extraction_roles == [Role.USER, Role.ASSISTANT, Role.SYSTEM]
        assert (settings.question_min_length, settings.question_max_length) == (10, 200)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("HIGHLIGHTER_ORACLE_ENABLED", "true")
        monkeypatch.setenv("HIGHLIGHTER_LLM_MODEL_NAME", "qwen2.5:7b")
        monkeypatch.setenv("HIGHLIGHTER_ORACLE_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("HIGHLIGHTER_EXTRACTION_ROLES", '["assistant"]')

        settings = Settings(_env_file=None)

        assert settings.oracle_enabled is True
        assert settings.llm_model_name == "qwen2.5:7b"
        assert settings.oracle_timeout_seconds == 5.0
        assert settings.extraction_roles == [Role.ASSISTANT]

    def test_invalid_role(self, monkeypatch):
        monkeypatch.setenv("HIGHLIGHTER_EXTRACTION_ROLES", '["moderator"]')
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_unknown_env_ignored(self, monkeypatch):
        monkeypatch.setenv("HIGHLIGHTER_NOT_A_SETTING", "1")
        assert Settings(_env_file=None).oracle_enabled is False

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestOracleFactory:
    """Tests for oracle and LLM client construction."""

    def test_disabled_returns_none(self, settings):
        assert create_oracle(settings) is None

    def test_enabled_returns_ollama_oracle(self, settings):
        settings = settings.model_copy(update={"oracle_enabled": True})
        oracle = create_oracle(settings)

        assert isinstance(oracle, OllamaOracle)
        assert oracle.settings is settings

    def test_llm_client_configuration(self, settings):
        llm = create_llm_client(settings, num_predict=123)

        assert llm.model == settings.llm_model_name
        assert llm.base_url == settings.llm_ollama_base_url
        assert llm.num_predict == 123

    def test_llm_client_default_num_predict(self, settings):
        assert create_llm_client(settings).num_predict == settings.llm_num_predict
