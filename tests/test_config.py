"""Tests for configuration loading and the server command line."""

import logging

import pytest
from unittest.mock import patch

from config import AssistantConfig, DEFAULT_GENERATION_URL
from server.cli import main, probe_generation_service, resolve_config

ENV_VARS = [
    "HOST", "PORT", "SERVER_THREADS", "LLAMA_URL", "MODEL_PATH", "MODEL_NAME",
    "N_PREDICT", "REQUEST_TIMEOUT", "ALGOLIA_APP_ID", "ALGOLIA_API_KEY",
    "ALGOLIA_INDEX_NAME", "ALGOLIA_HOST", "N_CTX", "N_THREADS", "N_GPU_LAYERS",
    "LOG_LEVEL", "LOG_JSON",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestAssistantConfig:

    def test_defaults(self):
        config = AssistantConfig.from_env()
        assert config.port == 8080
        assert config.server_threads == 4
        assert config.generation_url == DEFAULT_GENERATION_URL
        assert config.search_index_name == "IQM API Docs"
        assert config.search_enabled is False

    def test_environment_values(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        monkeypatch.setenv("SERVER_THREADS", "1")
        monkeypatch.setenv("LLAMA_URL", "http://llama:8081")
        monkeypatch.setenv("ALGOLIA_APP_ID", "APPID")
        monkeypatch.setenv("ALGOLIA_API_KEY", "secret")
        monkeypatch.setenv("LOG_JSON", "true")

        config = AssistantConfig.from_env()

        assert config.port == 9090
        assert config.server_threads == 1
        assert config.generation_url == "http://llama:8081"
        assert config.search_enabled is True
        assert config.log_json is True

    def test_model_path_used_when_it_is_a_url(self, monkeypatch):
        monkeypatch.setenv("MODEL_PATH", "http://gpu-box:8081")
        assert AssistantConfig.from_env().generation_url == "http://gpu-box:8081"

    def test_model_file_path_ignored(self, monkeypatch):
        monkeypatch.setenv("MODEL_PATH", "/models/mistral-7b.gguf")
        assert AssistantConfig.from_env().generation_url == DEFAULT_GENERATION_URL

    def test_invalid_number_falls_back(self, monkeypatch):
        monkeypatch.setenv("PORT", "eighty")
        assert AssistantConfig.from_env().port == 8080

    def test_overrides_skip_none(self):
        config = AssistantConfig().with_overrides(port=9000, host=None)
        assert config.port == 9000
        assert config.host == "0.0.0.0"

    def test_describe_masks_api_key(self):
        summary = AssistantConfig(search_app_id="APPID", search_api_key="secret").describe()
        assert summary["search_api_key"] == "****"
        assert summary["search_enabled"] is True
        assert "secret" not in str(summary)

    @pytest.mark.parametrize("raw, expected", [
        ("debug", "DEBUG"),
        ("warn", "WARNING"),
        (" Error ", "ERROR"),
        ("verbose", "INFO"),
    ])
    def test_log_level_normalized(self, raw, expected):
        assert AssistantConfig(log_level=raw).log_level == expected

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warn")
        assert AssistantConfig.from_env().log_level == "WARNING"


class TestCommandLine:

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")

        config = resolve_config([
            "--port", "7000",
            "--threads", "1",
            "--llama-url", "http://llama:8081",
            "--algolia-index", "docs",
            "--json-logs",
        ])

        assert config.port == 7000
        assert config.server_threads == 1
        assert config.generation_url == "http://llama:8081"
        assert config.search_index_name == "docs"
        assert config.log_json is True

    def test_model_alias(self):
        assert resolve_config(["--model", "http://other:8081"]).generation_url == "http://other:8081"

    def test_environment_kept_without_flags(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        assert resolve_config([]).port == 9090

    def test_unreachable_backend_only_warns(self):
        with patch("server.cli.GenerationClient.is_available", return_value=False):
            assert probe_generation_service(AssistantConfig()) is False

    def test_port_flag_replaces_invalid_environment_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "70000")
        assert resolve_config(["--port", "8000"]).port == 8000

    def test_log_level_flag_normalized(self):
        assert resolve_config(["--log-level", "debug"]).log_level == "DEBUG"


class TestMain:

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_serves_with_flag_values(self, monkeypatch):
        monkeypatch.setenv("PORT", "70000")
        monkeypatch.setenv("LOG_LEVEL", "warn")

        with patch("server.cli.GenerationClient.is_available", return_value=True), \
                patch("server.cli.uvicorn.run") as mock_run:
            assert main(["--port", "8000"]) == 0

        mock_run.assert_called_once()
        app = mock_run.call_args[0][0]
        assert app.state.config.port == 8000
        assert mock_run.call_args.kwargs["port"] == 8000
        assert mock_run.call_args.kwargs["log_level"] == "warning"

    def test_importing_api_builds_no_app(self):
        import server.rag_api
        assert not hasattr(server.rag_api, "app")
