"""
Tests for hamibot_mcp.core.config and the process entry point.
"""

from unittest.mock import MagicMock

import pytest

import hamibot_mcp.__main__ as entry
from hamibot_mcp.core import config
from hamibot_mcp.core.config import (
    BASE_URL_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    LOG_LEVEL_ENV,
    TIMEOUT_ENV,
    TOKEN_ENV,
    load_settings,
)
from hamibot_mcp.core.errors import ConfigurationError

# ============================================================================
# load_settings
# ============================================================================


class TestLoadSettings:
    def test_token_only(self):
        settings = load_settings({TOKEN_ENV: "hmp_abc"})
        assert settings.token == "hmp_abc"
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == DEFAULT_TIMEOUT
        assert settings.log_level == "INFO"

    @pytest.mark.parametrize("environ", [{}, {TOKEN_ENV: ""}, {TOKEN_ENV: "   "}])
    def test_missing_token(self, environ):
        with pytest.raises(ConfigurationError, match=TOKEN_ENV):
            load_settings(environ)

    def test_overrides(self):
        settings = load_settings(
            {
                TOKEN_ENV: "hmp_abc",
                BASE_URL_ENV: "http://localhost:8080/v2/",
                TIMEOUT_ENV: "2.5",
                LOG_LEVEL_ENV: "debug",
            }
        )
        assert settings.base_url == "http://localhost:8080/v2"
        assert settings.timeout == 2.5
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["abc", "0", "-1"])
    def test_bad_timeout(self, raw):
        with pytest.raises(ConfigurationError, match=TIMEOUT_ENV):
            load_settings({TOKEN_ENV: "hmp_abc", TIMEOUT_ENV: raw})

    def test_blank_timeout_means_no_timeout(self):
        settings = load_settings({TOKEN_ENV: "hmp_abc", TIMEOUT_ENV: ""})
        assert settings.timeout is None

    @pytest.mark.parametrize("raw", ["nan", "inf"])
    def test_non_finite_timeout(self, raw):
        with pytest.raises(ConfigurationError, match=TIMEOUT_ENV):
            load_settings({TOKEN_ENV: "hmp_abc", TIMEOUT_ENV: raw})

    @pytest.mark.parametrize("raw", ["warning", " Error ", "CRITICAL"])
    def test_log_level_names(self, raw):
        settings = load_settings({TOKEN_ENV: "hmp_abc", LOG_LEVEL_ENV: raw})
        assert settings.log_level == raw.strip().upper()

    @pytest.mark.parametrize("raw", ["BASIC_FORMAT", "verbose", "10"])
    def test_bad_log_level(self, raw):
        with pytest.raises(ConfigurationError, match=LOG_LEVEL_ENV):
            load_settings({TOKEN_ENV: "hmp_abc", LOG_LEVEL_ENV: raw})

    def test_repr_hides_token(self):
        settings = load_settings({TOKEN_ENV: "hmp_secret"})
        assert "hmp_secret" not in repr(settings)

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setattr(config, "load_dotenv", lambda: False)
        monkeypatch.setenv(TOKEN_ENV, "hmp_env")
        assert load_settings().token == "hmp_env"


# ============================================================================
# Entry point
# ============================================================================


class TestMain:
    def test_missing_token_exits_nonzero(self, monkeypatch):
        monkeypatch.setattr(config, "load_dotenv", lambda: False)
        monkeypatch.delenv(TOKEN_ENV, raising=False)
        create_server = MagicMock()
        monkeypatch.setattr(entry, "create_server", create_server)

        with pytest.raises(SystemExit) as exc_info:
            entry.main()

        assert exc_info.value.code == 1
        create_server.assert_not_called()

    def test_bad_log_level_exits_nonzero(self, monkeypatch):
        monkeypatch.setattr(config, "load_dotenv", lambda: False)
        monkeypatch.setenv(TOKEN_ENV, "hmp_env")
        monkeypatch.setenv(LOG_LEVEL_ENV, "BASIC_FORMAT")
        create_server = MagicMock()
        monkeypatch.setattr(entry, "create_server", create_server)

        with pytest.raises(SystemExit) as exc_info:
            entry.main()

        assert exc_info.value.code == 1
        create_server.assert_not_called()

    def test_starts_stdio_server(self, monkeypatch):
        monkeypatch.setattr(config, "load_dotenv", lambda: False)
        monkeypatch.setenv(TOKEN_ENV, "hmp_env")
        monkeypatch.delenv(BASE_URL_ENV, raising=False)
        monkeypatch.delenv(TIMEOUT_ENV, raising=False)
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        server = MagicMock()
        create_server = MagicMock(return_value=server)
        monkeypatch.setattr(entry, "create_server", create_server)

        entry.main()

        [client] = create_server.call_args.args
        assert client.base_url == DEFAULT_BASE_URL
        assert client.timeout is None
        server.run.assert_called_once_with(transport="stdio", show_banner=False)
