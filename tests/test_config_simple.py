"""Simplified test for configuration reading."""

import os
from unittest.mock import patch

from talkql.configs.config import AppConfig, get_app_config


class TestConfigSimple:
    """Test basic configuration functionality."""

    def test_defaults(self):
        config = AppConfig()
        assert config.service.query_path == "/query"
        assert config.service.check_connection_path == "/check-connection"
        assert config.service.disconnect_path == "/disconnect-database"
        assert config.session.default_source_name == "Database"
        assert (
            config.session.query_fallback_error
            == "Sorry, I encountered an error processing your query."
        )

    def test_config_works(self):
        """Test that configuration system works with environment variables."""

        env_vars = {
            "TALKQL_SERVICE__BASE_URL": "http://query.internal:9000",
            "TALKQL_LOGGING__JSON_OUTPUT": "true",
        }

        with patch.dict(os.environ, env_vars, clear=False):
            config = AppConfig()

            assert config.service.base_url == "http://query.internal:9000"
            assert config.logging.json_output is True

    def test_init_overrides_win(self):
        with patch.dict(
            os.environ, {"TALKQL_SERVICE__BASE_URL": "http://env:1"}, clear=False
        ):
            config = get_app_config(service={"base_url": "http://flag:2"})
        assert config.service.base_url == "http://flag:2"

    def test_not_a_singleton(self):
        assert get_app_config() is not get_app_config()
