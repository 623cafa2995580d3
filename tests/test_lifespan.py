import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from app.main import app
from app.core.config import AppConfig, ConfigurationError
from app.clients.chat_completion import ChatCompletionClient
from app.services.ingredient import IngredientService


class TestLifespan:
    """Test application startup and shutdown"""

    def test_startup_fails_without_api_key(self):
        """Test missing API key aborts startup instead of failing per request"""
        settings = AppConfig(openai_api_key="")

        with patch("app.main.get_settings", return_value=settings):
            with pytest.raises(ConfigurationError):
                with TestClient(app):
                    pass

    def test_startup_builds_client_from_settings(self):
        """Test completion client is configured once from settings"""
        settings = AppConfig(
            openai_api_key="sk-test",
            openai_model="gpt-test",
            openai_api_url="https://example.test/v1/chat/completions",
            openai_timeout=2.5
        )

        with patch("app.main.get_settings", return_value=settings):
            with TestClient(app):
                completion_client = app.state.completion_client
                assert isinstance(completion_client, ChatCompletionClient)
                assert isinstance(app.state.ingredient_service, IngredientService)
                assert completion_client.model == "gpt-test"
                assert completion_client.api_url == "https://example.test/v1/chat/completions"
                assert completion_client.timeout == 2.5

        assert app.state.completion_client is None
        assert app.state.ingredient_service is None
