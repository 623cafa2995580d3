import pytest
from unittest.mock import AsyncMock, MagicMock
from app.clients.chat_completion import ChatCompletionClient, UpstreamParseError
from app.services.ingredient import IngredientService, ClassificationParseError


@pytest.fixture
def completion_client():
    client = MagicMock(spec=ChatCompletionClient)
    client.get_completion = AsyncMock()
    return client


@pytest.fixture
def service(completion_client):
    return IngredientService(completion_client)


class TestIngredientService:
    """Test ingredient classification service"""

    @pytest.mark.asyncio
    async def test_categorize_vegan(self, service, completion_client):
        """Test classification field is extracted from JSON content"""
        completion_client.get_completion.return_value = '{"classification":"vegan"}'

        result = await service.categorize("tofu")

        assert result == "vegan"
        completion_client.get_completion.assert_awaited_once_with("tofu")

    @pytest.mark.asyncio
    async def test_categorize_ignores_extra_fields(self, service, completion_client):
        """Test additional keys in the content are ignored"""
        completion_client.get_completion.return_value = (
            '{"ingredient": "milk", "classification": "vegetarian", "reason": "dairy"}'
        )

        assert await service.categorize("milk") == "vegetarian"

    @pytest.mark.asyncio
    async def test_categorize_free_form_value(self, service, completion_client):
        """Test classification is returned verbatim, not restricted to known values"""
        completion_client.get_completion.return_value = '{"classification": "pescatarian"}'

        assert await service.categorize("salmon") == "pescatarian"

    @pytest.mark.asyncio
    async def test_categorize_invalid_json(self, service, completion_client):
        """Test non-JSON content raises parse error"""
        completion_client.get_completion.return_value = "It is vegan."

        with pytest.raises(ClassificationParseError) as exc_info:
            await service.categorize("tofu")

        assert "not valid JSON" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_categorize_missing_field(self, service, completion_client):
        """Test JSON object without classification raises parse error"""
        completion_client.get_completion.return_value = '{"category": "vegan"}'

        with pytest.raises(ClassificationParseError):
            await service.categorize("tofu")

    @pytest.mark.asyncio
    async def test_categorize_non_object(self, service, completion_client):
        """Test JSON that is not an object raises parse error"""
        completion_client.get_completion.return_value = '["vegan"]'

        with pytest.raises(ClassificationParseError):
            await service.categorize("tofu")

    @pytest.mark.asyncio
    async def test_categorize_non_string_value(self, service, completion_client):
        """Test non-string classification raises parse error"""
        completion_client.get_completion.return_value = '{"classification": null}'

        with pytest.raises(ClassificationParseError):
            await service.categorize("tofu")

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self, service, completion_client):
        """Test client errors pass through unchanged"""
        completion_client.get_completion.side_effect = UpstreamParseError("no choices")

        with pytest.raises(UpstreamParseError):
            await service.categorize("tofu")

    @pytest.mark.asyncio
    async def test_no_caching(self, service, completion_client):
        """Test each call reaches the completion client"""
        completion_client.get_completion.return_value = '{"classification":"regular"}'

        await service.categorize("cheese")
        await service.categorize("cheese")

        assert completion_client.get_completion.await_count == 2
