import json
from app.clients.chat_completion import ChatCompletionClient
from app.core.logging import get_logger, log_with_context

logger = get_logger(__name__)


class ClassificationParseError(Exception):
    """Exception raised when completion content does not carry a classification"""
    pass


class IngredientService:
    """Classifies ingredients through the completion provider"""

    def __init__(self, completion_client: ChatCompletionClient):
        self.completion_client = completion_client

    async def categorize(self, ingredient: str) -> str:
        """
        Classify an ingredient

        Args:
            ingredient: Ingredient name as supplied by the caller

        Returns:
            Value of the 'classification' key in the provider's JSON answer

        Raises:
            ClassificationParseError: Content is not a JSON object with a string 'classification'
        """
        content = await self.completion_client.get_completion(ingredient)
        return self._parse_classification(content)

    def _parse_classification(self, content: str) -> str:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            log_with_context(
                logger, "error", "Completion content is not valid JSON",
                content=content[:500],
                error=str(e)
            )
            raise ClassificationParseError(f"Completion content is not valid JSON: {e}")

        if not isinstance(data, dict) or "classification" not in data:
            log_with_context(
                logger, "error", "Completion content has no classification",
                content=content[:500]
            )
            raise ClassificationParseError("Completion content has no 'classification' field")

        classification = data["classification"]
        if not isinstance(classification, str):
            raise ClassificationParseError(
                f"'classification' must be a string, got {type(classification).__name__}"
            )

        return classification
