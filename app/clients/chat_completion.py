from typing import Optional
import httpx
from pydantic import ValidationError
from app.core.config import ConfigurationError
from app.core.logging import get_logger, log_with_context
from app.models.completion import ChatMessage, CompletionRequest, CompletionResponse, ResponseFormat

logger = get_logger(__name__)

PROMPT_TEMPLATE = (
    "Classify the ingredient '{ingredient}' as vegan, vegetarian, or regular. "
    "Respond in JSON format."
)

# Upper bound on raw provider bodies copied into logs
MAX_LOGGED_BODY = 2000


class CompletionClientError(Exception):
    """Base exception for completion provider failures"""
    pass


class UpstreamTransportError(CompletionClientError):
    """Network failure or non-success status from the completion provider"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamTimeoutError(UpstreamTransportError):
    """Completion provider did not answer within the configured timeout"""
    pass


class UpstreamParseError(CompletionClientError):
    """Completion provider answered with a body that does not match the expected schema"""
    pass


def build_prompt(ingredient: str) -> str:
    """Substitute the ingredient verbatim into the classification prompt"""
    return PROMPT_TEMPLATE.format(ingredient=ingredient)


class ChatCompletionClient:
    """Client for the OpenAI chat completions endpoint"""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        api_url: str = "https://api.openai.com/v1/chat/completions",
        timeout: float = 5.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError("Completion client requires a non-empty API key")

        self._api_key = api_key
        self.model = model
        self.api_url = api_url
        self.timeout = timeout
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    def build_request(self, ingredient: str) -> CompletionRequest:
        """Build the outbound payload for a single ingredient"""
        return CompletionRequest(
            model=self.model,
            messages=[ChatMessage(role="user", content=build_prompt(ingredient))],
            response_format=ResponseFormat(type="json_object")
        )

    async def get_completion(self, ingredient: str) -> str:
        """
        Ask the provider to classify an ingredient and return the raw message content

        Args:
            ingredient: Ingredient name; an empty string is sent as-is

        Returns:
            Content of the first choice's message

        Raises:
            UpstreamTimeoutError: Provider did not answer in time
            UpstreamTransportError: Network failure or non-2xx status
            UpstreamParseError: Body is not a valid completion envelope or has no choices
        """
        if ingredient is None:
            raise ValueError("ingredient must not be None")

        payload = self.build_request(ingredient).model_dump()
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        log_with_context(
            logger, "info", "Sending completion request",
            model=self.model,
            url=self.api_url,
            ingredient_length=len(ingredient)
        )

        try:
            response = await self._http.post(
                self.api_url,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()

        except httpx.TimeoutException as e:
            log_with_context(
                logger, "error", "Timeout calling completion provider",
                url=self.api_url,
                timeout=self.timeout,
                error=str(e)
            )
            raise UpstreamTimeoutError(f"Timeout calling completion provider: {e}")

        except httpx.HTTPStatusError as e:
            log_with_context(
                logger, "error", "HTTP error from completion provider",
                url=self.api_url,
                status_code=e.response.status_code,
                body=e.response.text[:MAX_LOGGED_BODY]
            )
            raise UpstreamTransportError(
                f"Completion provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code
            )

        except httpx.HTTPError as e:
            log_with_context(
                logger, "error", "Transport error calling completion provider",
                url=self.api_url,
                error=str(e),
                error_type=type(e).__name__
            )
            raise UpstreamTransportError(f"Failed to reach completion provider: {e}")

        content = self._extract_content(response.text)

        log_with_context(
            logger, "info", "Completion received",
            model=self.model,
            status_code=response.status_code,
            content_length=len(content)
        )

        return content

    def _extract_content(self, body: str) -> str:
        """Deserialize the response envelope and return choices[0].message.content"""
        try:
            completion = CompletionResponse.model_validate_json(body)
        except ValidationError as e:
            log_with_context(
                logger, "error", "Malformed completion response",
                body=body[:MAX_LOGGED_BODY],
                error=str(e)
            )
            raise UpstreamParseError(f"Malformed completion response: {e.error_count()} validation error(s)")

        if not completion.choices:
            log_with_context(
                logger, "error", "Completion response contains no choices",
                body=body[:MAX_LOGGED_BODY]
            )
            raise UpstreamParseError("Completion response contains no choices")

        return completion.choices[0].message.content

    async def aclose(self) -> None:
        """Close the underlying connection pool if this client created it"""
        if self._owns_http_client:
            await self._http.aclose()
