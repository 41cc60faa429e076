"""Google Generative Language API client for HTTP operations."""

from typing import Optional, Any
import httpx
import structlog

from config import get_settings

logger = structlog.get_logger()


class GeminiAPIError(Exception):
    """Non-2xx response from the generateContent endpoint."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Google AI API Error ({status_code}): {body}")


class GeminiClient:
    """Async client for the Gemini generateContent endpoint."""

    def __init__(self, endpoint: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.endpoint = endpoint
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json"
                },
                # Deadlines are applied by the caller; background calls run unbounded.
                timeout=None,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def generate_content(self, api_key: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a generateContent payload and return the decoded response body.

        The API key travels as the ``key`` query parameter. Raises
        GeminiAPIError when the provider answers with a non-2xx status.
        """
        client = await self._get_client()
        response = await client.post(self.endpoint, params={"key": api_key}, json=payload)
        if response.is_error:
            logger.error(
                "provider_error",
                status_code=response.status_code,
                body=response.text,
            )
            raise GeminiAPIError(response.status_code, response.text)
        return response.json()


# Process-wide client; the connection pool is shared across requests
_gemini_client: Optional[GeminiClient] = None


def get_gemini_client() -> GeminiClient:
    """FastAPI dependency for the shared GeminiClient."""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient(get_settings().gemini_endpoint)
    return _gemini_client


async def close_gemini_client() -> None:
    """Release the shared client on application shutdown."""
    global _gemini_client
    if _gemini_client is not None:
        await _gemini_client.close()
        _gemini_client = None
