"""Hands chat requests from the trigger stage to the background stage."""

from typing import Optional
import httpx
import structlog

from config import get_settings
from relay.errors import DispatchError
from relay.models import ChatRequest

logger = structlog.get_logger()


class BackgroundDispatcher:
    """Fire-and-forget sender for the background endpoint.

    A dispatch succeeds once the background stage acknowledges the hand-off;
    the provider call itself is never awaited here.
    """

    def __init__(self, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def dispatch(self, url: str, request: ChatRequest) -> None:
        """POST ``{message, history}`` to the background stage.

        Raises:
            DispatchError: the stage is unreachable or refused the hand-off.
        """
        client = await self._get_client()
        try:
            response = await client.post(url, json=request.model_dump())
        except httpx.HTTPError as e:
            logger.error("background_dispatch_failed", url=url, error=repr(e))
            raise DispatchError(repr(e))

        if response.is_error:
            logger.error(
                "background_dispatch_rejected",
                url=url,
                status_code=response.status_code,
                body=response.text,
            )
            raise DispatchError(
                f"Background stage answered {response.status_code}: {response.text}",
                upstream_status=response.status_code,
            )
        logger.info("background_dispatched", url=url, status_code=response.status_code)


_dispatcher: Optional[BackgroundDispatcher] = None


def get_background_dispatcher() -> BackgroundDispatcher:
    """FastAPI dependency for the shared BackgroundDispatcher."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = BackgroundDispatcher(timeout=get_settings().dispatch_timeout_seconds)
    return _dispatcher


async def close_background_dispatcher() -> None:
    """Release the shared dispatcher on application shutdown."""
    global _dispatcher
    if _dispatcher is not None:
        await _dispatcher.close()
        _dispatcher = None
