"""Relay service: one provider call per chat request."""

import asyncio
from typing import Optional
from fastapi import Depends
import structlog

from config import Settings, get_settings
from gemini import GeminiClient, GeminiAPIError, get_gemini_client
from relay.errors import ConfigurationError, UpstreamError, UpstreamTimeoutError
from relay.models import BackgroundOutcome, ChatRequest, ChatResponse
from relay.payload import build_payload, extend_history, extract_reply

logger = structlog.get_logger()


class RelayService:
    """Formats a chat request, calls the provider and shapes the reply."""

    def __init__(self, client: GeminiClient, settings: Settings):
        self.client = client
        self.settings = settings

    def api_key(self) -> str:
        """Return the provider credential or raise ConfigurationError."""
        key = self.settings.google_ai_api_key
        if key is None or not key.get_secret_value():
            logger.error("api_key_missing")
            raise ConfigurationError("Internal Server Error: API Key missing")
        return key.get_secret_value()

    async def _call_provider(self, request: ChatRequest, timeout: Optional[float]) -> str:
        api_key = self.api_key()
        payload = build_payload(
            request,
            self.settings.load_system_prompt(),
            self.settings.max_output_tokens,
        )

        try:
            if timeout is None:
                data = await self.client.generate_content(api_key, payload)
            else:
                # wait_for cancels the in-flight call when the deadline passes
                data = await asyncio.wait_for(
                    self.client.generate_content(api_key, payload),
                    timeout=timeout,
                )
        except asyncio.TimeoutError:
            logger.error("provider_timeout", timeout_seconds=timeout)
            raise UpstreamTimeoutError()
        except GeminiAPIError as e:
            raise UpstreamError(e.status_code, e.body)

        return extract_reply(data, self.settings.relay_fallback_reply)

    async def relay(self, request: ChatRequest) -> ChatResponse:
        """Synchronous shape: bounded provider call, reply returned to the caller."""
        reply = await self._call_provider(request, timeout=self.settings.relay_timeout_seconds)
        logger.info("chat_relayed", message_length=len(request.message), history_turns=len(request.history))

        if self.settings.relay_include_history:
            return ChatResponse(reply=reply, history=extend_history(request, reply))
        return ChatResponse(reply=reply)

    async def process_background(self, request: ChatRequest) -> BackgroundOutcome:
        """Deferred shape: unbounded provider call whose outcome is only logged.

        Never raises; every failure becomes a BackgroundOutcome with the status
        the host would report.
        """
        logger.info("background_provider_call_started", message_length=len(request.message))
        try:
            reply = await self._call_provider(request, timeout=None)
        except UpstreamError as e:
            outcome = BackgroundOutcome(status_code=e.status_code, detail=e.detail)
            logger.error(
                "background_task_failed",
                status_code=outcome.status_code,
                provider_status=e.provider_status,
                provider_error=e.provider_error,
            )
            return outcome
        except Exception as e:
            outcome = BackgroundOutcome(status_code=500, detail=f"Background task failed: {e}")
            logger.error("background_task_failed", status_code=500, error=str(e))
            return outcome

        logger.info("background_reply_recorded", reply=reply)
        return BackgroundOutcome(status_code=200, detail="Background task completed.")


def get_relay_service(
    settings: Settings = Depends(get_settings),
    client: GeminiClient = Depends(get_gemini_client),
) -> RelayService:
    """FastAPI dependency for RelayService."""
    return RelayService(client, settings)
