"""Google Generative Language API client."""

from .client import GeminiClient, GeminiAPIError, get_gemini_client, close_gemini_client

__all__ = ["GeminiClient", "GeminiAPIError", "get_gemini_client", "close_gemini_client"]
