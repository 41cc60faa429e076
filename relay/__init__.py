"""Chat relay feature."""

from .models import ChatRequest, ChatResponse, AcceptedResponse, BackgroundOutcome
from .service import RelayService, get_relay_service
from .dispatcher import BackgroundDispatcher, get_background_dispatcher
from .routes import router

__all__ = [
    "ChatRequest", "ChatResponse", "AcceptedResponse", "BackgroundOutcome",
    "RelayService", "get_relay_service",
    "BackgroundDispatcher", "get_background_dispatcher", "router"
]
