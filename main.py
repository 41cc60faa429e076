"""Chat Relay API - Main Application."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from config import get_settings
from gemini import close_gemini_client
from relay import router as relay_router
from relay.dispatcher import close_background_dispatcher

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(
        "starting_chat_relay_api",
        environment=settings.environment,
        model=settings.gemini_model,
        api_key_configured=settings.google_ai_api_key is not None,
    )
    yield
    await close_gemini_client()
    await close_background_dispatcher()
    logger.info("shutting_down_chat_relay_api")


app = FastAPI(
    title="Chat Relay API",
    version="1.0.0",
    description="Relays chat messages to the Google Generative Language API",
    lifespan=lifespan,
)

# CORS middleware; answers OPTIONS preflight for the chat endpoints
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Include routers
app.include_router(relay_router, prefix="/api/chat", tags=["Chat"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "service": "chat-relay"}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Chat Relay API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # Auto-reload on code changes (dev mode)
    )
