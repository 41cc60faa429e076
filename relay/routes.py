"""Chat relay API routes.

``POST /api/chat`` relays synchronously. ``POST /api/chat/trigger`` and
``POST /api/chat/background`` form the deferred shape: the trigger hands the
request to the background endpoint and acknowledges immediately.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse
import structlog

from config import Settings, get_settings
from relay.dispatcher import BackgroundDispatcher, get_background_dispatcher
from relay.errors import RelayError
from relay.models import AcceptedResponse, ChatRequest
from relay.payload import parse_chat_request
from relay.service import RelayService, get_relay_service

logger = structlog.get_logger()

router = APIRouter()

TRIGGER_ACK = "Chat request received and is being processed in the background."
BACKGROUND_ACK = "Background task accepted."


def cors_headers(settings: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.allow_origin,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


def error_response(error: RelayError, settings: Settings) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_body(),
        headers=cors_headers(settings),
    )


def internal_error_response(prefix: str, error: Exception, settings: Settings) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"detail": f"{prefix}: {error}"},
        headers=cors_headers(settings),
    )


@router.post("")
async def chat(
    request: Request,
    service: RelayService = Depends(get_relay_service),
    settings: Settings = Depends(get_settings),
):
    """Relay a chat message to the provider and return its reply."""
    try:
        service.api_key()
        chat_request = parse_chat_request(await request.body())
        response = await service.relay(chat_request)
        return JSONResponse(
            content=response.model_dump(exclude_none=True),
            headers=cors_headers(settings),
        )
    except RelayError as e:
        logger.warning("chat_failed", status_code=e.status_code, error=e.detail)
        return error_response(e, settings)
    except Exception as e:
        logger.error("chat_failed", status_code=500, error=str(e))
        return internal_error_response("Internal Server Error", e, settings)


@router.post("/trigger", status_code=202)
async def chat_trigger(
    request: Request,
    dispatcher: BackgroundDispatcher = Depends(get_background_dispatcher),
    settings: Settings = Depends(get_settings),
):
    """Validate a chat message and hand it to the background stage."""
    try:
        chat_request = parse_chat_request(await request.body())
        url = settings.relay_background_url or str(request.url_for("chat_background"))
        await dispatcher.dispatch(url, chat_request)
        return JSONResponse(
            status_code=202,
            content=AcceptedResponse(message=TRIGGER_ACK).model_dump(),
            headers=cors_headers(settings),
        )
    except RelayError as e:
        logger.warning("chat_trigger_failed", status_code=e.status_code, error=e.detail)
        return error_response(e, settings)
    except Exception as e:
        logger.error("chat_trigger_failed", status_code=500, error=str(e))
        return internal_error_response("Trigger function error", e, settings)


async def run_background(service: RelayService, chat_request: ChatRequest) -> None:
    """Run the provider call after the acknowledgement has been sent."""
    outcome = await service.process_background(chat_request)
    logger.info("background_outcome", status_code=outcome.status_code, detail=outcome.detail)


@router.post("/background", status_code=202)
async def chat_background(
    request: Request,
    background_tasks: BackgroundTasks,
    service: RelayService = Depends(get_relay_service),
    settings: Settings = Depends(get_settings),
):
    """Accept a forwarded chat request and call the provider out of band.

    Reachable on its own, so the request is validated again here.
    """
    try:
        service.api_key()
        chat_request = parse_chat_request(await request.body())
    except RelayError as e:
        logger.warning("chat_background_rejected", status_code=e.status_code, error=e.detail)
        return error_response(e, settings)
    except Exception as e:
        logger.error("chat_background_rejected", status_code=500, error=str(e))
        return internal_error_response("Background task failed", e, settings)

    background_tasks.add_task(run_background, service, chat_request)
    return JSONResponse(
        status_code=202,
        content=AcceptedResponse(message=BACKGROUND_ACK).model_dump(),
        headers=cors_headers(settings),
        background=background_tasks,
    )
