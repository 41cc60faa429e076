"""Request parsing, provider payload construction and reply extraction."""

import json
from typing import Any
from pydantic import ValidationError

from relay.errors import InvalidRequestError
from relay.models import ChatRequest, Part, Turn


def parse_chat_request(body: bytes) -> ChatRequest:
    """Validate a raw inbound body into a ChatRequest.

    Raises:
        InvalidRequestError: body missing, not a JSON object, or without a
            non-empty string ``message``.
    """
    if not body or not body.strip():
        raise InvalidRequestError("Bad Request: Missing request body.")
    try:
        data = json.loads(body)
    except ValueError:
        raise InvalidRequestError("Bad Request: Request body is not valid JSON.")
    if not isinstance(data, dict):
        raise InvalidRequestError("Bad Request: Request body must be a JSON object.")

    try:
        return ChatRequest.model_validate(data)
    except ValidationError as e:
        fields = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        if "message" in fields:
            raise InvalidRequestError("Bad Request: 'message' is required.")
        raise InvalidRequestError("Bad Request: 'history' must be a list of turns.")


def user_turn(text: str) -> dict[str, Any]:
    return Turn(role="user", parts=[Part(text=text)]).model_dump()


def model_turn(text: str) -> dict[str, Any]:
    return Turn(role="model", parts=[Part(text=text)]).model_dump()


def build_payload(request: ChatRequest, system_prompt: str, max_output_tokens: int) -> dict[str, Any]:
    """Build the generateContent body: system prompt, history plus the new user turn."""
    return {
        "system_instruction": {
            "parts": [{"text": system_prompt}],
        },
        "contents": [*request.history, user_turn(request.message)],
        "generationConfig": {
            "maxOutputTokens": max_output_tokens,
        },
    }


def extract_reply(data: Any, fallback: str) -> str:
    """Return candidates[0].content.parts[0].text, or fallback if absent or empty."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return fallback
    if not isinstance(text, str) or not text:
        return fallback
    return text


def extend_history(request: ChatRequest, reply: str) -> list[Any]:
    """Caller history followed by the new user turn and the model's reply."""
    return [*request.history, user_turn(request.message), model_turn(reply)]
