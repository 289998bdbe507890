"""HTTP API for the translation dispatcher.

Routes:
    POST /translate   body ``{"inputSentence": ..., "targetLanguage": ...}`` -> TranslationResult JSON
    GET  /languages   -> JSON array of supported language codes

Routing errors become ``400 {"error": ...}``; translation failures are ordinary 200 results with
``success: false``. Every response carries permissive CORS headers for browser front ends.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final

from aiohttp import web

from core.trans.interface import RoutingError
from models.translation_models import TranslationRequest
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from core.trans.dispatcher import TransDispatcher
    from models.translation_models import TranslationResult

__all__: list[str] = ["DISPATCHER_KEY", "create_app"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DISPATCHER_KEY: Final[web.AppKey[TransDispatcher]] = web.AppKey("dispatcher")

CORS_HEADERS: Final[dict[str, str]] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


def _error_response(message: str, status: int = 400) -> web.Response:
    return web.json_response({"error": message}, status=status)


@web.middleware
async def cors_middleware(
    request: web.Request, handler: Callable[[web.Request], Awaitable[web.StreamResponse]]
) -> web.StreamResponse:
    """Answer preflight requests and add CORS headers to every response, errors included."""
    if request.method == "OPTIONS":
        return web.Response(status=204, headers=CORS_HEADERS)
    try:
        response: web.StreamResponse = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(CORS_HEADERS)
        raise
    response.headers.update(CORS_HEADERS)
    return response


def _parse_request(body: Any) -> TranslationRequest:
    """Build a TranslationRequest from a decoded JSON body.

    Raises:
        ValueError: If the body is not an object with string (or null) fields.
    """
    if not isinstance(body, dict):
        msg = "Request body must be a JSON object"
        raise ValueError(msg)
    for key in ("inputSentence", "targetLanguage"):
        if key not in body:
            msg = f"Missing field '{key}'"
            raise ValueError(msg)
        if body[key] is not None and not isinstance(body[key], str):
            msg = f"Field '{key}' must be a string"
            raise ValueError(msg)
    return TranslationRequest(
        input_sentence=body["inputSentence"] or "",
        target_language=body["targetLanguage"] or "",
    )


async def translate_handler(request: web.Request) -> web.Response:
    dispatcher: TransDispatcher = request.app[DISPATCHER_KEY]
    try:
        body: Any = await request.json()
        translation_request: TranslationRequest = _parse_request(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        logger.debug("Undecodable request body: %s", err)
        return _error_response("Request body must be valid JSON")
    except ValueError as err:
        return _error_response(str(err))

    outcome: TranslationResult | RoutingError = await dispatcher.try_translate(translation_request)
    if isinstance(outcome, RoutingError):
        logger.warning("Translation request rejected (%s): %s", outcome.kind.value, outcome)
        return _error_response(str(outcome))

    return web.json_response(outcome.to_dict())


async def languages_handler(request: web.Request) -> web.Response:
    dispatcher: TransDispatcher = request.app[DISPATCHER_KEY]
    return web.json_response(dispatcher.get_supported_languages())


async def _close_dispatcher(app: web.Application) -> None:
    await app[DISPATCHER_KEY].close()


def create_app(dispatcher: TransDispatcher) -> web.Application:
    """Build the aiohttp application serving ``dispatcher``.

    The dispatcher's backend clients are closed when the application shuts down.
    """
    app = web.Application(middlewares=[cors_middleware])
    app[DISPATCHER_KEY] = dispatcher
    app.router.add_post("/translate", translate_handler)
    app.router.add_get("/languages", languages_handler)
    app.on_cleanup.append(_close_dispatcher)
    return app
