import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import ElevenLabsError, RateLimitError, WebhookPayloadError, WebhookSignatureError

logger = logging.getLogger(__name__)


async def webhook_signature_error_handler(
    _request: Request, exc: WebhookSignatureError
) -> JSONResponse:
    logger.error("Webhook signature validation failed: %s", exc.reason)
    return JSONResponse(
        status_code=401,
        content={"detail": "Invalid signature"},
    )


async def webhook_payload_error_handler(
    _request: Request, exc: WebhookPayloadError
) -> JSONResponse:
    logger.error("Webhook payload parsing failed: %s", exc.message)
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message},
    )


async def elevenlabs_error_handler(_request: Request, exc: ElevenLabsError) -> JSONResponse:
    logger.error("ElevenLabs error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=502,
        content={"detail": f"ElevenLabs error: {exc.message}"},
    )


async def rate_limit_error_handler(_request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Rate limit hit for %s", exc.service)
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded for {exc.service}"},
    )
