import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.config import Settings
from app.exceptions.custom import (
    ElevenLabsError,
    RateLimitError,
    WebhookPayloadError,
    WebhookSignatureError,
)
from app.exceptions.handlers import (
    elevenlabs_error_handler,
    rate_limit_error_handler,
    webhook_payload_error_handler,
    webhook_signature_error_handler,
)
from app.routers.sync import router as sync_router
from app.routers.tools import router as tools_router
from app.routers.webhooks import router as webhooks_router
from app.services.elevenlabs import ElevenLabsService
from app.services.intake import IntakeService
from app.store import SubmissionStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=30.0) as client:
        # Manual resync is optional, like the webhook secret
        elevenlabs: ElevenLabsService | None = None
        if settings.elevenlabs_api_key:
            elevenlabs = ElevenLabsService(client, settings.elevenlabs_api_key)

        app.state.service_name = settings.service_name
        app.state.intake_service = IntakeService(
            SubmissionStore(),
            settings.elevenlabs_webhook_secret,
            elevenlabs=elevenlabs,
            tolerance_secs=settings.signature_tolerance_secs,
        )

        yield


app = FastAPI(title="Patient Intake Webhook", lifespan=lifespan)

app.add_exception_handler(WebhookSignatureError, webhook_signature_error_handler)
app.add_exception_handler(WebhookPayloadError, webhook_payload_error_handler)
app.add_exception_handler(ElevenLabsError, elevenlabs_error_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)

app.include_router(webhooks_router)
app.include_router(sync_router)
app.include_router(tools_router)
