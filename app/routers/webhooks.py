import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request

from app.dependencies import IntakeDep, ServiceNameDep
from app.schemas.responses import HealthResponse, WebhookAckResponse
from app.services.signature import SIGNATURE_HEADER

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/webhooks/elevenlabs", response_model=WebhookAckResponse)
async def elevenlabs_webhook(request: Request, service: IntakeDep) -> WebhookAckResponse:
    if not service.webhook_configured:
        logger.error("Missing ELEVENLABS_WEBHOOK_SECRET")
        raise HTTPException(status_code=500, detail="Server configuration error")

    # Signature covers the exact bytes received, so read the body unparsed
    body = await request.body()
    signature = request.headers.get(SIGNATURE_HEADER)

    submission = service.process_webhook(body, signature)
    return WebhookAckResponse(
        conversation_id=submission.conversation_id,
        status=submission.status,
    )


@router.get("/api/webhooks/elevenlabs", response_model=HealthResponse)
async def elevenlabs_webhook_health(service_name: ServiceNameDep) -> HealthResponse:
    return HealthResponse(service=service_name, timestamp=datetime.now(timezone.utc))
