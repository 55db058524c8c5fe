from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.dependencies import IntakeDep
from app.schemas.responses import ConversationSyncListResponse, SyncResponse

router = APIRouter()


class SyncConversationRequest(BaseModel):
    conversation_id: str | None = None


@router.post("/api/admin/sync-conversation", response_model=SyncResponse)
async def sync_conversation(
    service: IntakeDep,
    request: SyncConversationRequest | None = None,
) -> SyncResponse:
    conversation_id = request.conversation_id if request else None
    if not conversation_id:
        raise HTTPException(status_code=400, detail="conversation_id is required")
    if not service.api_configured:
        raise HTTPException(status_code=503, detail="ElevenLabs not configured")

    submission = await service.sync_conversation(conversation_id)
    return SyncResponse(
        conversation_id=submission.conversation_id,
        status=submission.status,
        patient_data=submission.patient_data,
    )


@router.get("/api/admin/sync-conversation", response_model=ConversationSyncListResponse)
async def list_conversations(
    service: IntakeDep,
    agent_id: str | None = None,
) -> ConversationSyncListResponse:
    if not service.api_configured:
        raise HTTPException(status_code=503, detail="ElevenLabs not configured")

    return await service.list_conversations(agent_id)
