from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from app.schemas.intake import PatientRecord, SubmissionStatus, SubmissionWriteRecord


class WebhookAckResponse(BaseModel):
    success: bool = True
    conversation_id: str
    status: SubmissionStatus


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    webhook: str = "elevenlabs"
    timestamp: datetime


class SyncResponse(BaseModel):
    success: bool = True
    conversation_id: str
    status: SubmissionStatus
    patient_data: PatientRecord


class ConversationSyncState(BaseModel):
    conversation_id: str
    agent_id: str | None = None
    status: str | None = None
    start_time_unix_secs: int | None = None
    synced: bool


class ConversationSyncListResponse(BaseModel):
    conversations: list[ConversationSyncState]
    total: int
    missing: int


class StoredSubmission(SubmissionWriteRecord):
    id: str
    created_at: datetime
    updated_at: datetime


class CallLogEntry(BaseModel):
    id: str
    conversation_id: str
    event_type: str  # webhook_received | completed | error | manual_sync | sync_completed
    payload: dict | None = None
    created_at: datetime
