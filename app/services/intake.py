import logging
import time
from datetime import datetime

from app.exceptions.custom import ElevenLabsError, WebhookSignatureError
from app.mappers.submission_builder import build_submission
from app.schemas.elevenlabs import CallMetadata, ConversationResponse, WebhookData
from app.schemas.responses import (
    ConversationSyncListResponse,
    ConversationSyncState,
    StoredSubmission,
)
from app.services.elevenlabs import ElevenLabsService
from app.services.signature import DEFAULT_TOLERANCE_SECS, verify_signature
from app.services.webhook_parser import parse_webhook_payload
from app.store import SubmissionStore

logger = logging.getLogger(__name__)


def _conversation_to_webhook_data(conversation: ConversationResponse, conversation_id: str) -> WebhookData:
    if not conversation.agent_id:
        raise ElevenLabsError(f"Conversation {conversation_id} has no agent_id")

    return WebhookData(
        conversation_id=conversation.conversation_id or conversation_id,
        agent_id=conversation.agent_id,
        status=conversation.status or "done",
        transcript=conversation.transcript,
        metadata=conversation.metadata or CallMetadata(),
        analysis=conversation.analysis,
    )


class IntakeService:
    def __init__(
        self,
        store: SubmissionStore,
        webhook_secret: str,
        elevenlabs: ElevenLabsService | None = None,
        tolerance_secs: int = DEFAULT_TOLERANCE_SECS,
    ):
        self._store = store
        self._webhook_secret = webhook_secret
        self._elevenlabs = elevenlabs
        self._tolerance_secs = tolerance_secs

    @property
    def webhook_configured(self) -> bool:
        return bool(self._webhook_secret)

    @property
    def api_configured(self) -> bool:
        return self._elevenlabs is not None

    def process_webhook(
        self,
        body: bytes,
        signature: str | None,
        now: datetime | None = None,
    ) -> StoredSubmission:
        """Verify, parse and store one post-call webhook delivery.

        Signature failures stop processing before the body is parsed.
        """
        started = time.monotonic()

        result = verify_signature(
            signature,
            body,
            self._webhook_secret,
            now=now.timestamp() if now else None,
            tolerance_secs=self._tolerance_secs,
        )
        if not result.valid:
            raise WebhookSignatureError(result.reason or "invalid")

        envelope = parse_webhook_payload(body)
        data = envelope.data
        logger.info("Processing conversation: %s", data.conversation_id)

        self._store.log_event(
            data.conversation_id,
            "webhook_received",
            {"type": envelope.type, "status": data.status},
        )

        submission = self._save(data, now)

        self._store.log_event(
            data.conversation_id,
            "completed",
            {
                "status": submission.status,
                "processing_time_ms": int((time.monotonic() - started) * 1000),
            },
        )
        logger.info(
            "Successfully processed %s (%s, request_type=%s)",
            data.conversation_id,
            submission.status,
            submission.request_type,
        )
        return submission

    async def sync_conversation(self, conversation_id: str) -> StoredSubmission:
        """Fetch a conversation from the ElevenLabs API and run it through extraction.

        Used when a webhook delivery was missed; ElevenLabs does not retry them.
        """
        if self._elevenlabs is None:
            raise ElevenLabsError("ElevenLabs API key not configured")

        conversation = await self._elevenlabs.get_conversation(conversation_id)
        data = _conversation_to_webhook_data(conversation, conversation_id)

        self._store.log_event(data.conversation_id, "manual_sync", {"source": "api_fetch"})
        submission = self._save(data)
        self._store.log_event(
            data.conversation_id,
            "sync_completed",
            {
                "status": submission.status,
                "patient_name": f"{submission.patient_data.first_name} {submission.patient_data.last_name}".strip(),
            },
        )
        logger.info("Successfully synced %s (%s)", data.conversation_id, submission.status)
        return submission

    async def list_conversations(self, agent_id: str | None = None) -> ConversationSyncListResponse:
        if self._elevenlabs is None:
            raise ElevenLabsError("ElevenLabs API key not configured")

        listing = await self._elevenlabs.list_conversations(agent_id)
        stored = self._store.conversation_ids()

        conversations = [
            ConversationSyncState(
                conversation_id=conv.conversation_id,
                agent_id=conv.agent_id,
                status=conv.status,
                start_time_unix_secs=conv.start_time_unix_secs,
                synced=conv.conversation_id in stored,
            )
            for conv in listing.conversations
        ]
        return ConversationSyncListResponse(
            conversations=conversations,
            total=len(conversations),
            missing=sum(1 for c in conversations if not c.synced),
        )

    def _save(self, data: WebhookData, now: datetime | None = None) -> StoredSubmission:
        record = build_submission(data, now=now)
        try:
            return self._store.upsert(record)
        except Exception as exc:
            logger.exception("Failed to store submission %s", data.conversation_id)
            self._store.log_event(data.conversation_id, "error", {"error": str(exc)})
            raise
