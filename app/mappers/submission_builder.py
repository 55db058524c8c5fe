from datetime import datetime, timezone

from app.mappers.patient_mapper import extract_patient_data
from app.mappers.request_mapper import extract_request_data
from app.mappers.transcript import format_transcript
from app.schemas.elevenlabs import ConversationAnalysis, WebhookData
from app.schemas.intake import SubmissionStatus, SubmissionWriteRecord


def determine_status(
    call_status: str | None,
    analysis: ConversationAnalysis | None = None,
) -> SubmissionStatus:
    """Every new call is held for staff review; only failed calls are marked failed.

    ``pending`` and ``completed`` are only ever set later by staff.
    """
    if call_status == "failed":
        return SubmissionStatus.failed
    return SubmissionStatus.requires_review


def _call_timestamp(start_time_unix_secs: int | None, now: datetime | None) -> str:
    if start_time_unix_secs:
        try:
            return datetime.fromtimestamp(start_time_unix_secs, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            pass
    return (now or datetime.now(timezone.utc)).isoformat()


def build_submission(data: WebhookData, now: datetime | None = None) -> SubmissionWriteRecord:
    """Turn a parsed post-call payload into the record stored for the call.

    Deterministic for a given payload (and ``now`` when the call has no start
    time), so re-deliveries upsert to the same row.
    """
    collected = data.analysis.data_collection_results if data.analysis else {}

    patient = extract_patient_data(collected, data.transcript)
    request_types, request_data = extract_request_data(collected)

    return SubmissionWriteRecord(
        conversation_id=data.conversation_id,
        agent_id=data.agent_id,
        call_timestamp=_call_timestamp(data.metadata.start_time_unix_secs, now),
        call_duration_secs=data.metadata.call_duration_secs,
        caller_phone=patient.phone_number or None,
        status=determine_status(data.status, data.analysis),
        patient_data=patient,
        request_type=",".join(request_types) if request_types else None,
        request_data=request_data,
        transcript=format_transcript(data.transcript),
        analysis=data.analysis.model_dump() if data.analysis else None,
    )
