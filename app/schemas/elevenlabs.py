import math

from pydantic import BaseModel, field_validator

POST_CALL_TRANSCRIPTION = "post_call_transcription"

UNKNOWN_ROLE = "unknown"


def _finite_number(value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, int | float) and math.isfinite(value):
        return float(value)
    return None


def _whole_seconds(value) -> int | None:
    number = _finite_number(value)
    return math.floor(number) if number is not None else None


def _text_or_none(value) -> str | None:
    return value if isinstance(value, str) else None


class TranscriptEntry(BaseModel):
    model_config = {"frozen": True}

    role: str = UNKNOWN_ROLE  # "agent" | "user"
    message: str | None = ""
    time_in_call_secs: float | None = 0

    @field_validator("role", mode="before")
    @classmethod
    def _role_or_unknown(cls, value):
        return value if isinstance(value, str) and value else UNKNOWN_ROLE

    @field_validator("message", mode="before")
    @classmethod
    def _message_text(cls, value):
        return _text_or_none(value)

    @field_validator("time_in_call_secs", mode="before")
    @classmethod
    def _time_number(cls, value):
        return _finite_number(value)


class CallMetadata(BaseModel):
    model_config = {"frozen": True, "extra": "allow"}

    start_time_unix_secs: int | None = None
    end_time_unix_secs: int | None = None
    call_duration_secs: int | None = None
    cost: float | None = None

    @field_validator("start_time_unix_secs", "end_time_unix_secs", "call_duration_secs", mode="before")
    @classmethod
    def _floor_seconds(cls, value):
        return _whole_seconds(value)

    @field_validator("cost", mode="before")
    @classmethod
    def _cost_number(cls, value):
        return _finite_number(value)


class ConversationAnalysis(BaseModel):
    model_config = {"frozen": True, "extra": "allow"}

    call_successful: str | None = None
    transcript_summary: str | None = None
    data_collection_results: dict = {}
    evaluation_criteria_results: dict = {}

    @field_validator("call_successful", "transcript_summary", mode="before")
    @classmethod
    def _text(cls, value):
        return _text_or_none(value)

    @field_validator("data_collection_results", "evaluation_criteria_results", mode="before")
    @classmethod
    def _dict_or_empty(cls, value):
        return value if isinstance(value, dict) else {}


def _transcript_items(value) -> list:
    # Items that are not objects carry no role or message to recover
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict | TranscriptEntry)]


class WebhookData(BaseModel):
    model_config = {"frozen": True, "extra": "allow"}

    conversation_id: str
    agent_id: str
    status: str = "done"  # done | failed
    transcript: list[TranscriptEntry] = []
    metadata: CallMetadata = CallMetadata()
    analysis: ConversationAnalysis | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_or_done(cls, value):
        return value if isinstance(value, str) and value else "done"

    @field_validator("transcript", mode="before")
    @classmethod
    def _transcript_or_empty(cls, value):
        return _transcript_items(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_or_empty(cls, value):
        return value if isinstance(value, dict | CallMetadata) else {}

    @field_validator("analysis", mode="before")
    @classmethod
    def _analysis_or_none(cls, value):
        return value if isinstance(value, dict | ConversationAnalysis) else None


class WebhookEnvelope(BaseModel):
    model_config = {"frozen": True}

    type: str
    event_timestamp: int | None = None
    data: WebhookData

    @field_validator("event_timestamp", mode="before")
    @classmethod
    def _timestamp_seconds(cls, value):
        return _whole_seconds(value)


class ConversationResponse(BaseModel):
    conversation_id: str = ""
    agent_id: str | None = None
    status: str = ""  # initiated | in-progress | processing | done | failed
    transcript: list[TranscriptEntry] = []
    analysis: ConversationAnalysis | None = None
    metadata: CallMetadata | None = None

    @field_validator("transcript", mode="before")
    @classmethod
    def _transcript_or_empty(cls, value):
        return _transcript_items(value)

    @field_validator("analysis", mode="before")
    @classmethod
    def _analysis_or_none(cls, value):
        return value if isinstance(value, dict | ConversationAnalysis) else None

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_or_none(cls, value):
        return value if isinstance(value, dict | CallMetadata) else None


class ConversationSummary(BaseModel):
    model_config = {"extra": "allow"}

    conversation_id: str
    agent_id: str | None = None
    status: str | None = None
    start_time_unix_secs: int | None = None
    call_duration_secs: int | None = None

    @field_validator("start_time_unix_secs", "call_duration_secs", mode="before")
    @classmethod
    def _floor_seconds(cls, value):
        return _whole_seconds(value)


class ConversationListResponse(BaseModel):
    conversations: list[ConversationSummary] = []
    has_more: bool = False
    next_cursor: str | None = None
