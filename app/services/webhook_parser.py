import json

from pydantic import ValidationError

from app.exceptions.custom import UnsupportedWebhookTypeError, WebhookPayloadError
from app.schemas.elevenlabs import POST_CALL_TRANSCRIPTION, WebhookEnvelope


def _require_text(data: dict, key: str) -> None:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise WebhookPayloadError(f"Missing {key}")


def parse_webhook_payload(body: str | bytes) -> WebhookEnvelope:
    """Parse a raw post-call webhook body into an immutable envelope.

    Only ``post_call_transcription`` is accepted; ``post_call_audio``,
    ``call_initiation_failure`` and any other kind raise
    ``UnsupportedWebhookTypeError``.
    """
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise WebhookPayloadError(f"Failed to parse payload: {exc}") from exc

    if not isinstance(parsed, dict):
        raise WebhookPayloadError("Payload must be a JSON object")

    kind = parsed.get("type")
    if not kind:
        raise WebhookPayloadError("Missing type field")
    if kind != POST_CALL_TRANSCRIPTION:
        raise UnsupportedWebhookTypeError(str(kind))

    data = parsed.get("data")
    if not isinstance(data, dict):
        raise WebhookPayloadError("Missing data field")
    _require_text(data, "conversation_id")
    _require_text(data, "agent_id")

    try:
        return WebhookEnvelope.model_validate(parsed)
    except ValidationError as exc:
        raise WebhookPayloadError(
            f"Invalid payload: {exc.error_count()} validation error(s)"
        ) from exc
