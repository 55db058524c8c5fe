import logging
from collections.abc import Iterable

from app.mappers.coercion import coerce_boolean, coerce_string
from app.mappers.emergency import detect_emergency
from app.mappers.postcode import format_postcode
from app.schemas.elevenlabs import TranscriptEntry
from app.schemas.intake import PatientRecord, PreferredContact

logger = logging.getLogger(__name__)


def parse_preferred_contact(value) -> PreferredContact:
    text = coerce_string(value)
    if not text:
        return "phone"

    normalized = text.lower()
    if normalized in ("text", "sms"):
        return "text"
    if normalized in ("both", "either"):
        return "both"
    return "phone"


def extract_patient_data(
    collected: dict | None,
    transcript: Iterable[TranscriptEntry] | None = None,
) -> PatientRecord:
    """Build the patient record from the collected-field bag.

    A caller asserting an emergency in the transcript forces
    ``emergency_confirmed`` to False. The override only ever moves towards
    "needs review".
    """
    data = collected or {}

    emergency_confirmed = coerce_boolean(data.get("emergency_confirmed"))
    if emergency_confirmed and detect_emergency(transcript):
        logger.warning("Caller asserted an emergency; overriding emergency_confirmed")
        emergency_confirmed = False

    return PatientRecord(
        first_name=coerce_string(data.get("patient_first_name")) or "",
        last_name=coerce_string(data.get("patient_last_name")) or "",
        postcode=format_postcode(coerce_string(data.get("patient_postcode")) or ""),
        phone_number=coerce_string(data.get("patient_phone")) or "",
        preferred_contact=parse_preferred_contact(data.get("preferred_contact")),
        emergency_confirmed=emergency_confirmed,
    )
