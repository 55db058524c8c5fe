import logging
import re

from app.mappers.coercion import coerce_string
from app.schemas.intake import RequestType

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r"[\s-]")

_KNOWN_TYPES = {t.value for t in RequestType}

# Answers to the emergency screening question that ElevenLabs sometimes files
# under fit_note_illness.
_NEGATIVE_CONFIRMATIONS = {
    "no",
    "nope",
    "fine",
    "i'm fine",
    "im fine",
    "i'm good",
    "im good",
    "not an emergency",
}


def parse_request_types(value: str | None) -> list[RequestType]:
    """Parse "fit_note,repeat_prescription" into known types, first-seen order, no duplicates."""
    if not value:
        return []

    types: list[RequestType] = []
    for token in value.lower().split(","):
        normalized = _SEPARATOR_RE.sub("_", token.strip())
        if normalized not in _KNOWN_TYPES:
            if normalized:
                logger.info("Ignoring unknown request type %r", normalized)
            continue
        request_type = RequestType(normalized)
        if request_type not in types:
            types.append(request_type)
    return types


def _is_negative_confirmation(value: str) -> bool:
    return value.lower().strip() in _NEGATIVE_CONFIRMATIONS


def detect_request_types_from_data(collected: dict | None) -> list[RequestType]:
    """Infer the three common request types from the fields that were filled in.

    Only health_problem, repeat_prescription and fit_note are inferred. For the
    other types ElevenLabs fills their fields with unrelated conversation text
    even when they were not requested, so the declared request_type is trusted
    exclusively for them.
    """
    if not collected:
        return []

    detected: list[RequestType] = []

    health_desc = coerce_string(collected.get("health_problem_description"))
    health_concerns = coerce_string(collected.get("health_problem_concerns"))
    if health_desc or health_concerns:
        detected.append(RequestType.health_problem)

    if coerce_string(collected.get("medications_requested")):
        detected.append(RequestType.repeat_prescription)

    fit_illness = coerce_string(collected.get("fit_note_illness"))
    if fit_illness and not _is_negative_confirmation(fit_illness):
        # ElevenLabs sometimes copies the health problem answer into fit_note_illness
        differs_from_health = (
            not health_desc
            or fit_illness.lower().strip() != health_desc.lower().strip()
        )
        has_fit_note_details = (
            coerce_string(collected.get("fit_note_dates_and_details")) is not None
            or coerce_string(collected.get("fit_note_previous")) is not None
        )
        if differs_from_health or has_fit_note_details:
            detected.append(RequestType.fit_note)

    return detected


def reconcile_request_types(declared: str | None, collected: dict | None) -> list[RequestType]:
    """Declared types first, then any inferred types not already present."""
    types = parse_request_types(declared)
    for detected in detect_request_types_from_data(collected):
        if detected not in types:
            logger.info("Request type %s inferred from collected data", detected)
            types.append(detected)
    return types
