"""Normalize the loosely-typed values ElevenLabs returns in data collection results.

The same logical field can arrive as a bare string, the literal text "null",
a wrapper object such as ``{"value": "True", "rationale": "..."}`` or a native
list. Every function here is total: any input shape yields a defined output.
"""

import re

from app.schemas.intake import Medication

_WRAPPER_KEYS = ("value", "result", "data")

_TRUTHY = {"true", "yes", "1"}

# Trailing "<number> <unit>" after the medication name. Unit is optional so a
# bare trailing number ("Codeine 50") is still read as strength.
_MEDICATION_RE = re.compile(
    r"^(.+?)\s+(\d+(?:\.\d+)?\s*(?:mg|ml|mcg|g|iu|%|units?)?)\s*$",
    re.IGNORECASE,
)


def _unwrap(obj: dict):
    for key in _WRAPPER_KEYS:
        if obj.get(key) is not None:
            return obj[key]
    return None


def coerce_string(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, dict):
        inner = _unwrap(value)
        return coerce_string(inner) if inner is not None else None
    if isinstance(value, str):
        trimmed = value.strip()
        if trimmed == "" or trimmed.lower() == "null":
            return None
        return trimmed
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list | tuple):
        items = [s for s in (coerce_string(v) for v in value) if s]
        return ", ".join(items) if items else None
    return str(value)


def coerce_boolean(value) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, dict):
        return coerce_boolean(_unwrap(value))
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    if isinstance(value, int | float):
        return value != 0
    return False


def coerce_array(value) -> list | None:
    if value is None:
        return None
    if isinstance(value, list):
        return value
    return None


def _split_medication(item: str) -> Medication:
    match = _MEDICATION_RE.match(item)
    if match:
        return Medication(
            name=match.group(1).strip(),
            strength=match.group(2).strip().upper(),
        )
    return Medication(name=item, strength="")


def parse_medications_list(value) -> list[Medication]:
    """Split a medications answer into ``Medication`` entries.

    Accepts "Adderall XR 25 MG, Codeine 50 MG", wrapper objects around such a
    string, or a list of ``{"name", "strength"}`` objects / strings.

    This is a best-effort heuristic, not a medical parser: names containing
    commas are split apart and strengths in unusual notations ("1/2 tablet",
    "5mg/5ml") end up in the name with an empty strength. Staff review the
    result before acting on it.
    """
    items = coerce_array(value)
    if items is not None:
        medications: list[Medication] = []
        for item in items:
            if isinstance(item, dict) and "name" in item:
                name = coerce_string(item.get("name"))
                if name:
                    strength = coerce_string(item.get("strength")) or ""
                    medications.append(Medication(name=name, strength=strength.upper()))
                continue
            medications.extend(parse_medications_list(item))
        return medications

    text = coerce_string(value)
    if not text:
        return []

    entries = [part.strip() for part in text.split(",")]
    return [_split_medication(entry) for entry in entries if entry]
