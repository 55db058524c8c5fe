import re

from app.schemas.intake import PostcodeValidationResult

# SW1A 1AA, M1 1AA, B33 8TH, CR2 6XH, DN55 1PT
UK_POSTCODE_RE = re.compile(r"^[A-Z]{1,2}[0-9][0-9A-Z]?\s?[0-9][A-Z]{2}$", re.IGNORECASE)

_WHITESPACE_RE = re.compile(r"\s+")


def format_postcode(postcode) -> str:
    """Uppercase and put a single space before the inward code (last 3 chars).

    Lossy and tolerant: no grammar check, non-strings become "".
    """
    if not postcode or not isinstance(postcode, str):
        return ""

    cleaned = _WHITESPACE_RE.sub("", postcode).upper()
    if len(cleaned) >= 5:
        return f"{cleaned[:-3]} {cleaned[-3:]}"
    return cleaned


def validate_postcode(postcode) -> PostcodeValidationResult:
    if not postcode or not isinstance(postcode, str):
        return PostcodeValidationResult(valid=False, error="Postcode is required")

    cleaned = _WHITESPACE_RE.sub("", postcode).upper()
    if len(cleaned) < 5 or len(cleaned) > 7:
        return PostcodeValidationResult(valid=False, error="Invalid postcode length")

    formatted = f"{cleaned[:-3]} {cleaned[-3:]}"
    if not UK_POSTCODE_RE.match(formatted):
        return PostcodeValidationResult(valid=False, error="Invalid UK postcode format")

    return PostcodeValidationResult(valid=True, formatted=formatted)
