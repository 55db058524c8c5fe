"""ElevenLabs webhook signature verification.

Header format: ``t=<unix seconds>,v0=<hex HMAC-SHA256>``, where the HMAC is
computed with the webhook secret over ``"{t}.{raw body}"``.
"""

import hashlib
import hmac
import time

from pydantic import BaseModel

SIGNATURE_HEADER = "ElevenLabs-Signature"

DEFAULT_TOLERANCE_SECS = 30 * 60

MISSING_HEADER = "missing header"
MALFORMED_HEADER = "malformed header"
EXPIRED = "expired"
SIGNATURE_MISMATCH = "signature mismatch"


class SignatureResult(BaseModel):
    valid: bool
    reason: str | None = None


def _parse_header(signature: str) -> tuple[str, int, str] | None:
    timestamp: str | None = None
    provided: str | None = None
    for part in signature.split(","):
        part = part.strip()
        if part.startswith("t="):
            timestamp = part[2:]
        elif part.startswith("v0="):
            provided = part[3:]

    if not timestamp or not provided:
        return None
    try:
        return timestamp, int(timestamp), provided
    except ValueError:
        return None


def verify_signature(
    signature: str | None,
    body: str | bytes,
    secret: str,
    now: float | None = None,
    tolerance_secs: int = DEFAULT_TOLERANCE_SECS,
) -> SignatureResult:
    """Check freshness and authenticity of a webhook delivery.

    ``body`` must be the raw request body exactly as received.
    """
    if not signature:
        return SignatureResult(valid=False, reason=MISSING_HEADER)

    parsed = _parse_header(signature)
    if parsed is None:
        return SignatureResult(valid=False, reason=MALFORMED_HEADER)
    raw_timestamp, timestamp, provided = parsed

    current = int(now if now is not None else time.time())
    if abs(current - timestamp) > tolerance_secs:
        return SignatureResult(valid=False, reason=EXPIRED)

    raw = body.encode("utf-8") if isinstance(body, str) else body
    expected = hmac.new(
        secret.encode("utf-8"),
        f"{raw_timestamp}.".encode() + raw,
        hashlib.sha256,
    ).hexdigest()

    if not hmac.compare_digest(provided.lower().encode("utf-8"), expected.encode("utf-8")):
        return SignatureResult(valid=False, reason=SIGNATURE_MISMATCH)

    return SignatureResult(valid=True)
