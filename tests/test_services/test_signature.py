import pytest

from app.services.signature import (
    EXPIRED,
    MALFORMED_HEADER,
    MISSING_HEADER,
    SIGNATURE_MISMATCH,
    verify_signature,
)
from factories import sign

SECRET = "wsec_test"
BODY = '{"type":"post_call_transcription","data":{"conversation_id":"c1","agent_id":"a1"}}'
NOW = 1_700_000_000


def test_valid_signature():
    header = sign(BODY, SECRET, timestamp=NOW)
    result = verify_signature(header, BODY, SECRET, now=NOW)

    assert result.valid is True
    assert result.reason is None


def test_valid_signature_bytes_body():
    header = sign(BODY, SECRET, timestamp=NOW)
    assert verify_signature(header, BODY.encode(), SECRET, now=NOW).valid is True


def test_valid_signature_uppercase_hex():
    ts, digest = sign(BODY, SECRET, timestamp=NOW).split(",")
    header = f"{ts},{digest.upper().replace('V0=', 'v0=')}"
    assert verify_signature(header, BODY, SECRET, now=NOW).valid is True


def test_defaults_to_current_time():
    header = sign(BODY, SECRET)
    assert verify_signature(header, BODY, SECRET).valid is True


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(header):
    result = verify_signature(header, BODY, SECRET, now=NOW)
    assert result.valid is False
    assert result.reason == MISSING_HEADER


@pytest.mark.parametrize(
    "header",
    [
        f"t={NOW}",
        "v0=abcdef",
        "garbage",
        "t=,v0=abc",
        "t=yesterday,v0=abcdef",
    ],
)
def test_malformed_header(header):
    result = verify_signature(header, BODY, SECRET, now=NOW)
    assert result.valid is False
    assert result.reason == MALFORMED_HEADER


def test_expired_timestamp():
    header = sign(BODY, SECRET, timestamp=NOW - 1801)
    result = verify_signature(header, BODY, SECRET, now=NOW)

    assert result.valid is False
    assert result.reason == EXPIRED


def test_future_timestamp_expired():
    header = sign(BODY, SECRET, timestamp=NOW + 1801)
    assert verify_signature(header, BODY, SECRET, now=NOW).reason == EXPIRED


def test_timestamp_at_tolerance_edge_is_fresh():
    header = sign(BODY, SECRET, timestamp=NOW - 1800)
    assert verify_signature(header, BODY, SECRET, now=NOW).valid is True


def test_custom_tolerance():
    header = sign(BODY, SECRET, timestamp=NOW - 120)
    assert verify_signature(header, BODY, SECRET, now=NOW, tolerance_secs=60).reason == EXPIRED


def _flip_bit(text: str, index: int) -> str:
    return text[:index] + chr(ord(text[index]) ^ 1) + text[index + 1:]


@pytest.mark.parametrize("index", [0, 10, len(BODY) - 1])
def test_body_bit_flip_rejected(index):
    header = sign(BODY, SECRET, timestamp=NOW)
    result = verify_signature(header, _flip_bit(BODY, index), SECRET, now=NOW)

    assert result.valid is False
    assert result.reason == SIGNATURE_MISMATCH


@pytest.mark.parametrize("index", [0, len(SECRET) - 1])
def test_secret_bit_flip_rejected(index):
    header = sign(BODY, SECRET, timestamp=NOW)
    result = verify_signature(header, BODY, _flip_bit(SECRET, index), now=NOW)

    assert result.reason == SIGNATURE_MISMATCH


def test_reserialized_body_rejected():
    header = sign(BODY, SECRET, timestamp=NOW)
    reformatted = BODY.replace(",", ", ")
    assert verify_signature(header, reformatted, SECRET, now=NOW).reason == SIGNATURE_MISMATCH


def test_truncated_hash_rejected():
    header = sign(BODY, SECRET, timestamp=NOW)[:-4]
    assert verify_signature(header, BODY, SECRET, now=NOW).reason == SIGNATURE_MISMATCH


def test_non_hex_hash_rejected():
    header = f"t={NOW},v0=not-hex-at-all-é"
    assert verify_signature(header, BODY, SECRET, now=NOW).reason == SIGNATURE_MISMATCH


def test_timestamp_is_part_of_signed_payload():
    header = sign(BODY, SECRET, timestamp=NOW)
    digest = header.split("v0=")[1]
    tampered = f"t={NOW + 1},v0={digest}"
    assert verify_signature(tampered, BODY, SECRET, now=NOW).reason == SIGNATURE_MISMATCH
