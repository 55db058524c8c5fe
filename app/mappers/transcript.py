import math
from collections.abc import Iterable

from app.schemas.elevenlabs import TranscriptEntry

_ROLE_LABELS = {"agent": "Agent", "user": "Patient"}


def _format_time(seconds: float | None) -> str:
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        seconds = 0
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def format_transcript(transcript: Iterable[TranscriptEntry] | None) -> str:
    """Render entries as ``[M:SS] Agent: ...`` / ``[M:SS] Patient: ...`` lines."""
    if not transcript:
        return ""

    lines = []
    for entry in transcript:
        role = _ROLE_LABELS.get(entry.role, "Patient")
        lines.append(f"[{_format_time(entry.time_in_call_secs)}] {role}: {entry.message or ''}")
    return "\n".join(lines)
