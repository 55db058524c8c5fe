from collections.abc import Iterable

from app.schemas.elevenlabs import TranscriptEntry

CALLER_ROLE = "user"

# Only phrases where the caller asserts an emergency. Symptom names such as
# "chest pain" or "difficulty breathing" must not be listed: callers deny them
# during screening ("no chest pain, I'm fine") and substring matching cannot
# tell assertion from negation.
EMERGENCY_PHRASES = (
    # direct statements
    "this is an emergency",
    "it is an emergency",
    "is an emergency",
    "i have an emergency",
    "having an emergency",
    "yes emergency",
    "emergency help",
    # asking for immediate help
    "need ambulance",
    "call 999",
    "call an ambulance",
    "need an ambulance",
    # life-threatening
    "i am dying",
    "i'm dying",
    "im dying",
    "going to die",
    "about to die",
    "having a heart attack",
    "having a stroke",
)


def detect_emergency(transcript: Iterable[TranscriptEntry] | None) -> bool:
    """Return True if any caller turn asserts an ongoing emergency.

    Agent turns are skipped so the agent's own screening script never matches.
    """
    if not transcript:
        return False

    for entry in transcript:
        if entry.role != CALLER_ROLE or not entry.message:
            continue
        message = entry.message.lower()
        if any(phrase in message for phrase in EMERGENCY_PHRASES):
            return True
    return False
