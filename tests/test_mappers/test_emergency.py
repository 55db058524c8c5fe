from app.mappers.emergency import detect_emergency
from app.schemas.elevenlabs import TranscriptEntry


def _agent(message: str) -> TranscriptEntry:
    return TranscriptEntry(role="agent", message=message)


def _caller(message: str | None) -> TranscriptEntry:
    return TranscriptEntry(role="user", message=message)


def test_caller_asserts_emergency():
    transcript = [
        _agent("Is this an emergency?"),
        _caller("Yes, this is an emergency, my dad collapsed"),
    ]
    assert detect_emergency(transcript) is True


def test_case_insensitive():
    assert detect_emergency([_caller("Please CALL 999 now")]) is True


def test_heart_attack_assertion():
    assert detect_emergency([_caller("I think I'm having a heart attack")]) is True


def test_denied_symptoms_are_not_an_emergency():
    transcript = [
        _agent(
            "If you have chest pain, difficulty breathing or severe bleeding, "
            "please hang up and call 999. Is this an emergency?"
        ),
        _caller("No chest pain, I'm fine"),
        _caller("No difficulty breathing either"),
    ]
    assert detect_emergency(transcript) is False


def test_agent_script_never_matches():
    transcript = [_agent("If this is an emergency, call 999 or call an ambulance.")]
    assert detect_emergency(transcript) is False


def test_empty_and_missing_messages():
    assert detect_emergency(None) is False
    assert detect_emergency([]) is False
    assert detect_emergency([_caller(None), _caller("")]) is False


def test_turn_without_role_is_not_scanned():
    entry = TranscriptEntry.model_validate({"role": None, "message": "Is this an emergency? Call 999 if so."})
    assert detect_emergency([entry]) is False
