from app.mappers.request_types import (
    detect_request_types_from_data,
    parse_request_types,
    reconcile_request_types,
)
from app.schemas.intake import RequestType
from factories import wrapped


def test_parse_deduplicates_preserving_order():
    assert parse_request_types("fit_note,fit_note,health_problem") == [
        RequestType.fit_note,
        RequestType.health_problem,
    ]


def test_parse_normalizes_tokens():
    assert parse_request_types(" Repeat Prescription , fit-note,DOCTORS_LETTER") == [
        RequestType.repeat_prescription,
        RequestType.fit_note,
        RequestType.doctors_letter,
    ]


def test_parse_drops_unknown_types():
    assert parse_request_types("appointment,health_problem,,") == [RequestType.health_problem]


def test_parse_empty():
    assert parse_request_types(None) == []
    assert parse_request_types("") == []


def test_detect_health_problem_from_description_or_concerns():
    assert detect_request_types_from_data({"health_problem_description": wrapped("Headache")}) == [
        RequestType.health_problem
    ]
    assert detect_request_types_from_data({"health_problem_concerns": "It might be serious"}) == [
        RequestType.health_problem
    ]


def test_detect_repeat_prescription():
    assert detect_request_types_from_data({"medications_requested": wrapped("Metformin 500mg")}) == [
        RequestType.repeat_prescription
    ]


def test_detect_ignores_null_strings():
    collected = {
        "health_problem_description": wrapped("null"),
        "medications_requested": "null",
        "fit_note_illness": {"value": None},
    }
    assert detect_request_types_from_data(collected) == []


def test_detect_fit_note():
    assert detect_request_types_from_data({"fit_note_illness": wrapped("Back injury")}) == [
        RequestType.fit_note
    ]


def test_detect_fit_note_ignores_screening_answer():
    for answer in ("No", "i'm fine", " Nope ", "not an emergency"):
        assert detect_request_types_from_data({"fit_note_illness": wrapped(answer)}) == []


def test_detect_fit_note_duplicate_of_health_problem():
    collected = {
        "health_problem_description": wrapped("Migraine for two weeks"),
        "fit_note_illness": wrapped("migraine for two weeks "),
    }
    assert detect_request_types_from_data(collected) == [RequestType.health_problem]


def test_detect_fit_note_duplicate_with_supporting_fields():
    collected = {
        "health_problem_description": wrapped("Migraine"),
        "fit_note_illness": wrapped("Migraine"),
        "fit_note_dates_and_details": wrapped("Off work from Monday"),
    }
    assert detect_request_types_from_data(collected) == [
        RequestType.health_problem,
        RequestType.fit_note,
    ]


def test_detect_fit_note_duplicate_with_previous_note_answer():
    collected = {
        "health_problem_description": "Migraine",
        "fit_note_illness": "Migraine",
        "fit_note_previous": wrapped("False"),
    }
    assert RequestType.fit_note in detect_request_types_from_data(collected)


def test_detect_never_infers_rare_types():
    collected = {
        "routine_care_details": wrapped("Call me in the morning"),
        "test_details": wrapped("Headache for a week"),
        "referral_details": wrapped("Something"),
        "letter_details": wrapped("Mornings are best"),
        "other_admin_description": wrapped("Mornings are best"),
    }
    assert detect_request_types_from_data(collected) == []


def test_detect_empty_bag():
    assert detect_request_types_from_data(None) == []
    assert detect_request_types_from_data({}) == []


def test_reconcile_falls_back_when_declared_missing():
    collected = {"health_problem_description": wrapped("Persistent cough")}
    assert reconcile_request_types(None, collected) == [RequestType.health_problem]


def test_reconcile_declared_first_then_inferred():
    collected = {
        "medications_requested": wrapped("Metformin 500mg"),
        "health_problem_description": wrapped("Rash"),
    }
    assert reconcile_request_types("repeat_prescription,other_admin", collected) == [
        RequestType.repeat_prescription,
        RequestType.other_admin,
        RequestType.health_problem,
    ]
