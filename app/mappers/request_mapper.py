from typing import assert_never

from app.mappers.coercion import coerce_boolean, coerce_string, parse_medications_list
from app.mappers.request_types import reconcile_request_types
from app.schemas.intake import (
    DoctorsLetterRequest,
    FitNoteRequest,
    HealthProblemRequest,
    OtherAdminRequest,
    ReferralFollowupRequest,
    RepeatPrescriptionRequest,
    RequestRecord,
    RequestType,
    RoutineCareRequest,
    TestResultsRequest,
)


def _text(collected: dict, key: str) -> str:
    return coerce_string(collected.get(key)) or ""


def map_health_problem(collected: dict) -> HealthProblemRequest:
    return HealthProblemRequest(
        description=_text(collected, "health_problem_description"),
        duration=_text(collected, "health_problem_duration"),
        progression=_text(collected, "health_problem_progression"),
        treatments_tried=_text(collected, "health_problem_tried"),
        concerns=_text(collected, "health_problem_concerns"),
        help_requested=_text(collected, "health_problem_help_wanted"),
        best_contact_times=_text(collected, "best_contact_times"),
    )


def map_repeat_prescription(collected: dict) -> RepeatPrescriptionRequest:
    return RepeatPrescriptionRequest(
        medications=parse_medications_list(collected.get("medications_requested")),
        additional_notes=_text(collected, "prescription_notes"),
    )


def map_fit_note(collected: dict) -> FitNoteRequest:
    # Dates are not collected separately by the agent; staff fill them in.
    return FitNoteRequest(
        had_previous_note=coerce_boolean(collected.get("fit_note_previous")),
        illness_description=_text(collected, "fit_note_illness"),
        employer_accommodations=_text(collected, "fit_note_dates_and_details"),
    )


def map_routine_care(collected: dict) -> RoutineCareRequest:
    return RoutineCareRequest(additional_details=_text(collected, "routine_care_details"))


def map_test_results(collected: dict) -> TestResultsRequest:
    return TestResultsRequest(test_type=_text(collected, "test_details"))


def map_referral_followup(collected: dict) -> ReferralFollowupRequest:
    return ReferralFollowupRequest(referral_for=_text(collected, "referral_details"))


def map_doctors_letter(collected: dict) -> DoctorsLetterRequest:
    return DoctorsLetterRequest(letter_purpose=_text(collected, "letter_details"))


def map_other_admin(collected: dict) -> OtherAdminRequest:
    return OtherAdminRequest(description=_text(collected, "other_admin_description"))


def map_request(request_type: RequestType, collected: dict) -> RequestRecord:
    match request_type:
        case RequestType.health_problem:
            return map_health_problem(collected)
        case RequestType.repeat_prescription:
            return map_repeat_prescription(collected)
        case RequestType.fit_note:
            return map_fit_note(collected)
        case RequestType.routine_care:
            return map_routine_care(collected)
        case RequestType.test_results:
            return map_test_results(collected)
        case RequestType.referral_followup:
            return map_referral_followup(collected)
        case RequestType.doctors_letter:
            return map_doctors_letter(collected)
        case RequestType.other_admin:
            return map_other_admin(collected)
        case _:
            assert_never(request_type)


def extract_request_data(
    collected: dict | None,
) -> tuple[list[RequestType], dict[RequestType, RequestRecord] | None]:
    """Return the reconciled request types and one record per type.

    Supports several requests in one call, e.g. ``"fit_note,repeat_prescription"``
    yields ``{fit_note: FitNoteRequest, repeat_prescription: RepeatPrescriptionRequest}``.
    """
    data = collected or {}
    declared = coerce_string(data.get("request_type"))
    types = reconcile_request_types(declared, data)
    if not types:
        return [], None

    return types, {request_type: map_request(request_type, data) for request_type in types}
