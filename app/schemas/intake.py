from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class RequestType(StrEnum):
    health_problem = "health_problem"
    repeat_prescription = "repeat_prescription"
    fit_note = "fit_note"
    routine_care = "routine_care"
    test_results = "test_results"
    referral_followup = "referral_followup"
    doctors_letter = "doctors_letter"
    other_admin = "other_admin"


class SubmissionStatus(StrEnum):
    pending = "pending"
    requires_review = "requires_review"
    completed = "completed"
    failed = "failed"


PreferredContact = Literal["text", "phone", "both"]


class PatientRecord(BaseModel):
    first_name: str = ""
    last_name: str = ""
    postcode: str = ""
    phone_number: str = ""
    preferred_contact: PreferredContact = "phone"
    # True means the patient confirmed they are safe; False needs review.
    emergency_confirmed: bool = False


class Medication(BaseModel):
    name: str
    strength: str = ""


class HealthProblemRequest(BaseModel):
    type: Literal["health_problem"] = "health_problem"
    description: str = ""
    duration: str = ""
    progression: str = ""
    treatments_tried: str = ""
    concerns: str = ""
    help_requested: str = ""
    best_contact_times: str = ""


class RepeatPrescriptionRequest(BaseModel):
    type: Literal["repeat_prescription"] = "repeat_prescription"
    medications: list[Medication] = []
    additional_notes: str = ""


class FitNoteRequest(BaseModel):
    type: Literal["fit_note"] = "fit_note"
    had_previous_note: bool = False
    illness_description: str = ""
    start_date: str = ""
    end_date: str = ""
    employer_accommodations: str = ""


class RoutineCareRequest(BaseModel):
    type: Literal["routine_care"] = "routine_care"
    care_type: str = ""
    additional_details: str = ""


class TestResultsRequest(BaseModel):
    __test__ = False  # not a pytest test class

    type: Literal["test_results"] = "test_results"
    test_type: str = ""
    test_date: str = ""
    test_location: str = ""
    reason_for_test: str = ""


class ReferralFollowupRequest(BaseModel):
    type: Literal["referral_followup"] = "referral_followup"
    referral_for: str = ""
    referral_date: str = ""
    nhs_or_private: Literal["nhs", "private"] = "nhs"
    help_needed: str = ""


class DoctorsLetterRequest(BaseModel):
    type: Literal["doctors_letter"] = "doctors_letter"
    letter_purpose: str = ""
    deadline: str = ""


class OtherAdminRequest(BaseModel):
    type: Literal["other_admin"] = "other_admin"
    description: str = ""


RequestRecord = Annotated[
    HealthProblemRequest
    | RepeatPrescriptionRequest
    | FitNoteRequest
    | RoutineCareRequest
    | TestResultsRequest
    | ReferralFollowupRequest
    | DoctorsLetterRequest
    | OtherAdminRequest,
    Field(discriminator="type"),
]


class SubmissionWriteRecord(BaseModel):
    """Row written to storage for one call, upserted on ``conversation_id``."""

    conversation_id: str
    agent_id: str
    call_timestamp: str
    call_duration_secs: int | None = None
    caller_phone: str | None = None
    status: SubmissionStatus
    patient_data: PatientRecord
    request_type: str | None = None  # comma-joined, e.g. "fit_note,repeat_prescription"
    request_data: dict[RequestType, RequestRecord] | None = None
    transcript: str = ""
    analysis: dict | None = None


class PostcodeValidationResult(BaseModel):
    valid: bool
    formatted: str = ""
    error: str | None = None
