"""Required field completeness check."""

from ..schemas.claim import Claim
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus
from .context import CheckContext
from .formats import is_valid_place_of_service

CHECK = ValidationCheck.DATA_COMPLETENESS


def _blank(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def missing_required_fields(claim: Claim) -> list[str]:
    """Mandatory fields a payer rejects the claim without.

    Service line numbers must be positive and unique; a repeated number is
    reported once for each line after the first.
    """
    missing: list[str] = []
    if _blank(claim.patient_name):
        missing.append("patientName")
    if _blank(claim.insurance_id):
        missing.append("insuranceId")
    if _blank(claim.provider_npi):
        missing.append("providerNpi")
    if claim.date_of_service is None:
        missing.append("dateOfService")
    if not claim.service_lines:
        missing.append("serviceLines")

    seen_line_numbers: set[int] = set()
    for line in claim.service_lines:
        prefix = f"serviceLines[{line.line_number}]"
        if line.line_number <= 0 or line.line_number in seen_line_numbers:
            missing.append(f"{prefix}.lineNumber")
        seen_line_numbers.add(line.line_number)
        if _blank(line.cpt_code):
            missing.append(f"{prefix}.cptCode")
        if not any(not _blank(code) for code in line.icd_codes):
            missing.append(f"{prefix}.icdCodes")
        if line.units <= 0:
            missing.append(f"{prefix}.units")
        if line.charge <= 0:
            missing.append(f"{prefix}.charge")
    return missing


def incomplete_secondary_fields(claim: Claim, context: CheckContext) -> list[str]:
    """Fields that are missing or malformed but do not block submission."""
    fields: list[str] = []
    if claim.patient_dob is None:
        fields.append("patientDob")
    if claim.patient_gender is None:
        fields.append("patientGender")
    if _blank(claim.payer_name):
        fields.append("payerName")
    if _blank(claim.provider_name):
        fields.append("providerName")
    pos = claim.place_of_service
    if (
        _blank(pos)
        or not is_valid_place_of_service(pos)
        or pos not in context.reference.places_of_service
    ):
        fields.append("placeOfService")
    return fields


def check_data_completeness(claim: Claim, context: CheckContext) -> ValidationResult:
    missing = missing_required_fields(claim)
    if missing:
        return context.deny(
            CHECK,
            "CO-16",
            f"Missing or invalid required fields: {', '.join(missing)}",
            suggestion="Complete all required claim fields before submission",
            metadata={"missingFields": missing},
        )

    incomplete = incomplete_secondary_fields(claim, context)
    if incomplete:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.WARNING,
            message=f"Missing or invalid recommended fields: {', '.join(incomplete)}",
            suggestion="Fill in recommended fields to reduce payer follow-up",
            metadata={"incompleteFields": incomplete},
        )

    return ValidationResult(
        check_type=CHECK,
        status=ValidationStatus.PASS,
        message="All required fields are present",
    )
