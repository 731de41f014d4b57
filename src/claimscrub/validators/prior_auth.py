"""Prior authorization requirement check."""

from ..schemas.claim import Claim
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus
from .context import CheckContext, normalize_code

CHECK = ValidationCheck.PRIOR_AUTH


def auth_required_codes(claim: Claim, context: CheckContext) -> list[str]:
    """Procedure and drug codes on the claim that need prior authorization."""
    reference = context.reference
    specialty_config = reference.specialties.get(claim.specialty) if claim.specialty else None
    specialty_codes = set(specialty_config.requires_auth) if specialty_config else set()

    required: list[str] = []
    for line in claim.service_lines:
        cpt = normalize_code(line.cpt_code)
        if cpt and (cpt in reference.auth_required_cpts or cpt in specialty_codes):
            required.append(cpt)
        drug = normalize_code(line.drug_code)
        if drug and (drug in reference.auth_required_drugs or drug in specialty_codes):
            required.append(drug)
    return list(dict.fromkeys(required))


def check_prior_auth(claim: Claim, context: CheckContext) -> ValidationResult:
    required = auth_required_codes(claim, context)
    if not required:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.PASS,
            message="No prior authorization required",
        )

    auth_number = (claim.prior_auth_number or "").strip()
    if auth_number:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.PASS,
            message=f"Prior authorization {auth_number} on file",
            metadata={"authRequiredCodes": required},
        )

    payer = context.reference.payer(claim.payer_id)
    suggestion = "Obtain prior authorization before submitting"
    if payer is not None and payer.prior_auth_portal:
        suggestion += f" ({payer.name}: {payer.prior_auth_portal})"
    return context.deny(
        CHECK,
        "CO-15",
        f"Prior authorization required for {', '.join(required)}",
        suggestion=suggestion,
        metadata={"authRequiredCodes": required},
    )
