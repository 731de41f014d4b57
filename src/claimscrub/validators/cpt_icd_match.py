"""Procedure/diagnosis compatibility check."""

from ..reference import ReferenceData
from ..schemas.claim import Claim
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus
from ..schemas.reference import SpecialtyConfig
from .context import CheckContext, normalize_code
from .formats import is_valid_icd10

CHECK = ValidationCheck.CPT_ICD_MATCH


def diagnosis_requirement(
    cpt_code: str,
    reference: ReferenceData,
    specialty_config: SpecialtyConfig | None = None,
) -> tuple[tuple[str, ...], str] | None:
    """ICD prefixes that support ``cpt_code`` and a description of the rule.

    An exact CPT mapping wins over the specialty's CPT-family rules. Returns
    None when nothing constrains the code.
    """
    mapping = reference.cpt_icd_mappings.get(cpt_code)
    if mapping is not None:
        return mapping.valid_icd_prefixes, mapping.description
    if specialty_config is not None:
        for rule in specialty_config.diagnosis_rules:
            if cpt_code.startswith(rule.cpt_prefix):
                return rule.valid_icd_prefixes, rule.description
    return None


def matches_icd_prefix(icd_code: str, prefixes: tuple[str, ...]) -> bool:
    code = normalize_code(icd_code)
    return any(code.startswith(prefix) for prefix in prefixes)


def check_cpt_icd_match(claim: Claim, context: CheckContext) -> ValidationResult:
    """Every constrained procedure must be supported by at least one diagnosis."""
    reference = context.reference
    cpt_codes = list(dict.fromkeys(normalize_code(c) for c in claim.cpt_codes))
    icd_codes = claim.icd_codes

    if not cpt_codes:
        return context.deny(
            CHECK,
            "CO-50",
            "No procedure codes on the claim",
            suggestion="Add a CPT or HCPCS code to each service line",
        )
    if not icd_codes:
        return context.deny(
            CHECK,
            "CO-11",
            "No diagnosis codes on the claim",
            suggestion="Add at least one ICD-10 code supporting the billed services",
        )

    # Malformed codes cannot support a procedure but do not hide a valid pairing.
    malformed = [code for code in icd_codes if not is_valid_icd10(code)]
    valid_icd_codes = [code for code in icd_codes if is_valid_icd10(code)]

    specialty_config = reference.specialty(claim.specialty) if claim.specialty else None

    mismatched: list[str] = []
    requirements: list[str] = []
    suggested: list[str] = []
    for cpt in cpt_codes:
        requirement = diagnosis_requirement(cpt, reference, specialty_config)
        if requirement is None:
            continue
        prefixes, description = requirement
        if any(matches_icd_prefix(icd, prefixes) for icd in valid_icd_codes):
            continue
        mismatched.append(cpt)
        requirements.append(f"{cpt} requires {description}")
        candidates = reference.suggested_icd_codes.get(cpt, ())
        if not candidates and specialty_config is not None:
            candidates = tuple(
                code
                for code in specialty_config.common_icd_codes
                if matches_icd_prefix(code, prefixes)
            )
        for code in candidates:
            if code not in suggested:
                suggested.append(code)

    if mismatched:
        suggestion = "Add a supporting diagnosis"
        if suggested:
            suggestion += f" such as {', '.join(suggested[:3])}"
        return context.deny(
            CHECK,
            "CO-11",
            "Diagnosis does not support procedure: " + "; ".join(requirements),
            suggestion=suggestion,
            metadata={
                "mismatchedCptCodes": mismatched,
                "currentIcdCodes": list(icd_codes),
                "suggestedIcdCodes": suggested,
                **({"invalidIcdCodes": malformed} if malformed else {}),
            },
        )

    return ValidationResult(
        check_type=CHECK,
        status=ValidationStatus.PASS,
        message="All procedure codes are supported by a diagnosis",
        metadata={"invalidIcdCodes": malformed} if malformed else None,
    )
