"""Modifier validity, compatibility and requirement checks."""

from itertools import combinations

from ..schemas.claim import Claim, ServiceLine
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus
from .context import CheckContext, normalize_code
from .formats import is_valid_modifier

CHECK = ValidationCheck.MODIFIER_CHECK

MAX_MODIFIERS_PER_LINE = 4
DRUG_WASTAGE_MODIFIERS = ("JW", "JZ")


def check_modifiers(claim: Claim, context: CheckContext) -> ValidationResult:
    """Check modifiers on every service line.

    Errors (too many, malformed, incompatible, not allowed for the procedure)
    fail the check. Missing or documentation-dependent modifiers only warn.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for line in claim.service_lines:
        line_errors, line_warnings = _check_line(line, context)
        errors.extend(line_errors)
        warnings.extend(line_warnings)

    if errors:
        return context.deny(
            CHECK,
            "CO-4",
            "; ".join(errors),
            suggestion="Review modifier usage against CPT guidelines",
            metadata={"modifierErrors": errors},
        )
    if warnings:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.WARNING,
            message="; ".join(warnings),
            suggestion="Confirm modifiers and supporting documentation before submission",
            metadata={"modifierWarnings": warnings},
        )
    return ValidationResult(
        check_type=CHECK,
        status=ValidationStatus.PASS,
        message="Modifiers are valid for all service lines",
    )


def _check_line(line: ServiceLine, context: CheckContext) -> tuple[list[str], list[str]]:
    table = context.reference.modifiers
    label = f"Line {line.line_number}"
    cpt = normalize_code(line.cpt_code)
    errors: list[str] = []
    warnings: list[str] = []

    if len(line.modifiers) > MAX_MODIFIERS_PER_LINE:
        errors.append(
            f"{label}: {len(line.modifiers)} modifiers exceeds the maximum of {MAX_MODIFIERS_PER_LINE}"
        )

    modifiers: list[str] = []
    for raw in line.modifiers:
        if not is_valid_modifier(raw):
            errors.append(f"{label}: invalid modifier format '{raw}'")
            continue
        code = raw.upper()
        if code not in modifiers:
            modifiers.append(code)

    for code in modifiers:
        entry = table.get(code)
        if entry is None:
            continue
        if cpt and entry.applicable_cpts is not None and cpt not in entry.applicable_cpts:
            errors.append(f"{label}: modifier {code} ({entry.name}) is not applicable to {cpt}")
        elif cpt in entry.excluded_cpts:
            errors.append(f"{label}: modifier {code} ({entry.name}) cannot be used with {cpt}")
        elif entry.requires_documentation:
            warnings.append(f"{label}: modifier {code} ({entry.name}) requires supporting documentation")

    for first, second in combinations(modifiers, 2):
        first_entry, second_entry = table.get(first), table.get(second)
        if (first_entry and second in first_entry.incompatible_modifiers) or (
            second_entry and first in second_entry.incompatible_modifiers
        ):
            errors.append(f"{label}: modifiers {first} and {second} cannot be used together")

    drug = normalize_code(line.drug_code)
    if drug and not any(m in DRUG_WASTAGE_MODIFIERS for m in modifiers):
        warnings.append(f"{label}: drug {drug} should report JW (wastage) or JZ (no wastage)")

    for code in (cpt, drug):
        required = context.reference.required_modifiers.get(code) if code else None
        if required is None:
            continue
        if code == drug and required.required_modifiers == DRUG_WASTAGE_MODIFIERS:
            # already reported above
            continue
        if not any(m in required.required_modifiers for m in modifiers):
            warnings.append(
                f"{label}: {code} is missing one of {', '.join(required.required_modifiers)} ({required.condition})"
            )

    return errors, warnings
