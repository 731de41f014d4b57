"""NCCI bundling, mutually exclusive and MUE unit edits."""

from ..schemas.claim import Claim, ServiceLine
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus
from .context import CheckContext, normalize_code

CHECK = ValidationCheck.NCCI_EDITS


def _has_unbundling_modifier(line: ServiceLine, unbundling: frozenset[str]) -> bool:
    return any(normalize_code(m) in unbundling for m in line.modifiers)


def check_ncci_edits(claim: Claim, context: CheckContext) -> ValidationResult:
    """Apply column 1/column 2, mutually exclusive and MUE edits across lines.

    A bundled pair is excused when either line carries an unbundling modifier
    (59, XE, XP, XS, XU). Mutually exclusive pairs are never excused.
    """
    reference = context.reference
    lines = [line for line in claim.service_lines if normalize_code(line.cpt_code)]

    violations: list[str] = []
    bundled_pairs: list[str] = []
    excused_pairs: list[str] = []

    for column1 in lines:
        cpt1 = normalize_code(column1.cpt_code)
        edit = reference.ncci_column_edits.get(cpt1)
        if edit is None:
            continue
        for column2 in lines:
            cpt2 = normalize_code(column2.cpt_code)
            if column2 is column1 or cpt2 not in edit.bundled_codes:
                continue
            pair = f"{cpt1}/{cpt2}"
            if _has_unbundling_modifier(column1, reference.unbundling_modifiers) or _has_unbundling_modifier(
                column2, reference.unbundling_modifiers
            ):
                excused_pairs.append(pair)
            else:
                bundled_pairs.append(pair)
                violations.append(f"{cpt2} is bundled into {cpt1}")

    codes = {normalize_code(line.cpt_code) for line in lines}
    for edit in reference.mutually_exclusive_edits:
        if edit.code1 in codes and edit.code2 in codes:
            bundled_pairs.append(f"{edit.code1}/{edit.code2}")
            violations.append(f"{edit.code1} and {edit.code2} are mutually exclusive: {edit.reason}")

    if violations:
        return context.deny(
            CHECK,
            "CO-97",
            "NCCI edit violation: " + "; ".join(violations),
            suggestion="Remove the bundled code or append modifier 59/X{EPSU} when the service is distinct",
            metadata={"bundledPairs": bundled_pairs},
        )

    units: dict[str, int] = {}
    for line in lines:
        cpt = normalize_code(line.cpt_code)
        units[cpt] = units.get(cpt, 0) + line.units
    exceeded = [
        f"{cpt} billed {total} units (limit {reference.mue_limits[cpt].max_units})"
        for cpt, total in units.items()
        if cpt in reference.mue_limits and total > reference.mue_limits[cpt].max_units
    ]
    if exceeded:
        return context.deny(
            CHECK,
            "CO-97",
            "Medically unlikely units: " + "; ".join(exceeded),
            suggestion="Verify units of service against documentation",
            metadata={"mueExceeded": exceeded},
            status=ValidationStatus.WARNING,
        )

    if excused_pairs:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.PASS,
            message=f"Bundled pairs {', '.join(excused_pairs)} excused by unbundling modifier",
            metadata={"excusedPairs": excused_pairs},
        )
    return ValidationResult(
        check_type=CHECK,
        status=ValidationStatus.PASS,
        message="No NCCI edit conflicts",
    )
