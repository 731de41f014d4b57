"""Advisory ICD-10 and modifier suggestions.

Suggestions never raise: unknown codes simply produce no suggestions.
"""

from .reference import ReferenceData, default_reference_data
from .schemas.common import Specialty
from .schemas.validation import IcdSuggestion, ModifierSuggestion
from .validators.context import normalize_code
from .validators.cpt_icd_match import diagnosis_requirement, matches_icd_prefix
from .validators.formats import is_valid_icd10

PATIENT_CONDITION_CONFIDENCE = 0.95
CPT_TABLE_CONFIDENCE = 0.8
SPECIALTY_CONFIDENCE = 0.6


def suggest_icd_codes(
    cpt_code: str,
    patient_conditions: list[str] | None = None,
    specialty: Specialty | None = None,
    reference: ReferenceData | None = None,
) -> list[IcdSuggestion]:
    """Rank ICD-10 codes that support ``cpt_code``.

    Patient chart conditions that are valid pairings come first, then the
    CPT's usual codes, then the specialty's common codes.
    """
    reference = reference or default_reference_data()
    cpt = normalize_code(cpt_code)
    specialty_config = reference.specialties.get(specialty) if specialty else None
    requirement = diagnosis_requirement(cpt, reference, specialty_config) if cpt else None
    table_codes = reference.suggested_icd_codes.get(cpt, ())
    if requirement is None and not table_codes:
        return []
    prefixes = requirement[0] if requirement else None

    ranked: dict[str, IcdSuggestion] = {}

    def add(code: str, confidence: float, source: str | None = None) -> None:
        code = normalize_code(code)
        if not is_valid_icd10(code) or code in ranked:
            return
        if prefixes is not None and not matches_icd_prefix(code, prefixes):
            return
        display = reference.icd_descriptions.get(code, code)
        if source:
            display = f"{display} ({source})"
        ranked[code] = IcdSuggestion(code=code, display=display, confidence=confidence)

    for code in patient_conditions or []:
        add(code, PATIENT_CONDITION_CONFIDENCE, "from patient chart")
    for code in table_codes:
        add(code, CPT_TABLE_CONFIDENCE)
    if specialty_config is not None:
        for code in specialty_config.common_icd_codes:
            add(code, SPECIALTY_CONFIDENCE)
    return list(ranked.values())


def suggest_modifiers(
    cpt_code: str,
    drug_code: str | None = None,
    place_of_service: str | None = None,
    discarded_units: float | None = None,
    reference: ReferenceData | None = None,
) -> list[ModifierSuggestion]:
    """Modifiers a procedure or drug line is likely to need."""
    reference = reference or default_reference_data()
    cpt = normalize_code(cpt_code)
    suggestions: dict[str, ModifierSuggestion] = {}

    def add(code: str, reason: str) -> None:
        if code in suggestions:
            return
        entry = reference.modifiers.get(code)
        display = f"{code} - {entry.name}" if entry is not None else code
        suggestions[code] = ModifierSuggestion(code=code, display=display, reason=reason)

    if normalize_code(drug_code):
        if discarded_units == 0:
            add("JZ", "No drug was discarded from the single-dose container")
        else:
            add("JW", "Report the discarded portion of the single-dose drug")

    if cpt.startswith("992"):
        add("25", "Significant, separately identifiable E/M on the same day as a procedure")

    if cpt in reference.split_billable_cpts:
        pos = reference.places_of_service.get(normalize_code(place_of_service))
        add("26", "Professional component only (interpretation)")
        if pos is None or not pos.facility:
            add("TC", "Technical component only (equipment and technician)")

    required = reference.required_modifiers.get(cpt)
    if required is not None:
        for code in required.required_modifiers:
            add(code, required.condition)

    return list(suggestions.values())
