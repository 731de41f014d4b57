"""Code reference table schemas.

Reference entries are frozen: the tables are loaded once per process and
shared read-only across every validation run.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from .common import Specialty


class ReferenceEntry(BaseModel):
    """Base for immutable reference table rows."""

    model_config = ConfigDict(frozen=True)


class DenialCode(ReferenceEntry):
    """Payer claim adjustment reason code."""

    code: str
    name: str
    category: Literal["CO", "PR", "OA", "PI", "CR"]
    description: str
    common_causes: tuple[str, ...] = ()
    prevention_tips: tuple[str, ...] = ()


class Modifier(ReferenceEntry):
    """CPT/HCPCS modifier with its usage rules."""

    code: str
    name: str
    description: str
    category: Literal["anatomical", "procedural", "payment", "drug", "global", "other"]
    usage: str = ""
    applicable_cpts: tuple[str, ...] | None = None
    excluded_cpts: tuple[str, ...] = ()
    incompatible_modifiers: tuple[str, ...] = ()
    requires_documentation: bool = False


class Payer(ReferenceEntry):
    """Insurance payer and its filing rules."""

    id: str
    name: str
    type: Literal["MEDICARE", "MEDICAID", "COMMERCIAL", "SELF_PAY"]
    timely_filing_days: int
    prior_auth_portal: str | None = None
    claim_portal: str | None = None


class PlaceOfService(ReferenceEntry):
    """CMS place of service code."""

    code: str
    name: str
    description: str
    facility: bool = False


class SpecialtyDiagnosisRule(ReferenceEntry):
    """Diagnosis requirement for a family of CPT codes within a specialty."""

    cpt_prefix: str
    valid_icd_prefixes: tuple[str, ...]
    description: str


class SpecialtyConfig(ReferenceEntry):
    """Specialty-specific coding configuration."""

    id: Specialty
    name: str
    display_name: str
    taxonomy_code: str
    common_cpt_codes: tuple[str, ...] = ()
    requires_auth: tuple[str, ...] = ()
    common_icd_codes: tuple[str, ...] = ()
    diagnosis_rules: tuple[SpecialtyDiagnosisRule, ...] = ()


class CptIcdMapping(ReferenceEntry):
    """ICD-10 prefixes that support medical necessity for a CPT code."""

    cpt_code: str
    category: str
    valid_icd_prefixes: tuple[str, ...]
    description: str
    specialty: Specialty | None = None


class NcciColumnEdit(ReferenceEntry):
    """NCCI column 1 / column 2 bundling edit."""

    column1_code: str
    bundled_codes: tuple[str, ...]
    effective_date: str


class MutuallyExclusiveEdit(ReferenceEntry):
    """Pair of procedures that cannot be performed in the same session."""

    code1: str
    code2: str
    reason: str


class MueLimit(ReferenceEntry):
    """Medically unlikely edit: maximum units per day."""

    cpt_code: str
    max_units: int
    rationale: str


class RequiredModifier(ReferenceEntry):
    """Procedure or drug code that must carry one of a set of modifiers."""

    code: str
    required_modifiers: tuple[str, ...]
    condition: str
