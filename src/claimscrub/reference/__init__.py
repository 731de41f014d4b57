"""Code reference tables, loaded once per process and injected into checks."""

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from ..errors import ReferenceLookupError
from ..schemas.common import Specialty
from ..schemas.reference import (
    CptIcdMapping,
    DenialCode,
    Modifier,
    MueLimit,
    MutuallyExclusiveEdit,
    NcciColumnEdit,
    Payer,
    PlaceOfService,
    RequiredModifier,
    SpecialtyConfig,
)
from .coding import (
    AUTH_REQUIRED_CPTS,
    AUTH_REQUIRED_DRUGS,
    CPT_ICD_MAPPINGS,
    ICD_DESCRIPTIONS,
    MUE_LIMITS,
    MUTUALLY_EXCLUSIVE_EDITS,
    NCCI_COLUMN_EDITS,
    REQUIRED_MODIFIERS,
    SPLIT_BILLABLE_CPTS,
    SUGGESTED_ICD_CODES,
)
from .denial_codes import DENIAL_CODES
from .modifiers import MODIFIERS, UNBUNDLING_MODIFIERS
from .payers import PAYERS
from .place_of_service import PLACE_OF_SERVICE
from .specialties import SPECIALTIES

__all__ = [
    "ReferenceData",
    "default_reference_data",
    "DENIAL_CODES",
    "MODIFIERS",
    "PAYERS",
    "PLACE_OF_SERVICE",
    "SPECIALTIES",
    "UNBUNDLING_MODIFIERS",
]


@dataclass(frozen=True)
class ReferenceData:
    """Read-only bundle of every table the rule checks consult.

    Tests build their own instance (``dataclasses.replace`` on the default)
    to substitute fixtures for individual tables.
    """

    denial_codes: Mapping[str, DenialCode]
    modifiers: Mapping[str, Modifier]
    payers: Mapping[str, Payer]
    places_of_service: Mapping[str, PlaceOfService]
    specialties: Mapping[Specialty, SpecialtyConfig]
    cpt_icd_mappings: Mapping[str, CptIcdMapping]
    icd_descriptions: Mapping[str, str]
    suggested_icd_codes: Mapping[str, tuple[str, ...]]
    ncci_column_edits: Mapping[str, NcciColumnEdit]
    mutually_exclusive_edits: tuple[MutuallyExclusiveEdit, ...]
    mue_limits: Mapping[str, MueLimit]
    required_modifiers: Mapping[str, RequiredModifier]
    auth_required_cpts: frozenset[str]
    auth_required_drugs: frozenset[str]
    unbundling_modifiers: frozenset[str]
    split_billable_cpts: frozenset[str]

    def payer(self, payer_id: str | None) -> Payer | None:
        """Look up a payer by id, ignoring case. Unknown payers return None."""
        if not payer_id:
            return None
        return self.payers.get(payer_id.strip().upper())

    def specialty(self, specialty: Specialty) -> SpecialtyConfig:
        """Configuration for a specialty the claim declares."""
        config = self.specialties.get(specialty)
        if config is None:
            raise ReferenceLookupError(f"No specialty configuration for {specialty.value}")
        return config

    def denial_code(self, code: str) -> DenialCode:
        entry = self.denial_codes.get(code)
        if entry is None:
            raise ReferenceLookupError(f"Unknown denial code {code}")
        return entry


@lru_cache(maxsize=1)
def default_reference_data() -> ReferenceData:
    """Packaged reference tables, built on first use and shared afterwards."""
    return ReferenceData(
        denial_codes=DENIAL_CODES,
        modifiers=MODIFIERS,
        payers=PAYERS,
        places_of_service=PLACE_OF_SERVICE,
        specialties=SPECIALTIES,
        cpt_icd_mappings=CPT_ICD_MAPPINGS,
        icd_descriptions=ICD_DESCRIPTIONS,
        suggested_icd_codes=SUGGESTED_ICD_CODES,
        ncci_column_edits=NCCI_COLUMN_EDITS,
        mutually_exclusive_edits=MUTUALLY_EXCLUSIVE_EDITS,
        mue_limits=MUE_LIMITS,
        required_modifiers=REQUIRED_MODIFIERS,
        auth_required_cpts=AUTH_REQUIRED_CPTS,
        auth_required_drugs=AUTH_REQUIRED_DRUGS,
        unbundling_modifiers=UNBUNDLING_MODIFIERS,
        split_billable_cpts=SPLIT_BILLABLE_CPTS,
    )
