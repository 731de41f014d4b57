"""Claim validation schemas."""

from .claim import Claim, ServiceLine
from .common import (
    ClaimStatus,
    MetadataValue,
    Specialty,
    ValidationCheck,
    ValidationResult,
    ValidationStatus,
)
from .reference import (
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
    SpecialtyDiagnosisRule,
)
from .validation import ClaimValidation, IcdSuggestion, ModifierSuggestion

__all__ = [
    # Common
    "ClaimStatus",
    "MetadataValue",
    "Specialty",
    "ValidationCheck",
    "ValidationResult",
    "ValidationStatus",
    # Claim
    "Claim",
    "ServiceLine",
    # Reference
    "CptIcdMapping",
    "DenialCode",
    "Modifier",
    "MueLimit",
    "MutuallyExclusiveEdit",
    "NcciColumnEdit",
    "Payer",
    "PlaceOfService",
    "RequiredModifier",
    "SpecialtyConfig",
    "SpecialtyDiagnosisRule",
    # Output
    "ClaimValidation",
    "IcdSuggestion",
    "ModifierSuggestion",
]
