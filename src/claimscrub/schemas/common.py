"""Shared types for claim validation schemas."""

from enum import Enum

from pydantic import BaseModel

# Closed set of metadata value shapes so results serialize deterministically.
MetadataValue = str | int | float | bool | list[str]


class ValidationStatus(str, Enum):
    """Status outcome of a validation check."""

    PASS = "PASS"
    WARNING = "WARNING"
    FAIL = "FAIL"


class ValidationCheck(str, Enum):
    """The seven rule checks a claim is run through, in canonical order."""

    CPT_ICD_MATCH = "CPT_ICD_MATCH"
    NPI_VERIFY = "NPI_VERIFY"
    MODIFIER_CHECK = "MODIFIER_CHECK"
    PRIOR_AUTH = "PRIOR_AUTH"
    DATA_COMPLETENESS = "DATA_COMPLETENESS"
    TIMELY_FILING = "TIMELY_FILING"
    NCCI_EDITS = "NCCI_EDITS"


class ClaimStatus(str, Enum):
    """Lifecycle status of a claim."""

    DRAFT = "DRAFT"
    VALIDATING = "VALIDATING"
    VALIDATED = "VALIDATED"
    SUBMITTED = "SUBMITTED"
    ACCEPTED = "ACCEPTED"
    PAID = "PAID"
    DENIED = "DENIED"
    APPEALING = "APPEALING"


class Specialty(str, Enum):
    """Practice specialties with dedicated coding rules."""

    ONCOLOGY = "ONCOLOGY"
    MENTAL_HEALTH = "MENTAL_HEALTH"
    OBGYN = "OBGYN"
    ENDOCRINOLOGY = "ENDOCRINOLOGY"


class ValidationResult(BaseModel):
    """Result of a single rule check."""

    check_type: ValidationCheck
    status: ValidationStatus
    message: str
    denial_code: str | None = None
    suggestion: str | None = None
    metadata: dict[str, MetadataValue] | None = None
