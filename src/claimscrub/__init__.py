"""Pre-submission claim validation: rule checks, scoring and suggestions."""

from .engine import compute_score, record_validation, resolve_claim_status, validate_claim
from .errors import (
    ClaimNotFoundError,
    ClaimScrubError,
    InvalidCheckSelectionError,
    InvalidClaimReferenceError,
    ReferenceLookupError,
    RegistryUnavailableError,
)
from .reference import ReferenceData, default_reference_data
from .store import ClaimStore, InMemoryClaimStore
from .suggestions import suggest_icd_codes, suggest_modifiers
from .validators import run_all_validations

__version__ = "0.1.0"

__all__ = [
    "validate_claim",
    "run_all_validations",
    "compute_score",
    "resolve_claim_status",
    "record_validation",
    "suggest_icd_codes",
    "suggest_modifiers",
    "ReferenceData",
    "default_reference_data",
    "ClaimStore",
    "InMemoryClaimStore",
    "ClaimScrubError",
    "ClaimNotFoundError",
    "InvalidCheckSelectionError",
    "InvalidClaimReferenceError",
    "ReferenceLookupError",
    "RegistryUnavailableError",
]
