"""Validation orchestrator: run checks, score, persist."""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timezone

from .config import ValidationConfig, ValidationSettings, load_validation_config
from .errors import ClaimNotFoundError, InvalidClaimReferenceError
from .reference import ReferenceData
from .registry import ProviderRegistry
from .schemas.claim import Claim
from .schemas.common import ClaimStatus, ValidationCheck, ValidationResult, ValidationStatus
from .schemas.validation import ClaimValidation
from .store import ClaimStore
from .validators import resolve_checks, run_all_validations

logger = logging.getLogger(__name__)


def compute_score(results: Sequence[ValidationResult]) -> int:
    """Percentage of checks that passed, rounded half up.

    WARNING counts as not passed, so warnings lower the score even though
    they do not block the claim.
    """
    if not results:
        return 0
    passed = sum(1 for r in results if r.status == ValidationStatus.PASS)
    total = len(results)
    return (200 * passed + total) // (2 * total)


def resolve_claim_status(results: Sequence[ValidationResult]) -> ClaimStatus:
    """DRAFT if any check failed, otherwise VALIDATED."""
    if any(r.status == ValidationStatus.FAIL for r in results):
        return ClaimStatus.DRAFT
    return ClaimStatus.VALIDATED


def load_claim(claim_or_id: Claim | str, store: ClaimStore) -> Claim:
    """Resolve a claim reference through the store.

    A Claim instance is saved first so its current contents are validated.
    """
    if isinstance(claim_or_id, Claim):
        if not claim_or_id.id.strip():
            raise InvalidClaimReferenceError("Claim id must not be blank")
        store.save_claim(claim_or_id)
        return claim_or_id
    if not isinstance(claim_or_id, str) or not claim_or_id.strip():
        raise InvalidClaimReferenceError(f"Invalid claim reference: {claim_or_id!r}")
    claim = store.get_claim(claim_or_id.strip())
    if claim is None:
        raise ClaimNotFoundError(claim_or_id.strip())
    return claim


def record_validation(
    claim_id: str,
    results: Sequence[ValidationResult],
    store: ClaimStore,
) -> ClaimValidation:
    """Score a finished run and replace the claim's stored validation with it."""
    validation = ClaimValidation(
        claim_id=claim_id,
        score=compute_score(results),
        status=resolve_claim_status(results),
        validations=list(results),
        validated_at=datetime.now(timezone.utc),
    )
    store.replace_validation(validation)

    failed = sum(1 for r in results if r.status == ValidationStatus.FAIL)
    logger.info(
        "Claim %s validated: score=%d status=%s failed=%d",
        claim_id,
        validation.score,
        validation.status.value,
        failed,
    )
    return validation


def validate_claim(
    claim_or_id: Claim | str,
    *,
    store: ClaimStore,
    checks: Iterable[ValidationCheck | str] | None = None,
    reference: ReferenceData | None = None,
    registry: ProviderRegistry | None = None,
    settings: ValidationSettings | None = None,
    today: date | None = None,
    config: ValidationConfig | None = None,
) -> ClaimValidation:
    """Validate a claim and replace its stored validation run.

    With no ``checks`` the configured default checks run; ``settings``
    likewise default to the config file. Raises InvalidCheckSelectionError,
    InvalidClaimReferenceError or ClaimNotFoundError before anything is
    stored or any check runs. Problems inside individual checks are
    reported as results.
    """
    if checks is None or settings is None:
        config = config or load_validation_config()
    selected = resolve_checks(checks if checks is not None else config.checks)
    claim = load_claim(claim_or_id, store)
    logger.info(
        "Validating claim %s (%d service lines, $%.2f) with %d checks",
        claim.id,
        len(claim.service_lines),
        claim.total_charge,
        len(selected),
    )

    results = run_all_validations(
        claim,
        checks=selected,
        reference=reference,
        registry=registry,
        settings=settings or config.settings,
        today=today,
    )
    return record_validation(claim.id, results, store)
