"""Rule checks for claim validation."""

import logging
from collections.abc import Callable, Iterable
from datetime import date
from types import MappingProxyType

from ..config import ValidationSettings, load_validation_config
from ..errors import InvalidCheckSelectionError, ReferenceLookupError, RegistryUnavailableError
from ..reference import ReferenceData, default_reference_data
from ..registry import ProviderRegistry
from ..schemas.claim import Claim
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus
from .context import CheckContext
from .cpt_icd_match import check_cpt_icd_match
from .data_completeness import check_data_completeness
from .modifier_checks import check_modifiers
from .ncci_edits import check_ncci_edits
from .npi_verify import check_npi
from .prior_auth import check_prior_auth
from .timely_filing import check_timely_filing

__all__ = [
    "CHECKS",
    "CheckContext",
    "resolve_checks",
    "run_check",
    "run_all_validations",
    "check_cpt_icd_match",
    "check_npi",
    "check_modifiers",
    "check_prior_auth",
    "check_data_completeness",
    "check_timely_filing",
    "check_ncci_edits",
]

logger = logging.getLogger(__name__)

CheckFunction = Callable[[Claim, CheckContext], ValidationResult]

CHECKS: MappingProxyType[ValidationCheck, CheckFunction] = MappingProxyType(
    {
        ValidationCheck.CPT_ICD_MATCH: check_cpt_icd_match,
        ValidationCheck.NPI_VERIFY: check_npi,
        ValidationCheck.MODIFIER_CHECK: check_modifiers,
        ValidationCheck.PRIOR_AUTH: check_prior_auth,
        ValidationCheck.DATA_COMPLETENESS: check_data_completeness,
        ValidationCheck.TIMELY_FILING: check_timely_filing,
        ValidationCheck.NCCI_EDITS: check_ncci_edits,
    }
)


def resolve_checks(checks: Iterable[ValidationCheck | str] | None = None) -> list[ValidationCheck]:
    """Checks to run, in canonical order without duplicates.

    None selects all seven. An empty selection or an unknown name raises
    InvalidCheckSelectionError.
    """
    if checks is None:
        return list(ValidationCheck)
    requested: set[ValidationCheck] = set()
    for check in checks:
        try:
            requested.add(ValidationCheck(check))
        except ValueError as e:
            raise InvalidCheckSelectionError(f"Unknown validation check: {check}") from e
    if not requested:
        raise InvalidCheckSelectionError("At least one validation check must be requested")
    return [check for check in ValidationCheck if check in requested]


def run_check(check: ValidationCheck, claim: Claim, context: CheckContext) -> ValidationResult:
    """Run one check, converting anything it raises into a result for that check."""
    try:
        return CHECKS[check](claim, context)
    except (ReferenceLookupError, RegistryUnavailableError) as e:
        logger.warning("%s degraded for claim %s: %s", check.value, claim.id, e)
        return ValidationResult(
            check_type=check,
            status=ValidationStatus.WARNING,
            message=f"Check could not be completed: {e}",
            suggestion="Re-run validation once reference data or the provider registry is available",
        )
    except Exception as e:
        logger.exception("%s failed unexpectedly for claim %s", check.value, claim.id)
        return ValidationResult(
            check_type=check,
            status=ValidationStatus.FAIL,
            message=f"Check failed with an internal error: {e}",
        )


def run_all_validations(
    claim: Claim,
    checks: Iterable[ValidationCheck | str] | None = None,
    reference: ReferenceData | None = None,
    registry: ProviderRegistry | None = None,
    settings: ValidationSettings | None = None,
    today: date | None = None,
) -> list[ValidationResult]:
    """Run the selected checks against a claim and return one result per check.

    Results follow the canonical check order: CPT_ICD_MATCH, NPI_VERIFY,
    MODIFIER_CHECK, PRIOR_AUTH, DATA_COMPLETENESS, TIMELY_FILING, NCCI_EDITS.
    A failing check never stops the others from running.
    """
    selected = resolve_checks(checks)
    context = CheckContext(
        reference=reference or default_reference_data(),
        settings=settings or load_validation_config().settings,
        today=today or date.today(),
        registry=registry,
    )
    return [run_check(check, claim, context) for check in selected]
