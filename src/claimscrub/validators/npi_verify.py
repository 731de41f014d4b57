"""Rendering provider NPI verification."""

from ..registry import lookup_with_timeout
from ..schemas.claim import Claim
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus
from .context import CheckContext
from .formats import is_valid_npi

CHECK = ValidationCheck.NPI_VERIFY


def check_npi(claim: Claim, context: CheckContext) -> ValidationResult:
    """Verify NPI format and check digit, then confirm it with the registry.

    Registry outages raise RegistryUnavailableError, which the orchestrator
    reports as a warning.
    """
    npi = (claim.provider_npi or "").strip()
    if not npi:
        return context.deny(
            CHECK,
            "CO-16",
            "Rendering provider NPI is missing",
            suggestion="Enter the 10-digit NPI of the rendering provider",
        )
    if not is_valid_npi(npi):
        return context.deny(
            CHECK,
            "CO-16",
            f"NPI {npi} failed format or check digit validation",
            suggestion="Verify the NPI against the NPPES registry",
        )

    registry_settings = context.settings.registry
    if context.registry is None or not registry_settings.enabled:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.PASS,
            message=f"NPI {npi} has a valid format and check digit",
        )

    record = lookup_with_timeout(context.registry, npi, registry_settings.timeout_seconds)
    if record is None:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.WARNING,
            message=f"NPI {npi} was not found in the provider registry",
            suggestion="Confirm the provider is enrolled in NPPES",
        )
    if record.status != "active":
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.WARNING,
            message=f"NPI {npi} ({record.name}) is {record.status} in the provider registry",
            suggestion="Bill under an active NPI",
            metadata={"providerName": record.name, "registryStatus": record.status},
        )

    metadata: dict = {"providerName": record.name, "providerType": record.provider_type}
    if record.taxonomy_code:
        metadata["taxonomyCode"] = record.taxonomy_code
    return ValidationResult(
        check_type=CHECK,
        status=ValidationStatus.PASS,
        message=f"NPI {npi} verified for {record.name}",
        metadata=metadata,
    )
