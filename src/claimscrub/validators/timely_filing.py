"""Timely filing window check."""

from datetime import timedelta

from ..schemas.claim import Claim
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus
from .context import CheckContext
from .formats import days_until_timely_filing_expires, is_within_timely_filing

CHECK = ValidationCheck.TIMELY_FILING


def check_timely_filing(claim: Claim, context: CheckContext) -> ValidationResult:
    """Compare days since service against the payer's filing window.

    Unknown payers fall back to the configured default window.
    """
    settings = context.settings.timely_filing
    payer = context.reference.payer(claim.payer_id)
    window = payer.timely_filing_days if payer is not None else settings.default_days
    payer_label = payer.name if payer is not None else (claim.payer_name or "the payer")

    if claim.date_of_service is None:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.WARNING,
            message="Date of service is missing; timely filing cannot be evaluated",
            suggestion="Enter the date of service",
            metadata={"timelyFilingDays": window},
        )

    remaining = days_until_timely_filing_expires(claim.date_of_service, window, context.today)
    metadata = {"daysRemaining": remaining, "timelyFilingDays": window}
    deadline = (claim.date_of_service + timedelta(days=window)).isoformat()

    if not is_within_timely_filing(claim.date_of_service, window, context.today):
        return context.deny(
            CHECK,
            "CO-29",
            f"Timely filing limit of {window} days for {payer_label} expired on {deadline}",
            suggestion="Submit proof of timely filing or write off the claim",
            metadata=metadata,
        )
    if remaining <= settings.warning_threshold_days:
        return ValidationResult(
            check_type=CHECK,
            status=ValidationStatus.WARNING,
            message=f"{remaining} days left to file with {payer_label} (deadline {deadline})",
            suggestion="Submit this claim as soon as possible",
            metadata=metadata,
        )
    return ValidationResult(
        check_type=CHECK,
        status=ValidationStatus.PASS,
        message=f"Within the {window}-day filing window ({remaining} days remaining)",
        metadata=metadata,
    )
