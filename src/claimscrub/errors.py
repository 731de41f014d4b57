"""Exceptions raised by the claim validation engine.

Only input errors escape a validation call. Everything a rule check raises is
converted into a ValidationResult for that check by the orchestrator.
"""


class ClaimScrubError(Exception):
    """Base class for claim validation errors."""


class InvalidClaimReferenceError(ClaimScrubError, ValueError):
    """The claim reference passed to the orchestrator is malformed."""


class ClaimNotFoundError(ClaimScrubError, LookupError):
    """The claim or its service lines could not be loaded."""

    def __init__(self, claim_id: str):
        super().__init__(f"Claim not found: {claim_id}")
        self.claim_id = claim_id


class ReferenceLookupError(ClaimScrubError, LookupError):
    """A reference table does not hold an entry a check depends on."""


class RegistryUnavailableError(ClaimScrubError):
    """The provider registry could not answer within its time budget."""


class InvalidCheckSelectionError(ClaimScrubError, ValueError):
    """The requested set of checks is empty or names an unknown check."""
