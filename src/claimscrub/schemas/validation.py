"""Aggregate validation output for a claim."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from .common import ClaimStatus, ValidationResult


class ClaimValidation(BaseModel):
    """The current validation run for a claim.

    Created fresh every time validation runs and replaces any previous run.
    """

    claim_id: str
    score: int
    status: ClaimStatus
    validations: list[ValidationResult] = []
    validated_at: datetime

    def to_response(self) -> dict[str, Any]:
        """Shape returned to request handlers: score plus the result sequence."""
        return {
            "score": self.score,
            "validations": [v.model_dump(mode="json") for v in self.validations],
        }


class IcdSuggestion(BaseModel):
    """Advisory ICD-10 code for a procedure."""

    code: str
    display: str
    confidence: float


class ModifierSuggestion(BaseModel):
    """Advisory modifier for a procedure."""

    code: str
    display: str
    reason: str
