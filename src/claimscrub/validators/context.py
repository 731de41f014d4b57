"""Inputs shared by every rule check during one validation run."""

from dataclasses import dataclass
from datetime import date

from ..config import ValidationSettings
from ..reference import ReferenceData
from ..registry import ProviderRegistry
from ..schemas.common import ValidationCheck, ValidationResult, ValidationStatus


@dataclass(frozen=True)
class CheckContext:
    reference: ReferenceData
    settings: ValidationSettings
    today: date
    registry: ProviderRegistry | None = None

    def deny(
        self,
        check: ValidationCheck,
        denial_code: str,
        message: str,
        suggestion: str | None = None,
        metadata: dict | None = None,
        status: ValidationStatus = ValidationStatus.FAIL,
    ) -> ValidationResult:
        """Result attributed to a denial code from the reference table.

        Raises ReferenceLookupError when the table does not hold the code.
        """
        return ValidationResult(
            check_type=check,
            status=status,
            message=message,
            denial_code=self.reference.denial_code(denial_code).code,
            suggestion=suggestion,
            metadata=metadata,
        )


def normalize_code(code: object) -> str:
    """Upper-cased, trimmed code string; anything else becomes ''."""
    if not isinstance(code, str):
        return ""
    return code.strip().upper()
