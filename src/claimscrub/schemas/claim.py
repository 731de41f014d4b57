"""Claim and service line schema."""

from datetime import date
from typing import Literal

from pydantic import BaseModel

from .common import ClaimStatus, Specialty


class ServiceLine(BaseModel):
    """One billed procedure within a claim."""

    line_number: int
    cpt_code: str = ""
    cpt_description: str | None = None
    modifiers: list[str] = []
    icd_codes: list[str] = []
    drug_code: str | None = None
    drug_units: float | None = None
    units: int = 1
    charge: float = 0.0


class Claim(BaseModel):
    """A billing record awaiting validation and submission.

    Fields are intentionally lenient so that incomplete drafts can be loaded
    and reported on by the data completeness check.
    """

    id: str
    claim_number: str | None = None
    practice_id: str | None = None
    # Patient
    patient_name: str | None = None
    patient_dob: date | None = None
    patient_gender: Literal["M", "F", "O"] | None = None
    insurance_id: str | None = None
    payer_name: str | None = None
    payer_id: str | None = None
    # Provider
    provider_npi: str | None = None
    provider_name: str | None = None
    specialty: Specialty | None = None
    # Service
    date_of_service: date | None = None
    place_of_service: str | None = None
    prior_auth_number: str | None = None
    # Status
    status: ClaimStatus = ClaimStatus.DRAFT
    score: int | None = None
    service_lines: list[ServiceLine] = []

    @property
    def cpt_codes(self) -> list[str]:
        """Procedure codes across all service lines, in line order."""
        return [line.cpt_code for line in self.service_lines if line.cpt_code]

    @property
    def icd_codes(self) -> list[str]:
        """Diagnosis codes across all service lines, de-duplicated in order."""
        seen: dict[str, None] = {}
        for line in self.service_lines:
            for code in line.icd_codes:
                if code:
                    seen.setdefault(code, None)
        return list(seen)

    @property
    def total_charge(self) -> float:
        return sum(line.charge for line in self.service_lines)
