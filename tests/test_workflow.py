"""Tests for the claim validation workflow."""

from datetime import date

import pytest

from claimscrub.schemas import Claim, ClaimStatus, ServiceLine, Specialty, ValidationCheck
from claimscrub.store import get_claim_store
from claimscrub.validate_claim_workflow import ValidateClaimStartEvent
from claimscrub.validate_claim_workflow import workflow as validate_claim_workflow

REFERENCE_DATE = date(2024, 3, 1)


def _seed_claim(claim_id: str, **overrides) -> Claim:
    """Save a complete oncology claim into the shared claim store."""
    data = dict(
        id=claim_id,
        claim_number=f"CLM-{claim_id}",
        patient_name="Jane Doe",
        patient_dob=date(1970, 5, 1),
        patient_gender="F",
        insurance_id="W123456789",
        payer_name="Aetna",
        payer_id="AETNA",
        provider_npi="1234567893",
        provider_name="Dr. Sarah Chen",
        specialty=Specialty.ONCOLOGY,
        date_of_service=date(2024, 2, 15),
        place_of_service="11",
        prior_auth_number="PA-1001",
        service_lines=[
            ServiceLine(line_number=1, cpt_code="96413", icd_codes=["C50.911"], charge=850.00)
        ],
    )
    data.update(overrides)
    claim = Claim(**data)
    get_claim_store().save_claim(claim)
    return claim


@pytest.mark.asyncio
async def test_validate_claim_workflow() -> None:
    """A clean claim scores 100 and is marked VALIDATED in the store."""
    _seed_claim("wf-1")

    result = await validate_claim_workflow.run(
        start_event=ValidateClaimStartEvent(claim_id="wf-1", reference_date=REFERENCE_DATE)
    )

    assert result["score"] == 100
    assert [v["check_type"] for v in result["validations"]] == [c.value for c in ValidationCheck]
    assert get_claim_store().get_claim("wf-1").status == ClaimStatus.VALIDATED


@pytest.mark.asyncio
async def test_workflow_reports_failures() -> None:
    _seed_claim("wf-2", prior_auth_number=None)

    result = await validate_claim_workflow.run(
        start_event=ValidateClaimStartEvent(claim_id="wf-2", reference_date=REFERENCE_DATE)
    )

    prior_auth = result["validations"][3]
    assert prior_auth["status"] == "FAIL"
    assert prior_auth["denial_code"] == "CO-15"
    assert result["score"] == 86
    assert get_claim_store().get_claim("wf-2").status == ClaimStatus.DRAFT


@pytest.mark.asyncio
async def test_workflow_check_subset() -> None:
    _seed_claim("wf-3")

    result = await validate_claim_workflow.run(
        start_event=ValidateClaimStartEvent(
            claim_id="wf-3",
            checks=[ValidationCheck.NCCI_EDITS],
            reference_date=REFERENCE_DATE,
        )
    )

    assert len(result["validations"]) == 1
    assert result["validations"][0]["check_type"] == "NCCI_EDITS"


@pytest.mark.asyncio
async def test_workflow_unknown_claim() -> None:
    with pytest.raises(Exception, match="Claim not found: wf-missing"):
        await validate_claim_workflow.run(
            start_event=ValidateClaimStartEvent(claim_id="wf-missing")
        )
