"""Payer reference table and timely filing windows."""

from types import MappingProxyType

from ..schemas.reference import Payer

PAYERS = MappingProxyType(
    {
        "MEDICARE_A": Payer(
            id="MEDICARE_A",
            name="Medicare Part A",
            type="MEDICARE",
            timely_filing_days=365,
            claim_portal="https://www.cms.gov/medicare",
        ),
        "MEDICARE_B": Payer(
            id="MEDICARE_B",
            name="Medicare Part B",
            type="MEDICARE",
            timely_filing_days=365,
            claim_portal="https://www.cms.gov/medicare",
        ),
        "MEDICARE_D": Payer(
            id="MEDICARE_D",
            name="Medicare Part D",
            type="MEDICARE",
            timely_filing_days=365,
            claim_portal="https://www.cms.gov/medicare",
        ),
        "MEDICAID": Payer(
            id="MEDICAID",
            name="Medicaid",
            type="MEDICAID",
            timely_filing_days=365,
        ),
        "AETNA": Payer(
            id="AETNA",
            name="Aetna",
            type="COMMERCIAL",
            timely_filing_days=90,
            prior_auth_portal="https://www.aetna.com/providers",
            claim_portal="https://www.availity.com",
        ),
        "BCBS": Payer(
            id="BCBS",
            name="Blue Cross Blue Shield",
            type="COMMERCIAL",
            timely_filing_days=90,
            prior_auth_portal="https://www.bcbs.com/providers",
            claim_portal="https://www.availity.com",
        ),
        "CIGNA": Payer(
            id="CIGNA",
            name="Cigna",
            type="COMMERCIAL",
            timely_filing_days=90,
            prior_auth_portal="https://cignaforhcp.cigna.com",
            claim_portal="https://www.availity.com",
        ),
        "UNITED": Payer(
            id="UNITED",
            name="UnitedHealthcare",
            type="COMMERCIAL",
            timely_filing_days=90,
            prior_auth_portal="https://www.uhcprovider.com",
            claim_portal="https://www.availity.com",
        ),
        "HUMANA": Payer(
            id="HUMANA",
            name="Humana",
            type="COMMERCIAL",
            timely_filing_days=90,
            prior_auth_portal="https://www.humana.com/provider",
            claim_portal="https://www.availity.com",
        ),
    }
)
