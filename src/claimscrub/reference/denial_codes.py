"""Claim adjustment reason codes attributed by the rule checks."""

from types import MappingProxyType

from ..schemas.reference import DenialCode

DENIAL_CODES = MappingProxyType(
    {
        "CO-4": DenialCode(
            code="CO-4",
            name="Modifier Required",
            category="CO",
            description="The procedure code is inconsistent with the modifier used.",
            common_causes=(
                "Missing modifier (e.g., JW for drug wastage)",
                "Incorrect modifier combination",
                "Modifier not supported for procedure",
            ),
            prevention_tips=(
                "Verify modifier requirements for each CPT code",
                "Check payer-specific modifier rules",
                "Use JW modifier when drug wastage occurs",
            ),
        ),
        "CO-11": DenialCode(
            code="CO-11",
            name="Diagnosis Mismatch",
            category="CO",
            description="The diagnosis is inconsistent with the procedure.",
            common_causes=(
                "CPT code does not match ICD-10 diagnosis",
                "Missing secondary diagnosis",
                "Unspecified diagnosis code used",
            ),
            prevention_tips=(
                "Validate CPT-ICD pairing before submission",
                "Use most specific ICD-10 code available",
                "Include all relevant diagnoses",
            ),
        ),
        "CO-15": DenialCode(
            code="CO-15",
            name="Authorization Required",
            category="CO",
            description="The authorization number is missing, invalid, or does not apply.",
            common_causes=(
                "Prior authorization not obtained",
                "Authorization expired",
                "Authorization for different service",
            ),
            prevention_tips=(
                "Check authorization requirements before service",
                "Verify authorization is active on date of service",
                "Include valid authorization number on claim",
            ),
        ),
        "CO-16": DenialCode(
            code="CO-16",
            name="Missing Information",
            category="CO",
            description="Claim/service lacks information needed for adjudication.",
            common_causes=(
                "Missing patient demographics",
                "Missing provider NPI",
                "Incomplete service line data",
            ),
            prevention_tips=(
                "Complete all required fields",
                "Verify NPI validity",
                "Include all service details",
            ),
        ),
        "CO-29": DenialCode(
            code="CO-29",
            name="Timely Filing",
            category="CO",
            description="The time limit for filing has expired.",
            common_causes=(
                "Claim submitted after filing deadline",
                "Delayed from payer rejection correction",
                "Coordination of benefits delays",
            ),
            prevention_tips=(
                "Submit claims within 30 days of service",
                "Track payer-specific filing limits",
                "Appeal with proof of timely original submission",
            ),
        ),
        "CO-50": DenialCode(
            code="CO-50",
            name="Non-Covered Service",
            category="CO",
            description="These are non-covered services because this is not deemed a medical necessity by the payer.",
            common_causes=(
                "No procedure code billed",
                "Procedure not supported by documented diagnosis",
            ),
            prevention_tips=(
                "Bill at least one procedure code per claim",
                "Check LCD/NCD coverage before service",
            ),
        ),
        "CO-97": DenialCode(
            code="CO-97",
            name="Bundled Procedure",
            category="CO",
            description="Payment included in allowance for another service/procedure.",
            common_causes=(
                "NCCI edit violation",
                "Procedures billed separately that should be bundled",
                "Missing modifier to unbundle",
            ),
            prevention_tips=(
                "Check NCCI edits before billing",
                "Use modifier 59/XE/XP/XS/XU when appropriate",
                "Bill comprehensive codes",
            ),
        ),
    }
)
