"""Procedure/diagnosis coding tables: compatibility, bundling and authorization.

These mirror small excerpts of the CMS NCCI, MUE and LCD data sets. Production
deployments substitute full tables through ``ReferenceData``.
"""

from types import MappingProxyType

from ..schemas.common import Specialty
from ..schemas.reference import (
    CptIcdMapping,
    MueLimit,
    MutuallyExclusiveEdit,
    NcciColumnEdit,
    RequiredModifier,
)
from .specialties import CANCER_ICD_PREFIXES, DIABETES_ICD_PREFIXES


def _mapping(
    cpt_code: str,
    category: str,
    prefixes: tuple[str, ...],
    description: str,
    specialty: Specialty,
) -> tuple[str, CptIcdMapping]:
    return cpt_code, CptIcdMapping(
        cpt_code=cpt_code,
        category=category,
        valid_icd_prefixes=prefixes,
        description=description,
        specialty=specialty,
    )


CPT_ICD_MAPPINGS = MappingProxyType(
    dict(
        [
            # Oncology - Chemotherapy
            _mapping("96413", "Chemotherapy", CANCER_ICD_PREFIXES, "an oncology diagnosis for chemotherapy IV infusion", Specialty.ONCOLOGY),
            _mapping("96415", "Chemotherapy", CANCER_ICD_PREFIXES, "an oncology diagnosis for each additional chemotherapy hour", Specialty.ONCOLOGY),
            _mapping("96416", "Chemotherapy", CANCER_ICD_PREFIXES, "an oncology diagnosis for chemotherapy IV push", Specialty.ONCOLOGY),
            # Mental Health - Psychotherapy
            _mapping("90832", "Psychotherapy", ("F",), "a mental health diagnosis for 30-min psychotherapy", Specialty.MENTAL_HEALTH),
            _mapping("90834", "Psychotherapy", ("F",), "a mental health diagnosis for 45-min psychotherapy", Specialty.MENTAL_HEALTH),
            _mapping("90837", "Psychotherapy", ("F",), "a mental health diagnosis for 60-min psychotherapy", Specialty.MENTAL_HEALTH),
            # OB/GYN
            _mapping("59400", "Obstetrics", ("O", "Z33", "Z34", "Z36", "Z3A"), "a pregnancy diagnosis for routine obstetric care", Specialty.OBGYN),
            _mapping("59510", "Obstetrics", ("O", "Z37"), "a delivery-related diagnosis for cesarean delivery", Specialty.OBGYN),
            # Endocrinology
            _mapping("95250", "Diabetes Management", DIABETES_ICD_PREFIXES, "a diabetes diagnosis for CGM monitoring", Specialty.ENDOCRINOLOGY),
            _mapping("95251", "Diabetes Management", DIABETES_ICD_PREFIXES, "a diabetes diagnosis for CGM analysis", Specialty.ENDOCRINOLOGY),
        ]
    )
)

ICD_DESCRIPTIONS = MappingProxyType(
    {
        "C50.911": "Malignant neoplasm of unspecified site of right female breast",
        "C50.912": "Malignant neoplasm of unspecified site of left female breast",
        "C34.90": "Malignant neoplasm of unspecified part of unspecified bronchus or lung",
        "C18.9": "Malignant neoplasm of colon, unspecified",
        "C61": "Malignant neoplasm of prostate",
        "F33.1": "Major depressive disorder, recurrent, moderate",
        "F41.1": "Generalized anxiety disorder",
        "F43.10": "Post-traumatic stress disorder, unspecified",
        "F31.9": "Bipolar disorder, unspecified",
        "E11.9": "Type 2 diabetes mellitus without complications",
        "E11.65": "Type 2 diabetes mellitus with hyperglycemia",
        "O80": "Encounter for full-term uncomplicated delivery",
        "O82": "Encounter for cesarean delivery without indication",
        "Z34.00": "Encounter for supervision of normal first pregnancy, unspecified trimester",
        "Z00.00": "Encounter for general adult medical examination without abnormal findings",
    }
)

# Codes most commonly paired with a CPT, in ranking order.
SUGGESTED_ICD_CODES = MappingProxyType(
    {
        "96413": ("C50.911", "C34.90", "C18.9", "C61"),
        "96415": ("C50.911", "C34.90", "C18.9", "C61"),
        "96416": ("C50.911", "C34.90", "C18.9", "C61"),
        "90832": ("F33.1", "F41.1", "F43.10", "F31.9"),
        "90834": ("F33.1", "F41.1", "F43.10", "F31.9"),
        "90837": ("F33.1", "F41.1", "F43.10", "F31.9"),
        "59400": ("Z34.00",),
        "59510": ("O82",),
        "95250": ("E11.9", "E11.65"),
        "95251": ("E11.9", "E11.65"),
    }
)

NCCI_COLUMN_EDITS = MappingProxyType(
    {
        # Chemotherapy administration bundles hydration/infusion
        "96413": NcciColumnEdit(column1_code="96413", bundled_codes=("96360", "96361", "96365", "96366"), effective_date="2024-01-01"),
        "96415": NcciColumnEdit(column1_code="96415", bundled_codes=("96360", "96361"), effective_date="2024-01-01"),
        # E/M stacking
        "99213": NcciColumnEdit(column1_code="99213", bundled_codes=("99211", "99212"), effective_date="2024-01-01"),
        "99214": NcciColumnEdit(column1_code="99214", bundled_codes=("99211", "99212", "99213"), effective_date="2024-01-01"),
        # Psychotherapy
        "90837": NcciColumnEdit(column1_code="90837", bundled_codes=("90832", "90834"), effective_date="2024-01-01"),
    }
)

MUTUALLY_EXCLUSIVE_EDITS = (
    MutuallyExclusiveEdit(
        code1="59400",
        code2="59510",
        reason="Cannot bill routine OB care with C-section global package",
    ),
    MutuallyExclusiveEdit(
        code1="90834",
        code2="90837",
        reason="Cannot bill multiple time-based psychotherapy codes same session",
    ),
)

MUE_LIMITS = MappingProxyType(
    {
        "96413": MueLimit(cpt_code="96413", max_units=1, rationale="First hour of chemo administration - once per day"),
        "96415": MueLimit(cpt_code="96415", max_units=8, rationale="Additional hours of chemo - limited to 8 hours"),
        "90837": MueLimit(cpt_code="90837", max_units=2, rationale="60-min psychotherapy limited to 2 per day"),
        "99214": MueLimit(cpt_code="99214", max_units=1, rationale="Office visit - one per day per patient"),
    }
)

AUTH_REQUIRED_CPTS = frozenset(
    {
        "96413",  # Chemotherapy administration
        "96415",  # Chemotherapy infusion
        "96416",  # Chemotherapy push
        "90832",  # Psychotherapy 30 min
        "90834",  # Psychotherapy 45 min
        "90837",  # Psychotherapy 60 min
        "59400",  # OB global
        "59510",  # C-section global
    }
)

AUTH_REQUIRED_DRUGS = frozenset(
    {
        "J9271",  # Pembrolizumab (Keytruda)
        "J9299",  # Nivolumab (Opdivo)
        "J9035",  # Bevacizumab (Avastin)
        "J9310",  # Rituximab (Rituxan)
    }
)

REQUIRED_MODIFIERS = MappingProxyType(
    {
        "27447": RequiredModifier(
            code="27447",
            required_modifiers=("LT", "RT", "50"),
            condition="Knee arthroplasty requires anatomical modifier",
        ),
        "J9271": RequiredModifier(
            code="J9271",
            required_modifiers=("JW", "JZ"),
            condition="Injectable drugs may require wastage modifier for some payers",
        ),
    }
)

# Procedures with separately billable professional and technical components.
SPLIT_BILLABLE_CPTS = frozenset({"76801", "76805", "76811"})
