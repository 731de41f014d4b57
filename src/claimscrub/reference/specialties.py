"""Specialty-to-CPT configuration."""

from types import MappingProxyType

from ..schemas.common import Specialty
from ..schemas.reference import SpecialtyConfig, SpecialtyDiagnosisRule

CANCER_ICD_PREFIXES = ("C", "D0", "D1", "D2", "D3", "D4")
DIABETES_ICD_PREFIXES = ("E08", "E09", "E10", "E11", "E13")

SPECIALTIES = MappingProxyType(
    {
        Specialty.ONCOLOGY: SpecialtyConfig(
            id=Specialty.ONCOLOGY,
            name="oncology",
            display_name="Oncology",
            taxonomy_code="207RH0003X",
            common_cpt_codes=("96413", "96415", "96417", "77385", "77386", "77387", "99215"),
            requires_auth=("96413", "96415", "96417", "J9271", "J9355", "J9299"),
            common_icd_codes=("C50.911", "C50.912", "C34.90", "C18.9", "C61"),
            diagnosis_rules=(
                SpecialtyDiagnosisRule(
                    cpt_prefix="964",
                    valid_icd_prefixes=CANCER_ICD_PREFIXES,
                    description="chemotherapy administration requires a cancer diagnosis",
                ),
            ),
        ),
        Specialty.MENTAL_HEALTH: SpecialtyConfig(
            id=Specialty.MENTAL_HEALTH,
            name="mental_health",
            display_name="Mental Health",
            taxonomy_code="2084P0800X",
            common_cpt_codes=("90832", "90834", "90837", "90847", "90853", "99213", "99214"),
            requires_auth=("90837", "90847"),
            common_icd_codes=("F33.1", "F41.1", "F43.10", "F31.9"),
            diagnosis_rules=(
                SpecialtyDiagnosisRule(
                    cpt_prefix="908",
                    valid_icd_prefixes=("F",),
                    description="psychotherapy requires a mental health diagnosis",
                ),
            ),
        ),
        Specialty.OBGYN: SpecialtyConfig(
            id=Specialty.OBGYN,
            name="obgyn",
            display_name="OB-GYN",
            taxonomy_code="207V00000X",
            common_cpt_codes=("59400", "59510", "59610", "76801", "76805", "76811", "99213", "99214"),
            requires_auth=("59510", "59610"),
            common_icd_codes=("Z34.00", "O80", "O82"),
            diagnosis_rules=(
                SpecialtyDiagnosisRule(
                    cpt_prefix="59",
                    valid_icd_prefixes=("O", "Z3"),
                    description="maternity care requires a pregnancy-related diagnosis",
                ),
            ),
        ),
        Specialty.ENDOCRINOLOGY: SpecialtyConfig(
            id=Specialty.ENDOCRINOLOGY,
            name="endocrinology",
            display_name="Endocrinology",
            taxonomy_code="207RE0101X",
            common_cpt_codes=("95250", "95251", "99213", "99214", "99215", "80061", "83036"),
            requires_auth=("95250", "95251"),
            common_icd_codes=("E11.9", "E11.65"),
            diagnosis_rules=(
                SpecialtyDiagnosisRule(
                    cpt_prefix="9525",
                    valid_icd_prefixes=DIABETES_ICD_PREFIXES,
                    description="continuous glucose monitoring requires a diabetes diagnosis",
                ),
            ),
        ),
    }
)
