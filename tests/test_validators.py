"""Unit tests for the seven claim rule checks."""

import time
from dataclasses import replace
from datetime import date, timedelta
from types import MappingProxyType

import pytest

from claimscrub.config import RegistrySettings, TimelyFilingSettings, ValidationSettings
from claimscrub.errors import ReferenceLookupError, RegistryUnavailableError
from claimscrub.reference import default_reference_data
from claimscrub.registry import (
    SAMPLE_PROVIDERS,
    ProviderRecord,
    ProviderRegistry,
    StaticProviderRegistry,
)
from claimscrub.schemas import Claim, ServiceLine, Specialty, ValidationCheck, ValidationStatus
from claimscrub.validators import CheckContext, run_check
from claimscrub.validators.cpt_icd_match import check_cpt_icd_match
from claimscrub.validators.data_completeness import check_data_completeness
from claimscrub.validators.modifier_checks import check_modifiers
from claimscrub.validators.ncci_edits import check_ncci_edits
from claimscrub.validators.npi_verify import check_npi
from claimscrub.validators.prior_auth import check_prior_auth
from claimscrub.validators.timely_filing import check_timely_filing

REFERENCE_DATE = date(2024, 3, 1)


def _make_line(
    line_number: int = 1,
    cpt_code: str = "96413",
    icd_codes: list[str] | None = None,
    modifiers: list[str] | None = None,
    **kwargs,
) -> ServiceLine:
    """Helper to create a service line for testing."""
    return ServiceLine(
        line_number=line_number,
        cpt_code=cpt_code,
        icd_codes=icd_codes if icd_codes is not None else ["C50.911"],
        modifiers=modifiers or [],
        charge=kwargs.pop("charge", 850.00),
        **kwargs,
    )


def _make_claim(service_lines: list[ServiceLine] | None = None, **overrides) -> Claim:
    """Helper to create a complete oncology claim that passes every check."""
    data = dict(
        id="claim-1",
        claim_number="CLM-0001",
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
        service_lines=service_lines if service_lines is not None else [_make_line()],
    )
    data.update(overrides)
    return Claim(**data)


def _make_context(**overrides) -> CheckContext:
    data = dict(
        reference=default_reference_data(),
        settings=ValidationSettings(),
        today=REFERENCE_DATE,
        registry=None,
    )
    data.update(overrides)
    return CheckContext(**data)


class _SlowRegistry(ProviderRegistry):
    def lookup(self, npi):
        time.sleep(0.5)
        return None


class _BrokenRegistry(ProviderRegistry):
    def lookup(self, npi):
        raise ConnectionError("registry offline")


# ============================================================================
# CPT_ICD_MATCH TESTS
# ============================================================================


class TestCptIcdMatch:
    """Tests for procedure/diagnosis compatibility."""

    def test_chemo_with_cancer_diagnosis_passes(self):
        """96413 with C50.911 under oncology is supported."""
        result = check_cpt_icd_match(_make_claim(), _make_context())
        assert result.check_type == ValidationCheck.CPT_ICD_MATCH
        assert result.status == ValidationStatus.PASS

    def test_chemo_with_wellness_diagnosis_fails(self):
        """96413 with only Z00.00 is a CO-11 mismatch with suggested codes."""
        claim = _make_claim([_make_line(icd_codes=["Z00.00"])])
        result = check_cpt_icd_match(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-11"
        assert result.metadata["mismatchedCptCodes"] == ["96413"]
        assert result.metadata["currentIcdCodes"] == ["Z00.00"]
        assert result.metadata["suggestedIcdCodes"][0] == "C50.911"

    def test_no_procedure_codes(self):
        claim = _make_claim([_make_line(cpt_code="")])
        result = check_cpt_icd_match(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-50"

    def test_no_diagnosis_codes(self):
        claim = _make_claim([_make_line(icd_codes=[])])
        result = check_cpt_icd_match(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-11"

    def test_malformed_extra_code_does_not_block_valid_pairing(self):
        """A typo'd secondary code is reported but the valid pairing still passes."""
        claim = _make_claim([_make_line(icd_codes=["C50.911", "C5O.9"])])
        result = check_cpt_icd_match(claim, _make_context())
        assert result.status == ValidationStatus.PASS
        assert result.denial_code is None
        assert result.metadata["invalidIcdCodes"] == ["C5O.9"]

    def test_only_malformed_diagnosis_is_a_mismatch(self):
        """A malformed code cannot support a procedure, so CO-11 applies."""
        claim = _make_claim([_make_line(icd_codes=["XYZ"])])
        result = check_cpt_icd_match(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-11"
        assert result.metadata["mismatchedCptCodes"] == ["96413"]
        assert result.metadata["invalidIcdCodes"] == ["XYZ"]

    def test_malformed_code_with_unconstrained_procedure_passes(self):
        claim = _make_claim([_make_line(cpt_code="99999", icd_codes=["XYZ"])])
        result = check_cpt_icd_match(claim, _make_context())
        assert result.status == ValidationStatus.PASS
        assert result.metadata == {"invalidIcdCodes": ["XYZ"]}

    def test_clean_pass_has_no_metadata(self):
        assert check_cpt_icd_match(_make_claim(), _make_context()).metadata is None

    def test_unconstrained_procedure_passes(self):
        """A CPT with no compatibility entry is not a mismatch."""
        claim = _make_claim([_make_line(cpt_code="99999", icd_codes=["Z00.00"])])
        assert check_cpt_icd_match(claim, _make_context()).status == ValidationStatus.PASS

    def test_specialty_family_rule(self):
        """96417 has no exact mapping but the oncology 964xx rule applies."""
        claim = _make_claim([_make_line(cpt_code="96417", icd_codes=["F33.1"])])
        result = check_cpt_icd_match(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.metadata["mismatchedCptCodes"] == ["96417"]
        assert "C50.911" in result.metadata["suggestedIcdCodes"]

    def test_any_line_diagnosis_supports_procedure(self):
        """Diagnoses are pooled across the claim."""
        claim = _make_claim(
            [
                _make_line(1, cpt_code="99214", icd_codes=["Z00.00"]),
                _make_line(2, cpt_code="96413", icd_codes=["C34.90"]),
            ]
        )
        assert check_cpt_icd_match(claim, _make_context()).status == ValidationStatus.PASS

    def test_missing_specialty_configuration_raises(self):
        reference = replace(default_reference_data(), specialties=MappingProxyType({}))
        with pytest.raises(ReferenceLookupError):
            check_cpt_icd_match(_make_claim(), _make_context(reference=reference))


# ============================================================================
# NPI_VERIFY TESTS
# ============================================================================


class TestNpiVerify:
    """Tests for rendering provider NPI verification."""

    def test_valid_npi_without_registry(self):
        result = check_npi(_make_claim(), _make_context())
        assert result.status == ValidationStatus.PASS

    def test_missing_npi(self):
        result = check_npi(_make_claim(provider_npi=None), _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-16"

    def test_invalid_check_digit(self):
        result = check_npi(_make_claim(provider_npi="1234567890"), _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-16"

    def test_registry_confirms_active_provider(self):
        context = _make_context(registry=StaticProviderRegistry(SAMPLE_PROVIDERS))
        result = check_npi(_make_claim(), context)
        assert result.status == ValidationStatus.PASS
        assert result.metadata["providerName"] == "Dr. Sarah Chen"
        assert result.metadata["taxonomyCode"] == "207RH0003X"

    def test_registry_not_found_warns(self):
        context = _make_context(registry=StaticProviderRegistry(SAMPLE_PROVIDERS))
        result = check_npi(_make_claim(provider_npi="1111111112"), context)
        assert result.status == ValidationStatus.WARNING
        assert result.denial_code is None

    def test_deactivated_provider_warns(self):
        registry = StaticProviderRegistry(
            [
                ProviderRecord(
                    npi="1111111112",
                    name="Retired Clinic",
                    provider_type="organization",
                    status="deactivated",
                )
            ]
        )
        result = check_npi(_make_claim(provider_npi="1111111112"), _make_context(registry=registry))
        assert result.status == ValidationStatus.WARNING
        assert result.metadata["registryStatus"] == "deactivated"

    def test_registry_timeout_raises(self):
        settings = ValidationSettings(registry=RegistrySettings(timeout_seconds=0.05))
        context = _make_context(registry=_SlowRegistry(), settings=settings)
        with pytest.raises(RegistryUnavailableError):
            check_npi(_make_claim(), context)

    def test_registry_timeout_degrades_to_warning(self):
        settings = ValidationSettings(registry=RegistrySettings(timeout_seconds=0.05))
        context = _make_context(registry=_SlowRegistry(), settings=settings)
        result = run_check(ValidationCheck.NPI_VERIFY, _make_claim(), context)
        assert result.status == ValidationStatus.WARNING

    def test_registry_error_degrades_to_warning(self):
        context = _make_context(registry=_BrokenRegistry())
        result = run_check(ValidationCheck.NPI_VERIFY, _make_claim(), context)
        assert result.status == ValidationStatus.WARNING
        assert "registry offline" in result.message

    def test_registry_disabled(self):
        settings = ValidationSettings(registry=RegistrySettings(enabled=False))
        context = _make_context(registry=_BrokenRegistry(), settings=settings)
        assert check_npi(_make_claim(), context).status == ValidationStatus.PASS


# ============================================================================
# MODIFIER_CHECK TESTS
# ============================================================================


class TestModifierCheck:
    """Tests for modifier validity and compatibility."""

    def test_no_modifiers_passes(self):
        assert check_modifiers(_make_claim(), _make_context()).status == ValidationStatus.PASS

    def test_too_many_modifiers(self):
        claim = _make_claim([_make_line(modifiers=["GA", "GY", "GZ", "Q5", "KX"])])
        result = check_modifiers(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-4"
        assert "exceeds the maximum" in result.message

    def test_malformed_modifier(self):
        claim = _make_claim([_make_line(modifiers=["5"])])
        result = check_modifiers(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-4"

    def test_incompatible_pair(self):
        claim = _make_claim([_make_line(cpt_code="27447", icd_codes=["M17.11"], modifiers=["LT", "RT"])])
        result = check_modifiers(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert "LT and RT cannot be used together" in result.message

    def test_modifier_not_applicable_to_procedure(self):
        """Modifier 25 only applies to E/M codes."""
        claim = _make_claim([_make_line(modifiers=["25"])])
        result = check_modifiers(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert "not applicable to 96413" in result.message

    def test_documentation_modifier_warns(self):
        claim = _make_claim([_make_line(cpt_code="99214", modifiers=["25"])])
        result = check_modifiers(claim, _make_context())
        assert result.status == ValidationStatus.WARNING
        assert result.denial_code is None

    def test_missing_required_anatomical_modifier(self):
        claim = _make_claim([_make_line(cpt_code="27447", icd_codes=["M17.11"])])
        result = check_modifiers(claim, _make_context())
        assert result.status == ValidationStatus.WARNING
        assert "27447 is missing one of LT, RT, 50" in result.message

    def test_lowercase_modifier_accepted(self):
        claim = _make_claim([_make_line(cpt_code="27447", icd_codes=["M17.11"], modifiers=["lt"])])
        assert check_modifiers(claim, _make_context()).status == ValidationStatus.PASS

    def test_drug_without_wastage_modifier_warns(self):
        claim = _make_claim([_make_line(drug_code="J9271", drug_units=200)])
        result = check_modifiers(claim, _make_context())
        assert result.status == ValidationStatus.WARNING
        assert "J9271" in result.message

    def test_drug_with_jz_passes(self):
        claim = _make_claim([_make_line(drug_code="J9271", drug_units=200, modifiers=["JZ"])])
        assert check_modifiers(claim, _make_context()).status == ValidationStatus.PASS

    def test_errors_outrank_warnings(self):
        claim = _make_claim(
            [
                _make_line(1, cpt_code="99214", modifiers=["25"]),
                _make_line(2, modifiers=["JW", "JZ"]),
            ]
        )
        result = check_modifiers(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.metadata["modifierErrors"] == ["Line 2: modifiers JW and JZ cannot be used together"]


# ============================================================================
# PRIOR_AUTH TESTS
# ============================================================================


class TestPriorAuth:
    """Tests for prior authorization requirements."""

    def test_required_and_present(self):
        result = check_prior_auth(_make_claim(), _make_context())
        assert result.status == ValidationStatus.PASS
        assert result.metadata["authRequiredCodes"] == ["96413"]

    def test_required_and_missing(self):
        result = check_prior_auth(_make_claim(prior_auth_number=None), _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-15"
        assert result.metadata["authRequiredCodes"] == ["96413"]

    def test_blank_auth_number_counts_as_missing(self):
        result = check_prior_auth(_make_claim(prior_auth_number="  "), _make_context())
        assert result.status == ValidationStatus.FAIL

    def test_drug_requires_auth(self):
        claim = _make_claim(
            [_make_line(cpt_code="99213", icd_codes=["C50.911"], drug_code="J9271")],
            specialty=None,
            prior_auth_number=None,
        )
        result = check_prior_auth(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.metadata["authRequiredCodes"] == ["J9271"]

    def test_specialty_requires_auth(self):
        """95250 needs auth only through the endocrinology configuration."""
        line = _make_line(cpt_code="95250", icd_codes=["E11.9"])
        with_specialty = _make_claim([line], specialty=Specialty.ENDOCRINOLOGY, prior_auth_number=None)
        without_specialty = _make_claim([line], specialty=None, prior_auth_number=None)
        assert check_prior_auth(with_specialty, _make_context()).status == ValidationStatus.FAIL
        assert check_prior_auth(without_specialty, _make_context()).status == ValidationStatus.PASS

    def test_not_required(self):
        claim = _make_claim([_make_line(cpt_code="99213")], prior_auth_number=None, specialty=None)
        result = check_prior_auth(claim, _make_context())
        assert result.status == ValidationStatus.PASS
        assert result.metadata is None


# ============================================================================
# DATA_COMPLETENESS TESTS
# ============================================================================


class TestDataCompleteness:
    """Tests for required and recommended claim fields."""

    def test_complete_claim_passes(self):
        assert check_data_completeness(_make_claim(), _make_context()).status == ValidationStatus.PASS

    def test_missing_required_fields(self):
        claim = _make_claim([_make_line(icd_codes=[])], patient_name=None)
        result = check_data_completeness(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-16"
        assert result.metadata["missingFields"] == ["patientName", "serviceLines[1].icdCodes"]

    def test_no_service_lines(self):
        result = check_data_completeness(_make_claim([]), _make_context())
        assert result.metadata["missingFields"] == ["serviceLines"]

    def test_zero_charge(self):
        claim = _make_claim([_make_line(charge=0.0)])
        result = check_data_completeness(claim, _make_context())
        assert result.metadata["missingFields"] == ["serviceLines[1].charge"]

    def test_zero_units(self):
        claim = _make_claim([_make_line(units=0)])
        result = check_data_completeness(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-16"
        assert result.metadata["missingFields"] == ["serviceLines[1].units"]

    def test_negative_units(self):
        claim = _make_claim([_make_line(units=-2)])
        result = check_data_completeness(claim, _make_context())
        assert result.metadata["missingFields"] == ["serviceLines[1].units"]

    def test_duplicate_line_numbers(self):
        """Two lines both numbered 1 cannot be told apart by the payer."""
        claim = _make_claim([_make_line(1), _make_line(1, cpt_code="96415")])
        result = check_data_completeness(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-16"
        assert result.metadata["missingFields"] == ["serviceLines[1].lineNumber"]

    def test_non_positive_line_number(self):
        claim = _make_claim([_make_line(0)])
        result = check_data_completeness(claim, _make_context())
        assert result.metadata["missingFields"] == ["serviceLines[0].lineNumber"]

    def test_distinct_line_numbers_pass(self):
        claim = _make_claim([_make_line(1), _make_line(2, cpt_code="96415")])
        assert check_data_completeness(claim, _make_context()).status == ValidationStatus.PASS

    def test_blank_strings_are_missing(self):
        claim = _make_claim(patient_name="  ", insurance_id="")
        result = check_data_completeness(claim, _make_context())
        assert result.metadata["missingFields"] == ["patientName", "insuranceId"]

    def test_secondary_fields_warn(self):
        claim = _make_claim(patient_dob=None, place_of_service="99")
        result = check_data_completeness(claim, _make_context())
        assert result.status == ValidationStatus.WARNING
        assert result.denial_code is None
        assert result.metadata["incompleteFields"] == ["patientDob", "placeOfService"]


# ============================================================================
# TIMELY_FILING TESTS
# ============================================================================


class TestTimelyFiling:
    """Tests for payer filing windows."""

    def test_within_window(self):
        result = check_timely_filing(_make_claim(), _make_context())
        assert result.status == ValidationStatus.PASS
        assert result.metadata == {"daysRemaining": 75, "timelyFilingDays": 90}

    def test_expired(self):
        result = check_timely_filing(_make_claim(date_of_service=date(2023, 10, 1)), _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-29"
        assert result.metadata["daysRemaining"] == 0

    def test_near_expiry_warns(self):
        result = check_timely_filing(_make_claim(date_of_service=date(2023, 12, 15)), _make_context())
        assert result.status == ValidationStatus.WARNING
        assert result.metadata["daysRemaining"] == 13

    def test_last_day_warns(self):
        claim = _make_claim(date_of_service=REFERENCE_DATE - timedelta(days=90))
        result = check_timely_filing(claim, _make_context())
        assert result.status == ValidationStatus.WARNING
        assert result.metadata["daysRemaining"] == 0

    def test_payer_lookup_ignores_case(self):
        claim = _make_claim(payer_id="medicare_b", date_of_service=date(2023, 10, 1))
        result = check_timely_filing(claim, _make_context())
        assert result.status == ValidationStatus.PASS
        assert result.metadata["timelyFilingDays"] == 365

    def test_unknown_payer_uses_configured_default(self):
        settings = ValidationSettings(timely_filing=TimelyFilingSettings(default_days=200))
        claim = _make_claim(payer_id="LOCAL_PLAN", date_of_service=date(2023, 10, 1))
        result = check_timely_filing(claim, _make_context(settings=settings))
        assert result.status == ValidationStatus.PASS
        assert result.metadata["timelyFilingDays"] == 200

    def test_missing_date_of_service_warns(self):
        result = check_timely_filing(_make_claim(date_of_service=None), _make_context())
        assert result.status == ValidationStatus.WARNING


# ============================================================================
# NCCI_EDITS TESTS
# ============================================================================


class TestNcciEdits:
    """Tests for bundling, mutually exclusive and MUE edits."""

    def test_bundled_pair_without_modifier_fails(self):
        claim = _make_claim([_make_line(1, cpt_code="96413"), _make_line(2, cpt_code="96360")])
        result = check_ncci_edits(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.denial_code == "CO-97"
        assert result.metadata["bundledPairs"] == ["96413/96360"]

    @pytest.mark.parametrize("modifier", ["59", "XE", "XP", "XS", "XU"])
    def test_bundled_pair_excused_by_modifier(self, modifier):
        claim = _make_claim(
            [_make_line(1, cpt_code="96413"), _make_line(2, cpt_code="96360", modifiers=[modifier])]
        )
        result = check_ncci_edits(claim, _make_context())
        assert result.status == ValidationStatus.PASS
        assert result.metadata["excusedPairs"] == ["96413/96360"]

    def test_modifier_on_column_one_excuses(self):
        claim = _make_claim(
            [_make_line(1, cpt_code="96413", modifiers=["59"]), _make_line(2, cpt_code="96360")]
        )
        assert check_ncci_edits(claim, _make_context()).status == ValidationStatus.PASS

    def test_mutually_exclusive_never_excused(self):
        claim = _make_claim(
            [
                _make_line(1, cpt_code="90834", icd_codes=["F33.1"]),
                _make_line(2, cpt_code="90837", icd_codes=["F33.1"], modifiers=["59"]),
            ]
        )
        result = check_ncci_edits(claim, _make_context())
        assert result.status == ValidationStatus.FAIL
        assert result.metadata["bundledPairs"] == ["90834/90837"]
        assert "mutually exclusive" in result.message

    def test_mue_exceeded_warns(self):
        claim = _make_claim([_make_line(cpt_code="96415", units=9)])
        result = check_ncci_edits(claim, _make_context())
        assert result.status == ValidationStatus.WARNING
        assert result.denial_code == "CO-97"

    def test_mue_counts_units_across_lines(self):
        claim = _make_claim([_make_line(1), _make_line(2)])
        result = check_ncci_edits(claim, _make_context())
        assert result.status == ValidationStatus.WARNING
        assert result.metadata["mueExceeded"] == ["96413 billed 2 units (limit 1)"]

    def test_no_conflicts(self):
        claim = _make_claim([_make_line(1, cpt_code="96413"), _make_line(2, cpt_code="96415", units=3)])
        result = check_ncci_edits(claim, _make_context())
        assert result.status == ValidationStatus.PASS
        assert result.metadata is None


# ============================================================================
# CHECK ERROR HANDLING TESTS
# ============================================================================


class TestRunCheck:
    """Tests for converting check exceptions into results."""

    def test_missing_reference_entry_degrades_to_warning(self):
        reference = replace(default_reference_data(), specialties=MappingProxyType({}))
        result = run_check(ValidationCheck.CPT_ICD_MATCH, _make_claim(), _make_context(reference=reference))
        assert result.status == ValidationStatus.WARNING
        assert result.check_type == ValidationCheck.CPT_ICD_MATCH

    def test_missing_denial_code_degrades_to_warning(self):
        reference = replace(default_reference_data(), denial_codes=MappingProxyType({}))
        claim = _make_claim(prior_auth_number=None)
        result = run_check(ValidationCheck.PRIOR_AUTH, claim, _make_context(reference=reference))
        assert result.status == ValidationStatus.WARNING
        assert "CO-15" in result.message

    def test_unexpected_error_fails_the_check(self):
        reference = replace(default_reference_data(), cpt_icd_mappings=None)
        result = run_check(ValidationCheck.CPT_ICD_MATCH, _make_claim(), _make_context(reference=reference))
        assert result.status == ValidationStatus.FAIL
        assert result.message.startswith("Check failed with an internal error")
