"""Tests for ICD-10 and modifier suggestions."""

from claimscrub import suggest_icd_codes, suggest_modifiers
from claimscrub.schemas import Specialty


class TestSuggestIcdCodes:
    """Tests for ranked ICD-10 suggestions."""

    def test_cpt_table_codes(self):
        suggestions = suggest_icd_codes("96413")
        assert [s.code for s in suggestions] == ["C50.911", "C34.90", "C18.9", "C61"]
        assert all(s.confidence == 0.8 for s in suggestions)
        assert suggestions[0].display == "Malignant neoplasm of unspecified site of right female breast"

    def test_patient_conditions_rank_first(self):
        """Chart conditions that support the procedure lead; others are dropped."""
        suggestions = suggest_icd_codes("96413", patient_conditions=["C50.912", "F41.1"])
        assert suggestions[0].code == "C50.912"
        assert suggestions[0].confidence == 0.95
        assert "from patient chart" in suggestions[0].display
        assert "F41.1" not in [s.code for s in suggestions]

    def test_no_duplicates(self):
        suggestions = suggest_icd_codes("96413", patient_conditions=["C50.911"])
        codes = [s.code for s in suggestions]
        assert codes.count("C50.911") == 1
        assert suggestions[0].confidence == 0.95

    def test_specialty_codes_rank_last(self):
        suggestions = suggest_icd_codes("96413", specialty=Specialty.ONCOLOGY)
        assert suggestions[-1].code == "C50.912"
        assert suggestions[-1].confidence == 0.6

    def test_unknown_cpt(self):
        assert suggest_icd_codes("99999") == []

    def test_bad_input(self):
        assert suggest_icd_codes(None) == []
        assert suggest_icd_codes("96413", patient_conditions=["not a code"])[0].code == "C50.911"


class TestSuggestModifiers:
    """Tests for modifier suggestions."""

    def test_drug_with_wastage(self):
        codes = [s.code for s in suggest_modifiers("96413", drug_code="J9271", discarded_units=20)]
        assert codes == ["JW"]

    def test_drug_without_wastage(self):
        codes = [s.code for s in suggest_modifiers("96413", drug_code="J9271", discarded_units=0)]
        assert codes == ["JZ"]

    def test_evaluation_and_management(self):
        suggestions = suggest_modifiers("99214")
        assert [s.code for s in suggestions] == ["25"]
        assert suggestions[0].display == "25 - Significant E/M"

    def test_split_billable_outside_facility(self):
        codes = [s.code for s in suggest_modifiers("76805", place_of_service="11")]
        assert codes == ["26", "TC"]

    def test_split_billable_in_facility(self):
        """A hospital bills the technical component itself."""
        codes = [s.code for s in suggest_modifiers("76805", place_of_service="22")]
        assert codes == ["26"]

    def test_anatomical(self):
        suggestions = suggest_modifiers("27447")
        assert [s.code for s in suggestions] == ["LT", "RT", "50"]
        assert suggestions[0].reason == "Knee arthroplasty requires anatomical modifier"

    def test_unknown_cpt(self):
        assert suggest_modifiers("99999") == []
        assert suggest_modifiers(None) == []
