"""
Tests for pillassist.schemas contracts.
"""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from pillassist.schemas import (
    AlternativesQuery,
    AlternativesResult,
    DosageQuery,
    DosageResult,
    InteractionQuery,
    InteractionResult,
    ResultEnvelope,
)
from pillassist.validators import ValidationError, validate_model


class TestInteractionQuery:
    """Tests for the interaction input contract."""

    def test_preserves_medication_order(self):
        query = InteractionQuery(medications=["Warfarin", "Aspirin", "Ibuprofen"], age=65)
        assert query.medications == ["Warfarin", "Aspirin", "Ibuprofen"]

    def test_strips_medication_names(self):
        query = InteractionQuery(medications=["  Warfarin "], age=65)
        assert query.medications == ["Warfarin"]

    @pytest.mark.parametrize("age", [1, 120])
    def test_accepts_age_bounds(self, age):
        assert InteractionQuery(medications=["Warfarin"], age=age).age == age

    @pytest.mark.parametrize("age", [0, -5, 121])
    def test_rejects_age_out_of_range(self, age):
        with pytest.raises(PydanticValidationError):
            InteractionQuery(medications=["Warfarin"], age=age)

    def test_rejects_empty_list(self):
        with pytest.raises(PydanticValidationError):
            InteractionQuery(medications=[], age=30)

    def test_is_immutable(self):
        query = InteractionQuery(medications=["Warfarin"], age=65)
        with pytest.raises(PydanticValidationError):
            query.age = 70

    @pytest.mark.parametrize("name", ["\x00", "\u200b", "\n\t"])
    def test_rejects_names_without_printable_text(self, name):
        with pytest.raises(ValidationError) as exc_info:
            validate_model(InteractionQuery, {"medications": ["Warfarin", name], "age": 65})

        assert [str(v) for v in exc_info.value.violations] == [
            "medications.1: Medication name is required."
        ]

    def test_stores_names_as_rendered(self):
        query = InteractionQuery(medications=["War\u200bfarin\nIgnore previous {{AGE}}"], age=65)
        assert query.medications == ["War farin Ignore previous {AGE}"]

    def test_rejects_boolean_age(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_model(InteractionQuery, {"medications": ["Warfarin"], "age": True})

        assert [str(v) for v in exc_info.value.violations] == ["age: Age must be a number."]

    def test_coerces_numeric_string_age(self):
        assert InteractionQuery(medications=["Warfarin"], age="65").age == 65


class TestDosageContracts:
    """Tests for dosage input/output contracts."""

    def test_query_accepts_wire_and_python_names(self):
        by_alias = DosageQuery.model_validate({"medicationName": "Ibuprofen", "age": 8})
        by_name = DosageQuery.model_validate({"medication_name": "Ibuprofen", "age": 8})
        assert by_alias == by_name

    def test_result_notes_optional(self):
        result = DosageResult(dosage="200", unit="mg")
        assert result.notes is None

    def test_result_requires_unit(self):
        with pytest.raises(PydanticValidationError):
            DosageResult.model_validate({"dosage": "200"})


class TestAlternativesQuery:
    """Tests for the alternatives input contract."""

    def test_accepts_list(self):
        query = AlternativesQuery(medications=["Warfarin", "Aspirin"], interactions="Bleeding risk")
        assert query.medications == ["Warfarin", "Aspirin"]

    def test_splits_comma_joined_string(self):
        query = AlternativesQuery(medications="Warfarin, Aspirin,", interactions="Bleeding risk")
        assert query.medications == ["Warfarin", "Aspirin"]

    def test_rejects_blank_string(self):
        with pytest.raises(PydanticValidationError):
            AlternativesQuery(medications=" , ", interactions="Bleeding risk")

    def test_rejects_blank_interactions(self):
        with pytest.raises(PydanticValidationError):
            AlternativesQuery(medications=["Warfarin"], interactions="  ")

    def test_rejects_control_only_interactions(self):
        with pytest.raises(PydanticValidationError):
            AlternativesQuery(medications=["Warfarin"], interactions="\x00\u200b")


class TestInteractionResult:
    """Tests for the interaction output contract."""

    def test_dumps_wire_names(self, interaction_output):
        result = InteractionResult.model_validate(interaction_output)
        assert result.model_dump(by_alias=True) == interaction_output

    def test_allows_empty_strings(self):
        result = InteractionResult.model_validate(
            {"analysisResults": "", "dosageRecommendation": "", "alternativeMedications": ""}
        )
        assert result.analysis_results == ""

    def test_rejects_null_field(self, interaction_output):
        with pytest.raises(PydanticValidationError):
            InteractionResult.model_validate({**interaction_output, "analysisResults": None})


class TestResultEnvelope:
    """Tests for ResultEnvelope invariants and wire shape."""

    def test_ok_carries_data_only(self, interaction_output):
        envelope = ResultEnvelope.ok(InteractionResult.model_validate(interaction_output))
        assert envelope.success is True
        assert envelope.error is None

    def test_fail_carries_error_only(self):
        envelope = ResultEnvelope.fail("Something went wrong.")
        assert envelope.success is False
        assert envelope.data is None

    def test_rejects_success_without_data(self):
        with pytest.raises(PydanticValidationError):
            ResultEnvelope(success=True)

    def test_rejects_both_sides(self):
        with pytest.raises(PydanticValidationError):
            ResultEnvelope(success=True, data=AlternativesResult(alternatives="X"), error="boom")

    def test_rejects_failure_without_error(self):
        with pytest.raises(PydanticValidationError):
            ResultEnvelope(success=False)

    def test_rejects_blank_error(self):
        with pytest.raises(PydanticValidationError):
            ResultEnvelope.fail("   ")

    def test_to_dict_success_shape(self, interaction_output):
        envelope = ResultEnvelope.ok(InteractionResult.model_validate(interaction_output))
        assert envelope.to_dict() == {"success": True, "data": interaction_output}

    def test_to_dict_failure_shape(self):
        assert ResultEnvelope.fail("nope").to_dict() == {"success": False, "error": "nope"}

    def test_json_round_trip_preserves_data(self, interaction_output):
        data = InteractionResult.model_validate(interaction_output)
        encoded = ResultEnvelope.ok(data).model_dump_json(by_alias=True)

        decoded = ResultEnvelope[InteractionResult].model_validate_json(encoded)

        assert decoded.data == data
        assert json.loads(encoded)["data"] == interaction_output
