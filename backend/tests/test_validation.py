"""
PlantPlan Backend - Validation and Predicate Unit Tests
=======================================================

What:  validate_plan() and the match predicates used by the in-memory store.
"""

import pytest

from app.exceptions import ValidationError
from app.schemas.plan import PlanInput
from app.services.plan_store import (
    find_invalid_fields,
    matches_exact,
    matches_substring,
    validate_plan,
)


class TestValidatePlan:

    def test_valid_plan_passes(self, tomato_input):
        validate_plan(tomato_input)

    def test_optional_fields_not_required(self, make_input):
        validate_plan(make_input(watering_freq=None, notes=""))

    @pytest.mark.parametrize("blank", ["", " ", "\t\n", None])
    def test_blank_name_rejected(self, make_input, blank):
        with pytest.raises(ValidationError, match="name"):
            validate_plan(make_input(name=blank))

    def test_empty_input_lists_all_required_fields(self):
        assert find_invalid_fields(PlanInput()) == ["name", "plantingSeason", "sunlightNeeds"]

    def test_error_carries_fields_in_context(self, make_input):
        with pytest.raises(ValidationError) as exc_info:
            validate_plan(make_input(sunlight_needs=" "))

        assert exc_info.value.fields == ["sunlightNeeds"]
        assert exc_info.value.context["fields"] == ["sunlightNeeds"]

    def test_input_accepts_wire_names(self):
        plan = PlanInput.model_validate(
            {"name": "Kale", "plantingSeason": "Autumn", "sunlightNeeds": "Full Sun"}
        )

        assert plan.planting_season == "Autumn"
        assert find_invalid_fields(plan) == []


class TestPredicates:

    def test_exact_match(self):
        assert matches_exact("Spring", "Spring")
        assert not matches_exact("Spring", "spring")
        assert not matches_exact("Spring ", "Spring")
        assert not matches_exact(None, "Spring")

    def test_substring_match_ignores_case(self):
        assert matches_substring("Tomato", "tom")
        assert matches_substring("tomato seedling", "TOM")
        assert not matches_substring("Basil", "tom")

    def test_substring_on_missing_value(self):
        assert not matches_substring(None, "weekly")
        assert not matches_substring("", "weekly")
        assert matches_substring(None, "")
