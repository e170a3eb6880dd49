"""Tests for the scoring engine.

Covers BMI, the additive cardiovascular score, phenotypic age and FINDRISC.
"""

import pytest

from core.types import RiskScore
from scores import (
    ascvd_level,
    ascvd_risk,
    bmi,
    findrisc,
    findrisc_level,
    phenotypic_age,
    round1,
)


# ============================================================================
# Helpers
# ============================================================================


class TestRound1:
    """Test half-up rounding to one decimal."""

    def test_rounds_half_up(self):
        """0.25 goes up, unlike round()."""
        assert round1(0.25) == 0.3
        assert round1(22.85) == 22.9

    def test_rounds_down_below_half(self):
        """Test values below the midpoint round down."""
        assert round1(22.84) == 22.8

    def test_huge_value_not_rounded(self):
        """Test values that overflow when scaled are returned as is."""
        assert round1(1.7e308) == 1.7e308


# ============================================================================
# BMI Tests
# ============================================================================


class TestBMI:
    """Test BMI calculator."""

    def test_reference_value(self):
        """70 kg at 175 cm is 22.9."""
        assert bmi(70, 175) == pytest.approx(22.9, abs=0.05)

    def test_rounded_to_one_decimal(self):
        """Test result carries one decimal place."""
        assert bmi(68, 165) == 25.0

    def test_zero_height_returns_none(self):
        """Test non-positive height is not computable."""
        assert bmi(70, 0) is None
        assert bmi(70, -170) is None

    def test_missing_inputs_return_none(self):
        """Test missing or non-numeric inputs."""
        assert bmi(None, 175) is None
        assert bmi(70, None) is None
        assert bmi("heavy", 175) is None

    def test_numeric_strings_accepted(self):
        """Test values coming from text fields."""
        assert bmi("70", "175") == 22.9

    def test_non_finite_inputs_return_none(self):
        """Test infinite and NaN inputs are not computable."""
        assert bmi("inf", 175) is None
        assert bmi(70, float("inf")) is None
        assert bmi(float("nan"), 175) is None

    def test_overflowing_quotient_returns_none(self):
        """Test a quotient too large for a float."""
        assert bmi(1e308, 1) is None

    def test_idempotent(self):
        """Same input, same output."""
        assert bmi(70, 175) == bmi(70, 175)


# ============================================================================
# Cardiovascular Tests
# ============================================================================


class TestASCVD:
    """Test the simplified additive cardiovascular score."""

    def test_reference_case(self):
        """60-year-old man: 10 + 0.2 + 0.5 + 0.4 = 11.1, Moderate."""
        r = ascvd_risk(60, "male", cholesterol=220, hdl=40, systolic_bp=140, diabetes=False, smoker=False)
        assert r == RiskScore(11.1, "Moderate")

    def test_female_age_weight(self):
        """Test the 0.4 age factor for women."""
        r = ascvd_risk(60, "female", cholesterol=200, hdl=50, systolic_bp=120)
        assert r.value == 8.0
        assert r.level == "Moderate"

    def test_flat_additions(self):
        """Test +3 for diabetes and +2 for smoking."""
        base = ascvd_risk(50, "male", 180, 60, 110)
        both = ascvd_risk(50, "male", 180, 60, 110, diabetes=True, smoker=True)
        assert base.value == 5.0
        assert both.value == 10.0

    def test_young_age_clamped_at_zero(self):
        """Negative age contribution is clamped at the end."""
        r = ascvd_risk(20, "male", 180, 60, 110)
        assert r.value == 0.0
        assert r.level == "Low"

    def test_clamped_at_fifty(self):
        """Test the upper clamp."""
        r = ascvd_risk(120, "male", 400, 10, 220, diabetes=True, smoker=True)
        assert r.value == 50.0
        assert r.level == "High"

    def test_missing_labs_skip_terms(self):
        """Missing cholesterol, HDL and BP add nothing."""
        r = ascvd_risk(60, "male")
        assert r.value == 10.0

    def test_missing_age_returns_none(self):
        """Test no score without an age."""
        assert ascvd_risk(None, "male", 220, 40, 140) is None

    def test_level_thresholds_exclusive(self):
        """Thresholds are exclusive lower bounds, High checked first."""
        assert ascvd_level(20.0) == "Moderate"
        assert ascvd_level(20.01) == "High"
        assert ascvd_level(7.5) == "Low"
        assert ascvd_level(7.51) == "Moderate"
        assert ascvd_level(50) == "High"

    def test_idempotent(self):
        """Same input, same output."""
        args = dict(age=60, gender="male", cholesterol=220, hdl=40, systolic_bp=140)
        assert ascvd_risk(**args) == ascvd_risk(**args)


# ============================================================================
# Phenotypic Age Tests
# ============================================================================


class TestPhenotypicAge:
    """Test biological age estimate."""

    def test_reference_case(self):
        """50 + 2.5 + 5 + 3 + 1 = 61.5."""
        assert phenotypic_age(50, 3.5, 1.5, 130, 5) == pytest.approx(61.5)

    def test_healthy_labs_no_adjustment(self):
        """Test labs inside their ranges add nothing."""
        assert phenotypic_age(45, 4.2, 0.9, 92, 1.8) == 45

    def test_missing_labs_skipped(self):
        """Test absent labs add nothing."""
        assert phenotypic_age(40) == 40
        assert phenotypic_age(40, albumin=3.0) == pytest.approx(45.0)

    def test_zero_lab_treated_as_not_measured(self):
        """A zero albumin is not a 20-year penalty."""
        assert phenotypic_age(40, albumin=0) == 40

    def test_not_rounded(self):
        """Test float precision is preserved."""
        assert phenotypic_age(40, glucose=101.5) == pytest.approx(40.15)

    def test_missing_age_returns_none(self):
        """Test no estimate without an age."""
        assert phenotypic_age(None, 3.5) is None

    def test_non_finite_age_returns_none(self):
        """Test an infinite age gives no estimate."""
        assert phenotypic_age("inf") is None
        assert phenotypic_age(float("-inf"), 3.5) is None

    def test_non_finite_lab_skipped(self):
        """Test an infinite lab value counts as not measured."""
        assert phenotypic_age(50, creatinine=float("inf")) == 50

    def test_idempotent(self):
        """Same input, same output."""
        args = (50, 3.5, 1.5, 130, 5)
        assert phenotypic_age(*args) == phenotypic_age(*args)


# ============================================================================
# FINDRISC Tests
# ============================================================================


class TestFINDRISC:
    """Test FINDRISC diabetes score."""

    def test_reference_case(self):
        """3 + 3 + 3 + 2 + 5 + 5 = 21, Very high."""
        r = findrisc(50, 31, 90, 2, True, 110)
        assert r.value == 21
        assert r.level == "Very high"

    @pytest.mark.parametrize("age,points", [
        (44, 0), (45, 2), (54, 2), (55, 3), (64, 3), (65, 4), (90, 4),
    ])
    def test_age_brackets_lower_inclusive(self, age, points):
        """Test bracket edges use the lower-inclusive bracket."""
        assert findrisc(age).value == points

    @pytest.mark.parametrize("b,points", [(24.9, 0), (25, 1), (29.9, 1), (30, 3)])
    def test_bmi_points(self, b, points):
        """Test BMI brackets."""
        assert findrisc(30, b).value == points

    def test_waist_double_threshold(self):
        """Both cut-offs apply regardless of gender."""
        assert findrisc(30, waist=80).value == 0
        assert findrisc(30, waist=90).value == 3
        assert findrisc(30, waist=95).value == 6
        assert findrisc(30, waist=95, gender="female").value == 6

    def test_sex_specific_waist_option(self):
        """Test the single gender-matched cut-off when enabled."""
        assert findrisc(30, waist=90, gender="male", sex_specific_waist=True).value == 0
        assert findrisc(30, waist=95, gender="male", sex_specific_waist=True).value == 3
        assert findrisc(30, waist=85, gender="female", sex_specific_waist=True).value == 3

    def test_sex_specific_without_gender_falls_back(self):
        """Unknown gender keeps the literal behavior."""
        assert findrisc(30, waist=95, sex_specific_waist=True).value == 6

    def test_exercise_family_glucose(self):
        """Test the remaining point sources."""
        assert findrisc(30, exercise_frequency=3).value == 2
        assert findrisc(30, exercise_frequency=4).value == 0
        assert findrisc(30, family_diabetes=True).value == 5
        assert findrisc(30, glucose=100).value == 0
        assert findrisc(30, glucose=101).value == 5

    def test_missing_everything_is_low(self):
        """Missing inputs contribute nothing."""
        assert findrisc(None) == RiskScore(0, "Low")

    def test_non_finite_inputs_contribute_nothing(self):
        """Test infinite values count as not measured."""
        assert findrisc("inf", float("inf"), float("inf"), float("-inf"), glucose="inf").value == 0

    def test_idempotent(self):
        """Same input, same output."""
        args = (50, 31, 90, 2, True, 110)
        assert findrisc(*args) == findrisc(*args)

    @pytest.mark.parametrize("points,level", [
        (6, "Low"), (7, "Slightly elevated"), (11, "Slightly elevated"),
        (12, "Moderate"), (14, "Moderate"), (15, "High"), (19, "High"), (20, "Very high"),
    ])
    def test_levels(self, points, level):
        """Test ascending exclusive upper bounds."""
        assert findrisc_level(points) == level
