"""Tests for each safety rule category."""

from __future__ import annotations

import pytest

from conftest import make_context, make_prescription_context
from medsafety.validation.models import PatientFactors, Severity


# ============================================================================
# AGE RULES TESTS
# ============================================================================
class TestAgeRules:
    """Tests for pediatric and geriatric rules."""

    def test_pediatric_contraindication(self):
        from medsafety.validation.categories.age_rules import pediatric_contraindication_rule

        context = make_context(
            "tetracycline",
            patient=PatientFactors(age=7),
            contraindications=("Children under 8 years",),
        )
        hits = pediatric_contraindication_rule(context)
        assert len(hits) == 1
        assert hits[0].type == "pediatric-contraindication"
        assert hits[0].severity is Severity.CRITICAL
        assert "tetracycline" in hits[0].message

    def test_pediatric_contraindication_adult_not_flagged(self):
        from medsafety.validation.categories.age_rules import pediatric_contraindication_rule

        context = make_context(
            "tetracycline",
            patient=PatientFactors(age=18),
            contraindications=("Pediatric patients",),
        )
        assert pediatric_contraindication_rule(context) == []

    def test_reye_syndrome_under_two(self):
        from medsafety.validation.categories.age_rules import reye_syndrome_rule

        context = make_context("Aspirin", patient=PatientFactors(age=1))
        hits = reye_syndrome_rule(context)
        assert [h.type for h in hits] == ["reye-syndrome-risk"]
        assert hits[0].severity is Severity.CRITICAL

    def test_reye_syndrome_not_at_two(self):
        from medsafety.validation.categories.age_rules import reye_syndrome_rule

        context = make_context("aspirin", patient=PatientFactors(age=2))
        assert reye_syndrome_rule(context) == []

    def test_beers_criteria_elderly(self):
        from medsafety.validation.categories.age_rules import beers_criteria_rule

        context = make_context("Diphenhydramine HCl", patient=PatientFactors(age=65))
        hits = beers_criteria_rule(context)
        assert len(hits) == 1
        assert hits[0].type == "beers-criteria"
        assert hits[0].severity is Severity.MAJOR

    def test_beers_criteria_younger_patient(self):
        from medsafety.validation.categories.age_rules import beers_criteria_rule

        context = make_context("diazepam", patient=PatientFactors(age=64))
        assert beers_criteria_rule(context) == []

    def test_geriatric_high_dose_morphine(self):
        from medsafety.validation.categories.age_rules import geriatric_high_dose_rule

        context = make_context(
            "morphine sulfate", "60 mg every 12 hours", patient=PatientFactors(age=80)
        )
        hits = geriatric_high_dose_rule(context)
        assert [h.type for h in hits] == ["geriatric-high-dose"]

    def test_geriatric_dose_at_limit_not_flagged(self):
        from medsafety.validation.categories.age_rules import geriatric_high_dose_rule

        context = make_context("morphine", "30 mg every 12 hours", patient=PatientFactors(age=80))
        assert geriatric_high_dose_rule(context) == []

    def test_geriatric_unparseable_dose_not_flagged(self):
        from medsafety.validation.categories.age_rules import geriatric_high_dose_rule

        context = make_context("morphine", "1 tablet twice daily", patient=PatientFactors(age=80))
        assert geriatric_high_dose_rule(context) == []


# ============================================================================
# RENAL RULES TESTS
# ============================================================================
class TestRenalRules:
    """Tests for renal dosing rules."""

    @pytest.mark.parametrize(
        "renal_function,expected",
        [
            ("mild", Severity.MAJOR),
            ("moderate", Severity.MAJOR),
            ("severe", Severity.CRITICAL),
            ("dialysis", Severity.CRITICAL),
        ],
    )
    def test_renal_adjustment_severity(self, renal_function, expected):
        from medsafety.validation.categories.renal_rules import renal_dose_adjustment_rule

        context = make_context(
            "gabapentin", patient=PatientFactors(age=50, renal_function=renal_function)
        )
        hits = renal_dose_adjustment_rule(context)
        assert len(hits) == 1
        assert hits[0].severity is expected
        assert renal_function in hits[0].message

    @pytest.mark.parametrize("renal_function", [None, "normal"])
    def test_renal_adjustment_skipped_for_normal_function(self, renal_function):
        from medsafety.validation.categories.renal_rules import renal_dose_adjustment_rule

        context = make_context(
            "gabapentin", patient=PatientFactors(age=50, renal_function=renal_function)
        )
        assert renal_dose_adjustment_rule(context) == []

    def test_metformin_contraindicated_on_dialysis(self):
        from medsafety.validation.categories.renal_rules import renal_contraindication_rule

        context = make_context(
            "metformin", patient=PatientFactors(age=50, renal_function="dialysis")
        )
        hits = renal_contraindication_rule(context)
        assert [h.type for h in hits] == ["renal-contraindication"]
        assert hits[0].severity is Severity.CRITICAL

    def test_metformin_moderate_not_contraindicated(self):
        from medsafety.validation.categories.renal_rules import renal_contraindication_rule

        context = make_context(
            "metformin", patient=PatientFactors(age=50, renal_function="moderate")
        )
        assert renal_contraindication_rule(context) == []


# ============================================================================
# HEPATIC RULES TESTS
# ============================================================================
class TestHepaticRules:
    """Tests for hepatic dosing rules."""

    def test_hepatic_adjustment_major(self):
        from medsafety.validation.categories.hepatic_rules import hepatic_dose_adjustment_rule

        context = make_context(
            "valproic acid", patient=PatientFactors(age=50, hepatic_function="mild")
        )
        hits = hepatic_dose_adjustment_rule(context)
        assert hits[0].type == "hepatic-dose-adjustment"
        assert hits[0].severity is Severity.MAJOR

    def test_hepatic_adjustment_escalates_when_severe(self):
        from medsafety.validation.categories.hepatic_rules import hepatic_dose_adjustment_rule

        context = make_context(
            "warfarin sodium", patient=PatientFactors(age=50, hepatic_function="severe")
        )
        hits = hepatic_dose_adjustment_rule(context)
        assert hits[0].severity is Severity.CRITICAL

    def test_acetaminophen_daily_limit_exceeded(self):
        from medsafety.validation.categories.hepatic_rules import hepatic_dose_limit_rule

        context = make_context(
            "acetaminophen",
            "650 mg every 6 hours",
            patient=PatientFactors(age=50, hepatic_function="moderate"),
        )
        hits = hepatic_dose_limit_rule(context)
        assert len(hits) == 1
        assert hits[0].type == "hepatic-dose-limit"
        assert hits[0].severity is Severity.CRITICAL
        assert "2600mg" in hits[0].message
        assert "2000mg" in hits[0].message

    def test_large_daily_dose_not_in_exponent_notation(self):
        from medsafety.validation.categories.hepatic_rules import hepatic_dose_limit_rule

        context = make_context(
            "acetaminophen",
            "250000 mg every 6 hours",
            patient=PatientFactors(age=50, hepatic_function="moderate"),
        )
        hits = hepatic_dose_limit_rule(context)
        assert "(1000000mg)" in hits[0].message
        assert "e+" not in hits[0].message

    def test_acetaminophen_at_limit_not_flagged(self):
        from medsafety.validation.categories.hepatic_rules import hepatic_dose_limit_rule

        context = make_context(
            "acetaminophen",
            "500 mg every 6 hours",
            patient=PatientFactors(age=50, hepatic_function="moderate"),
        )
        assert hepatic_dose_limit_rule(context) == []

    def test_acetaminophen_normal_liver_not_flagged(self):
        from medsafety.validation.categories.hepatic_rules import hepatic_dose_limit_rule

        context = make_context(
            "acetaminophen",
            "1000 mg every 4 hours",
            patient=PatientFactors(age=50, hepatic_function="normal"),
        )
        assert hepatic_dose_limit_rule(context) == []


# ============================================================================
# PREGNANCY & LACTATION RULES TESTS
# ============================================================================
class TestPregnancyRules:
    """Tests for pregnancy and breastfeeding rules."""

    def test_category_x_critical(self):
        from medsafety.validation.categories.pregnancy_rules import pregnancy_contraindicated_rule

        context = make_context("Isotretinoin", patient=PatientFactors(age=25, pregnancy=True))
        hits = pregnancy_contraindicated_rule(context)
        assert hits[0].type == "pregnancy-contraindicated"
        assert hits[0].severity is Severity.CRITICAL

    def test_category_d_major(self):
        from medsafety.validation.categories.pregnancy_rules import pregnancy_risk_rule

        context = make_context("lisinopril", patient=PatientFactors(age=25, pregnancy=True))
        hits = pregnancy_risk_rule(context)
        assert hits[0].type == "pregnancy-risk"
        assert hits[0].severity is Severity.MAJOR

    def test_not_pregnant_not_flagged(self):
        from medsafety.validation.categories.pregnancy_rules import (
            pregnancy_contraindicated_rule,
            pregnancy_risk_rule,
        )

        context = make_context("warfarin", patient=PatientFactors(age=25))
        assert pregnancy_contraindicated_rule(context) == []
        assert pregnancy_risk_rule(context) == []

    def test_breastfeeding_contraindicated(self):
        from medsafety.validation.categories.pregnancy_rules import breastfeeding_rule

        context = make_context("ciprofloxacin", patient=PatientFactors(age=30, breastfeeding=True))
        hits = breastfeeding_rule(context)
        assert hits[0].type == "breastfeeding-contraindicated"
        assert hits[0].severity is Severity.MAJOR


# ============================================================================
# WEIGHT RULES TESTS
# ============================================================================
class TestWeightRules:
    """Tests for weight-based dosing."""

    def test_enoxaparin_dose_within_tolerance(self):
        from medsafety.validation.categories.weight_rules import weight_based_dosing_rule

        context = make_context(
            "enoxaparin", "90 mg every 12 hours", patient=PatientFactors(age=50, weight=80)
        )
        assert weight_based_dosing_rule(context) == []

    def test_enoxaparin_dose_outside_tolerance(self):
        from medsafety.validation.categories.weight_rules import weight_based_dosing_rule

        context = make_context(
            "enoxaparin sodium", "40 mg once daily", patient=PatientFactors(age=50, weight=80)
        )
        hits = weight_based_dosing_rule(context)
        assert len(hits) == 1
        assert hits[0].type == "weight-based-dosing"
        assert hits[0].message == (
            "Enoxaparin dose (40mg) may not be appropriate for weight "
            "(80kg, expected ~80mg)"
        )

    def test_enoxaparin_unparseable_dose_flagged(self):
        from medsafety.validation.categories.weight_rules import weight_based_dosing_rule

        context = make_context(
            "enoxaparin", "inject as directed", patient=PatientFactors(age=50, weight=70)
        )
        assert len(weight_based_dosing_rule(context)) == 1

    def test_no_weight_skips_rule(self):
        from medsafety.validation.categories.weight_rules import weight_based_dosing_rule

        context = make_context("enoxaparin", "10 mg daily", patient=PatientFactors(age=50))
        assert weight_based_dosing_rule(context) == []


# ============================================================================
# CONDITION RULES TESTS
# ============================================================================
class TestConditionRules:
    """Tests for comorbidity rules."""

    def test_heart_failure_synonym(self):
        from medsafety.validation.categories.condition_rules import medical_condition_rule

        context = make_context(
            "verapamil ER", patient=PatientFactors(age=60, medical_conditions=("CHF NYHA II",))
        )
        hits = medical_condition_rule(context)
        assert [h.type for h in hits] == ["heart-failure-contraindication"]

    def test_asthma_with_beta_blocker(self):
        from medsafety.validation.categories.condition_rules import medical_condition_rule

        context = make_context(
            "propranolol", patient=PatientFactors(age=60, medical_conditions=("Asthma",))
        )
        hits = medical_condition_rule(context)
        assert [h.type for h in hits] == ["respiratory-contraindication"]
        assert hits[0].severity is Severity.MAJOR

    def test_diabetes_monitoring_moderate(self):
        from medsafety.validation.categories.condition_rules import medical_condition_rule

        context = make_context(
            "prednisone", patient=PatientFactors(age=60, medical_conditions=("Type 2 diabetes",))
        )
        hits = medical_condition_rule(context)
        assert hits[0].type == "diabetes-monitoring"
        assert hits[0].severity is Severity.MODERATE

    def test_alerts_follow_condition_order(self):
        from medsafety.validation.categories.condition_rules import medical_condition_rule

        context = make_context(
            "atenolol",
            patient=PatientFactors(age=60, medical_conditions=("COPD", "asthma")),
        )
        hits = medical_condition_rule(context)
        assert [h.type for h in hits] == [
            "respiratory-contraindication",
            "respiratory-contraindication",
        ]
        assert [h.metadata["condition"] for h in hits] == ["COPD", "asthma"]

    def test_no_conditions(self):
        from medsafety.validation.categories.condition_rules import medical_condition_rule

        assert medical_condition_rule(make_context("ibuprofen")) == []


# ============================================================================
# ROUTE RULES TESTS
# ============================================================================
class TestRouteRules:
    """Tests for route/form mismatch."""

    def test_iv_drug_prescribed_orally(self):
        from medsafety.validation.categories.route_rules import route_mismatch_rule

        context = make_context("vancomycin", "125 mg Oral every 6 hours", route="IV")
        hits = route_mismatch_rule(context)
        assert hits[0].type == "route-mismatch"
        assert hits[0].severity is Severity.CRITICAL
        assert "formulated for IV" in hits[0].message

    @pytest.mark.parametrize("route", ["iv", " IV ", "Iv"])
    def test_iv_route_matched_regardless_of_case_and_padding(self, route):
        from medsafety.validation.categories.route_rules import route_mismatch_rule

        context = make_context("vancomycin", "125 mg orally every 6 hours", route=route)
        hits = route_mismatch_rule(context)
        assert [h.type for h in hits] == ["route-mismatch"]
        assert f"formulated for {route.strip()}" in hits[0].message

    def test_iv_drug_given_iv(self):
        from medsafety.validation.categories.route_rules import route_mismatch_rule

        context = make_context("vancomycin", "1000 mg IV every 12 hours", route="IV")
        assert route_mismatch_rule(context) == []

    def test_oral_drug_not_flagged(self):
        from medsafety.validation.categories.route_rules import route_mismatch_rule

        context = make_context("amoxicillin", "500 mg orally", route="oral")
        assert route_mismatch_rule(context) == []


# ============================================================================
# PRESCRIPTION-LEVEL RULES TESTS
# ============================================================================
class TestPrescriptionRules:
    """Tests for polypharmacy."""

    def test_polypharmacy_elderly(self):
        from medsafety.validation.categories.prescription_rules import polypharmacy_rule

        hits = polypharmacy_rule(make_prescription_context(6, PatientFactors(age=70)))
        assert len(hits) == 1
        assert hits[0].type == "polypharmacy"
        assert hits[0].severity is Severity.MODERATE
        assert "(6)" in hits[0].message

    def test_five_items_not_flagged(self):
        from medsafety.validation.categories.prescription_rules import polypharmacy_rule

        assert polypharmacy_rule(make_prescription_context(5, PatientFactors(age=70))) == []

    def test_younger_patient_not_flagged(self):
        from medsafety.validation.categories.prescription_rules import polypharmacy_rule

        assert polypharmacy_rule(make_prescription_context(9, PatientFactors(age=50))) == []


class TestEscalation:
    """Tests for severity escalation predicates."""

    def test_renal_escalation(self):
        from medsafety.validation.escalation import renal_escalates

        assert renal_escalates("severe")
        assert renal_escalates("dialysis")
        assert not renal_escalates("moderate")
        assert not renal_escalates(None)

    def test_hepatic_escalation(self):
        from medsafety.validation.escalation import hepatic_escalates

        assert hepatic_escalates("severe")
        assert not hepatic_escalates("moderate")

    def test_is_impaired(self):
        from medsafety.validation.escalation import is_impaired

        assert is_impaired("mild")
        assert not is_impaired("normal")
        assert not is_impaired(None)
