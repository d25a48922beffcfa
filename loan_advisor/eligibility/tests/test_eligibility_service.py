# eligibility/tests/test_eligibility_service.py
from unittest import TestCase

from eligibility.rules import DEFAULT_RULE, RULES, get_rule
from eligibility.services.eligibility_service import (
    ApplicantProfile,
    build_summary,
    evaluate,
    format_inr,
    format_percent,
    parse_int,
)


def make_profile(**overrides):
    values = {
        "age": "30",
        "monthly_income": "20000",
        "loan_type": "Personal Loan",
        "loan_amount": "100000",
        "existing_emis": "0",
        "credit_score": "750",
    }
    values.update(overrides)
    return ApplicantProfile(**values)


class ParseIntTest(TestCase):

    def test_plain_digits(self):
        self.assertEqual(parse_int("20000"), 20000)

    def test_empty_and_non_numeric_are_zero(self):
        self.assertEqual(parse_int(""), 0)
        self.assertEqual(parse_int("abc"), 0)
        self.assertEqual(parse_int("   "), 0)
        self.assertEqual(parse_int(None), 0)

    def test_reads_leading_integer_only(self):
        self.assertEqual(parse_int("12abc"), 12)
        self.assertEqual(parse_int("1.9"), 1)
        self.assertEqual(parse_int("  45 years"), 45)
        self.assertEqual(parse_int("-500"), -500)
        self.assertEqual(parse_int("20,000"), 20)

    def test_hex_is_not_read(self):
        self.assertEqual(parse_int("0x1A"), 0)

    def test_oversized_numbers_are_zero(self):
        self.assertEqual(parse_int("9" * 5000), 0)
        self.assertEqual(parse_int("9" * 101), 0)
        self.assertEqual(parse_int(10 ** 400), 0)

    def test_leading_zeros_do_not_count_as_digits(self):
        self.assertEqual(parse_int("0" * 5000 + "25"), 25)
        self.assertEqual(parse_int("9" * 100), int("9" * 100))

    def test_integers_pass_through(self):
        self.assertEqual(parse_int(750), 750)
        self.assertEqual(parse_int(True), 0)


class OversizedInputTest(TestCase):

    def test_huge_income_does_not_raise(self):
        result = evaluate(make_profile(monthly_income="9" * 5000))

        self.assertFalse(result.eligible)
        self.assertEqual(result.reasons[0], "Monthly income is required")
        self.assertEqual(result.metrics.debt_to_income_ratio, 1.0)

    def test_huge_emis_on_small_income_does_not_raise(self):
        result = evaluate(make_profile(monthly_income="1", existing_emis="1" + "0" * 400))

        self.assertEqual(result.metrics.debt_to_income_ratio, 0.0)

    def test_largest_accepted_amounts_still_summarise(self):
        result = evaluate(make_profile(monthly_income="1", existing_emis="9" * 100))

        self.assertGreater(result.metrics.debt_to_income_ratio, 1e99)
        self.assertIn("EMI-to-income ratio above 45%", result.reasons)
        self.assertTrue(build_summary(result, "100000").startswith("❌ Not eligible"))


class EvaluateScenarioTest(TestCase):

    def test_eligible_personal_loan(self):
        """
        ✅ Income 20000, personal loan of 100000, clean profile
        """
        result = evaluate(make_profile())

        self.assertTrue(result.eligible)
        self.assertEqual(result.reasons, ())
        self.assertEqual(result.metrics.suggested_max_loan, 480000)
        self.assertEqual(result.metrics.debt_to_income_ratio, 0.0)
        self.assertEqual(result.metrics.max_allowed_debt_to_income_ratio, 0.45)

    def test_income_below_minimum(self):
        """
        ❌ Income 10000 is under the personal loan minimum of 15000
        """
        result = evaluate(make_profile(monthly_income="10000", loan_amount="50000"))

        self.assertFalse(result.eligible)
        self.assertEqual(
            list(result.reasons),
            ["Income below minimum for Personal Loan (₹15,000)"]
        )

    def test_debt_to_income_exceeded(self):
        """
        ❌ Existing EMIs of 15000 on 20000 income is a 75% ratio
        """
        result = evaluate(make_profile(existing_emis="15000", loan_amount="50000"))

        self.assertFalse(result.eligible)
        self.assertEqual(result.metrics.debt_to_income_ratio, 0.75)
        self.assertEqual(list(result.reasons), ["EMI-to-income ratio above 45%"])

    def test_home_loan_age_above_maximum(self):
        """
        ❌ Home loans allow applicants up to 65
        """
        result = evaluate(make_profile(age="70", loan_type="Home Loan", monthly_income="50000"))

        self.assertFalse(result.eligible)
        self.assertEqual(list(result.reasons), ["Age must be between 21 and 65"])

    def test_home_loan_age_at_maximum_passes(self):
        result = evaluate(make_profile(age="65", loan_type="Home Loan", monthly_income="50000"))

        self.assertTrue(result.eligible)

    def test_other_loan_age_limit_is_sixty(self):
        self.assertTrue(evaluate(make_profile(age="60")).eligible)
        result = evaluate(make_profile(age="61"))
        self.assertEqual(list(result.reasons), ["Age must be between 21 and 60"])

    def test_minimum_age(self):
        self.assertTrue(evaluate(make_profile(age="21")).eligible)
        result = evaluate(make_profile(age="20"))
        self.assertEqual(list(result.reasons), ["Age must be between 21 and 60"])

    def test_all_numeric_fields_empty(self):
        """
        ❌ Empty answers parse to zero and fail every income dependent check
        """
        result = evaluate(make_profile(
            age="", monthly_income="", loan_amount="", existing_emis="", credit_score=""
        ))

        self.assertFalse(result.eligible)
        self.assertEqual(list(result.reasons), [
            "Monthly income is required",
            "Loan amount must be greater than 0",
            "Age must be between 21 and 60",
            "Income below minimum for Personal Loan (₹15,000)",
            "Credit score below 720",
            "EMI-to-income ratio above 45%",
        ])
        self.assertEqual(result.metrics.debt_to_income_ratio, 1.0)
        self.assertEqual(result.metrics.suggested_max_loan, 0)

    def test_non_numeric_income_treated_as_zero(self):
        as_text = evaluate(make_profile(monthly_income="lots"))
        as_zero = evaluate(make_profile(monthly_income="0"))

        self.assertEqual(as_text, as_zero)
        self.assertIn("Monthly income is required", as_text.reasons)

    def test_requested_amount_above_suggested_maximum(self):
        result = evaluate(make_profile(loan_amount="480001"))

        self.assertEqual(
            list(result.reasons),
            ["Requested amount exceeds suggested maximum for profile (₹480,000)"]
        )

    def test_requested_amount_at_suggested_maximum_passes(self):
        self.assertTrue(evaluate(make_profile(loan_amount="480000")).eligible)

    def test_credit_score_below_minimum(self):
        result = evaluate(make_profile(credit_score="719"))

        self.assertEqual(list(result.reasons), ["Credit score below 720"])

    def test_business_loan_rules(self):
        result = evaluate(make_profile(
            loan_type="Business Loan", monthly_income="30000", credit_score="749"
        ))

        self.assertEqual(list(result.reasons), ["Credit score below 750"])
        self.assertEqual(result.metrics.suggested_max_loan, 30000 * 48)

    def test_car_loan_ratio_at_limit_passes(self):
        result = evaluate(make_profile(loan_type="Car Loan", existing_emis="10000"))

        self.assertTrue(result.eligible)
        self.assertEqual(result.metrics.debt_to_income_ratio, 0.5)
        self.assertEqual(result.metrics.max_allowed_debt_to_income_ratio, 0.5)

    def test_blank_loan_type_named_as_selected_type(self):
        result = evaluate(make_profile(loan_type="", monthly_income="10000", loan_amount="50000"))

        self.assertIn("Income below minimum for selected type (₹15,000)", result.reasons)

    def test_reasons_keep_check_order(self):
        result = evaluate(make_profile(
            age="18", monthly_income="10000", credit_score="600",
            existing_emis="9000", loan_amount="900000"
        ))

        self.assertEqual(list(result.reasons), [
            "Age must be between 21 and 60",
            "Income below minimum for Personal Loan (₹15,000)",
            "Credit score below 720",
            "EMI-to-income ratio above 45%",
            "Requested amount exceeds suggested maximum for profile (₹240,000)",
        ])


class EvaluatePropertyTest(TestCase):

    PROFILES = [
        make_profile(),
        make_profile(monthly_income="", loan_amount=""),
        make_profile(monthly_income="-100"),
        make_profile(existing_emis="-5000"),
        make_profile(loan_type="Gold Loan", credit_score="abc"),
        make_profile(age="200", loan_type="HOME LOAN"),
        make_profile(monthly_income="9" * 5000, loan_amount="9" * 4400),
        make_profile(monthly_income="1", existing_emis="1" + "0" * 400),
        make_profile(monthly_income=" 20000 ", credit_score="750.9"),
        ApplicantProfile(),
    ]

    def test_eligible_iff_no_reasons(self):
        for profile in self.PROFILES:
            result = evaluate(profile)
            self.assertEqual(result.eligible, len(result.reasons) == 0)

    def test_ratio_is_never_negative(self):
        for profile in self.PROFILES:
            self.assertGreaterEqual(evaluate(profile).metrics.debt_to_income_ratio, 0)

    def test_ratio_is_one_without_income(self):
        for income in ("", "0", "-100", "none"):
            result = evaluate(make_profile(monthly_income=income))
            self.assertEqual(result.metrics.debt_to_income_ratio, 1.0)

    def test_idempotent(self):
        for profile in self.PROFILES:
            self.assertEqual(evaluate(profile), evaluate(profile))

    def test_loan_type_is_case_insensitive(self):
        title = evaluate(make_profile(loan_type="Personal Loan", credit_score="710"))
        lower = evaluate(make_profile(loan_type="personal loan", credit_score="710"))

        self.assertEqual(title.reasons, lower.reasons)
        self.assertEqual(title.metrics, lower.metrics)

    def test_home_loan_age_limit_is_case_insensitive(self):
        self.assertTrue(evaluate(make_profile(
            age="64", loan_type="HOME LOAN", monthly_income="50000"
        )).eligible)

    def test_unknown_loan_type_uses_default_rule(self):
        self.assertIs(get_rule("Gold Loan"), DEFAULT_RULE)
        self.assertIs(get_rule(""), DEFAULT_RULE)
        self.assertIs(get_rule(None), DEFAULT_RULE)

        result = evaluate(make_profile(loan_type="Gold Loan", credit_score="710"))
        self.assertTrue(result.eligible)
        self.assertEqual(result.metrics.suggested_max_loan, 20000 * DEFAULT_RULE.income_multiple_for_max_loan)

    def test_default_rule_mirrors_personal_loan_limits(self):
        personal = RULES["personal loan"]

        self.assertEqual(DEFAULT_RULE.min_income, personal.min_income)
        self.assertEqual(DEFAULT_RULE.max_debt_to_income_ratio, personal.max_debt_to_income_ratio)
        self.assertEqual(DEFAULT_RULE.income_multiple_for_max_loan, personal.income_multiple_for_max_loan)
        self.assertEqual(DEFAULT_RULE.min_credit_score, 700)


class SummaryTest(TestCase):

    def test_eligible_summary(self):
        result = evaluate(make_profile())

        self.assertEqual(
            build_summary(result, "100000"),
            "🎉 Congratulations! You are eligible for the loan. "
            "(DTI: 0% / Allowed: 45% / Suggested Max Loan: ₹480,000)"
        )

    def test_ineligible_summary_lists_reasons(self):
        result = evaluate(make_profile(existing_emis="15000", credit_score="700"))

        self.assertEqual(
            build_summary(result, "100000"),
            "❌ Not eligible currently due to: Credit score below 720; "
            "EMI-to-income ratio above 45%. "
            "(DTI: 75% / Allowed: 45% / Suggested Max Loan: ₹480,000)"
        )

    def test_suggested_maximum_omitted_without_loan_amount(self):
        result = evaluate(make_profile(loan_amount=""))

        self.assertTrue(build_summary(result, "").endswith("(DTI: 0% / Allowed: 45%)"))

    def test_formatting_helpers(self):
        self.assertEqual(format_inr(1500000), "₹1,500,000")
        self.assertEqual(format_percent(0.45), "45%")
        self.assertEqual(format_percent(0.125), "13%")
        self.assertEqual(format_percent(1.0), "100%")
