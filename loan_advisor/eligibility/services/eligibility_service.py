# eligibility/services/eligibility_service.py
import math
import re
from dataclasses import dataclass
from typing import Tuple, Union

from eligibility.rules import MIN_AGE, get_rule, max_age_for

RawValue = Union[str, int, None]

_LEADING_INT = re.compile(r"^\s*([+-]?)([0-9]+)")

# Longer digit runs are not amounts
MAX_DIGITS = 100


@dataclass(frozen=True)
class ApplicantProfile:
    """
    Applicant answers as entered. Numeric fields keep their raw text and are
    parsed leniently at evaluation time.
    """
    age: RawValue = ""
    monthly_income: RawValue = ""
    loan_type: str = ""
    loan_amount: RawValue = ""
    existing_emis: RawValue = ""
    credit_score: RawValue = ""


@dataclass(frozen=True)
class EligibilityMetrics:
    debt_to_income_ratio: float
    max_allowed_debt_to_income_ratio: float
    suggested_max_loan: int


@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    reasons: Tuple[str, ...]
    metrics: EligibilityMetrics

    def as_dict(self):
        return {
            "eligible": self.eligible,
            "reasons": list(self.reasons),
            "metrics": {
                "debt_to_income_ratio": self.metrics.debt_to_income_ratio,
                "max_allowed_debt_to_income_ratio": self.metrics.max_allowed_debt_to_income_ratio,
                "suggested_max_loan": self.metrics.suggested_max_loan,
            },
        }


def parse_int(value: RawValue) -> int:
    """
    Lenient integer parsing. Reads an optional sign and the leading digits,
    so "12abc" is 12 and "1.9" is 1. Empty or non-numeric text is 0, and
    so is a number with more than MAX_DIGITS significant digits.

    Only base 10 is read: "0x1A" is 0, not 26.

    Zero is a valid sentinel here, not an error: the reasons produced by
    evaluate() treat a missing income exactly like a zero income.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if abs(value) < 10 ** MAX_DIGITS else 0
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > MAX_DIGITS:
        return 0
    return int(sign + digits)


def format_inr(amount: int) -> str:
    return f"₹{amount:,}"


def format_percent(ratio: float) -> str:
    # Halves round up: 0.125 is "13%"
    return f"{math.floor(ratio * 100 + 0.5)}%"


def evaluate(profile: ApplicantProfile) -> EligibilityResult:
    """
    Apply the underwriting rules for the profile's loan type.

    Never raises. Every failed check adds a reason, in this order:
    income, loan amount, age, minimum income, credit score, EMI-to-income
    ratio, requested amount against the suggested maximum.
    """
    age = parse_int(profile.age)
    income = parse_int(profile.monthly_income)
    loan_amount = parse_int(profile.loan_amount)
    existing_emis = parse_int(profile.existing_emis)
    credit_score = parse_int(profile.credit_score)

    reasons = []

    if income <= 0:
        reasons.append("Monthly income is required")
    if loan_amount <= 0:
        reasons.append("Loan amount must be greater than 0")

    max_age = max_age_for(profile.loan_type)
    if age < MIN_AGE or age > max_age:
        reasons.append(f"Age must be between {MIN_AGE} and {max_age}")

    rule = get_rule(profile.loan_type)

    if income < rule.min_income:
        loan_type_label = profile.loan_type or "selected type"
        reasons.append(
            f"Income below minimum for {loan_type_label} ({format_inr(rule.min_income)})"
        )
    if credit_score < rule.min_credit_score:
        reasons.append(f"Credit score below {rule.min_credit_score}")

    # No income is the worst case. Parsed amounts are capped at MAX_DIGITS,
    # so the quotient always fits in a float.
    dti = max(existing_emis / income, 0.0) if income > 0 else 1.0
    if dti > rule.max_debt_to_income_ratio:
        reasons.append(
            f"EMI-to-income ratio above {format_percent(rule.max_debt_to_income_ratio)}"
        )

    suggested_max_loan = income * rule.income_multiple_for_max_loan
    if loan_amount > suggested_max_loan:
        reasons.append(
            "Requested amount exceeds suggested maximum for profile "
            f"({format_inr(suggested_max_loan)})"
        )

    return EligibilityResult(
        eligible=not reasons,
        reasons=tuple(reasons),
        metrics=EligibilityMetrics(
            debt_to_income_ratio=dti,
            max_allowed_debt_to_income_ratio=rule.max_debt_to_income_ratio,
            suggested_max_loan=suggested_max_loan,
        ),
    )


def build_summary(result: EligibilityResult, loan_amount: RawValue = "") -> str:
    """
    Advisor message shown once the application has been processed.
    The suggested maximum is only quoted when a loan amount was entered.
    """
    if result.eligible:
        details = "🎉 Congratulations! You are eligible for the loan."
    else:
        details = f"❌ Not eligible currently due to: {'; '.join(result.reasons)}."

    metrics = result.metrics
    summary = (
        f"{details} (DTI: {format_percent(metrics.debt_to_income_ratio)}"
        f" / Allowed: {format_percent(metrics.max_allowed_debt_to_income_ratio)}"
    )
    if loan_amount not in (None, ""):
        summary += f" / Suggested Max Loan: {format_inr(metrics.suggested_max_loan)}"
    return summary + ")"
