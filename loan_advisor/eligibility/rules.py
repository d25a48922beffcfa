# eligibility/rules.py
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class UnderwritingRule:
    """
    Underwriting policy for one loan type
    """
    min_income: int
    min_credit_score: int
    max_debt_to_income_ratio: float
    income_multiple_for_max_loan: int

    def as_dict(self):
        return asdict(self)


# Options offered by the application form
LOAN_TYPES = ("Personal Loan", "Home Loan", "Car Loan", "Business Loan")

MIN_AGE = 21
MAX_AGE = 60
MAX_AGE_HOME_LOAN = 65

# Keyed by the lower-cased loan type display name
RULES = {
    "personal loan": UnderwritingRule(
        min_income=15000, min_credit_score=720,
        max_debt_to_income_ratio=0.45, income_multiple_for_max_loan=24,
    ),
    "home loan": UnderwritingRule(
        min_income=25000, min_credit_score=700,
        max_debt_to_income_ratio=0.50, income_multiple_for_max_loan=60,
    ),
    "car loan": UnderwritingRule(
        min_income=20000, min_credit_score=700,
        max_debt_to_income_ratio=0.50, income_multiple_for_max_loan=36,
    ),
    "business loan": UnderwritingRule(
        min_income=30000, min_credit_score=750,
        max_debt_to_income_ratio=0.45, income_multiple_for_max_loan=48,
    ),
}

DEFAULT_RULE = UnderwritingRule(
    min_income=15000, min_credit_score=700,
    max_debt_to_income_ratio=0.45, income_multiple_for_max_loan=24,
)


def normalize_loan_type(loan_type) -> str:
    return str(loan_type or "").lower()


def get_rule(loan_type) -> UnderwritingRule:
    """Exact match on the lower-cased loan type, else the default rule."""
    return RULES.get(normalize_loan_type(loan_type), DEFAULT_RULE)


def max_age_for(loan_type) -> int:
    if normalize_loan_type(loan_type) == "home loan":
        return MAX_AGE_HOME_LOAN
    return MAX_AGE
