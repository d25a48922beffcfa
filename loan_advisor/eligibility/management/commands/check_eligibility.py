import json

from django.core.management.base import BaseCommand

from eligibility.services.eligibility_service import (
    ApplicantProfile,
    build_summary,
    evaluate,
)


class Command(BaseCommand):
    help = "Evaluate loan eligibility for a single applicant profile"

    def add_arguments(self, parser):
        # Values stay raw text; the evaluator parses them leniently
        parser.add_argument('--age', type=str, default='')
        parser.add_argument('--income', type=str, default='', help='Monthly income')
        parser.add_argument('--loan-type', type=str, default='', help='e.g. "Personal Loan"')
        parser.add_argument('--loan-amount', type=str, default='')
        parser.add_argument('--emis', type=str, default='', help='Existing EMIs per month')
        parser.add_argument('--credit-score', type=str, default='')
        parser.add_argument(
            '--json',
            action='store_true',
            help='Print the full result as JSON'
        )

    def handle(self, *args, **kwargs):
        profile = ApplicantProfile(
            age=kwargs['age'],
            monthly_income=kwargs['income'],
            loan_type=kwargs['loan_type'],
            loan_amount=kwargs['loan_amount'],
            existing_emis=kwargs['emis'],
            credit_score=kwargs['credit_score'],
        )
        result = evaluate(profile)

        if kwargs['json']:
            self.stdout.write(json.dumps(result.as_dict(), ensure_ascii=False, indent=2))
            return

        summary = build_summary(result, kwargs['loan_amount'])
        if result.eligible:
            self.stdout.write(self.style.SUCCESS(summary))
        else:
            self.stdout.write(self.style.ERROR(summary))
            for reason in result.reasons:
                self.stdout.write(f"  - {reason}")
