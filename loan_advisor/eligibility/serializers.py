from pathlib import Path

from django.conf import settings
from rest_framework import serializers

from .services.eligibility_service import ApplicantProfile

REQUIRED_MESSAGE = "Please fill in this field before proceeding."

MAX_ANSWER_LENGTH = 255

BATCH_FILE_EXTENSIONS = (".csv", ".xlsx", ".xls")


def raw_answer():
    return serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default="",
        trim_whitespace=False, max_length=MAX_ANSWER_LENGTH,
    )


def required_answer():
    return serializers.CharField(
        max_length=MAX_ANSWER_LENGTH,
        error_messages={
            "required": REQUIRED_MESSAGE,
            "blank": REQUIRED_MESSAGE,
            "null": REQUIRED_MESSAGE,
        }
    )


class ProfileSerializerMixin:

    def to_profile(self):
        data = self.validated_data
        return ApplicantProfile(
            age=data["age"],
            monthly_income=data["monthly_income"],
            loan_type=data["loan_type"],
            loan_amount=data["loan_amount"],
            existing_emis=data["existing_emis"],
            credit_score=data["credit_score"],
        )


class ApplicantProfileSerializer(ProfileSerializerMixin, serializers.Serializer):
    """
    Lenient profile input. Numeric answers are accepted as raw text (or
    numbers) and left for the evaluator to parse; nothing here is required.
    """
    age = raw_answer()
    monthly_income = raw_answer()
    loan_type = raw_answer()
    loan_amount = raw_answer()
    existing_emis = raw_answer()
    credit_score = raw_answer()


class ApplicationSerializer(ProfileSerializerMixin, serializers.Serializer):
    """
    Full application as submitted from the form. Every answer must be filled
    in before the profile is evaluated.
    """
    name = required_answer()
    age = required_answer()
    monthly_income = required_answer()
    loan_type = required_answer()
    loan_amount = required_answer()
    existing_emis = required_answer()
    credit_score = required_answer()
    pan_number = required_answer()


class EligibilityMetricsSerializer(serializers.Serializer):
    debt_to_income_ratio = serializers.FloatField()
    max_allowed_debt_to_income_ratio = serializers.FloatField()
    suggested_max_loan = serializers.IntegerField()


class EligibilityResultSerializer(serializers.Serializer):
    eligible = serializers.BooleanField()
    reasons = serializers.ListField(child=serializers.CharField())
    metrics = EligibilityMetricsSerializer()


class ApplicationResponseSerializer(serializers.Serializer):
    name = serializers.CharField()
    loan_type = serializers.CharField()
    result = EligibilityResultSerializer()
    summary = serializers.CharField()


class UnderwritingRuleSerializer(serializers.Serializer):
    loan_type = serializers.CharField()
    min_age = serializers.IntegerField()
    max_age = serializers.IntegerField()
    min_income = serializers.IntegerField()
    min_credit_score = serializers.IntegerField()
    max_debt_to_income_ratio = serializers.FloatField()
    income_multiple_for_max_loan = serializers.IntegerField()


class BatchEvaluationRequestSerializer(serializers.Serializer):
    """
    file_path is relative to BATCH_DATA_DIR and may not leave it
    """
    file_path = serializers.CharField(required=False, default="applicants.csv")

    def validate_file_path(self, value):
        base_dir = Path(settings.BATCH_DATA_DIR).resolve()
        resolved = (base_dir / value).resolve()
        if base_dir not in resolved.parents:
            raise serializers.ValidationError("File must be inside the batch data directory.")
        if resolved.suffix.lower() not in BATCH_FILE_EXTENSIONS:
            raise serializers.ValidationError("Only CSV and Excel files can be screened.")
        return str(resolved)
