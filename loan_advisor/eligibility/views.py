import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .rules import DEFAULT_RULE, LOAN_TYPES, MIN_AGE, get_rule, max_age_for
from .serializers import (
    ApplicantProfileSerializer,
    ApplicationSerializer,
    ApplicationResponseSerializer,
    BatchEvaluationRequestSerializer,
    EligibilityResultSerializer,
    UnderwritingRuleSerializer,
)
from .services.eligibility_service import build_summary, evaluate
from .tasks import evaluate_profiles_task

logger = logging.getLogger(__name__)


@api_view(["POST"])
def check_eligibility(request):
    """
    API endpoint to evaluate a profile as entered, without completeness checks
    """
    serializer = ApplicantProfileSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    result = evaluate(serializer.to_profile())
    logger.info(
        f"Eligibility checked: eligible={result.eligible}, reasons={len(result.reasons)}"
    )
    return Response(EligibilityResultSerializer(result).data, status=status.HTTP_200_OK)


@api_view(["POST"])
def apply(request):
    """
    API endpoint for a completed application: every answer is required,
    then the profile is evaluated and summarised for the applicant
    """
    serializer = ApplicationSerializer(data=request.data)
    if not serializer.is_valid():
        logger.warning(f"Incomplete application rejected: {sorted(serializer.errors)}")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    result = evaluate(serializer.to_profile())

    response_data = {
        "name": data["name"],
        "loan_type": data["loan_type"],
        "result": result,
        "summary": build_summary(result, data["loan_amount"]),
    }
    logger.info(
        f"Application processed for {data['loan_type']}: eligible={result.eligible}"
    )
    return Response(ApplicationResponseSerializer(response_data).data, status=status.HTTP_200_OK)


@api_view(["GET"])
def loan_types(request):
    """
    API endpoint listing the underwriting rules applied per loan type
    """
    catalogue = []
    for loan_type in LOAN_TYPES:
        catalogue.append({
            "loan_type": loan_type,
            "min_age": MIN_AGE,
            "max_age": max_age_for(loan_type),
            **get_rule(loan_type).as_dict(),
        })

    default = {
        "loan_type": "Other",
        "min_age": MIN_AGE,
        "max_age": max_age_for(""),
        **DEFAULT_RULE.as_dict(),
    }

    return Response({
        "loan_types": UnderwritingRuleSerializer(catalogue, many=True).data,
        "default": UnderwritingRuleSerializer(default).data,
    }, status=status.HTTP_200_OK)


# Background task endpoints
@api_view(["POST"])
def evaluate_batch(request):
    """
    API endpoint to screen an applicant file as a background task
    """
    serializer = BatchEvaluationRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    file_path = serializer.validated_data["file_path"]

    try:
        task = evaluate_profiles_task.delay(file_path)
        return Response({
            "task_id": task.id,
            "status": "Task started",
            "message": "Applicant screening started in background"
        }, status=status.HTTP_202_ACCEPTED)
    except Exception as e:
        logger.error(f"Failed to start batch screening task: {str(e)}")
        return Response({
            "error": "Failed to start background task",
            "details": str(e)
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(["GET"])
def task_status(request, task_id):
    """
    API endpoint to check background task status
    """
    from celery.result import AsyncResult

    task_result = AsyncResult(task_id)

    response_data = {
        "task_id": task_id,
        "status": task_result.status,
        "result": task_result.result if task_result.successful() else None,
    }

    if task_result.status == "PROGRESS":
        response_data["progress"] = task_result.info
    elif task_result.failed():
        response_data["error"] = str(task_result.result)

    return Response(response_data, status=status.HTTP_200_OK)
