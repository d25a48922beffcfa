from django.urls import path
from .views import (
    check_eligibility,
    apply,
    loan_types,
    evaluate_batch,
    task_status,
)

urlpatterns = [
    path("check-eligibility/", check_eligibility, name="check-eligibility"),
    path("apply/", apply, name="apply"),
    path("loan-types/", loan_types, name="loan-types"),

    # Background task endpoints
    path("evaluate-batch/", evaluate_batch, name="evaluate-batch"),
    path("task-status/<str:task_id>/", task_status, name="task-status"),
]
