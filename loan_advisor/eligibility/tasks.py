import os
import logging

import pandas as pd
from celery import shared_task
from django.conf import settings

from eligibility.services.eligibility_service import ApplicantProfile, evaluate

logger = logging.getLogger(__name__)

# Profile field -> accepted column headers
COLUMN_ALIASES = {
    "name": ("name", "Name", "Full Name"),
    "age": ("age", "Age"),
    "monthly_income": ("monthly_income", "Monthly Income", "income", "Income"),
    "loan_type": ("loan_type", "Loan Type"),
    "loan_amount": ("loan_amount", "Loan Amount"),
    "existing_emis": ("existing_emis", "Existing EMIs", "emis", "EMIs"),
    "credit_score": ("credit_score", "Credit Score"),
}


def read_profiles(file_path):
    """
    Load an applicant sheet with every cell kept as raw text, so blank cells
    reach the evaluator as empty strings.
    """
    if file_path.lower().endswith((".xlsx", ".xls")):
        return pd.read_excel(file_path, dtype=str, keep_default_na=False)
    return pd.read_csv(file_path, dtype=str, keep_default_na=False)


def row_value(row, field):
    for column in COLUMN_ALIASES[field]:
        if column in row.index:
            return row[column]
    return ""


def row_to_profile(row):
    return ApplicantProfile(
        age=row_value(row, "age"),
        monthly_income=row_value(row, "monthly_income"),
        loan_type=row_value(row, "loan_type"),
        loan_amount=row_value(row, "loan_amount"),
        existing_emis=row_value(row, "existing_emis"),
        credit_score=row_value(row, "credit_score"),
    )


@shared_task(bind=True)
def evaluate_profiles_task(self, file_path=None):
    """
    Background task to screen every applicant in a CSV or Excel sheet
    """
    if not file_path:
        file_path = os.path.join(settings.BATCH_DATA_DIR, "applicants.csv")

    if not os.path.exists(file_path):
        error_msg = f"Applicant file not found: {file_path}"
        logger.error(error_msg)
        return {"status": "error", "message": error_msg}

    try:
        df = read_profiles(file_path)
    except Exception as e:
        logger.error(f"Could not read applicant file {file_path}: {str(e)}")
        raise

    total = len(df)
    progress_every = max(settings.BATCH_PROGRESS_EVERY, 1)
    results = []
    eligible_count = 0

    for position, (_, row) in enumerate(df.iterrows(), start=1):
        result = evaluate(row_to_profile(row))
        if result.eligible:
            eligible_count += 1

        entry = {"row": position, "name": row_value(row, "name")}
        entry.update(result.as_dict())
        results.append(entry)

        # Progress is only reported when running inside a worker
        if self.request.id and position % progress_every == 0:
            self.update_state(
                state="PROGRESS",
                meta={"evaluated": position, "total": total}
            )

    summary = {
        "status": "success",
        "file": file_path,
        "total": total,
        "eligible": eligible_count,
        "ineligible": total - eligible_count,
        "results": results,
    }
    logger.info(
        f"Batch screening completed: {file_path} "
        f"(total={total}, eligible={eligible_count}, ineligible={total - eligible_count})"
    )
    return summary
