from django.core.management.base import BaseCommand, CommandError

from eligibility.tasks import evaluate_profiles_task


class Command(BaseCommand):
    help = "Screen every applicant in a CSV or Excel file using background tasks"

    def add_arguments(self, parser):
        parser.add_argument(
            '--file',
            type=str,
            default=None,
            help='Path to the CSV or Excel file containing applicant profiles '
                 '(default: applicants.csv in BATCH_DATA_DIR)'
        )
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Run synchronously instead of as background task'
        )

    def handle(self, *args, **kwargs):
        file_path = kwargs['file']
        sync = kwargs['sync']

        if file_path == '':
            raise CommandError("--file must not be empty")

        if sync:
            # Run synchronously for development/testing
            result = evaluate_profiles_task(file_path)
            if result['status'] == 'success':
                for entry in result['results']:
                    verdict = "eligible" if entry['eligible'] else "; ".join(entry['reasons'])
                    self.stdout.write(f"Row {entry['row']} {entry['name']}: {verdict}")
                self.stdout.write(
                    self.style.SUCCESS(
                        f"✅ Screened {result['total']} applicants, "
                        f"eligible: {result['eligible']}, "
                        f"ineligible: {result['ineligible']}"
                    )
                )
            else:
                self.stdout.write(
                    self.style.ERROR(f"Failed to screen applicants: {result['message']}")
                )
        else:
            # Run as background task
            task = evaluate_profiles_task.delay(file_path)
            self.stdout.write(
                self.style.SUCCESS(
                    f"✅ Applicant screening task started with ID: {task.id}"
                )
            )
