from django.core.management.base import BaseCommand
from evaluation_app.models import EvaluationSubmission, SubmissionKind
from evaluation_app.services.evaluation_store import recompute_all


class Command(BaseCommand):
    help = "Recompute stored results of evaluation submissions from their sections."

    def add_arguments(self, parser):
        parser.add_argument(
            "--kind",
            choices=[k.lower() for k in SubmissionKind.values],
            help="Only recompute one kind (self, peer or supervisor).",
        )

    def handle(self, *args, **options):
        qs = EvaluationSubmission.objects.all()
        if options.get("kind"):
            qs = qs.filter(kind=SubmissionKind.from_slug(options["kind"]))
        count = recompute_all(qs)
        self.stdout.write(self.style.SUCCESS(f"Recomputed {count} evaluations."))
