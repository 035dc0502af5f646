from django.core.management.base import BaseCommand
from evaluation_app.models import EvaluationType

# mirrors the components of the civil-service score
DEFAULT_TYPES = [
    ("Technical", "Job-specific technical performance", 70),
    ("Behavioral - Own", "Self-assessed behavioural competencies", 5),
    ("Behavioral - Supervisor", "Supervisor-assessed behavioural competencies", 10),
    ("Team Evaluation", "Team-level rating on a 1-5 scale", 15),
]


class Command(BaseCommand):
    help = "Seed the default evaluation types."

    def handle(self, *args, **options):
        for name, description, pct in DEFAULT_TYPES:
            obj, created = EvaluationType.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "section_percentage": pct,
                },
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"✓ {name} added"))
            else:
                self.stdout.write(self.style.WARNING(f"{name} already exists"))
