import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="EvaluationType",
            fields=[
                ("tid", models.BigAutoField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=120)),
                ("description", models.TextField(blank=True)),
                ("section_percentage", models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(0.01), django.core.validators.MaxValueValidator(100)])),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["tid"],
            },
        ),
        migrations.CreateModel(
            name="Criterion",
            fields=[
                ("cid", models.BigAutoField(primary_key=True, serialize=False)),
                ("criteria", models.TextField()),
                ("weight", models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("level", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)])),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("type", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="criteria", to="evaluation_app.evaluationtype")),
            ],
            options={
                "ordering": ["cid"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("weight__gte", 0), ("weight__lte", 100)), name="criterion_weight_0_100"),
                    models.CheckConstraint(condition=models.Q(("level__gte", 1), ("level__lte", 4)), name="criterion_level_1_4"),
                ],
            },
        ),
        migrations.CreateModel(
            name="EvaluationSubmission",
            fields=[
                ("eid", models.BigAutoField(primary_key=True, serialize=False)),
                ("kind", models.CharField(choices=[("SELF", "Self"), ("PEER", "Peer"), ("SUPERVISOR", "Supervisor")], max_length=10)),
                ("sections", models.JSONField(default=dict)),
                ("results", models.JSONField(default=dict, editable=False)),
                ("period", models.CharField(blank=True, max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("evaluation_type", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="submissions", to="evaluation_app.evaluationtype")),
                ("rater", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="evaluations_given", to=settings.AUTH_USER_MODEL)),
                ("subject", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="evaluations_received", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["created_at", "eid"],
                "indexes": [
                    models.Index(fields=["kind", "subject"], name="submission_kind_subject_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("kind", "SELF"), ("rater__isnull", True)),
                            models.Q(models.Q(("kind", "SELF"), _negated=True), ("rater__isnull", False)),
                            _connector="OR",
                        ),
                        name="submission_rater_matches_kind",
                    ),
                ],
            },
        ),
    ]
