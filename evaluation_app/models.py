from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db.models import Q
from evaluation_app.exceptions import ScoreInputError
from evaluation_app.services.score_math import compute_civil_service_score

# ── Lookup / Enum helpers ────────────────────────────────────────────────

class SubmissionKind(models.TextChoices):
    SELF       = "SELF",       "Self"
    PEER       = "PEER",       "Peer"
    SUPERVISOR = "SUPERVISOR", "Supervisor"

    @classmethod
    def from_slug(cls, slug):
        """URL segment (`self`, `peer`, `supervisor`) -> kind, or None."""
        value = str(slug or "").upper()
        return cls(value) if value in cls.values else None

    @property
    def needs_rater(self):
        return self != SubmissionKind.SELF


# ── Reference data ───────────────────────────────────────────────────────
class EvaluationType(models.Model):
    tid                = models.BigAutoField(primary_key=True)
    name               = models.CharField(max_length=120)
    description        = models.TextField(blank=True)
    section_percentage = models.DecimalField(
        max_digits=5, decimal_places=2,
        validators=[MinValueValidator(0.01), MaxValueValidator(100)],
    )
    created_at         = models.DateTimeField(default=timezone.now)
    updated_at         = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["tid"]

    def __str__(self):
        return self.name


class Criterion(models.Model):
    cid        = models.BigAutoField(primary_key=True)
    type       = models.ForeignKey(EvaluationType, on_delete=models.PROTECT, related_name="criteria")
    criteria   = models.TextField()
    weight     = models.DecimalField(
        max_digits=5, decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    level      = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(4)],
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["cid"]
        constraints = [
            models.CheckConstraint(condition=Q(weight__gte=0) & Q(weight__lte=100), name="criterion_weight_0_100"),
            models.CheckConstraint(condition=Q(level__gte=1) & Q(level__lte=4), name="criterion_level_1_4"),
        ]

    def __str__(self):
        return f"{self.criteria} ({self.weight}%)"


# ── Evaluations ──────────────────────────────────────────────────────────
class EvaluationSubmission(models.Model):
    """
    One rater's scored evaluation of a subject for a period.

    `results` is derived from `sections` on every save();
    callers never write it directly.
    """
    eid             = models.BigAutoField(primary_key=True)
    kind            = models.CharField(max_length=10, choices=SubmissionKind.choices)
    subject         = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="evaluations_received")
    rater           = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name="evaluations_given")
    evaluation_type = models.ForeignKey(EvaluationType, on_delete=models.PROTECT, null=True, blank=True, related_name="submissions")
    sections        = models.JSONField(default=dict)
    results         = models.JSONField(default=dict, editable=False)
    period          = models.CharField(max_length=20, blank=True)   # e.g. '2025-H1'
    created_at      = models.DateTimeField(default=timezone.now)
    updated_at      = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "eid"]
        indexes = [
            models.Index(fields=["kind", "subject"], name="submission_kind_subject_idx"),
        ]
        constraints = [
            # SELF rows carry no rater, PEER / SUPERVISOR rows always do
            models.CheckConstraint(
                condition=(Q(kind=SubmissionKind.SELF, rater__isnull=True)
                       | (~Q(kind=SubmissionKind.SELF) & Q(rater__isnull=False))),
                name="submission_rater_matches_kind",
            ),
        ]

    def clean(self):
        super().clean()
        try:
            compute_civil_service_score(self.sections)
        except ScoreInputError as exc:
            raise ValidationError({"sections": str(exc.detail)})

    def save(self, *args, **kwargs):
        # results always follow sections; a bad rating aborts before any write
        self.results = compute_civil_service_score(self.sections)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "sections" in update_fields:
            kwargs["update_fields"] = set(update_fields) | {"results"}
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.get_kind_display()} evaluation #{self.pk} of {self.subject_id}"
