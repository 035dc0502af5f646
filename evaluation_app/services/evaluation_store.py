import logging
import uuid
from collections.abc import Mapping

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from evaluation_app.models import EvaluationSubmission, EvaluationType, SubmissionKind
from evaluation_app.services.criteria_catalog import TYPE_NOT_FOUND

logger = logging.getLogger(__name__)
User = get_user_model()

SUBMISSION_NOT_FOUND = "Evaluation not found"
PERIOD_MAX_LENGTH = EvaluationSubmission._meta.get_field("period").max_length


# ---- helpers ------------------------------------------------------------
def _user(raw, label):
    try:
        user_id = raw if isinstance(raw, uuid.UUID) else uuid.UUID(str(raw))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f"{label} must be a valid user id")
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist:
        raise NotFound(f"{label} not found")


def _evaluation_type(type_id):
    if type_id is None:
        return None
    try:
        return EvaluationType.objects.get(pk=type_id)
    except (EvaluationType.DoesNotExist, ValueError, TypeError):
        raise NotFound(TYPE_NOT_FOUND)


def _check_sections(sections):
    if not isinstance(sections, Mapping):
        raise ValidationError("sections must be an object")
    return dict(sections)


# ---- operations ---------------------------------------------------------
def get_submission(kind, eid) -> EvaluationSubmission:
    try:
        return (EvaluationSubmission.objects
                .select_related("subject", "rater", "evaluation_type")
                .get(pk=eid, kind=kind))
    except (EvaluationSubmission.DoesNotExist, ValueError, TypeError):
        raise NotFound(SUBMISSION_NOT_FOUND)


def list_by_subject(kind, subject_id):
    return (EvaluationSubmission.objects
            .filter(kind=kind, subject_id=subject_id)
            .select_related("rater", "evaluation_type")
            .order_by("created_at", "eid"))


def submit(kind, *, subject_id, sections, period="", rater_id=None, type_id=None) -> EvaluationSubmission:
    """
    Score `sections` and store inputs and results as one row.

    PEER and SUPERVISOR submissions need a rater distinct from the subject;
    SELF submissions must not name one. Any scoring error aborts before the
    insert.
    """
    kind = SubmissionKind(kind)
    sections = _check_sections(sections)
    subject = _user(subject_id, "user_id")

    rater = None
    if kind.needs_rater:
        if rater_id is None:
            raise ValidationError(f"rater_id is required for {kind.label.lower()} evaluations")
        rater = _user(rater_id, "rater_id")
        if rater.pk == subject.pk:
            raise ValidationError("rater_id must differ from user_id")
    elif rater_id is not None and str(rater_id) != str(subject.pk):
        raise ValidationError("rater_id is not accepted for self evaluations")

    period = period or ""
    if len(period) > PERIOD_MAX_LENGTH:
        raise ValidationError(f"period must be at most {PERIOD_MAX_LENGTH} characters")

    evaluation_type = _evaluation_type(type_id)

    with transaction.atomic():
        submission = EvaluationSubmission(
            kind=kind,
            subject=subject,
            rater=rater,
            evaluation_type=evaluation_type,
            sections=sections,
            period=period,
        )
        submission.save()

    logger.info(
        "%s evaluation %s stored for %s (overall=%s)",
        kind.label, submission.pk, subject.pk, submission.results["overallResult"],
    )
    return submission


def update(kind, eid, sections) -> EvaluationSubmission:
    """Replace sections and recompute results in one write."""
    sections = _check_sections(sections)

    with transaction.atomic():
        try:
            submission = EvaluationSubmission.objects.select_for_update().get(pk=eid, kind=kind)
        except (EvaluationSubmission.DoesNotExist, ValueError, TypeError):
            raise NotFound(SUBMISSION_NOT_FOUND)

        if submission.evaluation_type_id is not None:
            _evaluation_type(submission.evaluation_type_id)

        submission.sections = sections
        submission.save(update_fields=["sections", "updated_at"])

    logger.info("%s evaluation %s rescored (overall=%s)",
                SubmissionKind(kind).label, submission.pk, submission.results["overallResult"])
    return submission


def delete(kind, eid) -> None:
    try:
        deleted, _ = EvaluationSubmission.objects.filter(pk=eid, kind=kind).delete()
    except (ValueError, TypeError):
        deleted = 0
    if not deleted:
        raise NotFound(SUBMISSION_NOT_FOUND)
    logger.info("%s evaluation %s deleted", SubmissionKind(kind).label, eid)


def recompute_all(queryset=None) -> int:
    """
    Re-derive stored results, e.g. after a change to the scoring rules.
    All or nothing: one row with unscorable sections rolls the batch back.
    """
    qs = queryset if queryset is not None else EvaluationSubmission.objects.all()
    count = 0
    with transaction.atomic():
        for submission in qs.iterator():
            submission.save(update_fields=["sections", "updated_at"])
            count += 1
    logger.info("Recomputed results for %s evaluations", count)
    return count
