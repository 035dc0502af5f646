import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from evaluation_app.exceptions import CapacityExceeded
from evaluation_app.models import Criterion, EvaluationType
from evaluation_app.services.weight_ledger import can_allocate

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
REQUIRED_FIELDS = ("tid", "criteria", "weight", "level")

TYPE_NOT_FOUND = "Invalid tid: type not found"
CRITERION_NOT_FOUND = "Criteria not found"


@dataclass
class CriterionValues:
    tid: int
    criteria: str
    weight: Decimal
    level: int


# ---- parsing ------------------------------------------------------------
def _as_int(raw, field) -> int:
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not value.is_finite() or value != value.to_integral_value():
        raise ValidationError(f"{field} must be a whole number")
    return int(value)


def _as_weight(raw) -> Decimal:
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("weight must be a number")
    if not value.is_finite():
        raise ValidationError("weight must be a number")
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_criterion_values(data) -> CriterionValues:
    """
    Field checks in a fixed order: presence, weight range, level range.
    Type existence and capacity are checked later under the type lock.
    """
    missing = [f for f in REQUIRED_FIELDS if data.get(f) is None or str(data.get(f)).strip() == ""]
    if missing:
        raise ValidationError("tid, criteria, weight, and level are required")

    tid = _as_int(data["tid"], "tid")
    weight = _as_weight(data["weight"])
    level = _as_int(data["level"], "level")

    if not Decimal(0) <= weight <= Decimal(100):
        raise ValidationError("weight must be between 0 and 100")
    if not 1 <= level <= 4:
        raise ValidationError("level must be between 1 and 4")

    return CriterionValues(tid=tid, criteria=str(data["criteria"]).strip(), weight=weight, level=level)


# ---- locking / guard ----------------------------------------------------
def _lock_types(*type_ids):
    """
    Row-lock the given types (in pk order) for the rest of the transaction.
    Concurrent criteria writes on the same type queue up here, so the
    capacity check and the write that follows cannot interleave.
    """
    ids = sorted(set(t for t in type_ids if t is not None))
    return {t.tid: t for t in EvaluationType.objects.select_for_update().filter(tid__in=ids).order_by("tid")}


def _guard_capacity(tid, weight, *, excluding=None):
    allocation = can_allocate(tid, weight, excluding=excluding)
    if not allocation.allowed:
        logger.info(
            "Rejected weight %s for type %s (remaining %.2f)", weight, tid, allocation.remaining
        )
        raise CapacityExceeded(allocation.remaining, excluding_row=excluding is not None)
    return allocation


# ---- operations ---------------------------------------------------------
def get_criterion(cid) -> Criterion:
    try:
        return Criterion.objects.select_related("type").get(pk=cid)
    except (Criterion.DoesNotExist, ValueError, TypeError):
        raise NotFound(CRITERION_NOT_FOUND)


def list_criteria(tid=None):
    qs = Criterion.objects.select_related("type").order_by("cid")
    if tid is not None:
        qs = qs.filter(type_id=tid)
    return qs


def create_criterion(data) -> Criterion:
    values = validate_criterion_values(data)

    with transaction.atomic():
        types = _lock_types(values.tid)
        if values.tid not in types:
            raise NotFound(TYPE_NOT_FOUND)
        _guard_capacity(values.tid, values.weight)

        criterion = Criterion.objects.create(
            type=types[values.tid],
            criteria=values.criteria,
            weight=values.weight,
            level=values.level,
        )

    logger.info("Criterion %s created under type %s (weight=%s)", criterion.pk, values.tid, values.weight)
    return criterion


def update_criterion(cid, data) -> Criterion:
    """
    Omitted fields fall back to the stored row before validation, so a
    partial update is checked as a whole. Capacity is measured without the
    criterion's own current weight.
    """
    with transaction.atomic():
        try:
            current = Criterion.objects.select_for_update().get(pk=cid)
        except (Criterion.DoesNotExist, ValueError, TypeError):
            raise NotFound(CRITERION_NOT_FOUND)

        merged = {
            "tid": current.type_id,
            "criteria": current.criteria,
            "weight": current.weight,
            "level": current.level,
        }
        merged.update({k: v for k, v in data.items() if k in REQUIRED_FIELDS and v is not None})
        values = validate_criterion_values(merged)

        types = _lock_types(values.tid, current.type_id)
        if values.tid not in types:
            raise NotFound(TYPE_NOT_FOUND)
        _guard_capacity(values.tid, values.weight, excluding=current.pk)

        current.type = types[values.tid]
        current.criteria = values.criteria
        current.weight = values.weight
        current.level = values.level
        current.save()

    logger.info("Criterion %s updated (type=%s, weight=%s)", current.pk, values.tid, values.weight)
    return current


def delete_criterion(cid) -> None:
    try:
        deleted, _ = Criterion.objects.filter(pk=cid).delete()
    except (ValueError, TypeError):
        deleted = 0
    if not deleted:
        raise NotFound(CRITERION_NOT_FOUND)
    logger.info("Criterion %s deleted", cid)
