from dataclasses import dataclass
from decimal import Decimal
from django.db.models import Sum
from evaluation_app.models import Criterion


def _d(x) -> Decimal:
    return Decimal(str(x))

TOTAL_WEIGHT = Decimal('100.00')


@dataclass(frozen=True)
class Allocation:
    allowed: bool
    remaining: float


def allocated_weight(type_id, *, excluding=None) -> Decimal:
    """Sum of criteria weights under `type_id`, optionally skipping one criterion."""
    qs = Criterion.objects.filter(type_id=type_id)
    if excluding is not None:
        qs = qs.exclude(pk=excluding)
    total = qs.aggregate(total=Sum("weight"))["total"]
    return _d(total or 0)


def remaining_capacity(type_id, excluding=None) -> float:
    """
    100 minus the weight already allocated under the type.

    Pass `excluding` when measuring an update so the criterion's own
    current weight is not counted against it.
    """
    return float(TOTAL_WEIGHT - allocated_weight(type_id, excluding=excluding))


def can_allocate(type_id, proposed_weight, excluding=None) -> Allocation:
    remaining = TOTAL_WEIGHT - allocated_weight(type_id, excluding=excluding)
    # boundary is inclusive: filling a type to exactly 100 is fine
    return Allocation(allowed=_d(proposed_weight) <= remaining, remaining=float(remaining))
