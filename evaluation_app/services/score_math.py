import math
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Tuple

from evaluation_app.exceptions import InvalidLevel, InvalidTeamScore


def _d(x) -> Decimal:
    return Decimal(str(x))

def _round2(x: float | Decimal) -> float:
    return float(_d(x).quantize(CENT, rounding=ROUND_HALF_UP))

CENT = Decimal('0.01')

# (section key, weight %) per group; each group's weights sum to 100
TECHNICAL_WEIGHTS: Tuple[Tuple[str, int], ...] = (
    ("a1", 25), ("a2", 25), ("a3", 10), ("a4", 10), ("a5", 20), ("a6", 10),
)
BEHAVIORAL_PATTERN = (25, 20, 15, 15, 15, 10)
OWN_WEIGHTS = tuple((f"b1_{i}", w) for i, w in enumerate(BEHAVIORAL_PATTERN, start=1))
SUPERVISOR_WEIGHTS = tuple((f"b2_{i}", w) for i, w in enumerate(BEHAVIORAL_PATTERN, start=1))
TEAM_KEY = "team"

# share of the overall result carried by each component
TECHNICAL_SHARE  = 70
OWN_SHARE        = 5
SUPERVISOR_SHARE = 10
TEAM_SHARE       = 15

LEVEL_MIN, LEVEL_MAX = 1, 4
TEAM_MIN, TEAM_MAX   = 1, 5

SECTION_KEYS = tuple(
    key for key, _ in TECHNICAL_WEIGHTS + OWN_WEIGHTS + SUPERVISOR_WEIGHTS
) + (TEAM_KEY,)


def _as_number(raw):
    if isinstance(raw, bool) or raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _level(sections, key) -> float:
    raw = sections.get(key)
    value = _as_number(raw)
    if value is None or not LEVEL_MIN <= value <= LEVEL_MAX:
        raise InvalidLevel(raw, key)
    return value


def group_points(sections, weights) -> float:
    """Σ weight × level / 4 over one group; 100 when every level is 4."""
    return sum(weight * _level(sections, key) / LEVEL_MAX for key, weight in weights)


def team_total(sections) -> float:
    raw = sections.get(TEAM_KEY)
    value = _as_number(raw)
    if value is None or not TEAM_MIN <= value <= TEAM_MAX:
        raise InvalidTeamScore(raw, TEAM_KEY)
    return value * TEAM_SHARE / TEAM_MAX


def compute_civil_service_score(sections) -> Dict[str, float]:
    """
    Civil-service composite score.

    A  technical            a1..a6     weights 25/25/10/10/20/10   → 70%
    B1 own behavioural      b1_1..b1_6 weights 25/20/15/15/15/10   →  5%
    B2 supervisor behaviour b2_1..b2_6 same weights                → 10%
    B3 team evaluation      team       scale 1–5                   → 15%

    Levels outside 1–4 raise InvalidLevel, a team score outside 1–5 raises
    InvalidTeamScore; either aborts the whole computation.

    `overallResult` and `averagePoint` are rounded half-up to 2dp, the
    component totals are returned unrounded. `averagePoint` is the sum of
    the three group point totals and leaves the team score out.
    """
    if not isinstance(sections, Mapping):
        sections = {}

    technical_points = group_points(sections, TECHNICAL_WEIGHTS)
    own_points = group_points(sections, OWN_WEIGHTS)
    sup_points = group_points(sections, SUPERVISOR_WEIGHTS)

    technical = technical_points * TECHNICAL_SHARE / 100
    own = own_points * OWN_SHARE / 100
    sup = sup_points * SUPERVISOR_SHARE / 100
    team = team_total(sections)

    return {
        "technicalTotal": technical,
        "ownTotal": own,
        "supTotal": sup,
        "teamTotal": team,
        "overallResult": _round2(technical + own + sup + team),
        "averagePoint": _round2(technical_points + own_points + sup_points),
    }
