# scrimhub_backend/core/points.py

"""
Placement and kill scoring.

Current balance (see scoring_config.PLACEMENT_POINTS):
- 1st: 12, 2nd: 9, 3rd: 8 ... 10th: 1
- Anything outside the table (0, 11th and below): 0
- Every kill is worth one point on top of placement points.
"""

from typing import NamedTuple

from scrimhub_backend.core.scoring_config import PLACEMENT_POINTS, BOOYAH_PLACEMENT


class PointsBreakdown(NamedTuple):
    placement_points: int
    total_points: int


def get_placement_points(placement: int) -> int:
    """Return the placement points for a finishing position (0 when off the table)."""
    return PLACEMENT_POINTS.get(placement, 0)


def compute_points(placement: int, kills: int) -> PointsBreakdown:
    """
    Combine a placement and a kill count into a score.
    Never raises: an out-of-table placement simply earns 0 placement points.
    """
    placement_points = get_placement_points(placement)
    return PointsBreakdown(
        placement_points=placement_points,
        total_points=placement_points + kills,
    )


def is_booyah(placement: int) -> bool:
    return placement == BOOYAH_PLACEMENT
