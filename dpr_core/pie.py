"""
Pie-chart geometry: proportional arcs that partition the full circle.

Angles are radians in screen orientation (0 points right, angles grow
clockwise), starting at 12 o'clock.
"""
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from dpr_core.errors import InvalidInputError
from dpr_core.models import SectorBenchmark

START_ANGLE = -math.pi / 2
FULL_TURN = 2 * math.pi


@dataclass(frozen=True)
class PieSlice:
    label: str
    value: float
    share: float          # value / total
    start_angle: float
    end_angle: float
    large_arc: int        # 1 when the span exceeds half a turn


def slice_pie(values: Sequence[Tuple[str, float]]) -> List[PieSlice]:
    total = sum(v for _, v in values)
    if any(v < 0 for _, v in values):
        raise InvalidInputError("pie magnitudes must be non-negative")
    if total <= 0:
        raise InvalidInputError(f"cannot split a pie with total {total}; supply at least one positive magnitude")

    slices = []
    cumulative = START_ANGLE
    last = len(values) - 1
    for i, (label, value) in enumerate(values):
        span = value / total * FULL_TURN
        start = cumulative
        # the closing slice ends exactly where the first one started
        end = START_ANGLE + FULL_TURN if i == last else cumulative + span
        cumulative = end
        slices.append(PieSlice(
            label=label,
            value=value,
            share=value / total,
            start_angle=start,
            end_angle=end,
            large_arc=1 if span > math.pi else 0,
        ))
    return slices


def arc_path(s: PieSlice, radius: float) -> str:
    """SVG wedge for one slice of a pie centred at (radius, radius)."""
    x1 = radius + radius * math.cos(s.start_angle)
    y1 = radius + radius * math.sin(s.start_angle)
    if s.share == 1:
        # start and end coincide, so draw the circle as two half arcs
        xm = radius + radius * math.cos(s.start_angle + math.pi)
        ym = radius + radius * math.sin(s.start_angle + math.pi)
        return (f"M {x1} {y1} A {radius} {radius} 0 1 1 {xm} {ym} "
                f"A {radius} {radius} 0 1 1 {x1} {y1} Z")
    x2 = radius + radius * math.cos(s.end_angle)
    y2 = radius + radius * math.sin(s.end_angle)
    return f"M {radius} {radius} L {x1} {y1} A {radius} {radius} 0 {s.large_arc} 1 {x2} {y2} Z"


def capital_allocation(benchmark: SectorBenchmark, policy: Optional[Dict] = None) -> List[Tuple[str, float]]:
    """Capex, working capital and green upgrades for one sub-sector."""
    policy = policy or {}
    capex = benchmark.capex_per_unit
    working_capital = max(float(policy.get("working_capital_floor", 12)),
                          capex * float(policy.get("working_capital_factor", 0.6)))
    sustainability = max(float(policy.get("green_floor", 6)),
                         capex * benchmark.sustainability_score * float(policy.get("green_factor", 0.35)))
    return [
        ("Capex Assets", capex),
        ("Working Capital", working_capital),
        ("Green Upgrades", sustainability),
    ]
