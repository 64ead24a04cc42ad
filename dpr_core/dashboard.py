"""
Wires dataset slices into the geometry and scoring functions and returns
plain results for the presentation layer. Every function here is called
on demand with explicit inputs; nothing is cached between calls.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from dpr_core.errors import InvalidInputError
from dpr_core.formatting import fmt_pct
from dpr_core.geo import bounding_box, project
from dpr_core.models import FreeTextInput, Language, LatLng, Point, Scheme, SectorBenchmark, SensitivityCell, SupplyNode, TimeSeriesPoint
from dpr_core.paths import build_path, path_to_svg
from dpr_core.pie import arc_path, capital_allocation, slice_pie
from dpr_core.scale import index_scale, value_scale
from dpr_core.scoring import (
    BankabilityConfig,
    EligibilityConfig,
    SchemeMatch,
    bankability_score,
    matched_indicators,
    rank_schemes,
)
from dpr_core.sensitivity import build_grid, classify, format_delta

logger = logging.getLogger(__name__)

SERIES = ("revenue", "expense", "capital")
HEADROOM = 1.1


# --- cash flow line chart -------------------------------------------------

@dataclass
class CashflowChart:
    width: float
    height: float
    ticks: List[tuple]                 # (label, x)
    paths: Dict[str, str]              # series -> svg d
    markers: Dict[str, List[Point]]    # series -> point per month


def cashflow_chart(timeline: Sequence[TimeSeriesPoint], width: float = 540,
                   height: float = 220, padding: float = 40) -> CashflowChart:
    n = len(timeline)
    max_value = max((getattr(p, s) for p in timeline for s in SERIES), default=0) * HEADROOM
    if n == 1 or max_value == 0:
        logger.debug("Cash-flow axis collapsed (points=%d, max=%s); plotting at midpoint", n, max_value)

    bottom = height - padding
    top = height - padding - (height - padding * 1.6)

    def x(i):
        return index_scale(i, n, padding, width - padding)

    markers = {
        s: [(x(i), value_scale(getattr(p, s), max_value, bottom, top)) for i, p in enumerate(timeline)]
        for s in SERIES
    }
    return CashflowChart(
        width=width,
        height=height,
        ticks=[(p.label, x(i)) for i, p in enumerate(timeline)],
        paths={s: path_to_svg(build_path(pts)) for s, pts in markers.items()},
        markers=markers,
    )


# --- capital allocation pie -----------------------------------------------

@dataclass
class AllocationWedge:
    label: str
    value: float
    percent: str
    path: str


def allocation_chart(benchmark: SectorBenchmark, size: float = 160,
                     policy: Optional[Dict[str, float]] = None) -> List[AllocationWedge]:
    """Pie wedges for the benchmark's capital blueprint; [] when nothing to split."""
    radius = size / 2
    try:
        slices = slice_pie(capital_allocation(benchmark, policy))
    except InvalidInputError as e:
        logger.warning("No allocation chart for %s: %s", benchmark.sub_sector, e)
        return []
    return [AllocationWedge(s.label, s.value, fmt_pct(s.share), arc_path(s, radius)) for s in slices]


# --- sensitivity heatmap --------------------------------------------------

@dataclass
class HeatCell:
    variation: str
    delta: Optional[float]
    bucket: Optional[str]   # None renders as a placeholder
    label: str


@dataclass
class HeatRow:
    driver: str
    cells: List[HeatCell] = field(default_factory=list)


def sensitivity_heatmap(cells: Sequence[SensitivityCell]) -> tuple:
    """Returns (variations, rows) with rows and columns in first-seen order."""
    grid = build_grid(cells)
    rows = []
    for driver in grid.drivers:
        row = HeatRow(driver)
        for variation in grid.variations:
            cell = grid.lookup(driver, variation)
            if cell is None:
                row.cells.append(HeatCell(variation, None, None, format_delta(None)))
            else:
                row.cells.append(HeatCell(variation, cell.ebitda_delta, classify(cell.ebitda_delta),
                                          format_delta(cell.ebitda_delta)))
        rows.append(row)
    return grid.variations, rows


# --- geo reach map --------------------------------------------------------

@dataclass
class MapNode:
    district: str
    role: str
    throughput: float
    x: float
    y: float


@dataclass
class GeoMap:
    width: float
    height: float
    outline_path: str
    nodes: List[MapNode]


def geo_map(outline: Sequence[LatLng], nodes: Sequence[SupplyNode],
            width: float = 420, height: float = 360) -> GeoMap:
    if outline and bounding_box(outline).degenerate:
        logger.debug("Outline bounding box is degenerate; collapsed axis maps to midpoint")
    projection = project(outline, nodes, width, height)
    return GeoMap(
        width=width,
        height=height,
        outline_path=path_to_svg(build_path(projection.outline_path), precision=2, close=True),
        nodes=[
            MapNode(n.district, n.role.value, n.throughput, *projection.node_positions[n.district])
            for n in nodes
        ],
    )


# --- benchmark profile ----------------------------------------------------

def viability_profile(b: SectorBenchmark) -> Dict[str, object]:
    return {
        "sub_sector": b.sub_sector,
        "operating_margin": fmt_pct(b.operating_margin),
        "break_even_months": b.break_even_months,
        "productivity_index": fmt_pct(b.productivity_index),
        "export_readiness": fmt_pct(b.export_readiness),
        "workforce": {
            "skilled": fmt_pct(b.workforce_split.skilled),
            "semi_skilled": fmt_pct(b.workforce_split.semi_skilled),
            "women": fmt_pct(b.workforce_split.women),
        },
        "sources": list(b.sources),
    }


# --- scoring --------------------------------------------------------------

def scheme_matches(schemes: Sequence[Scheme], selected_focus: Iterable[str], user_score: float,
                   config: EligibilityConfig = EligibilityConfig()) -> List[SchemeMatch]:
    matches = rank_schemes(schemes, selected_focus, user_score, config)
    logger.debug("%d of %d schemes match (score=%.2f)", len(matches), len(schemes), user_score)
    return matches


@dataclass(frozen=True)
class TurnScore:
    text: str
    language: Language
    bankability: float
    indicators: tuple


def score_turn(turn: FreeTextInput, config: BankabilityConfig = BankabilityConfig()) -> Optional[TurnScore]:
    """Score one submitted turn; blank submissions produce nothing."""
    text = turn.text.strip()
    if not text:
        return None
    return TurnScore(
        text=text,
        language=turn.language,
        bankability=bankability_score(text, config),
        indicators=tuple(i.name for i in matched_indicators(text, config)),
    )
