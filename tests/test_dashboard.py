import math

from dpr_core.dashboard import (
    allocation_chart,
    cashflow_chart,
    geo_map,
    scheme_matches,
    score_turn,
    sensitivity_heatmap,
    viability_profile,
)
from dpr_core.models import (
    FreeTextInput,
    Language,
    NodeRole,
    Scheme,
    SectorBenchmark,
    SensitivityCell,
    SupplyNode,
    TimeSeriesPoint,
    WorkforceSplit,
)

BENCH = SectorBenchmark(
    sub_sector="Food Processing",
    capex_per_unit=48,
    operating_margin=0.18,
    break_even_months=22,
    productivity_index=0.71,
    export_readiness=0.46,
    sustainability_score=0.62,
    workforce_split=WorkforceSplit(0.34, 0.48, 0.41),
    sources=("AP MSME ONE",),
)

def test_cashflow_chart_geometry():
    timeline = [
        TimeSeriesPoint("M1", 10, 5, 0),
        TimeSeriesPoint("M2", 20, 8, 4),
        TimeSeriesPoint("M3", 50, 9, 6),
    ]
    chart = cashflow_chart(timeline)
    xs = [x for _, x in chart.ticks]
    assert xs == [40, 270, 500]
    assert [label for label, _ in chart.ticks] == ["M1", "M2", "M3"]
    # zero sits on the baseline, the peak sits below the top because of headroom
    assert chart.markers["capital"][0][1] == 180
    peak_y = chart.markers["revenue"][2][1]
    assert 24 < peak_y < 180
    assert chart.paths["revenue"].startswith("M 40 ")
    assert chart.paths["revenue"].count("L") == 2

def test_cashflow_chart_degenerate():
    chart = cashflow_chart([TimeSeriesPoint("M1", 0, 0, 0)])
    assert chart.ticks == [("M1", 270)]
    assert chart.markers["revenue"] == [(270, 102)]
    assert cashflow_chart([]).paths == {"revenue": "", "expense": "", "capital": ""}

def test_allocation_chart():
    wedges = allocation_chart(BENCH)
    assert [w.label for w in wedges] == ["Capex Assets", "Working Capital", "Green Upgrades"]
    assert all(w.path.startswith("M 80.0 80.0 L") for w in wedges)
    assert wedges[0].percent == "55%"

def test_allocation_chart_empty_when_nothing_to_split():
    zero = SectorBenchmark("Idle", 0, 0, 1, 0, 0, 0, WorkforceSplit(0, 0, 0))
    floors = {"working_capital_floor": 0, "green_floor": 0}
    assert allocation_chart(zero, policy=floors) == []

def test_sensitivity_heatmap_rows():
    variations, rows = sensitivity_heatmap([
        SensitivityCell("Energy Cost", "+10%", 7),
        SensitivityCell("Energy Cost", "-10%", -7),
        SensitivityCell("Volume", "+10%", 3),
    ])
    assert variations == ["+10%", "-10%"]
    assert [r.driver for r in rows] == ["Energy Cost", "Volume"]
    assert [(c.bucket, c.label) for c in rows[0].cells] == [("high-positive", "+7"), ("high-negative", "-7")]
    missing = rows[1].cells[1]
    assert missing.bucket is None and missing.label == "-"

def test_geo_map_closes_outline_and_places_nodes():
    outline = [(19.0, 78.0), (14.0, 83.0)]
    nodes = [SupplyNode("Guntur", 16.5, 80.5, NodeRole.INPUT_CLUSTER, 69)]
    gm = geo_map(outline, nodes)
    assert gm.outline_path == "M 0.00 0.00 L 420.00 360.00 Z"
    (n,) = gm.nodes
    assert (n.x, n.y) == (210, 180)
    assert n.role == "Input Cluster"

def test_viability_profile():
    p = viability_profile(BENCH)
    assert p["operating_margin"] == "18%"
    assert p["break_even_months"] == 22
    assert p["workforce"]["women"] == "41%"
    assert p["sources"] == ["AP MSME ONE"]

def test_scheme_matches():
    schemes = [
        Scheme("A", "SIDBI", (1, 5), frozenset({"Export"}), 9, 0.1, 0.5),
        Scheme("B", "SIDBI", (1, 5), frozenset({"Term Loan"}), 9, 0.1, 0.9),
    ]
    assert [m.scheme.name for m in scheme_matches(schemes, ["Export"], 0.6)] == ["A"]

def test_score_turn():
    assert score_turn(FreeTextInput("   ")) is None
    turn = score_turn(FreeTextInput("  Export loan  ", Language.TELUGU))
    assert turn.text == "Export loan"
    assert turn.language is Language.TELUGU
    assert turn.indicators == ("financing", "international-trade")
    assert math.isclose(turn.bankability, 0.42 + 0.24 + 11 / 500)

def test_geo_map_without_outline_still_places_nodes():
    nodes = [SupplyNode("Guntur", 16.3, 80.4, NodeRole.INPUT_CLUSTER, 69)]
    gm = geo_map([], nodes)
    assert gm.outline_path == ""
    (n,) = gm.nodes
    assert (n.district, n.x, n.y) == ("Guntur", 210, 180)
