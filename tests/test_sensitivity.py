import math

from dpr_core.models import SensitivityCell
from dpr_core.sensitivity import (
    HIGH_NEGATIVE,
    HIGH_POSITIVE,
    LOW_NEGATIVE,
    LOW_POSITIVE,
    build_grid,
    classify,
    format_delta,
)

def test_classify_boundaries():
    assert classify(6) == HIGH_POSITIVE
    assert classify(5.999) == LOW_POSITIVE
    assert classify(0) == LOW_POSITIVE
    assert classify(-0.001) == LOW_NEGATIVE
    assert classify(-6) == HIGH_NEGATIVE
    assert classify(-5.999) == LOW_NEGATIVE
    assert classify(42) == "high-positive"
    assert classify(-42) == "high-negative"

def test_energy_cost_scenario():
    cells = [
        SensitivityCell("Energy Cost", "+10%", 7),
        SensitivityCell("Energy Cost", "-10%", -7),
    ]
    grid = build_grid(cells)
    assert grid.drivers == ["Energy Cost"]
    assert grid.variations == ["+10%", "-10%"]
    assert classify(grid.lookup("Energy Cost", "+10%").ebitda_delta) == "high-positive"
    assert classify(grid.lookup("Energy Cost", "-10%").ebitda_delta) == "high-negative"

def test_keys_keep_first_seen_order_not_sorted():
    cells = [
        SensitivityCell("Volume", "-10%", -8),
        SensitivityCell("Price", "+10%", 5),
        SensitivityCell("Volume", "+10%", 7),
        SensitivityCell("Freight", "-10%", 1),
    ]
    grid = build_grid(cells)
    assert grid.drivers == ["Volume", "Price", "Freight"]
    assert grid.variations == ["-10%", "+10%"]

def test_missing_cell_is_absent_not_error():
    grid = build_grid([SensitivityCell("A", "x", 1), SensitivityCell("B", "y", 2)])
    assert grid.lookup("A", "y") is None
    assert grid.lookup("nope", "x") is None

def test_duplicate_pair_keeps_first():
    grid = build_grid([SensitivityCell("A", "x", 1), SensitivityCell("A", "x", 9)])
    assert grid.lookup("A", "x").ebitda_delta == 1

def test_empty_grid():
    grid = build_grid([])
    assert grid.drivers == [] and grid.variations == []
    assert grid.to_frame().empty

def test_to_frame_pivots_in_order():
    grid = build_grid([
        SensitivityCell("Volume", "+10%", 7.2),
        SensitivityCell("Rate", "+200bps", -1.6),
    ])
    df = grid.to_frame()
    assert list(df.index) == ["Volume", "Rate"]
    assert list(df.columns) == ["+10%", "+200bps"]
    assert df.loc["Volume", "+10%"] == 7.2
    assert math.isnan(df.loc["Volume", "+200bps"])

def test_format_delta():
    assert format_delta(7) == "+7"
    assert format_delta(-6.5) == "-6.5"
    assert format_delta(0) == "0"
    assert format_delta(None) == "-"
