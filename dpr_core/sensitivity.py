"""EBITDA sensitivity matrix: driver x variation grid and display buckets."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from dpr_core.models import SensitivityCell

HIGH_POSITIVE = "high-positive"
LOW_POSITIVE = "low-positive"
HIGH_NEGATIVE = "high-negative"
LOW_NEGATIVE = "low-negative"

HIGH_THRESHOLD = 6


def classify(delta: float) -> str:
    if delta >= HIGH_THRESHOLD:
        return HIGH_POSITIVE
    if delta >= 0:
        return LOW_POSITIVE
    if delta <= -HIGH_THRESHOLD:
        return HIGH_NEGATIVE
    return LOW_NEGATIVE


def format_delta(delta: Optional[float]) -> str:
    """'+7', '-7', '0' ... or '-' for a missing cell."""
    if delta is None:
        return "-"
    text = f"{delta:g}"
    return f"+{text}" if delta > 0 else text


@dataclass(frozen=True)
class SensitivityGrid:
    drivers: List[str]
    variations: List[str]
    _index: Dict[Tuple[str, str], SensitivityCell] = field(default_factory=dict, repr=False)

    def lookup(self, driver: str, variation: str) -> Optional[SensitivityCell]:
        return self._index.get((driver, variation))

    def to_frame(self) -> pd.DataFrame:
        """Deltas pivoted drivers x variations in first-seen order; NaN where absent."""
        rows = []
        for d in self.drivers:
            row = []
            for v in self.variations:
                cell = self.lookup(d, v)
                row.append(cell.ebitda_delta if cell else float("nan"))
            rows.append(row)
        return pd.DataFrame(rows, index=pd.Index(self.drivers, name="driver"),
                            columns=pd.Index(self.variations, name="variation"), dtype=float)


def build_grid(cells: Sequence[SensitivityCell]) -> SensitivityGrid:
    # dicts keep insertion order, so keys come out in first-seen order
    drivers = dict.fromkeys(c.driver for c in cells)
    variations = dict.fromkeys(c.variation for c in cells)
    index: Dict[Tuple[str, str], SensitivityCell] = {}
    for c in cells:
        # first match wins, as a linear scan would find it
        index.setdefault((c.driver, c.variation), c)
    return SensitivityGrid(drivers=list(drivers), variations=list(variations), _index=index)
