from dataclasses import dataclass
from typing import Iterable, List, Optional

from dpr_core.models import Point

MOVE_TO = "M"
LINE_TO = "L"


@dataclass(frozen=True)
class PathCommand:
    op: str   # MOVE_TO | LINE_TO
    x: float
    y: float


def build_path(points: Iterable[Point]) -> List[PathCommand]:
    """First point moves, every later point draws a straight line to it."""
    return [
        PathCommand(MOVE_TO if i == 0 else LINE_TO, x, y)
        for i, (x, y) in enumerate(points)
    ]


def _num(v: float, precision: Optional[int]) -> str:
    if precision is None:
        return f"{v:g}" if float(v).is_integer() else repr(float(v))
    return f"{v:.{precision}f}"


def path_to_svg(path: List[PathCommand], precision: Optional[int] = None, close: bool = False) -> str:
    """Serialise a path descriptor as an SVG 'd' attribute."""
    d = " ".join(f"{c.op} {_num(c.x, precision)} {_num(c.y, precision)}" for c in path)
    if close and path:
        d += " Z"
    return d
