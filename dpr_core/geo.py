"""
Equirectangular projection of a regional outline and supply-chain nodes
into a drawing box anchored at the origin, north up.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from dpr_core.models import LatLng, Point, SupplyNode
from dpr_core.scale import map_linear


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @property
    def degenerate(self) -> bool:
        return self.min_lat == self.max_lat or self.min_lng == self.max_lng


@dataclass(frozen=True)
class Projection:
    outline_path: List[Point]
    node_positions: Dict[str, Point]


def bounding_box(outline: Sequence[LatLng]) -> BoundingBox:
    lats = [lat for lat, _ in outline]
    lngs = [lng for _, lng in outline]
    return BoundingBox(min(lats), max(lats), min(lngs), max(lngs))


def project_point(lat: float, lng: float, box: BoundingBox, width: float, height: float) -> Point:
    x = map_linear(lng, box.min_lng, box.max_lng, 0, width)
    y = map_linear(lat, box.min_lat, box.max_lat, height, 0)
    return (x, y)


def project(outline: Sequence[LatLng], nodes: Sequence[SupplyNode],
            width: float, height: float) -> Projection:
    """
    Fit the outline's bounding box to width x height and project every
    vertex and node into it. Nodes outside the outline are not re-fitted.
    An empty outline has no extent, so every node sits at the centre.
    """
    if not outline:
        centre = (width / 2, height / 2)
        return Projection(outline_path=[], node_positions={n.district: centre for n in nodes})
    box = bounding_box(outline)
    return Projection(
        outline_path=[project_point(lat, lng, box, width, height) for lat, lng in outline],
        node_positions={n.district: project_point(n.latitude, n.longitude, box, width, height) for n in nodes},
    )


def select_node(nodes: Sequence[SupplyNode], district: Optional[str]) -> Optional[SupplyNode]:
    return next((n for n in nodes if n.district == district), None)
