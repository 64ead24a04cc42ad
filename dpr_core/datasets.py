"""Static reference datasets: YAML for catalogs, CSV for the cash-flow timeline."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from dpr_core.config import get_data_dir, load_yaml
from dpr_core.errors import DatasetError
from dpr_core.models import (
    LatLng,
    NodeRole,
    Scheme,
    SectorBenchmark,
    SensitivityCell,
    SupplyNode,
    TimeSeriesPoint,
    WorkforceSplit,
)

logger = logging.getLogger(__name__)

CASHFLOW_COLUMNS = ["month", "revenue", "expense", "capital"]


@dataclass(frozen=True)
class Datasets:
    cashflow: Tuple[TimeSeriesPoint, ...]
    benchmarks: Tuple[SectorBenchmark, ...]
    sensitivity: Tuple[SensitivityCell, ...]
    nodes: Tuple[SupplyNode, ...]
    outline: Tuple[LatLng, ...]
    schemes: Tuple[Scheme, ...]


def _require(rec: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in rec:
        raise DatasetError(f"{kind} record is missing '{key}': {rec}")
    return rec[key]


def _unique(keys: List[str], kind: str) -> None:
    seen = set()
    for k in keys:
        if k in seen:
            raise DatasetError(f"duplicate {kind}: {k!r}")
        seen.add(k)


def parse_benchmarks(records: List[Dict[str, Any]]) -> Tuple[SectorBenchmark, ...]:
    out = []
    for r in records:
        ws = _require(r, "workforce_split", "benchmark")
        out.append(SectorBenchmark(
            sub_sector=_require(r, "sub_sector", "benchmark"),
            capex_per_unit=float(_require(r, "capex_per_unit", "benchmark")),
            operating_margin=float(_require(r, "operating_margin", "benchmark")),
            break_even_months=int(_require(r, "break_even_months", "benchmark")),
            productivity_index=float(_require(r, "productivity_index", "benchmark")),
            export_readiness=float(_require(r, "export_readiness", "benchmark")),
            sustainability_score=float(_require(r, "sustainability_score", "benchmark")),
            workforce_split=WorkforceSplit(
                skilled=float(ws.get("skilled", 0)),
                semi_skilled=float(ws.get("semi_skilled", 0)),
                women=float(ws.get("women", 0)),
            ),
            sources=tuple(r.get("sources", [])),
        ))
    return tuple(out)


def parse_sensitivity(records: List[Dict[str, Any]]) -> Tuple[SensitivityCell, ...]:
    return tuple(
        SensitivityCell(
            driver=_require(r, "driver", "sensitivity"),
            variation=str(_require(r, "variation", "sensitivity")),
            ebitda_delta=float(_require(r, "ebitda_delta", "sensitivity")),
        )
        for r in records
    )


def parse_nodes(records: List[Dict[str, Any]]) -> Tuple[SupplyNode, ...]:
    out = []
    for r in records:
        role = _require(r, "role", "node")
        try:
            role = NodeRole(role)
        except ValueError:
            raise DatasetError(f"unknown node role {role!r} for {r.get('district')}") from None
        out.append(SupplyNode(
            district=_require(r, "district", "node"),
            latitude=float(_require(r, "latitude", "node")),
            longitude=float(_require(r, "longitude", "node")),
            role=role,
            throughput=float(r.get("throughput", 0)),
        ))
    _unique([n.district for n in out], "district")
    return tuple(out)


def parse_outline(vertices: List[List[float]]) -> Tuple[LatLng, ...]:
    out = []
    for v in vertices:
        if len(v) != 2:
            raise DatasetError(f"outline vertex must be [lat, lng], got {v}")
        out.append((float(v[0]), float(v[1])))
    return tuple(out)


def parse_schemes(records: List[Dict[str, Any]]) -> Tuple[Scheme, ...]:
    out = []
    for r in records:
        name = _require(r, "name", "scheme")
        lo, hi = (float(x) for x in _require(r, "ticket_size", "scheme"))
        if lo > hi:
            raise DatasetError(f"scheme {name!r}: ticket size min {lo} > max {hi}")
        focus = frozenset(_require(r, "focus", "scheme"))
        if not focus:
            raise DatasetError(f"scheme {name!r} has no focus areas")
        out.append(Scheme(
            name=name,
            owner=r.get("owner", ""),
            ticket_size=(lo, hi),
            focus=focus,
            interest_rate=float(r.get("interest_rate", 0)),
            subsidy=float(r.get("subsidy", 0)),
            min_score=float(_require(r, "min_score", "scheme")),
            eligibility=tuple(r.get("eligibility", [])),
            digital_touchpoints=tuple(r.get("digital_touchpoints", [])),
        ))
    _unique([s.name for s in out], "scheme name")
    return tuple(out)


def load_cashflow(csv_path: Optional[Path] = None) -> Tuple[TimeSeriesPoint, ...]:
    csv_path = csv_path or get_data_dir() / "cashflow.csv"
    if not csv_path.exists():
        raise DatasetError(f"CSV not found: {csv_path}")
    df = pd.read_csv(csv_path, dtype={"month": str})
    missing = [c for c in CASHFLOW_COLUMNS if c not in df.columns]
    if missing:
        raise DatasetError(f"{csv_path} is missing columns {missing}")
    for col in ("revenue", "expense", "capital"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    if df[["revenue", "expense", "capital"]].isna().any().any():
        raise DatasetError(f"{csv_path} has blank or non-numeric values")
    _unique(df["month"].tolist(), "month label")
    return tuple(
        TimeSeriesPoint(label=row.month, revenue=float(row.revenue),
                        expense=float(row.expense), capital=float(row.capital))
        for row in df.itertuples(index=False)
    )


def load_datasets(name: str = "datasets.yaml", cashflow_csv: Optional[Path] = None) -> Datasets:
    raw = load_yaml(name, required=True)
    ds = Datasets(
        cashflow=load_cashflow(cashflow_csv),
        benchmarks=parse_benchmarks(raw.get("sector_benchmarks", [])),
        sensitivity=parse_sensitivity(raw.get("sensitivity_matrix", [])),
        nodes=parse_nodes(raw.get("supply_nodes", [])),
        outline=parse_outline(raw.get("state_outline", [])),
        schemes=parse_schemes(raw.get("schemes", [])),
    )
    logger.debug(
        "Loaded %d cash-flow points, %d benchmarks, %d sensitivity cells, %d nodes, %d schemes",
        len(ds.cashflow), len(ds.benchmarks), len(ds.sensitivity), len(ds.nodes), len(ds.schemes),
    )
    return ds
