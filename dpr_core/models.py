from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Tuple

LatLng = Tuple[float, float]
Point = Tuple[float, float]


@dataclass(frozen=True)
class TimeSeriesPoint:
    label: str          # month label, unique within a series
    revenue: float
    expense: float
    capital: float


@dataclass(frozen=True)
class WorkforceSplit:
    skilled: float
    semi_skilled: float
    women: float


@dataclass(frozen=True)
class SectorBenchmark:
    sub_sector: str
    capex_per_unit: float
    operating_margin: float
    break_even_months: int
    productivity_index: float
    export_readiness: float
    sustainability_score: float
    workforce_split: WorkforceSplit
    sources: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SensitivityCell:
    driver: str
    variation: str
    ebitda_delta: float  # percentage points vs base case


class NodeRole(Enum):
    INPUT_CLUSTER = "Input Cluster"
    PROCESSING_HUB = "Processing Hub"
    DISTRIBUTION = "Distribution"


@dataclass(frozen=True)
class SupplyNode:
    district: str
    latitude: float
    longitude: float
    role: NodeRole
    throughput: float


@dataclass(frozen=True)
class Scheme:
    name: str
    owner: str
    ticket_size: Tuple[float, float]   # (min, max) in INR lakh
    focus: FrozenSet[str]
    interest_rate: float               # % p.a.
    subsidy: float
    min_score: float
    eligibility: Tuple[str, ...] = ()
    digital_touchpoints: Tuple[str, ...] = ()


class Language(Enum):
    ENGLISH = "english"
    TELUGU = "telugu"


@dataclass(frozen=True)
class FreeTextInput:
    """One submitted conversational turn, typed or transcribed."""
    text: str
    language: Language = Language.ENGLISH
