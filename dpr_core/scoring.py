"""
Heuristic scores for the DPR assistant.

Bankability: a keyword-and-length proxy for how a lender might read a
narrative. Eligibility: overlap between a scheme's focus areas and the
user's selection, plus a bonus once the user's readiness clears the
scheme's threshold. Both are deterministic and always in range.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from dpr_core.config import load_yaml
from dpr_core.errors import DatasetError
from dpr_core.models import Scheme


@dataclass(frozen=True)
class KeywordIndicator:
    name: str
    pattern: str     # case-insensitive substring
    weight: float = 0.12

    def matches(self, text: str) -> bool:
        return self.pattern.lower() in text.lower()


DEFAULT_INDICATORS = (
    KeywordIndicator("financing", "loan"),
    KeywordIndicator("government-support", "scheme"),
    KeywordIndicator("international-trade", "export"),
    KeywordIndicator("sustainability", "energy"),
)


@dataclass(frozen=True)
class BankabilityConfig:
    indicators: Tuple[KeywordIndicator, ...] = DEFAULT_INDICATORS
    base: float = 0.42
    length_divisor: float = 500
    length_cap: float = 0.18
    score_cap: float = 0.95


@dataclass(frozen=True)
class EligibilityConfig:
    overlap_weight: float = 0.6
    threshold_bonus: float = 0.4
    cutoff: float = 0.15


@dataclass(frozen=True)
class ScoringConfig:
    bankability: BankabilityConfig = field(default_factory=BankabilityConfig)
    eligibility: EligibilityConfig = field(default_factory=EligibilityConfig)
    allocation: Dict[str, float] = field(default_factory=dict)


def _indicator(rec: Dict) -> KeywordIndicator:
    for key in ("name", "pattern"):
        if not rec.get(key):
            raise DatasetError(f"bankability indicator is missing '{key}': {rec}")
    return KeywordIndicator(rec["name"], rec["pattern"], float(rec.get("weight", 0.12)))


def load_scoring_config(name: str = "scoring.yaml") -> ScoringConfig:
    raw = load_yaml(name)
    b = raw.get("bankability", {}) or {}
    e = raw.get("eligibility", {}) or {}
    defaults_b, defaults_e = BankabilityConfig(), EligibilityConfig()

    indicators = tuple(_indicator(i) for i in b.get("indicators", [])) or DEFAULT_INDICATORS

    return ScoringConfig(
        bankability=BankabilityConfig(
            indicators=indicators,
            base=float(b.get("base", defaults_b.base)),
            length_divisor=float(b.get("length_divisor", defaults_b.length_divisor)),
            length_cap=float(b.get("length_cap", defaults_b.length_cap)),
            score_cap=float(b.get("score_cap", defaults_b.score_cap)),
        ),
        eligibility=EligibilityConfig(
            overlap_weight=float(e.get("overlap_weight", defaults_e.overlap_weight)),
            threshold_bonus=float(e.get("threshold_bonus", defaults_e.threshold_bonus)),
            cutoff=float(e.get("cutoff", defaults_e.cutoff)),
        ),
        allocation={k: float(v) for k, v in (raw.get("allocation", {}) or {}).items()},
    )


def matched_indicators(text: str, config: BankabilityConfig = BankabilityConfig()) -> List[KeywordIndicator]:
    return [i for i in config.indicators if i.matches(text)]


def bankability_score(text: str, config: BankabilityConfig = BankabilityConfig()) -> float:
    """Base + indicator weights + length bonus, capped below full certainty."""
    indicator_bonus = sum(i.weight for i in matched_indicators(text, config))
    length_bonus = min(len(text) / config.length_divisor, config.length_cap)
    return min(config.base + indicator_bonus + length_bonus, config.score_cap)


def eligibility_score(scheme: Scheme, selected_focus: Iterable[str], user_score: float,
                      config: EligibilityConfig = EligibilityConfig()) -> float:
    overlap = len(scheme.focus & set(selected_focus)) / len(scheme.focus)
    bonus = config.threshold_bonus if user_score >= scheme.min_score else 0
    return min(1, overlap * config.overlap_weight + bonus)


@dataclass(frozen=True)
class SchemeMatch:
    scheme: Scheme
    score: float


def rank_schemes(schemes: Sequence[Scheme], selected_focus: Iterable[str], user_score: float,
                 config: EligibilityConfig = EligibilityConfig()) -> List[SchemeMatch]:
    """Schemes scoring above the cut-off, best first; ties keep catalog order."""
    selected = set(selected_focus)
    matches = [SchemeMatch(s, eligibility_score(s, selected, user_score, config)) for s in schemes]
    matches = [m for m in matches if m.score > config.cutoff]
    # sorted() is stable
    return sorted(matches, key=lambda m: m.score, reverse=True)


def focus_areas(schemes: Sequence[Scheme]) -> List[str]:
    return sorted({f for s in schemes for f in s.focus})
