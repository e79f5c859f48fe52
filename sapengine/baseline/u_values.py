"""
U-value and thermal mass lookup for UK construction descriptions.

Resolves free-text certificate descriptions ("Cavity wall, filled cavity",
"Pitched, 270 mm loft insulation") to U-values in three steps:

1. Ordered keyword rules, first match wins
2. Construction age band, when the text is absent or generic ("as built")
3. Worst-case default for the element type

A wall described "as built" was assumed from the dwelling's age by the
assessor, so a parseable age band overrides its keyword value.

Values follow SAP 2012 Appendix S / RdSAP conventions and typical UK
construction practice. They are estimates for unsurveyed dwellings, not
measurements.

Usage:
    estimate = lookup_u_value(ElementType.WALL, "Cavity wall, filled cavity", "1976-1982")
    print(estimate.u_value, estimate.source)  # 0.5 keyword
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.models import ElementType


class UValueSource(str, Enum):
    """Where an inferred value came from."""
    KEYWORD = "keyword"
    AGE_BAND = "age_band"
    DEFAULT = "default"


@dataclass(frozen=True)
class UValueRule:
    """
    Keyword rule.

    `terms` is a tuple of alternative groups. Every group must match and a
    group matches when any of its alternatives occurs in the lowercased
    text.
    """
    terms: Tuple[Tuple[str, ...], ...]
    u_value: float
    label: str

    def matches(self, text: str) -> bool:
        return all(any(alt in text for alt in group) for group in self.terms)


@dataclass(frozen=True)
class UValueEstimate:
    """Resolved U-value with provenance."""
    u_value: float
    source: UValueSource
    detail: str = ""

    def to_dict(self) -> Dict:
        return {"u_value": self.u_value, "source": self.source.value, "detail": self.detail}


# =============================================================================
# KEYWORD RULES (order matters)
# =============================================================================

_CAVITY = ("cavity",)
_NO_INSULATION = ("unfilled", "no insulation", "uninsulated")

WALL_RULES: List[UValueRule] = [
    UValueRule((("external insulation", "insulated externally", "externally insulated"),), 0.3, "external insulation"),
    UValueRule((("internal insulation", "insulated internally", "internally insulated"),), 0.4, "internal insulation"),
    # "unfilled" contains "filled": test it first
    UValueRule((_CAVITY, _NO_INSULATION), 1.6, "cavity, unfilled"),
    UValueRule((_CAVITY, ("filled", "insulated"), ("100mm", "100 mm", "4 inch")), 0.35, "cavity, filled 100mm"),
    UValueRule((_CAVITY, ("filled", "insulated"), ("75mm", "75 mm", "3 inch")), 0.45, "cavity, filled 75mm"),
    UValueRule((_CAVITY, ("filled", "insulated"), ("50mm", "50 mm", "2 inch")), 0.55, "cavity, filled 50mm"),
    UValueRule((_CAVITY, ("filled", "insulated")), 0.5, "cavity, filled"),
    UValueRule((("system built", "system build"), ("insulated", "with insulation")), 0.5, "system built, insulated"),
    UValueRule((("system built", "system build"),), 1.0, "system built"),
    UValueRule((("timber frame",),), 0.6, "timber frame"),
    UValueRule((("stone", "granite", "whinstone"),), 1.7, "solid stone"),
    UValueRule((("solid concrete",),), 2.0, "solid concrete"),
    UValueRule((("solid brick", "solid wall"),), 2.1, "solid brick"),
]

ROOF_RULES: List[UValueRule] = [
    UValueRule((("another dwelling above", "other premises above", "dwelling above"),), 0.0, "dwelling above"),
    UValueRule((("thatch",),), 0.35, "thatched"),
    UValueRule((("flat",), _NO_INSULATION), 2.0, "flat, uninsulated"),
    UValueRule((_NO_INSULATION,), 2.3, "uninsulated"),
    UValueRule((("flat",), ("limited insulation",)), 0.9, "flat, limited insulation"),
    UValueRule((("flat",), ("insulated",)), 0.5, "flat, insulated"),
    UValueRule((("limited insulation",),), 1.5, "limited insulation"),
    UValueRule((("insulated",),), 0.4, "insulated"),
]

FLOOR_RULES: List[UValueRule] = [
    UValueRule((("another dwelling below", "other premises below", "dwelling below"),), 0.0, "dwelling below"),
    UValueRule((_NO_INSULATION,), 0.7, "uninsulated"),
    UValueRule((("limited insulation",),), 0.45, "limited insulation"),
    UValueRule((("insulated",), ("150mm", "150 mm")), 0.18, "insulated 150mm"),
    UValueRule((("insulated",), ("100mm", "100 mm")), 0.25, "insulated 100mm"),
    UValueRule((("insulated",), ("50mm", "50 mm")), 0.45, "insulated 50mm"),
    UValueRule((("insulated",),), 0.25, "insulated"),
    UValueRule((("suspended", "solid"),), 0.7, "uninsulated"),
]

WINDOW_RULES: List[UValueRule] = [
    UValueRule((("triple",), ("low-e", "low e")), 1.2, "triple, low-e"),
    UValueRule((("triple",),), 1.8, "triple"),
    UValueRule((("high performance",),), 1.6, "high performance"),
    UValueRule((("secondary",),), 2.4, "secondary"),
    UValueRule((("double",), ("low-e", "low e")), 1.6, "double, low-e"),
    UValueRule((("double",), ("argon",)), 2.0, "double, argon"),
    UValueRule((("double",), ("before 2002", "pre 2002", "pre-2002")), 3.1, "double, pre-2002"),
    UValueRule((("double",),), 2.8, "double"),
    UValueRule((("single",),), 4.8, "single"),
]

KEYWORD_RULES: Dict[ElementType, List[UValueRule]] = {
    ElementType.WALL: WALL_RULES,
    ElementType.ROOF: ROOF_RULES,
    ElementType.FLOOR: FLOOR_RULES,
    ElementType.WINDOW: WINDOW_RULES,
}

# Loft insulation depth (mm) -> U-value, deepest first
ROOF_INSULATION_DEPTHS: List[Tuple[float, float]] = [
    (300, 0.13),
    (270, 0.15),
    (250, 0.16),
    (200, 0.2),
    (150, 0.25),
    (100, 0.4),
    (75, 0.6),
    (50, 0.8),
    (1, 1.5),
    (0, 2.3),
]

_DEPTH_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\+?\s*(mm|inch|in\b)")

# =============================================================================
# AGE BANDS
# =============================================================================

# (first year of band is before this year, U-value)
AGE_BAND_U_VALUES: Dict[ElementType, List[Tuple[int, float]]] = {
    ElementType.WALL: [
        (1930, 2.1),
        (1950, 1.6),
        (1967, 1.5),
        (1976, 1.0),
        (1983, 0.6),
        (1991, 0.5),
        (2003, 0.45),
        (2007, 0.35),
        (2012, 0.28),
        (9999, 0.18),
    ],
    ElementType.ROOF: [
        (1919, 2.3),
        (1976, 1.5),
        (1996, 0.6),
        (2003, 0.4),
        (9999, 0.25),
    ],
    ElementType.FLOOR: [
        (1976, 0.7),
        (1983, 0.6),
        (1996, 0.45),
        (9999, 0.25),
    ],
    ElementType.WINDOW: [
        (2002, 4.8),
        (2011, 2.0),
        (9999, 1.6),
    ],
}

# England & Wales certificate band letters -> first year of band
AGE_BAND_LETTERS: Dict[str, int] = {
    "A": 1899, "B": 1900, "C": 1930, "D": 1950, "E": 1967, "F": 1976,
    "G": 1983, "H": 1991, "I": 1996, "J": 2003, "K": 2007, "L": 2012,
}

WORST_CASE_U_VALUES: Dict[ElementType, float] = {
    ElementType.WALL: 2.1,
    ElementType.ROOF: 2.3,
    ElementType.FLOOR: 0.7,
    ElementType.WINDOW: 4.8,
}

SINGLE_GLAZING_U_VALUE = 4.8

_YEAR_PATTERN = re.compile(r"(1[89]\d\d|20\d\d)")


def parse_age_band(age_band: Optional[str]) -> Optional[int]:
    """
    First year of a construction age band.

    Accepts "England and Wales: 1930-1949", "before 1900", "2012 onwards",
    a bare year, or a band letter. Returns None if nothing parses.
    """
    if not age_band:
        return None
    text = age_band.strip()
    if text.upper() in AGE_BAND_LETTERS:
        return AGE_BAND_LETTERS[text.upper()]

    years = [int(y) for y in _YEAR_PATTERN.findall(text)]
    if not years:
        return None
    if "before" in text.lower():
        return years[0] - 1
    return years[0]


def age_band_u_value(element_type: ElementType, year: int) -> float:
    for before, u_value in AGE_BAND_U_VALUES[element_type]:
        if year < before:
            return u_value
    return AGE_BAND_U_VALUES[element_type][-1][1]


def insulation_depth_mm(text: str) -> Optional[float]:
    """Insulation depth in mm from "270 mm" or "4 inch" style text."""
    match = _DEPTH_PATTERN.search(text)
    if not match:
        return None
    value = float(match.group(1))
    return value * 25 if match.group(2) != "mm" else value


def _match_rules(rules: Sequence[UValueRule], text: str) -> Optional[UValueRule]:
    for rule in rules:
        if rule.matches(text):
            return rule
    return None


def _roof_depth_u_value(text: str) -> Optional[float]:
    if "insulat" not in text and "loft" not in text:
        return None
    depth = insulation_depth_mm(text)
    if depth is None:
        return None
    for minimum, u_value in ROOF_INSULATION_DEPTHS:
        if depth >= minimum:
            return u_value
    return None


def lookup_u_value(
    element_type: ElementType,
    description: Optional[str],
    age_band: Optional[str] = None,
) -> UValueEstimate:
    """
    Resolve a U-value from description text and age band.

    Args:
        element_type: Element being resolved
        description: Certificate description (may be None)
        age_band: Construction age band text (may be None)

    Returns:
        UValueEstimate with value and source
    """
    text = (description or "").lower()
    year = parse_age_band(age_band)

    if year is not None and element_type == ElementType.WALL and "as built" in text:
        return UValueEstimate(
            age_band_u_value(element_type, year), UValueSource.AGE_BAND, f"built {year}, as built"
        )

    if text:
        if element_type == ElementType.ROOF and "above" not in text:
            depth_u = _roof_depth_u_value(text)
            if depth_u is not None:
                return UValueEstimate(depth_u, UValueSource.KEYWORD, "loft insulation depth")

        rule = _match_rules(KEYWORD_RULES[element_type], text)
        if rule is not None:
            return UValueEstimate(rule.u_value, UValueSource.KEYWORD, rule.label)

    if year is not None:
        return UValueEstimate(
            age_band_u_value(element_type, year), UValueSource.AGE_BAND, f"built {year}"
        )

    return UValueEstimate(WORST_CASE_U_VALUES[element_type], UValueSource.DEFAULT, "worst case")


def blend_window_u_value(u_value: float, multi_glaze_proportion: Optional[float]) -> float:
    """
    Area-weight multiple glazing against single glazing.

    Args:
        u_value: U-value of the multiple-glazed portion
        multi_glaze_proportion: Percentage of glazing that is multiple (0-100)
    """
    if multi_glaze_proportion is None:
        return u_value
    fraction = min(100.0, max(0.0, multi_glaze_proportion)) / 100
    return fraction * u_value + (1 - fraction) * SINGLE_GLAZING_U_VALUE


def thermal_mass(element_type: ElementType, description: Optional[str]) -> float:
    """Heat capacity per area (kJ/m2K) from construction keywords."""
    text = (description or "").lower()

    if element_type == ElementType.WALL:
        if any(k in text for k in ("brick", "stone", "concrete", "granite")):
            return 200
        if "timber" in text:
            return 50
        return 100

    if element_type == ElementType.FLOOR:
        if "concrete" in text or "solid" in text:
            return 300
        if "timber" in text or "suspended" in text:
            return 50
        return 100

    if element_type == ElementType.ROOF:
        if "concrete" in text:
            return 200
        return 50

    return 0
