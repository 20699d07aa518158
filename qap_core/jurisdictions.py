"""
QAP scoring tables for the supported jurisdictions (Texas, California)
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import UnknownJurisdictionError

TEXAS = "Texas"
CALIFORNIA = "California"
DEVELOPMENT_LOCATION = "Development Location"


@dataclass(frozen=True)
class JurisdictionConfig:
    jurisdiction_id: str
    development_location_max_points: float


@dataclass(frozen=True)
class QAPCategory:
    """One row of a QAP scoring table"""
    name: str
    description: str
    data_available: bool
    max_points: Dict[str, float] = field(default_factory=dict)

    def max_for(self, jurisdiction: str) -> float:
        return self.max_points[jurisdiction]


SCORING_TABLE: List[QAPCategory] = [
    QAPCategory(
        "Financial Feasibility and Cost of Development",
        "Points awarded based on cost per square foot and financial feasibility of the development.",
        False, {TEXAS: 14, CALIFORNIA: 12},
    ),
    QAPCategory(
        DEVELOPMENT_LOCATION,
        "Points for developments in areas with high opportunity indices, proximity to amenities, "
        "and underserved areas.",
        True, {TEXAS: 17, CALIFORNIA: 15},
    ),
    QAPCategory(
        "Tenant Populations with Special Needs",
        "Incentivizes support for individuals with disabilities or homelessness.",
        False, {TEXAS: 5, CALIFORNIA: 5},
    ),
    QAPCategory(
        "Income and Rent Levels of Tenants",
        "Encourages deeper income targeting and reduced rents.",
        False, {TEXAS: 16, CALIFORNIA: 10},
    ),
    QAPCategory(
        "Size and Quality of Units",
        "Rewards for larger unit sizes and inclusion of amenities.",
        False, {TEXAS: 7, CALIFORNIA: 8},
    ),
    QAPCategory(
        "Tenant Services",
        "Points for providing supportive services like education, health, etc.",
        False, {TEXAS: 10, CALIFORNIA: 6},
    ),
    QAPCategory(
        "Readiness to Proceed",
        "Scores readiness for construction start.",
        False, {TEXAS: 10, CALIFORNIA: 5},
    ),
    QAPCategory(
        "Development Team Experience",
        "Considers the team's history with successful LIHTC projects.",
        False, {TEXAS: 10, CALIFORNIA: 4},
    ),
    QAPCategory(
        "State Housing Priorities",
        "Rewards alignment with state-specific goals (e.g., rural housing, preservation).",
        False, {TEXAS: 10, CALIFORNIA: 12},
    ),
    QAPCategory(
        "Eviction Prevention Plans",
        "Incentivizes structured eviction prevention with case management.",
        False, {TEXAS: 5, CALIFORNIA: 4},
    ),
]

# Sum of every category maximum in the table above
TEXAS_TOTAL_POINTS = 104
CALIFORNIA_TOTAL_POINTS = 81

TOTAL_POINTS: Dict[str, float] = {
    TEXAS: TEXAS_TOTAL_POINTS,
    CALIFORNIA: CALIFORNIA_TOTAL_POINTS,
}

JURISDICTIONS: Dict[str, JurisdictionConfig] = {
    TEXAS: JurisdictionConfig(TEXAS, 17),
    CALIFORNIA: JurisdictionConfig(CALIFORNIA, 15),
}


def get_jurisdiction(name: str) -> JurisdictionConfig:
    """Look up a jurisdiction by state name (case-insensitive)"""
    for jurisdiction_id, config in JURISDICTIONS.items():
        if jurisdiction_id.lower() == (name or "").strip().lower():
            return config
    raise UnknownJurisdictionError(name)


def development_location_max_points(jurisdiction: Optional[str]) -> float:
    """Maximum Development Location points, or 0 when no state is selected"""
    if not jurisdiction:
        return 0
    return get_jurisdiction(jurisdiction).development_location_max_points


def total_points(jurisdiction: Optional[str]) -> float:
    """Total QAP points available, or 0 when no state is selected"""
    if not jurisdiction:
        return 0
    return TOTAL_POINTS[get_jurisdiction(jurisdiction).jurisdiction_id]


def score_percentage(location_points: float, jurisdiction_total: float) -> Optional[float]:
    """
    Share of the jurisdiction's total points earned, as a percentage.

    Categories without a data source contribute zero. Returns None when the
    total is zero.
    """
    if not jurisdiction_total:
        return None
    return (location_points / jurisdiction_total) * 100


def category_breakdown(jurisdiction: str, location_points: float) -> List[Dict[str, object]]:
    """Rows of (category, max points, awarded points, data source) for display"""
    config = get_jurisdiction(jurisdiction)
    rows = []
    for category in SCORING_TABLE:
        awarded = location_points if category.name == DEVELOPMENT_LOCATION else 0.0
        rows.append({
            "category": category.name,
            "max_points": category.max_for(config.jurisdiction_id),
            "awarded_points": awarded,
            "data_source": "OpenStreetMap" if category.data_available else "Not Available",
        })
    return rows
