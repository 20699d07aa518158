import pytest

from qap_core.errors import UnknownJurisdictionError
from qap_core.jurisdictions import (
    CALIFORNIA,
    CALIFORNIA_TOTAL_POINTS,
    DEVELOPMENT_LOCATION,
    SCORING_TABLE,
    TEXAS,
    TEXAS_TOTAL_POINTS,
    category_breakdown,
    development_location_max_points,
    get_jurisdiction,
    score_percentage,
    total_points,
)


def test_table_has_ten_categories_with_both_states():
    assert len(SCORING_TABLE) == 10
    for category in SCORING_TABLE:
        assert set(category.max_points) == {TEXAS, CALIFORNIA}


def test_totals_match_table_sums():
    assert TEXAS_TOTAL_POINTS == sum(c.max_for(TEXAS) for c in SCORING_TABLE) == 104
    assert CALIFORNIA_TOTAL_POINTS == sum(c.max_for(CALIFORNIA) for c in SCORING_TABLE) == 81


def test_only_development_location_has_data():
    available = [c.name for c in SCORING_TABLE if c.data_available]
    assert available == [DEVELOPMENT_LOCATION]


def test_development_location_maxima():
    assert development_location_max_points("Texas") == 17
    assert development_location_max_points("california") == 15
    assert development_location_max_points("") == 0
    assert development_location_max_points(None) == 0


def test_unknown_state_raises():
    with pytest.raises(UnknownJurisdictionError):
        get_jurisdiction("Nevada")


def test_score_percentage():
    assert score_percentage(17, 104) == pytest.approx(17 / 104 * 100)
    assert score_percentage(0, 81) == 0


def test_score_percentage_without_jurisdiction_is_none():
    assert score_percentage(5.0, 0) is None
    assert score_percentage(5.0, total_points(None)) is None


def test_category_breakdown_awards_location_only():
    rows = category_breakdown("Texas", 9.5)
    awarded = {r["category"]: r["awarded_points"] for r in rows}
    assert awarded[DEVELOPMENT_LOCATION] == 9.5
    assert sum(awarded.values()) == 9.5
