"""
End-to-end location evaluation: amenity lookup, scoring and report assembly
"""
import asyncio
import logging
from typing import Optional

from .amenities import AmenitySource, MockAmenitySource
from .config import Settings
from .jurisdictions import development_location_max_points
from .locations import Location
from .report import QAPReport, build_report
from .scorer import AmenityScorer, ScoringThresholds

logger = logging.getLogger(__name__)


def scorer_from_settings(settings: Settings) -> AmenityScorer:
    return AmenityScorer(ScoringThresholds(
        volume_threshold=settings.volume_threshold,
        proximity_threshold_km=settings.proximity_threshold_km,
    ))


def source_from_settings(settings: Settings) -> AmenitySource:
    return MockAmenitySource(seed=settings.amenity_seed, delay_s=settings.lookup_delay_s)


async def evaluate_location(location: Location, source: AmenitySource,
                            scorer: Optional[AmenityScorer] = None) -> QAPReport:
    """
    Look up amenities around `location` and score them

    Cancelling the awaiting task cancels the amenity lookup.
    """
    scorer = scorer or AmenityScorer()
    logger.debug("Fetching amenities near %.4f, %.4f", location.lat, location.lon)
    amenities = await source.fetch_nearby_amenities(location.lat, location.lon)

    max_points = development_location_max_points(location.state)
    result = scorer.score_breakdown(amenities, max_points)
    report = build_report(location, amenities, result)

    logger.info(
        "%s: %.2f/%g Development Location points from %d amenities (%s of total)",
        location.label, result.normalized_points, max_points, len(amenities), report.percentage_text(),
    )
    return report


def run_evaluation(location: Location, source: AmenitySource,
                   scorer: Optional[AmenityScorer] = None) -> QAPReport:
    """Synchronous wrapper around evaluate_location"""
    return asyncio.run(evaluate_location(location, source, scorer))
